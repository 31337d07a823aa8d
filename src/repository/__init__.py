"""Local git workspace and hosted repository providers."""
