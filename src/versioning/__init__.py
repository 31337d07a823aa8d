"""Package requests, registry-driven version resolution and conflict detection."""
