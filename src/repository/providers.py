"""Provider dispatch for remote repository creation."""

from __future__ import annotations

from typing import Optional

from constants import Constants, RemoteProviders
from .github import GitHubClient
from .gitlab import GitLabClient
from .models import RemoteRepository, RemoteRepositoryError


def create_remote(
    provider: str,
    name: str,
    private: bool = True,
    description: str = "",
    owner: Optional[str] = None,
) -> RemoteRepository:
    """Create a hosted repository on ``provider``.

    ``owner`` is an organization login on GitHub and a numeric namespace id
    on GitLab.

    Raises:
        RemoteRepositoryError: Unsupported provider, bad owner, or API failure.
    """
    key = (provider or "").lower()
    if key == RemoteProviders.GITHUB.value:
        return GitHubClient().create_repository(name, private=private, description=description, owner=owner)
    if key == RemoteProviders.GITLAB.value:
        namespace_id = None
        if owner:
            if not owner.isdigit():
                raise RemoteRepositoryError(key, f"namespace must be a numeric id, got '{owner}'")
            namespace_id = int(owner)
        return GitLabClient().create_project(name, private=private, description=description, namespace_id=namespace_id)
    raise RemoteRepositoryError(
        provider or "unknown",
        f"unsupported provider; choose one of {', '.join(Constants.SUPPORTED_PROVIDERS)}",
    )
