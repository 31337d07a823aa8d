"""Shared types for remote repository providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class RemoteRepositoryError(RuntimeError):
    """Remote repository could not be created."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


@dataclass(frozen=True)
class RemoteRepository:
    """A newly created hosted repository."""

    provider: str
    name: str
    web_url: str
    https_url: str
    ssh_url: str

    def push_url(self, protocol: str = "https") -> str:
        return self.ssh_url if protocol == "ssh" else self.https_url
