"""GitHub API client for repository provisioning."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

from constants import Constants, RemoteProviders
from common.http_client import post_json
from common.logging_utils import redact
from .models import RemoteRepository, RemoteRepositoryError

logger = logging.getLogger(__name__)

PROVIDER = RemoteProviders.GITHUB.value


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Authenticates via the GITHUB_TOKEN environment variable unless a token is
    passed explicitly.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def create_repository(
        self,
        name: str,
        private: bool = True,
        description: str = "",
        owner: Optional[str] = None,
    ) -> RemoteRepository:
        """Create an empty repository for the authenticated user or an organization.

        Args:
            name: Repository name
            private: Private visibility when True
            description: Optional repository description
            owner: Organization login; the authenticated user when None

        Returns:
            RemoteRepository describing the new repository

        Raises:
            RemoteRepositoryError: On missing token, transport error or non-201 status
        """
        if not self.token:
            raise RemoteRepositoryError(
                PROVIDER, f"no API token; set {Constants.ENV_GITHUB_TOKEN}"
            )

        payload: Dict[str, Any] = {
            'name': name,
            'private': private,
            'auto_init': False,
        }
        if description:
            payload['description'] = description

        if owner:
            url = f"{self.base_url}/orgs/{quote(owner, safe='')}/repos"
        else:
            url = f"{self.base_url}/user/repos"

        logger.info("Creating GitHub repository '%s'", f"{owner}/{name}" if owner else name)
        (status, _, data), error = post_json(url, payload=payload, headers=self._get_headers())

        if error is not None:
            raise RemoteRepositoryError(PROVIDER, error)
        if status != 201 or not isinstance(data, dict):
            message = data.get('message') if isinstance(data, dict) else None
            raise RemoteRepositoryError(
                PROVIDER,
                f"repository creation failed (HTTP {status}): {redact(str(message or 'no details'))}",
                status,
            )

        return RemoteRepository(
            provider=PROVIDER,
            name=data.get('full_name') or name,
            web_url=data.get('html_url', ''),
            https_url=data.get('clone_url', ''),
            ssh_url=data.get('ssh_url', ''),
        )
