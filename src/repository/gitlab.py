"""GitLab API client for project provisioning.

Provides a lightweight REST client that creates the empty project the
scaffolded application is pushed to.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants, RemoteProviders
from common.http_client import post_json
from common.logging_utils import redact
from .models import RemoteRepository, RemoteRepositoryError

logger = logging.getLogger(__name__)

PROVIDER = RemoteProviders.GITLAB.value


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Authenticates via the GITLAB_TOKEN environment variable unless a token is
    passed explicitly.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            base_url: Base URL for GitLab API (defaults to Constants.GITLAB_API_BASE)
            token: GitLab personal access token (defaults to GITLAB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITLAB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITLAB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Private-Token'] = self.token
        return headers

    def create_project(
        self,
        name: str,
        private: bool = True,
        description: str = "",
        namespace_id: Optional[int] = None,
    ) -> RemoteRepository:
        """Create an empty project.

        Args:
            name: Project name (also used as path)
            private: Private visibility when True, public otherwise
            description: Optional project description
            namespace_id: Group namespace; the token owner's namespace when None

        Returns:
            RemoteRepository describing the new project

        Raises:
            RemoteRepositoryError: On missing token, transport error or non-201 status
        """
        if not self.token:
            raise RemoteRepositoryError(
                PROVIDER, f"no API token; set {Constants.ENV_GITLAB_TOKEN}"
            )

        payload: Dict[str, Any] = {
            'name': name,
            'path': name,
            'visibility': 'private' if private else 'public',
            'initialize_with_readme': False,
        }
        if description:
            payload['description'] = description
        if namespace_id is not None:
            payload['namespace_id'] = namespace_id

        url = f"{self.base_url}/projects"
        logger.info("Creating GitLab project '%s'", name)
        (status, _, data), error = post_json(url, payload=payload, headers=self._get_headers())

        if error is not None:
            raise RemoteRepositoryError(PROVIDER, error)
        if status != 201 or not isinstance(data, dict):
            message = data.get('message') if isinstance(data, dict) else None
            raise RemoteRepositoryError(
                PROVIDER,
                f"project creation failed (HTTP {status}): {redact(str(message or 'no details'))}",
                status,
            )

        return RemoteRepository(
            provider=PROVIDER,
            name=data.get('path_with_namespace') or name,
            web_url=data.get('web_url', ''),
            https_url=data.get('http_url_to_repo', ''),
            ssh_url=data.get('ssh_url_to_repo', ''),
        )
