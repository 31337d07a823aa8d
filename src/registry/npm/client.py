"""NPM registry client: packument listings and per-version peer dependencies."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.models import FetchResult
import registry.npm as npm_pkg

logger = logging.getLogger(__name__)


def encode_package_name(name: str) -> str:
    """URL-encode a package name; ``@scope/name`` becomes ``@scope%2Fname``."""
    return quote(name, safe="@")


class NpmRegistryClient:
    """Best-effort reader for the npm registry HTTP API.

    Every call makes one request. Failures never raise: they are logged as a
    warning and reported as a failed :class:`FetchResult` with empty data.
    """

    def __init__(self, base_url: Optional[str] = None):
        base = base_url or Constants.REGISTRY_URL_NPM
        self.base_url = base if base.endswith("/") else base + "/"

    def _fetch(self, url: str, *, what: str) -> FetchResult:
        (status, _, data), error = npm_pkg.get_json(url)
        if error is not None:
            logger.warning("Could not fetch %s: %s", what, error)
            return FetchResult.failure(error, status)
        if status != 200:
            logger.warning("Could not fetch %s: registry returned HTTP %s", what, status)
            return FetchResult.failure(f"HTTP {status}", status)
        if not isinstance(data, dict):
            logger.warning("Could not fetch %s: unparsable registry response", what)
            return FetchResult.failure("invalid JSON document", status)
        return FetchResult.success(data, status)

    def fetch_versions(self, package_name: str) -> FetchResult:
        """List every published version of a package with its metadata.

        Args:
            package_name: npm package name, scoped or not.

        Returns:
            FetchResult whose data maps version string -> version document.
        """
        url = f"{self.base_url}{encode_package_name(package_name)}"
        result = self._fetch(url, what=f"versions for {package_name}")
        if not result.ok:
            return result
        versions = result.data.get("versions")
        if not isinstance(versions, dict):
            logger.warning("Could not fetch versions for %s: no version listing", package_name)
            return FetchResult.failure("missing versions object", result.status_code)
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched version listing",
                extra=extra_context(
                    event="registry_versions",
                    component="npm_client",
                    action="fetch_versions",
                    outcome="success",
                    count=len(versions),
                    target=safe_url(url),
                    package_manager="npm"
                )
            )
        return FetchResult.success(versions, result.status_code)

    def fetch_peer_dependencies(self, package_name: str, version: str) -> FetchResult:
        """Read the peerDependencies declared by one version of a package.

        ``version`` may also be a dist-tag such as ``latest``.

        Returns:
            FetchResult whose data maps dependency name -> version spec.
        """
        url = f"{self.base_url}{encode_package_name(package_name)}/{quote(version, safe='')}"
        result = self._fetch(url, what=f"peer dependencies for {package_name}@{version}")
        if not result.ok:
            return result
        peers: Any = result.data.get("peerDependencies") or {}
        if not isinstance(peers, dict):
            peers = {}
        return FetchResult.success(peers, result.status_code)


def peer_dependencies_of(version_document: Any) -> Mapping[str, Any]:
    """Return the peerDependencies mapping of a version document, or {}."""
    if not isinstance(version_document, dict):
        return {}
    peers = version_document.get("peerDependencies") or {}
    return peers if isinstance(peers, dict) else {}
