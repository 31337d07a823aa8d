"""NPM registry package.

- client.py: packument and per-version lookups against the npm registry
"""

# Patch point exposed for tests (e.g., patch('registry.npm.get_json'))
from common.http_client import get_json  # noqa: F401

from .client import NpmRegistryClient, encode_package_name, peer_dependencies_of  # noqa: F401

__all__ = [
    "NpmRegistryClient",
    "encode_package_name",
    "peer_dependencies_of",
    "get_json",
]
