"""Compatibility resolver for the auxiliary packages of a new Angular project.

For each requested package the resolver picks the version whose declared
peer dependency on the framework core equals the target framework version,
then folds every resolved package's peer dependencies into a conflict map.
Any peer dependency declared with more than one distinct spec forces the
install for the whole batch.

Version choice is a plain string sort: among qualifying versions the
lexicographically smallest one wins, so ``"10.0.0"`` beats ``"2.0.0"``.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from registry.npm.client import NpmRegistryClient, peer_dependencies_of
from .models import (
    PackageRequest,
    ResolutionResult,
    ResolutionSource,
    ResolvedPackage,
)

logger = logging.getLogger(__name__)

_Accumulator = Tuple[Tuple[ResolvedPackage, ...], Dict[str, FrozenSet[str]]]


def pick_compatible_version(
    versions: Mapping[str, Any],
    target_version: str,
    core_package: str = Constants.FRAMEWORK_CORE_PACKAGE,
) -> Optional[str]:
    """Return the smallest version (string order) whose core peer equals the target.

    Args:
        versions: version string -> version document, as listed by the registry.
        target_version: exact peer spec to match, e.g. ``"^17.0.0"``.
        core_package: peer dependency used as the compatibility key.

    Returns:
        The chosen version string, or None when nothing qualifies.
    """
    qualifying = sorted(
        version
        for version, document in versions.items()
        if peer_dependencies_of(document).get(core_package) == target_version
    )
    return qualifying[0] if qualifying else None


def merge_peer_dependencies(
    conflicts: Mapping[str, FrozenSet[str]],
    peers: Mapping[str, Any],
) -> Dict[str, FrozenSet[str]]:
    """Return a new conflict map with ``peers`` folded in.

    Non-string specs are ignored; a name seen only with non-string specs is
    still recorded with an empty set.
    """
    merged = dict(conflicts)
    for name, spec in peers.items():
        current = merged.get(name, frozenset())
        if isinstance(spec, str):
            current = current | {spec}
        merged[name] = current
    return merged


class CompatibilityResolver:
    """Resolve auxiliary package versions against a target framework version."""

    def __init__(
        self,
        client: NpmRegistryClient,
        core_package: str = Constants.FRAMEWORK_CORE_PACKAGE,
        generator_package: Optional[str] = Constants.GENERATOR_PACKAGE,
    ):
        self.client = client
        self.core_package = core_package
        self.generator_package = generator_package

    def resolve_version(self, request: PackageRequest, target_version: str) -> ResolvedPackage:
        """Pick the version to install for one request.

        Pinned requests keep their version; ``latest`` requests are matched
        against the registry listing and fall back to ``latest``.
        """
        if not request.is_latest:
            return ResolvedPackage(request.name, request.requested_version, ResolutionSource.PINNED)

        listing = self.client.fetch_versions(request.name)
        if not listing.ok:
            logger.warning("Could not fetch version for %s, using 'latest'", request.name)
            return ResolvedPackage(request.name, Constants.LATEST, ResolutionSource.FALLBACK)

        chosen = pick_compatible_version(listing.data, target_version, self.core_package)
        if chosen is None:
            logger.info(
                "No %s release declares %s %s; using 'latest'",
                request.name, self.core_package, target_version,
            )
            return ResolvedPackage(request.name, Constants.LATEST, ResolutionSource.FALLBACK)
        return ResolvedPackage(request.name, chosen, ResolutionSource.COMPATIBLE)

    def _step(self, target_version: str):
        def step(acc: _Accumulator, request: PackageRequest) -> _Accumulator:
            resolved, conflicts = acc
            package = self.resolve_version(request, target_version)
            peers = self.client.fetch_peer_dependencies(package.name, package.resolved_version)
            if is_debug_enabled(logger):
                logger.debug(
                    "Resolved package",
                    extra=extra_context(
                        event="decision",
                        component="resolver",
                        action="resolve_version",
                        outcome=package.source.value,
                        target=package.specifier,
                        peer_count=len(peers.data)
                    )
                )
            return resolved + (package,), merge_peer_dependencies(conflicts, peers.data)
        return step

    def resolve(
        self,
        target_version: str,
        requests: Sequence[PackageRequest],
    ) -> ResolutionResult:
        """Resolve every request in order and detect peer conflicts.

        Args:
            target_version: framework version the project is pinned to.
            requests: ordered package requests.

        Returns:
            ResolutionResult with the generator package (pinned to
            ``target_version``) first, then one entry per request.
        """
        logger.info("Resolving %d packages against %s %s", len(requests), self.core_package, target_version)
        initial: _Accumulator = ((), {})
        resolved, conflicts = reduce(self._step(target_version), requests, initial)

        generator = None
        if self.generator_package:
            generator = ResolvedPackage(self.generator_package, target_version, ResolutionSource.GENERATOR)

        result = ResolutionResult(generator=generator, resolved=resolved, conflicts=conflicts)
        for name, specs in result.conflicting.items():
            logger.warning("Detected conflicting versions for %s: %s", name, ", ".join(specs))
        return result
