"""Data models for package requests and compatibility resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from constants import Constants


class ResolutionSource(Enum):
    """How a package ended up with its resolved version."""
    COMPATIBLE = "compatible"
    PINNED = "pinned"
    FALLBACK = "fallback"
    GENERATOR = "generator"


@dataclass(frozen=True)
class PackageRequest:
    """Resolution input: a package name and the version the caller asked for."""
    name: str
    requested_version: str = Constants.LATEST

    @property
    def is_latest(self) -> bool:
        return self.requested_version == Constants.LATEST

    def __str__(self) -> str:
        return f"{self.name}@{self.requested_version}"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one registry call.

    ``data`` is always a mapping; it is empty whenever ``ok`` is False so
    callers can treat a failure as "no data".
    """
    ok: bool
    data: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    status_code: int = 0

    @classmethod
    def success(cls, data: Mapping[str, Any], status_code: int = 200) -> "FetchResult":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: int = 0) -> "FetchResult":
        return cls(ok=False, data={}, error=error, status_code=status_code)


@dataclass(frozen=True)
class ResolvedPackage:
    """One resolved package specifier."""
    name: str
    resolved_version: str
    source: ResolutionSource

    @property
    def specifier(self) -> str:
        return f"{self.name}@{self.resolved_version}"


# Peer-dependency name -> distinct version specs declared across packages.
ConflictMap = Mapping[str, FrozenSet[str]]


@dataclass(frozen=True)
class ResolutionResult:
    """Resolution outcome consumed by the installer and the JSON export."""
    generator: Optional[ResolvedPackage]
    resolved: Tuple[ResolvedPackage, ...]
    conflicts: ConflictMap

    @property
    def packages(self) -> Tuple[str, ...]:
        """Ordered ``name@version`` specifiers, generator first when present."""
        head = (self.generator.specifier,) if self.generator else ()
        return head + tuple(pkg.specifier for pkg in self.resolved)

    @property
    def conflicting(self) -> Dict[str, Tuple[str, ...]]:
        """Peer dependencies with more than one declared spec."""
        return {
            name: tuple(sorted(specs))
            for name, specs in self.conflicts.items()
            if len(specs) > 1
        }

    @property
    def force_install(self) -> bool:
        return any(len(specs) > 1 for specs in self.conflicts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "packages": list(self.packages),
            "forceInstall": self.force_install,
            "resolved": [
                {
                    "name": pkg.name,
                    "version": pkg.resolved_version,
                    "source": pkg.source.value,
                }
                for pkg in ((self.generator,) if self.generator else ()) + self.resolved
            ],
            "conflicts": {name: list(specs) for name, specs in self.conflicting.items()},
        }
