"""Per-manager install command builders.

Each supported package manager gets its own sub-command, the flag that
relaxes peer-dependency checks when a conflict was detected, and the flag
that points it at a non-default registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from constants import Constants, PackageManagers
from runner import CommandRunner, run_checked

logger = logging.getLogger(__name__)


@dataclass
class InstallCommand:
    """A fully built install invocation."""

    command: str
    args: List[str] = field(default_factory=list)


def _registry_args(registry_url: Optional[str]) -> List[str]:
    if not registry_url or registry_url.rstrip("/") == Constants.REGISTRY_URL_NPM.rstrip("/"):
        return []
    return [f"--registry={registry_url}"]


# ---------- builders ----------


def _build_npm(packages: Sequence[str], force: bool, registry_url: Optional[str]) -> InstallCommand:
    args = ["install", *packages]
    if force:
        args.append("--legacy-peer-deps")
    return InstallCommand("npm", args + _registry_args(registry_url))


def _build_pnpm(packages: Sequence[str], force: bool, registry_url: Optional[str]) -> InstallCommand:
    args = ["add", *packages]
    if force:
        args.append("--strict-peer-dependencies=false")
    return InstallCommand("pnpm", args + _registry_args(registry_url))


def _build_yarn(packages: Sequence[str], force: bool, registry_url: Optional[str]) -> InstallCommand:
    # yarn only warns on peer mismatches, so there is nothing to relax
    return InstallCommand("yarn", ["add", *packages] + _registry_args(registry_url))


_BUILDERS: Dict[str, Callable[[Sequence[str], bool, Optional[str]], InstallCommand]] = {
    PackageManagers.NPM.value: _build_npm,
    PackageManagers.PNPM.value: _build_pnpm,
    PackageManagers.YARN.value: _build_yarn,
}


def build_install_command(
    manager: str,
    packages: Sequence[str],
    force_install: bool = False,
    registry_url: Optional[str] = None,
) -> InstallCommand:
    """Build the install command for ``manager``.

    Raises:
        ValueError: If the manager is not supported or no packages are given.
    """
    builder = _BUILDERS.get(manager.lower())
    if builder is None:
        raise ValueError(
            f"Unsupported package manager '{manager}'. "
            f"Supported managers: {', '.join(Constants.SUPPORTED_MANAGERS)}"
        )
    if not packages:
        raise ValueError("No packages to install")
    return builder(list(packages), force_install, registry_url)


class Installer:
    """Installs resolved packages into a project directory."""

    def __init__(
        self,
        runner: CommandRunner,
        manager: str = PackageManagers.NPM.value,
        registry_url: Optional[str] = None,
    ):
        self.runner = runner
        self.manager = manager
        self.registry_url = registry_url

    def install(self, packages: Sequence[str], force_install: bool, cwd: Optional[str] = None) -> None:
        """Run the install; a nonzero exit raises CommandError."""
        cmd = build_install_command(self.manager, packages, force_install, self.registry_url)
        if force_install:
            logger.warning("Peer dependency conflicts detected; installing with relaxed peer checks")
        logger.info("Installing %d packages with %s", len(packages), self.manager)
        run_checked(self.runner, cmd.command, cmd.args, cwd)
