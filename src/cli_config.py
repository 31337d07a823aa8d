"""Runtime settings assembled from defaults, config file, environment and CLI.

Precedence, highest first: CLI flags, environment variables, the YAML config
file, then the defaults in :class:`constants.Constants`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants
from versioning.models import PackageRequest
from versioning.parser import parse_package_tokens

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file or option is invalid."""


@dataclass
class Settings:
    """Effective configuration for one scaffolding run."""

    registry_url: str = Constants.REGISTRY_URL_NPM
    package_manager: str = "npm"
    packages: List[PackageRequest] = field(
        default_factory=lambda: parse_package_tokens(Constants.AUXILIARY_PACKAGES)
    )
    style: str = Constants.DEFAULT_STYLE
    routing: bool = True
    branch: str = Constants.DEFAULT_BRANCH
    commit_message: str = Constants.DEFAULT_COMMIT_MESSAGE
    remote_provider: str = "github"
    remote_private: bool = True
    remote_owner: Optional[str] = None
    remote_protocol: str = "https"


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML (or JSON) config file.

    Args:
        config_path: Path to the file; None means no file.

    Returns:
        Parsed mapping, empty when no path is given.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the top level")
    logger.info("Loaded config from: %s", config_path)
    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return value


def _choice(value: Any, allowed: List[str], key: str) -> str:
    text = str(value).lower()
    if text not in allowed:
        raise ConfigError(f"Invalid {key} '{value}'; choose one of {', '.join(allowed)}")
    return text


def _bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"Config key '{key}' must be true or false")


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config key '{key}' must be a non-empty string")
    return value.strip()


def apply_file_config(settings: Settings, data: Mapping[str, Any]) -> None:
    """Apply a parsed config mapping onto ``settings`` in place."""
    if "registry_url" in data:
        settings.registry_url = _str(data["registry_url"], "registry_url")
    if "package_manager" in data:
        settings.package_manager = _choice(
            data["package_manager"], Constants.SUPPORTED_MANAGERS, "package_manager"
        )
    if "packages" in data:
        packages = data["packages"]
        if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
            raise ConfigError("Config key 'packages' must be a list of 'name@version' strings")
        try:
            settings.packages = parse_package_tokens(packages)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    generator = _section(data, "generator")
    if "style" in generator:
        settings.style = _choice(generator["style"], Constants.SUPPORTED_STYLES, "generator.style")
    if "routing" in generator:
        settings.routing = _bool(generator["routing"], "generator.routing")

    git = _section(data, "git")
    if "branch" in git:
        settings.branch = _str(git["branch"], "git.branch")
    if "commit_message" in git:
        settings.commit_message = _str(git["commit_message"], "git.commit_message")

    remote = _section(data, "remote")
    if "provider" in remote:
        settings.remote_provider = _choice(remote["provider"], Constants.SUPPORTED_PROVIDERS, "remote.provider")
    if "private" in remote:
        settings.remote_private = _bool(remote["private"], "remote.private")
    if "owner" in remote:
        settings.remote_owner = str(remote["owner"]) if remote["owner"] is not None else None
    if "protocol" in remote:
        settings.remote_protocol = _choice(remote["protocol"], ["https", "ssh"], "remote.protocol")


def apply_env_overrides(settings: Settings, environ: Optional[Mapping[str, str]] = None) -> None:
    env = os.environ if environ is None else environ
    registry = env.get(Constants.ENV_REGISTRY_URL)
    if registry and registry.strip():
        settings.registry_url = registry.strip()


def apply_cli_overrides(settings: Settings, args: Any) -> None:
    """Apply parsed CLI flags; unset flags leave settings untouched."""
    if getattr(args, "REGISTRY", None):
        settings.registry_url = args.REGISTRY
    if getattr(args, "PACKAGE_MANAGER", None):
        settings.package_manager = args.PACKAGE_MANAGER
    if getattr(args, "PACKAGES", None):
        try:
            settings.packages = parse_package_tokens(args.PACKAGES)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if getattr(args, "STYLE", None):
        settings.style = args.STYLE
    if getattr(args, "NO_ROUTING", False):
        settings.routing = False
    if getattr(args, "BRANCH", None):
        settings.branch = args.BRANCH
    if getattr(args, "PROVIDER", None):
        settings.remote_provider = args.PROVIDER
    if getattr(args, "PUBLIC", False):
        settings.remote_private = False
    if getattr(args, "OWNER", None):
        settings.remote_owner = args.OWNER


def build_settings(args: Any, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Assemble effective settings for ``args``.

    Raises:
        ConfigError: On any invalid file or option value.
    """
    settings = Settings()
    apply_file_config(settings, load_config_file(getattr(args, "CONFIG", None)))
    apply_env_overrides(settings, environ)
    apply_cli_overrides(settings, args)
    return settings
