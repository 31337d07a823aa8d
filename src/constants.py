"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    COMMAND_FAILED = 4
    INTERRUPTED = 130


class PackageManagers(Enum):
    """Package managers supported for the post-generation install.

    Args:
        Enum (string): Package managers supported by the program.
    """

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"


class RemoteProviders(Enum):
    """Hosting providers that can receive the initial push.

    Args:
        Enum (string): Remote providers supported by the program.
    """

    GITHUB = "github"
    GITLAB = "gitlab"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    SUPPORTED_MANAGERS = [
        PackageManagers.NPM.value,
        PackageManagers.PNPM.value,
        PackageManagers.YARN.value,
    ]
    SUPPORTED_PROVIDERS = [
        RemoteProviders.GITHUB.value,
        RemoteProviders.GITLAB.value,
    ]
    SUPPORTED_STYLES = ["css", "scss", "sass", "less"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Angular project defaults
    DEFAULT_PROJECT_NAME = "my-angular-app"
    DEFAULT_ANGULAR_VERSION = "latest"
    DEFAULT_STYLE = "scss"
    LATEST = "latest"
    FRAMEWORK_CORE_PACKAGE = "@angular/core"
    GENERATOR_PACKAGE = "@schematics/angular"
    CLI_PACKAGE = "@angular/cli"
    AUXILIARY_PACKAGES = [
        "rxjs@latest",
        "primeng@latest",
        "primeflex@latest",
        "keycloak-js@latest",
        "keycloak-angular@latest",
    ]

    # Git defaults
    DEFAULT_BRANCH = "main"
    DEFAULT_REMOTE_NAME = "origin"
    DEFAULT_COMMIT_MESSAGE = "Initial commit"

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_API_BASE = "https://gitlab.com/api/v4"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    ENV_REGISTRY_URL = "EGGS_REGISTRY_URL"
    ENV_LOG_LEVEL = "EGGS_LOG_LEVEL"
