"""Argument parsing functionality for eggs-next-setup."""

import argparse

from constants import Constants
from versioning.parser import is_valid_framework_version


def _framework_version(value):
    if not is_valid_framework_version(value):
        raise argparse.ArgumentTypeError(
            f"'{value}' is neither 'latest' nor a valid npm version or range"
        )
    return value.strip()


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="eggs-next-setup",
        description=(
            "Scaffold an Angular application with compatible auxiliary "
            "libraries and an optional remote repository"
        ),
        add_help=True,
    )

    parser.add_argument("-n", "--name",
                        dest="NAME",
                        help=f"Project name (default: {Constants.DEFAULT_PROJECT_NAME})",
                        action="store", type=str,
                        default=Constants.DEFAULT_PROJECT_NAME)
    parser.add_argument("-v", "--angular-version",
                        dest="ANGULAR_VERSION",
                        help="Target Angular version, peer range or dist-tag, i.e: 17.3.0, ^17.0.0, next (default: latest)",
                        action="store", type=_framework_version,
                        default=Constants.DEFAULT_ANGULAR_VERSION)
    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Destination directory for the new project (default: current directory)",
                        action="store", type=str,
                        default=".")

    git_group = parser.add_argument_group("git")
    git_group.add_argument("--branch",
                           dest="BRANCH",
                           help=f"Initial branch name, also the branch pushed to the remote (default: {Constants.DEFAULT_BRANCH})",
                           action="store", type=str)
    git_group.add_argument("--skip-git",
                           dest="SKIP_GIT",
                           help="Do not initialize a git repository",
                           action="store_true")

    remote_group = parser.add_argument_group("remote repository")
    remote_group.add_argument("--create-remote",
                              dest="CREATE_REMOTE",
                              help="Create a remote repository and push the initial commit",
                              action="store_true")
    remote_group.add_argument("--provider",
                              dest="PROVIDER",
                              help="Remote hosting provider (default: github)",
                              action="store", type=str.lower,
                              choices=Constants.SUPPORTED_PROVIDERS)
    remote_group.add_argument("--owner",
                              dest="OWNER",
                              help="GitHub organization or GitLab namespace id (default: token owner)",
                              action="store", type=str)
    remote_group.add_argument("--public",
                              dest="PUBLIC",
                              help="Create a public repository instead of a private one",
                              action="store_true")

    deps_group = parser.add_argument_group("dependencies")
    deps_group.add_argument("-p", "--package",
                            dest="PACKAGES",
                            help="Auxiliary package as name[@version]; repeat to replace the default list",
                            action="append", type=str)
    deps_group.add_argument("--package-manager",
                            dest="PACKAGE_MANAGER",
                            help="Package manager used for the install (default: npm)",
                            action="store", type=str.lower,
                            choices=Constants.SUPPORTED_MANAGERS)
    deps_group.add_argument("--registry",
                            dest="REGISTRY",
                            help=f"npm registry base URL (default: {Constants.REGISTRY_URL_NPM})",
                            action="store", type=str)
    deps_group.add_argument("--resolve-only",
                            dest="RESOLVE_ONLY",
                            help="Only resolve compatible versions and print them as JSON",
                            action="store_true")
    deps_group.add_argument("-o", "--output",
                            dest="OUTPUT",
                            help="Write the resolution result as JSON to this path",
                            action="store", type=str)

    gen_group = parser.add_argument_group("generator")
    gen_group.add_argument("--style",
                           dest="STYLE",
                           help=f"Stylesheet format (default: {Constants.DEFAULT_STYLE})",
                           action="store", type=str.lower,
                           choices=Constants.SUPPORTED_STYLES)
    gen_group.add_argument("--no-routing",
                           dest="NO_ROUTING",
                           help="Generate the project without the routing module",
                           action="store_true")
    gen_group.add_argument("--skip-install",
                           dest="SKIP_INSTALL",
                           help="Skip dependency resolution and every install step",
                           action="store_true")

    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Log external commands instead of running them",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors to the console.",
                        action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    args = build_parser().parse_args(argv)
    if args.CREATE_REMOTE and args.SKIP_GIT:
        build_parser().error("--create-remote cannot be combined with --skip-git")
    return args
