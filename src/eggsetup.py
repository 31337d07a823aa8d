"""eggs-next-setup - Angular project scaffolder with compatible auxiliary libraries.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from args import parse_args
from cli_config import ConfigError, build_settings
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from registry.npm.client import NpmRegistryClient
from repository.models import RemoteRepository, RemoteRepositoryError
from runner import CommandError, DryRunRunner, SubprocessRunner
from scaffold import ScaffoldError, ScaffoldOptions, Scaffolder
from versioning.resolver import CompatibilityResolver

logger = logging.getLogger(__name__)


def export_json(result, path):
    """Exports the resolution result to a JSON file.

    Args:
        result (ResolutionResult): Resolution to export.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(result.to_dict(), file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _dry_run_remote(provider, name, **_kwargs):
    logging.info("[dry-run] would create %s repository '%s'", provider, name)
    return RemoteRepository(
        provider=provider,
        name=name,
        web_url="",
        https_url=f"https://{provider}.invalid/{name}.git",
        ssh_url=f"git@{provider}.invalid:{name}.git",
    )


def resolve_only(args, settings, resolver):
    """Resolve versions without touching the filesystem and print the result."""
    result = resolver.resolve(args.ANGULAR_VERSION, settings.packages)
    if getattr(args, "OUTPUT", None):
        export_json(result, args.OUTPUT)
    else:
        print(json.dumps(result.to_dict(), indent=4))
    return result


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, quiet=args.QUIET)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        settings = build_settings(args)
    except ConfigError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    resolver = CompatibilityResolver(NpmRegistryClient(settings.registry_url))

    if args.RESOLVE_ONLY:
        try:
            resolve_only(args, settings, resolver)
        except KeyboardInterrupt:
            logging.error("Interrupted by user")
            sys.exit(ExitCodes.INTERRUPTED.value)
        sys.exit(ExitCodes.SUCCESS.value)

    if args.DRY_RUN:
        scaffolder = Scaffolder(settings, DryRunRunner(), resolver, remote_factory=_dry_run_remote)
    else:
        scaffolder = Scaffolder(settings, SubprocessRunner(), resolver)
    options = ScaffoldOptions(
        name=args.NAME,
        angular_version=args.ANGULAR_VERSION,
        directory=args.DIRECTORY,
        create_remote=args.CREATE_REMOTE,
        skip_install=args.SKIP_INSTALL,
        skip_git=args.SKIP_GIT,
    )

    try:
        report = scaffolder.run(options)
    except ScaffoldError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except CommandError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.COMMAND_FAILED.value)
    except RemoteRepositoryError as e:
        logging.error("Remote repository setup failed: %s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except KeyboardInterrupt:
        logging.error("Interrupted by user")
        sys.exit(ExitCodes.INTERRUPTED.value)

    if report.resolution is not None and args.OUTPUT:
        export_json(report.resolution, args.OUTPUT)

    logging.info("Project ready at %s", report.project_path)
    if report.remote is not None:
        logging.info("Remote repository: %s", report.remote.web_url or report.remote.name)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
