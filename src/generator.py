"""Angular CLI invocation for the initial project skeleton."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from constants import Constants
from runner import CommandRunner, run_checked

logger = logging.getLogger(__name__)


@dataclass
class GeneratorOptions:
    """Options forwarded to ``ng new``."""

    name: str
    version: str = Constants.DEFAULT_ANGULAR_VERSION
    style: str = Constants.DEFAULT_STYLE
    routing: bool = True
    skip_install: bool = False


def build_generator_args(options: GeneratorOptions) -> List[str]:
    """Arguments for ``npx`` that run ``ng new`` from the pinned CLI release.

    Git is always skipped here; the repository is initialized afterwards.
    """
    args = [
        "--yes",
        f"{Constants.CLI_PACKAGE}@{options.version}",
        "new",
        options.name,
        "--directory",
        options.name,
        "--routing" if options.routing else "--routing=false",
        f"--style={options.style}",
        "--skip-git",
    ]
    if options.skip_install:
        args.append("--skip-install")
    return args


def generate_project(runner: CommandRunner, options: GeneratorOptions, cwd: Optional[str] = None) -> None:
    logger.info("Generating Angular %s project '%s'", options.version, options.name)
    run_checked(runner, "npx", build_generator_args(options), cwd)
