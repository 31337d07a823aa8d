"""Project orchestration: generate, resolve, install, commit, publish.

Each step runs strictly after the previous one. A failing external command
or remote API call aborts the run; nothing already created is rolled back.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional

from cli_config import Settings
from common.logging_utils import extra_context, is_debug_enabled, Timer
from generator import GeneratorOptions, generate_project
from installer import Installer
from repository.git import GitWorkspace
from repository.models import RemoteRepository
from repository.providers import create_remote
from runner import CommandRunner
from versioning.models import ResolutionResult
from versioning.resolver import CompatibilityResolver

logger = logging.getLogger(__name__)

RemoteFactory = Callable[..., RemoteRepository]


class ScaffoldError(RuntimeError):
    """The run cannot start, e.g. the project directory already exists."""


@dataclass
class ScaffoldOptions:
    """Per-run choices taken from the command line."""

    name: str
    angular_version: str
    directory: str = "."
    create_remote: bool = False
    skip_install: bool = False
    skip_git: bool = False


@dataclass
class ScaffoldReport:
    """What a completed run produced."""

    project_path: str
    resolution: Optional[ResolutionResult] = None
    remote: Optional[RemoteRepository] = None


class Scaffolder:
    """Sequences the generator, resolver, installer, git and remote provider."""

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        resolver: CompatibilityResolver,
        remote_factory: RemoteFactory = create_remote,
    ):
        self.settings = settings
        self.runner = runner
        self.resolver = resolver
        self.remote_factory = remote_factory

    def _step(self, action: str, fn, *args):
        with Timer() as t:
            result = fn(*args)
        if is_debug_enabled(logger):
            logger.debug(
                "Step finished",
                extra=extra_context(
                    event="function_exit",
                    component="scaffold",
                    action=action,
                    outcome="success",
                    duration_ms=t.duration_ms()
                )
            )
        return result

    def run(self, options: ScaffoldOptions) -> ScaffoldReport:
        """Scaffold one project.

        Raises:
            ScaffoldError: If the target directory already exists.
            runner.CommandError: If any external command fails.
            repository.models.RemoteRepositoryError: If the remote cannot be created.
        """
        destination = os.path.abspath(options.directory)
        project_path = os.path.join(destination, options.name)
        if os.path.exists(project_path):
            raise ScaffoldError(f"Destination already exists: {project_path}")
        if not os.path.isdir(destination):
            raise ScaffoldError(f"Destination directory not found: {destination}")

        report = ScaffoldReport(project_path=project_path)

        gen_options = GeneratorOptions(
            name=options.name,
            version=options.angular_version,
            style=self.settings.style,
            routing=self.settings.routing,
            skip_install=options.skip_install,
        )
        self._step("generate", generate_project, self.runner, gen_options, destination)

        if not options.skip_install:
            report.resolution = self._step(
                "resolve", self.resolver.resolve, options.angular_version, self.settings.packages
            )
            installer = Installer(self.runner, self.settings.package_manager, self.settings.registry_url)
            self._step(
                "install",
                installer.install,
                list(report.resolution.packages),
                report.resolution.force_install,
                project_path,
            )

        if options.skip_git:
            return report

        git = GitWorkspace(self.runner, project_path)
        self._step("commit", git.initial_commit, self.settings.branch, self.settings.commit_message)

        if options.create_remote:
            report.remote = self._step("create_remote", self._create_remote, options.name)
            git.add_remote(report.remote.push_url(self.settings.remote_protocol))
            git.push(self.settings.branch)
            logger.info("Pushed to %s", report.remote.web_url or report.remote.name)

        return report

    def _create_remote(self, name: str) -> RemoteRepository:
        return self.remote_factory(
            self.settings.remote_provider,
            name,
            private=self.settings.remote_private,
            description=f"Angular application {name}",
            owner=self.settings.remote_owner,
        )
