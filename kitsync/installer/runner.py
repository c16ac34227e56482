"""Installer runners for shared components and blocks.

A runner is configured builder-style and then executed:

    runner = ComRunner(context, config, registry)
    runner.load()
    runner.install(artifacts).link().commit().execute()

Installing an artifact reconciles its declared dependencies against the
target project, installs or bumps third-party packages through npm,
installs internal artifacts recursively (dispatching block dependencies
to the block runner and everything else to the component runner), copies
the artifact's files and optionally commits and pushes the result.
"""

from __future__ import annotations

import shutil
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from kitsync.artifacts.catalog import Catalog
from kitsync.artifacts.layout import artifact_files, has_foreign_conflict
from kitsync.artifacts.models import Artifact, ArtifactKind
from kitsync.config.manager import ConfigManager
from kitsync.config.settings import Settings
from kitsync.context import Context
from kitsync.installer.reporter import BufferedSink, Reporter, counter
from kitsync.integrations import git, npm
from kitsync.links import LinkRegistry
from kitsync.resolver import DependencyPlan, project_dependencies, reconcile
from kitsync.utils.console import (
    console,
    print_error,
    print_header,
    print_success,
    print_warning,
    separator,
)
from kitsync.utils.errors import (
    ArtifactNotFoundError,
    ConfigError,
    GitOperationError,
    InvalidPlanError,
    KitsyncError,
)
from kitsync.utils.logging import log_message


@dataclass
class RunnerPlan:
    """Operations queued on a runner by the builder methods."""

    save: bool = False
    install: list[Artifact] | None = None
    sync: list[Artifact] | None = None
    link: bool = False
    unlink: list[Artifact] | None = None
    commit: str | None = None
    commit_requested: bool = False
    overwrite: bool = False


@dataclass
class _Shared:
    """State shared between a runner and the peer runners it spawns."""

    runners: dict[str, ArtifactRunner] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock)


@dataclass
class SyncFailure:
    """A project that failed to receive a synced artifact."""

    artifact: str
    project: str
    error: Exception


class ArtifactRunner:
    """Installs, syncs, links and unlinks one kind of shared artifact.

    Subclasses set ``scope`` (also the link registry namespace),
    ``kinds`` (artifact kinds found in the shared repository) and
    ``dependency_kinds`` (artifact kinds counted as already provided when
    analysing a project).

    Attributes:
        context: Filesystem locations
        config: Configuration manager
        settings: Loaded settings
        registry: Link registry
        catalog: Artifacts in this runner's repository checkout
        reporter: Progress reporter for top-level operations
    """

    scope: ClassVar[str] = ""
    kinds: ClassVar[tuple[ArtifactKind, ...]] = ()
    dependency_kinds: ClassVar[tuple[ArtifactKind, ...]] = ()

    _types: ClassVar[dict[str, type[ArtifactRunner]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.scope:
            ArtifactRunner._types[cls.scope] = cls

    def __init__(
        self,
        context: Context,
        config: ConfigManager,
        registry: LinkRegistry,
        *,
        reporter: Reporter | None = None,
        _shared: _Shared | None = None,
    ) -> None:
        self.context = context
        self.config = config
        self.settings: Settings = config.settings
        self.registry = registry
        self.catalog = Catalog(self.kinds)
        self.reporter = reporter or Reporter(self.scope)
        self._url = self.settings.url_for(self.scope)
        self._plan = RunnerPlan()
        self._project_catalog = Catalog(self.dependency_kinds)
        self._loaded = False
        self._shared = _shared or _Shared()
        self._shared.runners.setdefault(self.scope, self)

    # ------------------------------------------------------------------
    # Repository checkout
    # ------------------------------------------------------------------

    @property
    def cache_path(self) -> Path:
        """Local checkout of this runner's shared repository."""
        return self.context.cache_path(self.scope)

    def load(self) -> None:
        """Clone the shared repository, or pull it if already cloned.

        Only the first call per runner touches the network.

        Raises:
            ConfigError: If no repository URL is configured
            GitOperationError: If clone or pull fails
        """
        with self._shared.lock:
            if self._loaded:
                return

            if not self.cache_path.exists():
                if not self._url:
                    raise ConfigError(
                        f"No {self.scope} repository configured. "
                        f"Pass --url or set {Settings.url_key_for(self.scope)}."
                    )
                self.reporter.pending(f"ready to download repository: {self._url}")
                try:
                    git.clone(
                        self._url,
                        self.cache_path,
                        depth=self.settings.git_clone_depth,
                        on_line=self.reporter.output,
                    )
                except GitOperationError:
                    # A half-written checkout would be pulled next time
                    shutil.rmtree(self.cache_path, ignore_errors=True)
                    raise
                self.reporter.success("download done")
            else:
                self.reporter.pending(f"ready to update repository: {self._url or self.cache_path}")
                git.pull(self.cache_path, on_line=self.reporter.output)
                self.reporter.success("update done")

            self.catalog.invalidate()
            self._loaded = True

    def clear(self) -> None:
        """Remove the local checkout of the shared repository.

        Raises:
            KitsyncError: If the checkout cannot be fully removed
        """
        started = time.perf_counter()
        self.catalog.invalidate()
        self._loaded = False
        with console.status(f"Clearing {self.scope} cache...", spinner="dots"):
            try:
                if self.cache_path.exists():
                    shutil.rmtree(self.cache_path)
            except OSError as e:
                raise KitsyncError(f"Failed to clear cache {self.cache_path}: {e}") from e
        print_success(f"clear cache: {time.perf_counter() - started:.2f}s ({self.cache_path})")

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list(self) -> list[Artifact]:
        """Artifacts available in the shared repository checkout."""
        return self.catalog.list(self.cache_path)

    def find(self, name: str) -> Artifact | None:
        return self.catalog.find(name, self.cache_path)

    def sync_list(self) -> list[Artifact]:
        """Available artifacts linked to at least one project."""
        return self.catalog.linked(self.cache_path, self.registry)

    def linked_to_project(self) -> list[Artifact]:
        """Available artifacts linked to the current project."""
        names = set(self.registry.linked_to(self.scope, self.context.project_path))
        return [artifact for artifact in self.list() if artifact.name in names]

    def project_artifact_deps(self, project_path: Path) -> dict[str, str]:
        """Artifacts of this runner's kinds already present in a project."""
        return Catalog(self.kinds).dependency_map(project_path)

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def url(self, url: str) -> ArtifactRunner:
        self._url = url
        return self

    def save(self) -> ArtifactRunner:
        self._plan.save = True
        return self

    def install(self, artifacts: Artifact | list[Artifact]) -> ArtifactRunner:
        self._plan.install = (self._plan.install or []) + _as_list(artifacts)
        return self

    def sync(self, artifacts: Artifact | list[Artifact]) -> ArtifactRunner:
        self._plan.sync = (self._plan.sync or []) + _as_list(artifacts)
        return self

    def link(self) -> ArtifactRunner:
        self._plan.link = True
        return self

    def unlink(self, artifacts: Artifact | list[Artifact]) -> ArtifactRunner:
        self._plan.unlink = (self._plan.unlink or []) + _as_list(artifacts)
        return self

    def commit(self, message: str | None = None) -> ArtifactRunner:
        self._plan.commit_requested = True
        self._plan.commit = message
        return self

    def overwrite(self) -> ArtifactRunner:
        self._plan.overwrite = True
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self) -> None:
        """Run the queued operations in order: save, install, sync, link, unlink.

        Raises:
            InvalidPlanError: If both install and sync were requested
            KitsyncError: If any linked project failed to sync
        """
        plan = self._plan
        if plan.install is not None and plan.sync is not None:
            raise InvalidPlanError("Install and sync cannot be combined in one run")

        if plan.save:
            key = Settings.url_key_for(self.scope)
            warning = self.config.save(key, self._url)
            print_success(f"Saved {key}={self._url}")
            if warning:
                print_warning(warning)

        if plan.install is not None:
            self._execute_install(plan.install)

        failures: list[SyncFailure] = []
        if plan.sync is not None:
            for artifact in plan.sync:
                failures.extend(self._sync_artifact(artifact))
            if failures:
                for failure in failures:
                    print_error(f"{failure.artifact} -> {failure.project}: {failure.error}")
            else:
                print_success("Sync finished")

        if plan.link and plan.install is not None:
            project = self.context.project_path
            for artifact in plan.install:
                self.registry.link(self.scope, artifact.name, project)
                print_success(f"Link command detected, linked {artifact.name} -> {project}")
            self.registry.save()

        if plan.unlink is not None:
            project = self.context.project_path
            for artifact in plan.unlink:
                if self.registry.unlink(self.scope, artifact.name, project):
                    print_success(
                        f"Unlink command detected, removed {artifact.name} -> {project}"
                    )
                else:
                    print_warning(f"{artifact.name} is not linked to {project}")
            self.registry.save()

        if failures:
            raise KitsyncError(f"{len(failures)} project(s) failed to sync")

    def _execute_install(self, artifacts: list[Artifact]) -> None:
        project = self.context.project_path
        total = len(artifacts)
        for i, artifact in enumerate(artifacts, start=1):
            self.reporter.pending(f"{counter(i, total)}preparing to install: {artifact.name}")
            self._install_checked(artifact, project, self.reporter, "install", ())
        self.reporter.success(f"{counter(total, total)}install finished")

    def _install_checked(
        self,
        artifact: Artifact,
        project_path: Path,
        reporter: Reporter,
        action: str,
        chain: tuple[str, ...],
    ) -> None:
        """Install unless a same-named file the tool does not manage is in the way."""
        if has_foreign_conflict(artifact, project_path):
            if not self._plan.overwrite:
                reporter.warning(
                    f"A non-artifact file with the same name exists, skipping {artifact.name}"
                )
                separator()
                return
            reporter.warning(
                f"A non-artifact file with the same name exists, overwriting {artifact.name}"
            )
            separator()
        self._install(artifact, project_path, reporter, action, chain)

    def _sync_artifact(self, artifact: Artifact) -> list[SyncFailure]:
        """Update one artifact in every project linked to it."""
        projects = self.registry.projects(self.scope, artifact.name)
        print_header(f"Sync {artifact.name}")
        if not projects:
            print_warning(f"No projects linked to {artifact.name}")
            return []

        self.load()
        failures: list[SyncFailure] = []
        max_workers = max(1, min(self.settings.sync_max_parallel, len(projects)))

        def sync_project(project: str) -> BufferedSink:
            sink = BufferedSink()
            reporter = Reporter(self.scope, sink)
            try:
                self._install(artifact, Path(project), reporter, "update", ())
            except Exception as e:
                reporter.error(str(e))
                raise _SyncError(sink, e) from e
            return sink

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(sync_project, project): project for project in projects}
            for future in as_completed(futures):
                project = futures[future]
                console.print(f"[step]Sync to: {project}[/step]")
                try:
                    future.result().flush()
                    print_success(f"{artifact.name} -> {project}")
                except _SyncError as e:
                    e.sink.flush()
                    failures.append(SyncFailure(artifact.name, project, e.error))
        return failures

    def _install(
        self,
        artifact: Artifact,
        project_path: Path,
        reporter: Reporter,
        action: str,
        chain: tuple[str, ...],
    ) -> None:
        """Reconcile dependencies, install them, copy files and optionally commit.

        Args:
            artifact: Artifact to install
            project_path: Project receiving the artifact
            reporter: Output destination
            action: "install" or "update", used in the default commit message
            chain: Artifacts currently being installed above this one

        Raises:
            NpmError: If npm fails
            GitOperationError: If the auto-commit fails
            ArtifactNotFoundError: If an internal dependency is not in its repository
        """
        chain = (*chain, artifact.name)
        plan = self._analyse(artifact, project_path, reporter)
        self._report_plan(plan, reporter)

        specs = plan.npm_specs
        if specs:
            reporter.pending(f"{counter(0, len(specs))}processing third-party dependencies")
            npm.install(project_path, specs, on_line=reporter.output)
            reporter.success("third-party dependencies done")

        if plan.internal:
            total = len(plan.internal)
            reporter.pending(f"{counter(0, total)}processing internal dependencies")
            for i, name in enumerate(plan.internal, start=1):
                reporter.pending(f"{counter(i, total)}{name}")
                if name in chain:
                    reporter.warning(f"{name} is already being installed, skipping")
                    continue
                self._install_internal(name, artifact, project_path, reporter, chain)
                separator()

        self._copy_files(artifact, project_path, reporter)

        if self._plan.commit_requested and len(chain) == 1:
            reporter.pending("auto commit detected")
            message = self._plan.commit or f"chore({self.scope}): {action} {artifact.name}"
            git.commit_and_push(project_path, message, on_line=reporter.output)
            reporter.success("commit done")

    def _analyse(self, artifact: Artifact, project_path: Path, reporter: Reporter) -> DependencyPlan:
        self._project_catalog.invalidate(project_path)
        provided = project_dependencies(
            project_path,
            [self._project_catalog.dependency_map(project_path)],
        )

        total = len(artifact.dependencies)
        if total:
            reporter.pending(f"{counter(0, total)}analysing dependencies")
            for i, name in enumerate(artifact.dependencies, start=1):
                reporter.pending(f"{counter(i, total)}{name}")

        plan = reconcile(artifact.dependencies, provided, self.settings.internal_scope_prefix)

        if total:
            reporter.success(f"{counter(total, total)}dependency analysis done")
        return plan

    @staticmethod
    def _report_plan(plan: DependencyPlan, reporter: Reporter) -> None:
        if plan.install:
            reporter.warning(f"dependencies to install: {len(plan.install)}")
            for name, ver in plan.install:
                reporter.info(f"{name}@{ver}")
        if plan.update:
            reporter.warning(f"dependencies to update: {len(plan.update)}")
            for name, ver in plan.update:
                reporter.info(f"{name}@{ver}")
        if plan.internal:
            reporter.warning(f"other artifacts to install: {len(plan.internal)}")
            for name in plan.internal:
                reporter.info(name)

    def _install_internal(
        self,
        name: str,
        parent: Artifact,
        project_path: Path,
        reporter: Reporter,
        chain: tuple[str, ...],
    ) -> None:
        runner = self._peer(self._scope_for_dependency(name), reporter)
        target = runner.find(name)
        if target is None:
            raise ArtifactNotFoundError(name)

        child_reporter = reporter.child(f"{self.scope}->{parent.name}")
        runner._install_checked(target, project_path, child_reporter, "install", chain)

    def _scope_for_dependency(self, name: str) -> str:
        return "block" if name.startswith(self.settings.block_scope_prefix) else "com"

    def _peer(self, scope: str, reporter: Reporter) -> ArtifactRunner:
        """Runner for another (or the same) scope, sharing state with this one.

        A runner created here reports to the same destination as ``reporter``,
        so its first load lands in a sync worker's buffer.
        """
        with self._shared.lock:
            runner = self._shared.runners.get(scope)
            if runner is None:
                runner = self._types[scope](
                    self.context,
                    self.config,
                    self.registry,
                    reporter=Reporter(f"{self.scope}->{scope}", reporter.sink),
                    _shared=self._shared,
                )
            if self._plan.overwrite:
                runner._plan.overwrite = True
            runner.load()
        return runner

    def _copy_files(self, artifact: Artifact, project_path: Path, reporter: Reporter) -> None:
        files = artifact_files(artifact, self.cache_path)
        total = len(files)
        if not files:
            reporter.warning(f"no files found for {artifact.name} in {self.cache_path}")

        reporter.pending(f"{counter(0, total)}preparing to copy files")
        for i, relative in enumerate(files, start=1):
            reporter.pending(f"{counter(i, total)}{relative.as_posix()}")
            source = self.cache_path / relative
            destination = project_path / relative
            if source.is_dir():
                shutil.copytree(source, destination, dirs_exist_ok=True)
            else:
                destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, destination)
        log_message(f"Copied {total} path(s) of {artifact.name} into {project_path}")
        reporter.success(f"{counter(total, total)}install done")


class _SyncError(Exception):
    """Carries a failed project's buffered output out of a worker thread."""

    def __init__(self, sink: BufferedSink, error: Exception) -> None:
        super().__init__(str(error))
        self.sink = sink
        self.error = error


def _as_list(artifacts: Artifact | list[Artifact]) -> list[Artifact]:
    return list(artifacts) if isinstance(artifacts, list) else [artifacts]


__all__ = [
    "ArtifactRunner",
    "RunnerPlan",
    "SyncFailure",
]
