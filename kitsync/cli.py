"""CLI interface for KITSYNC.

This module provides the Typer-based command-line interface:

    kitsync --config               show configuration and cache locations
    kitsync com --install --link   pick components to install and link
    kitsync block --sync           push updated blocks to linked projects
"""

from typing import Annotated

import typer
from rich.table import Table

from kitsync.config.manager import ConfigManager
from kitsync.context import Context
from kitsync.installer import RUNNERS, ArtifactRunner
from kitsync.links import LinkRegistry
from kitsync.ui.prompts import select_artifacts
from kitsync.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_warning,
    show_version,
)
from kitsync.utils.errors import ExitCode, KitsyncError, UserCancelledError
from kitsync.utils.logging import setup_logging

app = typer.Typer(
    name="kitsync",
    help="KITSYNC - Install shared components and blocks into front-end projects",
    add_completion=False,
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


def _show_locations(config: ConfigManager, context: Context) -> None:
    print_header("Locations")
    print_info(f"Config file: {config.global_config_path}")
    print_info(f"Local component cache: {context.com_path}")
    print_info(f"Local block cache: {context.block_path}")
    print_info(f"Link registry: {context.links_path}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_config: Annotated[
        bool,
        typer.Option(
            "--config",
            "-c",
            help="Show local configuration and cache locations",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """KITSYNC - Install shared components and blocks into front-end projects."""
    setup_logging()

    config = ConfigManager()
    config.ensure_global_config()
    config.load()
    ctx.obj = config

    if show_config:
        _show_locations(config, Context.from_settings(config.settings))
        config.show()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _build_runner(scope: str, config: ConfigManager) -> ArtifactRunner:
    context = Context.from_settings(config.settings, config_path=config.global_config_path)
    registry = LinkRegistry(context.links_path).load()
    return RUNNERS[scope](context, config, registry)


def _show_catalog(runner: ArtifactRunner) -> None:
    artifacts = runner.list()
    if not artifacts:
        print_warning(f"No {runner.scope} artifacts found in {runner.cache_path}")
        return

    table = Table(title=None, show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Kind")
    table.add_column("Feature")
    table.add_column("Description")
    table.add_column("Linked Projects")

    for artifact in artifacts:
        projects = runner.registry.projects(runner.scope, artifact.name)
        table.add_row(
            artifact.name,
            artifact.version,
            artifact.kind.value,
            artifact.feature,
            artifact.description,
            "\n".join(projects) or "-",
        )
    console.print(table)


def _run_artifact_command(
    scope: str,
    config: ConfigManager,
    *,
    install: bool,
    url: str | None,
    clear: bool,
    save: bool,
    link: bool,
    unlink: bool,
    sync: bool,
    auto_commit: bool,
    message: str | None,
    overwrite: bool,
    list_artifacts: bool,
) -> None:
    """Shared flow for the com and block commands."""
    try:
        runner = _build_runner(scope, config)

        if url:
            runner.url(url)

        if clear:
            runner.clear()
        else:
            runner.load()

        if save:
            runner.save()

        if link:
            runner.link()

        if overwrite:
            runner.overwrite()

        if unlink:
            runner.unlink(
                select_artifacts("Select the artifacts to unlink", runner.linked_to_project())
            )

        if auto_commit or message:
            runner.commit(message)

        if sync:
            runner.sync(select_artifacts("Select the artifacts to sync", runner.sync_list()))

        if install:
            runner.install(select_artifacts("Select the artifacts to install", runner.list()))

        if list_artifacts and not clear:
            _show_catalog(runner)

        runner.execute()

    except UserCancelledError as e:
        print_info(f"\n{e}")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e

    except KitsyncError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e

    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e


# Options shared by the com and block commands
InstallOption = Annotated[
    bool, typer.Option("--install", "-i", help="Select and install artifacts")
]
UrlOption = Annotated[
    str | None, typer.Option("--url", "-u", help="Shared git repository url")
]
ClearOption = Annotated[
    bool, typer.Option("--clear", "-c", help="Clear the local repository cache")
]
SaveOption = Annotated[
    bool, typer.Option("--save", "-s", help="Save the repository url to config")
]
LinkOption = Annotated[
    bool, typer.Option("--link", "-l", help="Link installed artifacts to this project")
]
UnlinkOption = Annotated[
    bool, typer.Option("--unlink", help="Select artifacts to unlink from this project")
]
SyncOption = Annotated[
    bool, typer.Option("--sync", help="Select artifacts to update in all linked projects")
]
AutoCommitOption = Annotated[
    bool, typer.Option("--auto-commit", "-a", help="Commit and push after installing")
]
MessageOption = Annotated[
    str | None, typer.Option("--message", "-m", help="Commit message (implies --auto-commit)")
]
OverwriteOption = Annotated[
    bool, typer.Option("--overwrite", "-o", help="Overwrite same-named files that are not artifacts")
]
ListOption = Annotated[
    bool, typer.Option("--list", help="List the artifacts in the shared repository")
]


@app.command()
def com(
    ctx: typer.Context,
    install: InstallOption = False,
    url: UrlOption = None,
    clear: ClearOption = False,
    save: SaveOption = False,
    link: LinkOption = False,
    unlink: UnlinkOption = False,
    sync: SyncOption = False,
    auto_commit: AutoCommitOption = False,
    message: MessageOption = None,
    overwrite: OverwriteOption = False,
    list_artifacts: ListOption = False,
) -> None:
    """Install, sync and link shared components and utilities."""
    _run_artifact_command(
        "com",
        ctx.obj,
        install=install,
        url=url,
        clear=clear,
        save=save,
        link=link,
        unlink=unlink,
        sync=sync,
        auto_commit=auto_commit,
        message=message,
        overwrite=overwrite,
        list_artifacts=list_artifacts,
    )


@app.command()
def block(
    ctx: typer.Context,
    install: InstallOption = False,
    url: UrlOption = None,
    clear: ClearOption = False,
    save: SaveOption = False,
    link: LinkOption = False,
    unlink: UnlinkOption = False,
    sync: SyncOption = False,
    auto_commit: AutoCommitOption = False,
    message: MessageOption = None,
    overwrite: OverwriteOption = False,
    list_artifacts: ListOption = False,
) -> None:
    """Install, sync and link shared page blocks."""
    _run_artifact_command(
        "block",
        ctx.obj,
        install=install,
        url=url,
        clear=clear,
        save=save,
        link=link,
        unlink=unlink,
        sync=sync,
        auto_commit=auto_commit,
        message=message,
        overwrite=overwrite,
        list_artifacts=list_artifacts,
    )


__all__ = [
    "app",
]
