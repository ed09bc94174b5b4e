"""CLI adapter for ``zap`` built on ``lib_cli_exit_tools``.

Purpose
-------
Own the process command surface: build the root command, compose the
``subscribe``/``publish``/``stats`` subcommands into one tree, report version
information, render help, and map execution failures to exit codes.

Contents
--------
* :func:`build_root_command` – command tree builder returning a wired root.
* :class:`RootArguments` – parsed flags handed to the root handler.
* :func:`handle_root` – behaviour of ``zap`` without a subcommand.
* :func:`new_help_command` – the implicit ``help [command]`` command.
* :func:`main` – entry point used by ``console_scripts`` and ``python -m zap``.

System Role
-----------
The CLI lives in the outermost layer. Subcommands come from
:mod:`zap.commands`; help text comes from the :class:`zap.usage.UsageRenderer`
injected here and inherited by every node. ``lib_cli_exit_tools`` prints
failures, and :func:`main` collapses every failure to exit status 1.
"""

from __future__ import annotations

import json
import sys
import uuid
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from . import __revision__
from .adapters.bus.unavailable import UnavailableBus
from .application.ports import MessageBus
from .command import CLICK_CONTEXT_SETTINGS, ZapCommand, ZapGroup
from .commands import new_publish_command, new_stats_command, new_subscribe_command
from .commands.options import global_options
from .observability import bind_trace_id, log_debug, set_verbosity, setup_logging
from .session import BuildInfo, Session
from .usage import UsageRenderer

PROG_NAME: Final[str] = "zap"
EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

ROOT_SHORT: Final[str] = "Listen or publish to a MQTT broker"
ROOT_LONG: Final[str] = """zap - what happens when technology meets mosquito

zap is a little utility for publishing or subscribing to events for the
MQTT message bus"""

HELP_LONG: Final[str] = """Help provides help for any command in the application.
Simply type zap help [path to command] for full details."""


@dataclass(frozen=True)
class RootArguments:
    """Flags of the root command that decide what ``zap`` alone does."""

    show_version: bool = False


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version("zap")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def handle_root(ctx: click.Context, args: RootArguments, build: BuildInfo) -> None:
    """Print the version line or the root help text.

    The handler only writes to stdout; leaving the process is the business of
    :func:`main`.
    """

    if args.show_version:
        click.echo(build.banner)
    else:
        click.echo(ctx.get_help())


def build_root_command(
    version: str,
    revision: str,
    *,
    renderer: UsageRenderer | None = None,
    bus: MessageBus | None = None,
) -> ZapGroup:
    """Return a fully wired root command ready for execution.

    Why
        Building the tree in a function instead of at import time keeps every
        invocation (and every test) independent of process-wide state.

    What
        Creates the ``zap`` group with its ``--version`` flag and global
        flags, attaches the subcommands and ``help``, binds *renderer* (the
        default :class:`UsageRenderer` when omitted) to the root so every
        descendant inherits it, and runs the logging initializer.

    Parameters
    ----------
    version / revision:
        Reported by ``zap --version``.
    renderer:
        Usage renderer shared by the whole tree.
    bus:
        Message bus handed to the subcommands; defaults to
        :class:`zap.adapters.bus.unavailable.UnavailableBus`.
    """

    build = BuildInfo(version=version, revision=revision)
    message_bus: MessageBus = bus if bus is not None else UnavailableBus()

    @click.group(
        PROG_NAME,
        cls=ZapGroup,
        invoke_without_command=True,
        short_help=ROOT_SHORT,
        help=ROOT_LONG,
        context_settings=CLICK_CONTEXT_SETTINGS,
        usage_renderer=renderer or UsageRenderer(),
    )
    @click.option("--version", "show_version", is_flag=True, default=False, help="Display version information")
    @global_options()
    @click.pass_context
    def root(ctx: click.Context, show_version: bool, config_path: Path, verbosity: str, traceback: bool) -> None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
        set_verbosity(verbosity)
        bind_trace_id(uuid.uuid4().hex)
        ctx.obj = Session(build=build, bus=message_bus, config_path=config_path)
        if ctx.invoked_subcommand is None:
            handle_root(ctx, RootArguments(show_version=show_version), build)
        else:
            log_debug("dispatch", command=ctx.invoked_subcommand, config=str(config_path))

    root.add_command(new_subscribe_command())
    root.add_command(new_publish_command())
    root.add_command(new_stats_command())
    root.add_command(new_help_command())

    setup_logging()
    return root


def new_help_command() -> ZapCommand:
    """Return the ``help [command]`` command shown for every group."""

    @click.command(
        "help",
        cls=ZapCommand,
        use="help [command]",
        short_help="Help about any command",
        help=HELP_LONG,
        context_settings=CLICK_CONTEXT_SETTINGS,
    )
    @click.argument("path", nargs=-1)
    @click.pass_context
    def help_command(ctx: click.Context, path: tuple[str, ...]) -> None:
        parent = ctx.parent if ctx.parent is not None else ctx
        target = parent
        for name in path:
            group = target.command
            child = group.get_command(target, name) if isinstance(group, click.Group) else None
            if child is None:
                click.echo(f"Unknown help topic {json.dumps(list(path))}")
                click.echo(parent.get_usage())
                return
            target = child.make_context(child.name, [], parent=target, resilient_parsing=True)
        click.echo(target.get_help())

    return help_command


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    version: Optional[str] = None,
    revision: Optional[str] = None,
    restore_traceback: bool = True,
) -> int:
    """Build the command tree, execute it, and return the process exit code.

    Returns ``0`` on success (including the help and version paths) and ``1``
    for any failure: unknown subcommand, bad arguments, config errors, or a
    failing subcommand.
    """

    root = build_root_command(
        version if version is not None else _resolve_version(),
        revision if revision is not None else __revision__,
    )
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            exit_code = lib_cli_exit_tools.run_cli(
                root,
                argv=list(argv) if argv is not None else None,
                prog_name=PROG_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            exit_code = lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color
    return EXIT_SUCCESS if exit_code == 0 else EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
