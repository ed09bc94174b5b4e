"""Options shared by every subcommand.

Purpose
-------
Declare the connection flags and the global flags once, and turn their parsed
values into :class:`zap.domain.settings.BrokerSettings`, letting only the
options the user actually typed override the config file.

Contents
--------
* :data:`BROKER_OPTION_NAMES` – parameter names of the connection flags.
* :data:`GLOBAL_OPTION_NAMES` – parameter names of the global flags.
* :func:`broker_options` – decorator attaching the connection flags.
* :func:`global_options` – decorator attaching ``--config``, ``--verbosity``
  and ``--traceback``.
* :func:`explicit_overrides` – options given on the command line.
* :func:`current_session` – the per-invocation state set by the root command.
* :func:`settings_for` – resolve settings for the running command.
* :data:`CONFIG_FILE_HELP` – config-file note appended to long help texts.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Final, Mapping, MutableMapping, TypeVar

import lib_cli_exit_tools
import rich_click as click
from click.core import ParameterSource

from ..command import GlobalOption
from ..core import default_config_path, resolve_broker_settings
from ..domain.settings import BrokerSettings, normalize_key
from ..observability import VERBOSITY_LEVELS, log_debug, set_verbosity
from ..session import Session

F = TypeVar("F", bound=Callable[..., Any])

GLOBAL_OPTION_NAMES: Final[tuple[str, ...]] = ("config_path", "verbosity", "traceback")

BROKER_OPTION_NAMES: Final[tuple[str, ...]] = (
    "host",
    "port",
    "qos",
    "client_id",
    "username",
    "password",
    "keepalive",
)

CONFIG_FILE_HELP: Final[str] = """Many of the options for this command can be put in a config file.
You can create a config file at $HOME/.zap.toml.  Configs found in the config file will override built-in
defaults but can be overridden by explicit command-line options.

The format of the config file is written in Toml.  Sections in brackets (e.g. [broker]) can be
referenced with the --broker flag.  Values should be of the form qos = "1" and the keys will
have the same name as the option values listed above."""


def broker_options(func: F) -> F:
    """Attach ``--broker`` and the connection flags to a command callback."""

    decorators = [
        click.option("--broker", "-b", default=None, help="Config file section holding the broker settings"),
        click.option("--host", "-H", default="localhost", help="Broker host name"),
        click.option("--port", "-p", type=click.IntRange(1, 65535), default=1883, help="Broker port"),
        click.option("--qos", "-q", type=click.IntRange(0, 2), default=0, help="Quality of service level (0, 1 or 2)"),
        click.option("--client-id", "-i", default="", help="Client identifier (the transport picks one if empty)"),
        click.option("--username", "-u", default="", help="User name for broker authentication"),
        click.option("--password", "-P", default="", help="Password for broker authentication"),
        click.option("--keepalive", "-k", type=click.IntRange(min=1), default=60, help="Keepalive interval in seconds"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def explicit_overrides(ctx: click.Context, params: Mapping[str, Any]) -> dict[str, object]:
    """Return the connection options the user typed, keyed by option name.

    Defaults are left out so config file values are not masked by them.
    """

    overrides: dict[str, object] = {}
    for name in BROKER_OPTION_NAMES:
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
            overrides[normalize_key(name)] = params[name]
    return overrides


def global_options(*, hidden: bool = False) -> Callable[[F], F]:
    """Return a decorator attaching ``--config``, ``--verbosity`` and ``--traceback``.

    The root carries the visible copies, which descendants list under "Global
    Flags". Subcommands carry *hidden* copies so the same flags are accepted
    after the subcommand name; :func:`current_session` applies them.
    """

    def decorate(func: F) -> F:
        decorators = [
            click.option(
                "--config",
                "config_path",
                cls=GlobalOption,
                hidden=hidden,
                type=click.Path(path_type=Path, dir_okay=False),
                default=default_config_path,
                show_default="$HOME/.zap.toml",
                help="Config file to read broker settings from",
            ),
            click.option(
                "--verbosity",
                cls=GlobalOption,
                hidden=hidden,
                type=click.Choice(tuple(VERBOSITY_LEVELS), case_sensitive=False),
                default="standard",
                show_default="standard",
                help="Diagnostics level: standard, stats, verbose or debug",
            ),
            click.option(
                "--traceback/--no-traceback",
                cls=GlobalOption,
                hidden=hidden,
                is_flag=True,
                default=False,
                help="Show full Python traceback on errors",
            ),
        ]
        for decorator in reversed(decorators):
            func = decorator(func)
        return func

    return decorate


def current_session(ctx: click.Context, params: MutableMapping[str, Any]) -> Session:
    """Return the :class:`Session` prepared by the root command.

    Global flags typed after the subcommand name are removed from *params* and
    applied here, overriding what the root command set up.
    """

    session = ctx.find_object(Session)
    if session is None:
        raise click.UsageError("this command must be run through the zap root command", ctx=ctx)
    values = {name: params.pop(name, None) for name in GLOBAL_OPTION_NAMES}
    typed = [name for name in GLOBAL_OPTION_NAMES if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE]
    if "verbosity" in typed:
        set_verbosity(str(values["verbosity"]))
    if "traceback" in typed:
        lib_cli_exit_tools.config.traceback = bool(values["traceback"])
        lib_cli_exit_tools.config.traceback_force_color = bool(values["traceback"])
    if "config_path" in typed:
        session = replace(session, config_path=Path(str(values["config_path"])))
        ctx.obj = session
    if typed:
        log_debug("global_flags_applied", command=ctx.command.name, flags=",".join(typed))
    return session


def settings_for(ctx: click.Context, session: Session, params: Mapping[str, Any]) -> BrokerSettings:
    """Resolve broker settings for the command bound to *ctx*."""

    return resolve_broker_settings(
        config_path=session.config_path,
        broker=params.get("broker"),
        overrides=explicit_overrides(ctx, params),
    )
