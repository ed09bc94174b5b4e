"""``zap subscribe`` – listen for messages on one or more topics."""

from __future__ import annotations

from typing import Any

import rich_click as click

from ..command import CLICK_CONTEXT_SETTINGS, ZapCommand
from ..observability import log_verbose, make_event
from .options import CONFIG_FILE_HELP, broker_options, current_session, global_options, settings_for

SUBSCRIBE_HELP = f"""Subscribe to one or more topics on a MQTT broker and print the messages
that arrive until interrupted.

{CONFIG_FILE_HELP}"""


def new_subscribe_command() -> ZapCommand:
    """Return a fresh ``subscribe`` command node."""

    @click.command(
        "subscribe",
        cls=ZapCommand,
        aliases=("sub",),
        short_help="Subscribe to topics on a MQTT broker",
        help=SUBSCRIBE_HELP,
        context_settings=CLICK_CONTEXT_SETTINGS,
    )
    @click.option(
        "--topic",
        "-t",
        "topics",
        multiple=True,
        required=True,
        help="Topic filter to subscribe to (repeatable)",
    )
    @broker_options
    @global_options(hidden=True)
    @click.pass_context
    def subscribe(ctx: click.Context, topics: tuple[str, ...], **params: Any) -> None:
        session = current_session(ctx, params)
        settings = settings_for(ctx, session, params)
        log_verbose(
            "subscribe_requested",
            **make_event("subscribe", {"host": settings.host, "port": settings.port, "topics": ",".join(topics)}),
        )
        session.bus.subscribe(settings, list(topics))

    return subscribe
