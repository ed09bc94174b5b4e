"""``zap publish`` – send one message to a topic."""

from __future__ import annotations

from typing import Any

import rich_click as click

from ..command import CLICK_CONTEXT_SETTINGS, ZapCommand
from ..observability import log_verbose, make_event
from .options import CONFIG_FILE_HELP, broker_options, current_session, global_options, settings_for

PUBLISH_HELP = f"""Publish a single message to a topic on a MQTT broker.

{CONFIG_FILE_HELP}"""


def new_publish_command() -> ZapCommand:
    """Return a fresh ``publish`` command node."""

    @click.command(
        "publish",
        cls=ZapCommand,
        aliases=("pub",),
        short_help="Publish a message to a MQTT broker",
        help=PUBLISH_HELP,
        context_settings=CLICK_CONTEXT_SETTINGS,
    )
    @click.option("--topic", "-t", required=True, help="Topic to publish on")
    @click.option("--message", "-m", required=True, help="Message payload")
    @click.option("--retain", "-r", is_flag=True, default=False, help="Ask the broker to retain the message")
    @broker_options
    @global_options(hidden=True)
    @click.pass_context
    def publish(ctx: click.Context, topic: str, message: str, retain: bool, **params: Any) -> None:
        session = current_session(ctx, params)
        settings = settings_for(ctx, session, params)
        log_verbose(
            "publish_requested",
            **make_event(
                "publish",
                {"host": settings.host, "port": settings.port, "topic": topic, "bytes": len(message), "retain": retain},
            ),
        )
        session.bus.publish(settings, topic, message, retain)

    return publish
