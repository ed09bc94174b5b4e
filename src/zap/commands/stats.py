"""``zap stats`` – report the statistics a broker publishes about itself."""

from __future__ import annotations

from typing import Any, Final

import rich_click as click

from ..command import CLICK_CONTEXT_SETTINGS, ZapCommand
from ..observability import log_verbose, make_event
from .options import CONFIG_FILE_HELP, broker_options, current_session, global_options, settings_for

SYS_TOPIC: Final[str] = "$SYS/#"

STATS_HELP = f"""Collect the statistics a MQTT broker publishes under its $SYS topics.

{CONFIG_FILE_HELP}"""


def new_stats_command() -> ZapCommand:
    """Return a fresh ``stats`` command node."""

    @click.command(
        "stats",
        cls=ZapCommand,
        short_help="Show statistics of a MQTT broker",
        help=STATS_HELP,
        context_settings=CLICK_CONTEXT_SETTINGS,
    )
    @click.option("--topic", "-t", default=SYS_TOPIC, help="Topic filter carrying the broker statistics")
    @broker_options
    @global_options(hidden=True)
    @click.pass_context
    def stats(ctx: click.Context, topic: str, **params: Any) -> None:
        session = current_session(ctx, params)
        settings = settings_for(ctx, session, params)
        log_verbose("stats_requested", **make_event("stats", {"host": settings.host, "port": settings.port, "topic": topic}))
        session.bus.stats(settings, topic)

    return stats
