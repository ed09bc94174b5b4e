"""Subcommand constructors composed into the root command by :mod:`zap.cli`."""

from __future__ import annotations

from .publish import new_publish_command
from .stats import new_stats_command
from .subscribe import new_subscribe_command

__all__ = ["new_publish_command", "new_stats_command", "new_subscribe_command"]
