"""Command-line front end for publishing to and subscribing from MQTT brokers.

``build_root_command`` returns the wired click command tree so embedding
applications can inject their own :class:`zap.application.ports.MessageBus`;
``main`` runs it the way the ``zap`` console script does.
"""

from __future__ import annotations

__revision__ = "unknown"
"""Source revision reported by ``zap --version``; release builds overwrite it."""

from .cli import build_root_command, main  # noqa: E402
from .domain.errors import ConfigError, TransportUnavailable, ZapError  # noqa: E402
from .observability import get_logger, setup_logging  # noqa: E402

__all__ = [
    "ConfigError",
    "TransportUnavailable",
    "ZapError",
    "build_root_command",
    "get_logger",
    "main",
    "setup_logging",
]
