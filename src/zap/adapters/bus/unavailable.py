"""Placeholder message bus used when no MQTT transport is wired in."""

from __future__ import annotations

from typing import Sequence

from ...domain.errors import TransportUnavailable
from ...domain.settings import BrokerSettings
from ...observability import log_error

_HINT = "no MQTT transport is installed; pass a MessageBus to zap.cli.build_root_command"


class UnavailableBus:
    """:class:`zap.application.ports.MessageBus` that refuses every request."""

    def subscribe(self, settings: BrokerSettings, topics: Sequence[str]) -> None:
        self._refuse("subscribe", settings)

    def publish(self, settings: BrokerSettings, topic: str, message: str, retain: bool) -> None:
        self._refuse("publish", settings)

    def stats(self, settings: BrokerSettings, topic: str) -> None:
        self._refuse("stats", settings)

    @staticmethod
    def _refuse(operation: str, settings: BrokerSettings) -> None:
        log_error("transport_unavailable", operation=operation, host=settings.host, port=settings.port)
        raise TransportUnavailable(f"cannot run {operation} against {settings.host}:{settings.port}: {_HINT}")
