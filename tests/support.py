"""Test doubles shared by the unit and end-to-end suites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from zap.domain.settings import BrokerSettings

VERSION = "1.2.3"
REVISION = "abc123"


@dataclass
class RecordingBus:
    """Message bus that remembers every request instead of talking to a broker."""

    calls: list[tuple[str, BrokerSettings, tuple[object, ...]]] = field(default_factory=list)

    def subscribe(self, settings: BrokerSettings, topics: Sequence[str]) -> None:
        self.calls.append(("subscribe", settings, (tuple(topics),)))

    def publish(self, settings: BrokerSettings, topic: str, message: str, retain: bool) -> None:
        self.calls.append(("publish", settings, (topic, message, retain)))

    def stats(self, settings: BrokerSettings, topic: str) -> None:
        self.calls.append(("stats", settings, (topic,)))
