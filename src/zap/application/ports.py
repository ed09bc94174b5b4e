"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the subcommands rely on so the CLI can be
wired to any MQTT transport without importing one.

Contents
--------
* :class:`FileLoader` – parses the structured config file.
* :class:`MessageBus` – carries out subscribe, publish and stats requests.

System Role
-----------
These protocols keep the command layer free of network code. The package
ships :class:`zap.adapters.bus.unavailable.UnavailableBus`; applications
inject a working bus through :func:`zap.cli.build_root_command`.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from ..domain.settings import BrokerSettings


class FileLoader(Protocol):
    """Parse a structured configuration file into a mapping."""

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping or raise ``InvalidFormat``/``NotFound``."""


class MessageBus(Protocol):
    """Perform MQTT operations for the subcommands.

    Why
    ----
    Subcommands only resolve arguments and settings; everything that touches
    the network lives behind this port.

    Methods
    -------
    :meth:`subscribe`
        Listen on *topics* and print what arrives.
    :meth:`publish`
        Send *message* to *topic*.
    :meth:`stats`
        Report broker statistics published under *topic*.
    """

    def subscribe(self, settings: BrokerSettings, topics: Sequence[str]) -> None:
        """Subscribe to *topics* using *settings*."""

    def publish(self, settings: BrokerSettings, topic: str, message: str, retain: bool) -> None:
        """Publish *message* on *topic* using *settings*."""

    def stats(self, settings: BrokerSettings, topic: str) -> None:
        """Collect broker statistics from *topic* using *settings*."""
