"""Per-invocation state shared by the root command and its subcommands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .application.ports import MessageBus


@dataclass(frozen=True)
class BuildInfo:
    """Version and source revision reported by ``zap --version``."""

    version: str
    revision: str

    @property
    def banner(self) -> str:
        """Return the version line.

        Examples
        --------
        >>> BuildInfo("1.2.3", "abc123").banner
        'zap version 1.2.3, Revision: abc123'
        """

        return "zap version " + self.version + ", Revision: " + self.revision


@dataclass(frozen=True)
class Session:
    """Stored as ``ctx.obj`` by the root handler before a subcommand runs."""

    build: BuildInfo
    bus: MessageBus
    config_path: Path
