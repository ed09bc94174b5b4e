"""Shared fixtures: a recording message bus and fresh command trees."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from zap.cli import build_root_command
from zap.command import ZapGroup
from tests.support import REVISION, VERSION, RecordingBus


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def root(bus: RecordingBus) -> ZapGroup:
    return build_root_command(VERSION, REVISION, bus=bus)


@pytest.fixture
def runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


@pytest.fixture
def missing_config(tmp_path: Path) -> Path:
    """Config path that does not exist, so the user's real file never leaks in."""

    return tmp_path / "absent.toml"
