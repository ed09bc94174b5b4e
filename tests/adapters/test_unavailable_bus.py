from __future__ import annotations

import pytest

from zap.adapters.bus.unavailable import UnavailableBus
from zap.domain.errors import TransportUnavailable
from zap.domain.settings import BrokerSettings


@pytest.mark.parametrize(
    "operation, args",
    [
        ("subscribe", (["a/b"],)),
        ("publish", ("a/b", "hello", False)),
        ("stats", ("$SYS/#",)),
    ],
)
def test_every_operation_is_refused(operation: str, args: tuple[object, ...]) -> None:
    settings = BrokerSettings(host="mqtt.local", port=1884)
    with pytest.raises(TransportUnavailable, match=f"cannot run {operation} against mqtt.local:1884"):
        getattr(UnavailableBus(), operation)(settings, *args)
