from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from zap.application.merge import merge_layers

KEYS = st.sampled_from(["host", "port", "qos", "client-id", "username"])
VALUES = st.one_of(st.integers(), st.text(max_size=5))
LAYER = st.dictionaries(KEYS, VALUES, max_size=3)


def test_precedence_overwrites() -> None:
    layers = [
        ("default", {"host": "localhost", "qos": 0}, None),
        ("file", {"qos": "1"}, "/home/me/.zap.toml"),
        ("broker", {"host": "mqtt.home"}, "/home/me/.zap.toml"),
        ("cli", {"qos": 2}, None),
    ]
    merged, meta = merge_layers(layers)
    assert merged == {"host": "mqtt.home", "qos": 2}
    assert meta["host"] == {"layer": "broker", "path": "/home/me/.zap.toml", "key": "host"}
    assert meta["qos"]["layer"] == "cli"


def test_keys_are_normalised_before_merging() -> None:
    merged, meta = merge_layers([("file", {"client_id": "a"}, None), ("cli", {"client-id": "b"}, None)])
    assert merged == {"client-id": "b"}
    assert meta["client-id"]["layer"] == "cli"


def test_merge_is_idempotent() -> None:
    layers = [("file", {"host": "a"}, "x.toml"), ("cli", {"port": 1}, None)]
    assert merge_layers(layers) == merge_layers(layers)


@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
@given(LAYER, LAYER, LAYER)
def test_last_layer_wins(low, mid, high) -> None:
    merged, meta = merge_layers([("low", low, None), ("mid", mid, None), ("high", high, None)])
    for key, value in high.items():
        assert merged[key] == value
        assert meta[key]["layer"] == "high"
    assert set(merged) == set(low) | set(mid) | set(high)
