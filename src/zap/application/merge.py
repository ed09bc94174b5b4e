"""Application-layer merge policy for broker settings.

Purpose
-------
Combine the setting layers (built-in defaults, config file top level, selected
broker section, explicit command-line options) into one flat mapping while
recording which layer supplied each key. Free of I/O so it can be tested in
isolation.

Contents
    - ``merge_layers``: public entry point driven by a simple loop.
    - ``_set_value``: records the value and its provenance.

System Role
-----------
Receives layer payloads from :mod:`zap.core`, applies precedence
(`default → file → broker → cli`), and returns the data consumed by
:meth:`zap.domain.settings.BrokerSettings.from_mapping`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable

from ..domain.settings import SourceInfo, normalize_key


def merge_layers(
    layers: Iterable[tuple[str, Mapping[str, object], str | None]],
) -> tuple[dict[str, object], dict[str, SourceInfo]]:
    """Merge setting *layers* honouring precedence and provenance.

    Parameters
    ----------
    layers:
        Iterable of ``(layer_name, mapping, source_path)`` tuples ordered from
        lowest to highest precedence. Keys are normalised to option spelling.

    Returns
    -------
    tuple[dict[str, object], dict[str, SourceInfo]]
        ``(merged_data, provenance)``.

    Examples
    --------
    >>> merged, meta = merge_layers([
    ...     ("default", {"qos": 0}, None),
    ...     ("cli", {"qos": 2}, None),
    ... ])
    >>> merged["qos"], meta["qos"]["layer"]
    (2, 'cli')
    """

    merged: dict[str, object] = {}
    meta: dict[str, SourceInfo] = {}
    for layer_name, data, path in layers:
        for key, value in data.items():
            _set_value(merged, meta, normalize_key(key), value, layer_name, path)
    return merged, meta


def _set_value(
    target: dict[str, object],
    meta: dict[str, SourceInfo],
    key: str,
    value: object,
    layer: str,
    path: str | None,
) -> None:
    target[key] = value
    meta[key] = {"layer": layer, "path": path, "key": key}
