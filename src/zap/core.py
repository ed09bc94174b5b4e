"""Composition root for broker settings.

Purpose
-------
Provide the single entry point that reads the config file, selects the broker
section, merges the layers with explicit command-line options and returns a
validated :class:`zap.domain.settings.BrokerSettings`.

Contents
--------
* :data:`CONFIG_FILENAME` – name of the config file in the user's home.
* :func:`default_config_path` – ``$HOME/.zap.toml``.
* :func:`load_config_file` – parse the config file, treating absence as empty.
* :func:`config_layers` – split the file into the ``file`` and ``broker`` layers.
* :func:`resolve_broker_settings` – high-level API used by the subcommands.

System Role
-----------
Precedence is ``default → file → broker → cli``: top-level keys of the config
file override built-in defaults, the ``[NAME]`` table chosen with ``--broker``
overrides top-level keys, and options typed on the command line override
everything.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from .adapters.file_loaders.structured import TOMLFileLoader
from .application.merge import merge_layers
from .application.ports import FileLoader
from .domain.errors import ConfigError, InvalidFormat, NotFound, ValidationError
from .domain.settings import DEFAULTS, SETTING_KEYS, BrokerSettings, normalize_key
from .observability import log_debug

CONFIG_FILENAME: Final[str] = ".zap.toml"

_LOADER: Final[FileLoader] = TOMLFileLoader()


def default_config_path() -> Path:
    """Return the location of the per-user config file."""

    return Path.home() / CONFIG_FILENAME


def load_config_file(path: str | Path, loader: FileLoader = _LOADER) -> Mapping[str, object]:
    """Return the parsed config file at *path* or an empty mapping when absent.

    Examples
    --------
    >>> load_config_file("/nonexistent/.zap.toml")
    {}
    """

    try:
        return loader.load(str(path))
    except NotFound:
        log_debug("config_file_missing", path=str(path))
        return {}


def config_layers(
    data: Mapping[str, object],
    *,
    broker: str | None,
    path: str | None,
) -> list[tuple[str, Mapping[str, object], str | None]]:
    """Split parsed config *data* into the ``file`` and ``broker`` layers.

    Why
    ----
    Tables other than the selected one describe other brokers and must not leak
    into the result; unknown keys are ignored so newer config files keep
    working with older releases.

    Raises
    ------
    ValidationError
        *broker* names a table the file does not contain.
    InvalidFormat
        The selected entry is not a table.

    Examples
    --------
    >>> data = {"qos": 1, "home": {"host": "mqtt.home"}, "work": {"host": "mqtt.work"}}
    >>> config_layers(data, broker="home", path=None)
    [('file', {'qos': 1}, None), ('broker', {'host': 'mqtt.home'}, None)]
    """

    top_level = {key: value for key, value in data.items() if not isinstance(value, Mapping)}
    layers: list[tuple[str, Mapping[str, object], str | None]] = [("file", _known_keys(top_level, path), path)]
    if broker is None:
        return layers
    if broker not in data:
        raise ValidationError(f"No [{broker}] section in config file {path}")
    section = data[broker]
    if not isinstance(section, Mapping):
        raise InvalidFormat(f"[{broker}] in config file {path} is not a table")
    layers.append(("broker", _known_keys(section, path), path))
    return layers


def resolve_broker_settings(
    *,
    config_path: str | Path,
    broker: str | None = None,
    overrides: Mapping[str, object] | None = None,
) -> BrokerSettings:
    """Return validated broker settings for one command invocation.

    Parameters
    ----------
    config_path:
        Location of the TOML config file; a missing file is an empty layer
        unless *broker* is given.
    broker:
        Name of the config table selected with ``--broker``.
    overrides:
        Options given explicitly on the command line, keyed by option name.

    Raises
    ------
    ConfigError
        The file is malformed, the section is missing, or a value is invalid.

    Examples
    --------
    >>> settings = resolve_broker_settings(config_path="/nonexistent/.zap.toml", overrides={"port": 8883})
    >>> settings.port, settings.origin("port")["layer"], settings.origin("host")["layer"]
    (8883, 'cli', 'default')
    """

    path = str(config_path)
    data = load_config_file(path)
    if broker is not None and not data:
        raise NotFound(f"--broker {broker} requires the config file {path}")
    layers = [("default", DEFAULTS, None), *config_layers(data, broker=broker, path=path)]
    layers.append(("cli", dict(overrides or {}), None))
    merged, provenance = merge_layers(layers)
    for key, source in sorted(provenance.items()):
        log_debug("setting_resolved", key=key, layer=source["layer"], path=source["path"])
    try:
        return BrokerSettings.from_mapping(merged, provenance)
    except ValidationError as exc:
        origin = provenance.get(_failing_key(str(exc)) or "")
        if origin is None or origin["layer"] == "default":
            raise
        raise ValidationError(f"{exc} [from {origin['layer']} layer{_where(origin['path'])}]") from exc


def _known_keys(data: Mapping[str, object], path: str | None) -> dict[str, object]:
    known: dict[str, object] = {}
    for key, value in data.items():
        normalized = normalize_key(key)
        if normalized in SETTING_KEYS:
            known[normalized] = value
        else:
            log_debug("config_key_ignored", key=key, path=path)
    return known


def _failing_key(message: str) -> str | None:
    head = message.split(" ", 1)[0]
    return head if head in SETTING_KEYS else None


def _where(path: str | None) -> str:
    return f" {path}" if path else ""


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "config_layers",
    "default_config_path",
    "load_config_file",
    "resolve_broker_settings",
]
