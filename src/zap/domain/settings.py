"""Broker connection settings value object.

Purpose
-------
Hold the connection parameters a subcommand hands to the message bus once the
config file and the command line have been merged. The module performs type
coercion and range checks but no I/O.

Contents
--------
* :class:`SourceInfo` – provenance record for a resolved key.
* :data:`DEFAULTS` – built-in defaults, the lowest precedence layer.
* :func:`normalize_key` – maps config spellings (``client_id``) onto option
  names (``client-id``).
* :class:`BrokerSettings` – frozen dataclass consumed by
  :class:`zap.application.ports.MessageBus` implementations.

System Role
-----------
:mod:`zap.core` merges the layers and calls :meth:`BrokerSettings.from_mapping`;
subcommands never see raw config dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Mapping, TypedDict

from .errors import ValidationError


class SourceInfo(TypedDict):
    """Describe the origin of a resolved setting.

    Attributes
    ----------
    layer:
        ``"default"``, ``"file"``, ``"broker"`` or ``"cli"``.
    path:
        Config file that supplied the value, ``None`` for in-memory layers.
    key:
        Option name of the setting (``"client-id"``).
    """

    layer: str
    path: str | None
    key: str


DEFAULTS: Final[Mapping[str, object]] = MappingProxyType(
    {
        "host": "localhost",
        "port": 1883,
        "qos": 0,
        "client-id": "",
        "username": "",
        "password": "",
        "keepalive": 60,
    }
)

SETTING_KEYS: Final[frozenset[str]] = frozenset(DEFAULTS)
QOS_LEVELS: Final[tuple[int, ...]] = (0, 1, 2)


def normalize_key(key: str) -> str:
    """Return the option spelling of *key*.

    Examples
    --------
    >>> normalize_key("Client_ID")
    'client-id'
    """

    return key.strip().lower().replace("_", "-")


@dataclass(frozen=True)
class BrokerSettings:
    """Resolved connection parameters for one command invocation.

    Examples
    --------
    >>> settings = BrokerSettings.from_mapping({"host": "mqtt.local", "port": "8883", "qos": "1"})
    >>> settings.host, settings.port, settings.qos
    ('mqtt.local', 8883, 1)
    >>> BrokerSettings.from_mapping({"qos": 3})
    Traceback (most recent call last):
    ...
    zap.domain.errors.ValidationError: qos must be one of 0, 1, 2 (got 3)
    """

    host: str = "localhost"
    port: int = 1883
    qos: int = 0
    client_id: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    keepalive: int = 60
    provenance: Mapping[str, SourceInfo] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        provenance: Mapping[str, SourceInfo] | None = None,
    ) -> "BrokerSettings":
        """Build settings from a merged mapping keyed by option names.

        Missing keys fall back to :data:`DEFAULTS`. Values may be strings, as
        config files often quote them (``qos = "1"``).
        """

        merged = {**DEFAULTS, **{normalize_key(key): value for key, value in data.items()}}
        port = _as_int(merged["port"], "port")
        if not 1 <= port <= 65535:
            raise ValidationError(f"port must be between 1 and 65535 (got {port})")
        qos = _as_int(merged["qos"], "qos")
        if qos not in QOS_LEVELS:
            raise ValidationError(f"qos must be one of 0, 1, 2 (got {qos})")
        keepalive = _as_int(merged["keepalive"], "keepalive")
        if keepalive <= 0:
            raise ValidationError(f"keepalive must be positive (got {keepalive})")
        host = _as_str(merged["host"], "host")
        if not host:
            raise ValidationError("host must not be empty")
        return cls(
            host=host,
            port=port,
            qos=qos,
            client_id=_as_str(merged["client-id"], "client-id"),
            username=_as_str(merged["username"], "username"),
            password=_as_str(merged["password"], "password"),
            keepalive=keepalive,
            provenance=MappingProxyType(dict(provenance or {})),
        )

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for option *key* when it was recorded."""

        return self.provenance.get(normalize_key(key))


def _as_int(value: object, key: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer (got {value!r})")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{key} must be an integer (got {value!r})") from exc


def _as_str(value: object, key: str) -> str:
    if isinstance(value, (dict, list, tuple)):
        raise ValidationError(f"{key} must be a string (got {value!r})")
    return str(value)
