"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the config adapters, the settings
composition root, the message bus adapters, and the CLI. The hierarchy lives in
the domain layer so outer layers depend on it, never the other way round.

Contents
--------
* :class:`ZapError` – umbrella base class for every failure raised by ``zap``.
* :class:`ConfigError` – base for configuration file problems.
* :class:`InvalidFormat` – the config file cannot be parsed.
* :class:`ValidationError` – parsed values fail semantic checks.
* :class:`NotFound` – an expected configuration resource is missing.
* :class:`TransportUnavailable` – no MQTT transport was wired into the CLI.

System Role
-----------
Errors propagate untouched to :func:`zap.cli.main`, where
``lib_cli_exit_tools`` prints them and the process exits with status 1.
Dispatch errors (unknown command, bad flag) stay click exceptions.
"""

from __future__ import annotations


class ZapError(Exception):
    """Base type for all exceptions emitted by ``zap``.

    Why
    ----
    Give embedding applications a single type to catch.
    """


class ConfigError(ZapError):
    """Base type for configuration file failures."""


class InvalidFormat(ConfigError):
    """Raised when the config file cannot be parsed into structured data.

    Typical Sources
    ---------------
    :class:`zap.adapters.file_loaders.structured.TOMLFileLoader` and section
    lookups that find something other than a table.
    """


class ValidationError(ConfigError):
    """Signifies that a syntactically valid value failed semantic checks.

    Raised by :class:`zap.domain.settings.BrokerSettings` for out-of-range
    ports or QoS levels and by :mod:`zap.core` for unknown broker sections.
    """


class NotFound(ConfigError):
    """Represents missing-but-optional resources.

    The settings composition root treats a missing config file as an empty
    layer; only an explicit ``--broker`` selection turns it into a failure.
    """


class TransportUnavailable(ZapError):
    """Raised when a subcommand runs without an MQTT transport."""
