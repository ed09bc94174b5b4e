from __future__ import annotations

from zap.domain.errors import ConfigError, InvalidFormat, NotFound, TransportUnavailable, ValidationError, ZapError


def test_error_hierarchy() -> None:
    assert issubclass(ConfigError, ZapError)
    assert issubclass(InvalidFormat, ConfigError)
    assert issubclass(ValidationError, ConfigError)
    assert issubclass(NotFound, ConfigError)
    assert issubclass(TransportUnavailable, ZapError)
    assert not issubclass(TransportUnavailable, ConfigError)
    for exception in (InvalidFormat(""), ValidationError(""), NotFound("")):
        assert isinstance(exception, ConfigError)


def test_package_reexports_errors() -> None:
    import zap

    assert zap.ZapError is ZapError
    assert zap.ConfigError is ConfigError
    assert zap.TransportUnavailable is TransportUnavailable
