"""Structured configuration file loader.

Purpose
-------
Convert the TOML config file into a Python mapping. The adapter is a small
wrapper around ``tomllib`` so error handling and observability live in one
place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileLoader` – loader for the config file format.

System Role
-----------
Invoked by :func:`zap.core.load_config_file` before the settings layers are
merged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Side Effects
        ------------
        Emits ``config_file_read`` debug events.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"host": "localhost"}, path="demo")
        {'host': 'localhost'}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        zap.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data  # type: ignore[return-value]


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from the TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.toml', delete=False, encoding='utf-8')
        >>> _ = tmp.write('qos = "1"')
        >>> tmp.close()
        >>> TOMLFileLoader().load(tmp.name)["qos"]
        '1'
        >>> Path(tmp.name).unlink()
        """

        try:
            text = self._read(path).decode("utf-8")
            data = tomllib.loads(text)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:  # type: ignore[attr-defined]
            log_error("config_file_invalid", path=path, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("config_file_loaded", path=path, format="toml")
        return result
