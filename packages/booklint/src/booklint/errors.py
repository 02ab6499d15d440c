from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .exit_codes import ERR_CONFIG, ERR_INTERNAL, ERR_IO


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class DocumentIOError(ScriptError, OSError):
    """A document root, a document file or a report file could not be read or written.

    Also an ``OSError``, so callers outside the CLI can handle it as ordinary I/O failure.
    """

    def __init__(self, path: Path | str, reason: str, errno: int | None = None, action: str = "read") -> None:
        super().__init__(f"cannot {action} {path}: {reason}", ERR_IO, "io_error")
        self.path = str(path)
        self.filename = str(path)
        self.strerror = reason
        self.errno = errno


class ConfigError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, "config_error")
