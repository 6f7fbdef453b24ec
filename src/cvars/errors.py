"""Exceptions raised by the cvars registry."""

from __future__ import annotations


class ConfigVarError(Exception):
    """Base class for registry errors."""


class DuplicateNameError(ConfigVarError):
    def __init__(self, name: str) -> None:
        super().__init__(f"cvar '{name}' is already registered")
        self.name = name


class InvalidNameError(ConfigVarError):
    def __init__(self, name: str | None) -> None:
        super().__init__(f"invalid cvar name: {name!r}")
        self.name = name


class ConfigSyntaxError(ConfigVarError):
    """A line of a persisted config file could not be parsed."""

    def __init__(self, lineno: int, line: str, reason: str = "malformed line") -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno
        self.line = line
        self.reason = reason


class AlreadyBoundError(ConfigVarError):
    def __init__(self, name: str) -> None:
        super().__init__(f"cvar '{name}' already belongs to a registry")
        self.name = name
