"""Reader and writer for the flat ``name "value"`` config file format."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from cvars.errors import ConfigSyntaxError

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}

_QUOTED_LINE_RE = re.compile(r'^(?P<name>\S+)\s+"(?P<value>(?:[^"\\]|\\.)*)"$')
_BARE_LINE_RE = re.compile(r"^(?P<name>\S+)\s+(?P<value>[^\s\"]+)$")


@dataclass(slots=True)
class ConfigEntry:
    lineno: int
    name: str
    value: str


@dataclass(slots=True)
class ConfigDocument:
    entries: list[ConfigEntry] = field(default_factory=list)
    errors: list[ConfigSyntaxError] = field(default_factory=list)


def escape_value(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def unescape_value(text: str) -> str:
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "\\")
        out.append(_UNESCAPES.get(nxt, nxt))
    return "".join(out)


def format_line(name: str, value: str) -> str:
    return f'{name} "{escape_value(value)}"'


def parse_line(line: str, lineno: int = 0) -> ConfigEntry | None:
    """Parse one line; ``None`` for blanks and comments.

    Raises ``ConfigSyntaxError`` when the line is neither.
    """

    stripped = line.strip()
    if not stripped or stripped.startswith("#") or stripped.startswith("//"):
        return None
    match = _QUOTED_LINE_RE.match(stripped)
    if match:
        return ConfigEntry(lineno, match["name"], unescape_value(match["value"]))
    match = _BARE_LINE_RE.match(stripped)
    if match:
        return ConfigEntry(lineno, match["name"], match["value"])
    raise ConfigSyntaxError(lineno, line)


def parse_text(text: str) -> ConfigDocument:
    doc = ConfigDocument()
    for lineno, line in enumerate(text.split("\n"), start=1):
        try:
            entry = parse_line(line, lineno)
        except ConfigSyntaxError as exc:
            doc.errors.append(exc)
            continue
        if entry is not None:
            doc.entries.append(entry)
    return doc


def read_config(path: Path | str) -> ConfigDocument:
    return parse_text(Path(path).read_text(encoding="utf-8"))


def write_config(path: Path | str, items: Iterable[tuple[str, str]]) -> int:
    """Truncate ``path`` and write one line per item; returns the line count."""

    count = 0
    with Path(path).open("w", encoding="utf-8", newline="\n") as fh:
        for name, value in items:
            fh.write(format_line(name, value) + "\n")
            count += 1
    return count
