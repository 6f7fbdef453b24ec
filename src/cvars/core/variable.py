"""Configuration variable record.

A ``ConfigVar`` keeps its value as a string and caches the integer and float
interpretations of it. Numeric reads never fail; text that does not parse
reads back as zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cvars.flags import ConfigFlags
from cvars.utils.numeric import parse_float, parse_int

if TYPE_CHECKING:
    from cvars.core.registry import ConfigVarRegistry


class ConfigVar:
    """A named string setting with cached numeric views and change tracking."""

    __slots__ = (
        "_name",
        "_description",
        "_default_value",
        "_flags",
        "_value",
        "_int_value",
        "_float_value",
        "_changed",
        "_registry",
    )

    def __init__(
        self,
        name: str,
        description: str,
        default_value: str,
        flags: ConfigFlags = ConfigFlags.NONE,
    ) -> None:
        self._name = name
        self._description = description
        self._default_value = default_value
        self._flags = ConfigFlags(flags)
        self._value: str | None = None
        self._int_value = 0
        self._float_value = 0.0
        self._changed = False
        self._registry: ConfigVarRegistry | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def default_value(self) -> str:
        return self._default_value

    @property
    def flags(self) -> ConfigFlags:
        return self._flags

    @property
    def registry(self) -> ConfigVarRegistry | None:
        """The registry that accepted this record, if any."""

        return self._registry

    @property
    def changed(self) -> bool:
        return self._changed

    @property
    def value(self) -> str | None:
        return self._value

    @value.setter
    def value(self, new_value: str) -> None:
        if new_value == self._value:
            return
        if self._registry is not None:
            self._registry.mark_dirty(self._flags)
        self._value = new_value
        self._int_value = parse_int(new_value)
        self._float_value = parse_float(new_value)
        self._changed = True

    @property
    def int_value(self) -> int:
        return self._int_value

    @property
    def float_value(self) -> float:
        return self._float_value

    def change_check(self) -> bool:
        """Return whether the value changed since the last call, consuming the notification."""

        if not self._changed:
            return False
        self._changed = False
        return True

    def reset_to_default(self) -> None:
        self.value = self._default_value

    def _bind(self, registry: ConfigVarRegistry) -> None:
        self._registry = registry

    def __repr__(self) -> str:
        return f"ConfigVar(name={self._name!r}, value={self._value!r}, flags={self._flags!r})"
