"""Registry of named configuration variables.

The registry owns the name -> ``ConfigVar`` map and the global dirty flags,
the union of the flags of every registered variable assigned since the flags
were last cleared. Access is single-threaded; callers serialize.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from cvars.core.declarations import ConfigVarDeclaration
from cvars.core.variable import ConfigVar
from cvars.errors import AlreadyBoundError, ConfigVarError, DuplicateNameError, InvalidNameError
from cvars.flags import ConfigFlags, has_flag
from cvars.logging import get_logger
from cvars.storage.cfg_file import read_config, write_config

_NAME_RE = re.compile(r"^[a-z_+-][a-z0-9_+.-]*$")


def is_valid_name(name: str) -> bool:
    return isinstance(name, str) and _NAME_RE.fullmatch(name) is not None


class ConfigVarRegistry:
    def __init__(self) -> None:
        self.logger = get_logger("registry")
        self._vars: dict[str, ConfigVar] = {}
        self._dirty_flags = ConfigFlags.NONE
        self._initialized: dict[str, ConfigVar] | None = None

    # -- map access -------------------------------------------------------

    def lookup(self, name: str) -> ConfigVar | None:
        return self._vars.get(name)

    def names(self) -> list[str]:
        return sorted(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[ConfigVar]:
        return (self._vars[name] for name in self.names())

    # -- dirty flags ------------------------------------------------------

    @property
    def dirty_flags(self) -> ConfigFlags:
        return self._dirty_flags

    def mark_dirty(self, flags: ConfigFlags) -> None:
        self._dirty_flags = ConfigFlags(int(self._dirty_flags) | int(flags))

    def clear_dirty_flags(self, flags: ConfigFlags | None = None) -> None:
        if flags is None:
            self._dirty_flags = ConfigFlags.NONE
        else:
            self._dirty_flags = ConfigFlags(int(self._dirty_flags) & ~int(flags))

    # -- registration -----------------------------------------------------

    def _check_registrable(self, cvar: ConfigVar) -> None:
        if cvar.name in self._vars:
            raise DuplicateNameError(cvar.name)
        if not is_valid_name(cvar.name):
            raise InvalidNameError(cvar.name)
        if cvar.registry is not None:
            raise AlreadyBoundError(cvar.name)

    def register(self, cvar: ConfigVar) -> bool:
        """Add ``cvar`` to the registry. Rejections are logged and leave the registry untouched."""

        try:
            self._check_registrable(cvar)
        except ConfigVarError as exc:
            self.logger.error("Cannot register cvar: {}", exc)
            return False
        self._vars[cvar.name] = cvar
        cvar._bind(self)
        self.logger.debug("Registered cvar {} = {!r}", cvar.name, cvar.value)
        return True

    def create(
        self,
        name: str,
        description: str = "",
        default_value: str = "",
        flags: ConfigFlags = ConfigFlags.NONE,
    ) -> ConfigVar:
        """Build, default and register a variable.

        The record is returned even when registration fails; it is then
        unknown to the registry.
        """

        cvar = ConfigVar(name, description, default_value, flags)
        cvar.reset_to_default()
        self.register(cvar)
        return cvar

    def initialize(self, declarations: Iterable[ConfigVarDeclaration]) -> dict[str, ConfigVar]:
        """Register every declaration once, at start-up.

        Defaults are applied before each record is registered, so they never
        count as modifications. Declarations that fail to resolve or register
        are logged and left out of the returned mapping.
        """

        if self._initialized is not None:
            self.logger.warning("Registry already initialized; ignoring declarations")
            return dict(self._initialized)

        bound: dict[str, ConfigVar] = {}
        for decl in declarations:
            try:
                name = decl.resolved_name()
            except InvalidNameError as exc:
                self.logger.error("Skipping declaration: {}", exc)
                continue
            cvar = self.create(name, decl.description, decl.default_value, decl.flags)
            if self.lookup(name) is cvar:
                bound[name] = cvar

        self._initialized = bound
        self.logger.info("Registry initialized with {} cvars", len(bound))
        return dict(bound)

    def reset_all_to_default(self) -> None:
        for cvar in self._vars.values():
            cvar.reset_to_default()

    # -- persistence ------------------------------------------------------

    def save(self, path: Path | str) -> None:
        """Write every SAVE-flagged variable to ``path`` and clear the SAVE dirty bit."""

        items = [
            (cvar.name, cvar.value or "")
            for cvar in self
            if has_flag(cvar.flags, ConfigFlags.SAVE)
        ]
        try:
            count = write_config(path, items)
        except OSError as exc:
            self.logger.error("Failed to save cvars to {}: {}", path, exc)
            raise
        self.clear_dirty_flags(ConfigFlags.SAVE)
        self.logger.info("Saved {} cvars to {}", count, path)

    def save_changed_vars(self, path: Path | str) -> bool:
        if not has_flag(self._dirty_flags, ConfigFlags.SAVE):
            return False
        self.save(path)
        return True

    def load(self, path: Path | str) -> int:
        """Assign the values stored in ``path`` to the matching registered variables."""

        doc = read_config(path)
        for error in doc.errors:
            self.logger.warning("Skipping {}: {}", path, error)

        applied = 0
        for entry in doc.entries:
            cvar = self.lookup(entry.name)
            if cvar is None:
                self.logger.warning("Unknown cvar {} at {}:{}", entry.name, path, entry.lineno)
                continue
            cvar.value = entry.value
            applied += 1
        self.logger.info("Loaded {} cvars from {}", applied, path)
        return applied
