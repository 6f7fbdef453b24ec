"""Explicit cvar declarations supplied by application start-up code."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from cvars.errors import InvalidNameError
from cvars.flags import ConfigFlags


class ConfigVarDeclaration(BaseModel):
    """What start-up code knows about a variable before it exists.

    When ``name`` is omitted the variable is named after its declaring site,
    ``"<owner>.<field>"`` in lowercase.
    """

    name: str | None = None
    owner: str | None = None
    field: str | None = None
    default_value: str = ""
    description: str = ""
    flags: int = ConfigFlags.NONE

    @field_validator("flags")
    @classmethod
    def _as_flags(cls, value: int) -> ConfigFlags:
        return ConfigFlags(value)

    def resolved_name(self) -> str:
        if self.name is not None:
            return self.name
        if not self.owner or not self.field:
            raise InvalidNameError(None)
        return f"{self.owner}.{self.field}".lower()
