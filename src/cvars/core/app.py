"""cvars application composition root."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from cvars.config import CvarsSettings
from cvars.core.declarations import ConfigVarDeclaration
from cvars.core.registry import ConfigVarRegistry
from cvars.core.variable import ConfigVar
from cvars.logging import get_logger


@dataclass(slots=True)
class CvarsContext:
    settings: CvarsSettings
    registry: ConfigVarRegistry
    cvars: dict[str, ConfigVar] = field(default_factory=dict)

    def start(self) -> None:
        path = self.settings.config_path
        if path.exists():
            self.registry.load(path)

    def stop(self) -> None:
        if self.settings.persistence.autosave:
            self.registry.save_changed_vars(self.settings.config_path)


def build_context(
    settings: CvarsSettings,
    declarations: Iterable[ConfigVarDeclaration] = (),
) -> CvarsContext:
    registry = ConfigVarRegistry()
    cvars = registry.initialize(declarations)

    logger = get_logger("bootstrap")
    logger.info("cvars context ready")

    return CvarsContext(settings=settings, registry=registry, cvars=cvars)
