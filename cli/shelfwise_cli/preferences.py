"""Persisted UI preferences."""

from pathlib import Path

import structlog
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)


class SidebarPreferences(BaseModel):
    """Sidebar visibility.

    Only ``is_collapsed`` survives a restart; the sidebar always starts closed.
    """

    is_open: bool = False
    is_collapsed: bool = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set_collapsed(self, collapsed: bool) -> None:
        self.is_collapsed = collapsed


def load_preferences(path: Path) -> SidebarPreferences:
    """Read preferences from ``path``, falling back to defaults."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return SidebarPreferences()
    except OSError as e:
        logger.warning("Could not read preferences", path=str(path), error=str(e))
        return SidebarPreferences()

    try:
        stored = SidebarPreferences.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Ignoring invalid preferences", path=str(path), error=str(e))
        return SidebarPreferences()

    return SidebarPreferences(is_collapsed=stored.is_collapsed)


def save_preferences(prefs: SidebarPreferences, path: Path) -> None:
    """Write the persistent part of ``prefs`` to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        prefs.model_dump_json(include={"is_collapsed"}),
        encoding="utf-8",
    )
