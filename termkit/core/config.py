"""Configuration helpers for termkit."""
from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .line_editor import DEFAULT_POLL_INTERVAL
from .palette import Palette

logger = logging.getLogger(__name__)

ENV_VAR = "TERMKIT_CONFIG"
USER_CONFIG = Path("~/.config/termkit/termkit.yaml")
SECTIONS = ("menu", "input", "colors")


@dataclass
class TermkitConfig:
    """Represents the settings shared by the editor, menus and dialogs."""

    raw: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None

    @classmethod
    def from_file(cls, path: str | Path) -> "TermkitConfig":
        path = Path(path).expanduser()
        try:
            data = yaml.safe_load(path.read_text())
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")
        for key in data:
            if key not in SECTIONS:
                logger.warning("Ignoring unknown configuration section %r in %s", key, path)
        return cls(raw=data, source=path)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "TermkitConfig":
        """Load from ``path``, ``$TERMKIT_CONFIG`` or the user config, else defaults."""

        if path:
            return cls.from_file(path)
        env_path = os.environ.get(ENV_VAR)
        if env_path:
            return cls.from_file(env_path)
        user_path = USER_CONFIG.expanduser()
        if user_path.exists():
            return cls.from_file(user_path)
        logger.debug("No configuration file found, using defaults")
        return cls()

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def require(self, key: str) -> Any:
        if key not in self.raw:
            raise KeyError(f"Missing configuration key: {key}")
        return self.raw[key]

    def section(self, key: str) -> Dict[str, Any]:
        value = self.raw.get(key) or {}
        if not isinstance(value, dict):
            raise ConfigError(f"Configuration section {key!r} must be a mapping")
        return value

    # ------------------------------------------------------------------
    # Typed views
    # ------------------------------------------------------------------
    @property
    def poll_interval(self) -> float:
        millis = self.section("input").get("poll_interval_ms")
        if millis is None:
            return DEFAULT_POLL_INTERVAL
        try:
            value = float(millis) / 1000.0
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"input.poll_interval_ms must be a number, got {millis!r}") from exc
        if value <= 0:
            raise ConfigError("input.poll_interval_ms must be positive")
        return value

    @property
    def palette(self) -> Palette:
        return Palette.from_mapping(self.section("colors"))

    def menu_settings(self):
        """Return the configured ``MenuSettings``."""

        from termkit.menu.types import MenuSettings

        return MenuSettings.from_mapping(self.section("menu"))

    def summary(self) -> Dict[str, Any]:
        """Return the effective settings as plain data."""

        return {
            "source": str(self.source) if self.source else None,
            "menu": asdict(self.menu_settings()),
            "input": {"poll_interval_ms": round(self.poll_interval * 1000)},
            "colors": asdict(self.palette),
        }
