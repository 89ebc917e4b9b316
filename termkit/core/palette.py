"""Console colour names and the palette used by menus and dialogs."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

# The sixteen classic console colours mapped onto rich's standard colours.
CONSOLE_COLORS: Dict[str, str] = {
    "black": "black",
    "darkblue": "blue",
    "darkgreen": "green",
    "darkcyan": "cyan",
    "darkred": "red",
    "darkmagenta": "magenta",
    "darkyellow": "yellow",
    "gray": "white",
    "darkgray": "bright_black",
    "blue": "bright_blue",
    "green": "bright_green",
    "cyan": "bright_cyan",
    "red": "bright_red",
    "magenta": "bright_magenta",
    "yellow": "bright_yellow",
    "white": "bright_white",
}


def resolve_color(name: Optional[str]) -> Optional[str]:
    """Return the rich colour for a console colour name, or None if unknown."""

    if not name:
        return None
    return CONSOLE_COLORS.get(name.strip().lower())


@dataclass(frozen=True)
class Palette:
    """Colours (console colour names) used for the different kinds of output."""

    title: str = "White"
    highlight: str = "White"
    menu_select: str = "Yellow"
    menu_inactive_select: str = "DarkYellow"
    menu: str = "Gray"
    menu_inactive: str = "DarkGray"
    error: str = "Red"
    warn: str = "DarkYellow"
    updates: str = "Cyan"
    ok: str = "Green"
    not_ok: str = "Red"
    bool_true: str = "White"
    bool_false: str = "DarkGray"

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Palette":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, str] = {}
        for name, color in data.items():
            if name not in known:
                raise ConfigError(f"Unknown palette entry: {name}")
            if resolve_color(str(color)) is None:
                raise ConfigError(f"Unknown console colour for {name}: {color}")
            values[name] = str(color)
        return cls(**values)
