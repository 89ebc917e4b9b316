#!/usr/bin/env python3
"""
Menu Types and Data Classes

Defines the core data structures used by the termkit menu system.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from termkit.core.errors import ConfigError

T = TypeVar("T")

ESCAPE_KEY = "ESC"


class ItemState(enum.Enum):
    """Visibility/enablement of a menu row for one render pass."""

    HIDDEN = "hidden"
    DISABLED = "disabled"
    ENABLED = "enabled"

    @property
    def visible(self) -> bool:
        return self is not ItemState.HIDDEN

    @property
    def enabled(self) -> bool:
        return self is ItemState.ENABLED

    @classmethod
    def from_result(cls, result: Optional[bool]) -> "ItemState":
        if result is None:
            return cls.HIDDEN
        return cls.ENABLED if result else cls.DISABLED


@dataclass(eq=False)
class MenuItem:
    """Represents one selectable or display-only menu row.

    ``can_execute`` returns True (enabled), False (shown but disabled) or
    None (not shown at all). Items compare by identity.
    """

    text: str
    action: Optional[Callable[[], Any]] = None
    key: Optional[str] = None
    tag: Any = None
    can_execute: Optional[Callable[[], Optional[bool]]] = None
    admin_required: bool = False
    hidden_but_active: bool = False

    selectable = True

    def evaluate(self) -> ItemState:
        """Run the evaluator and return the resulting state."""

        if self.can_execute is None:
            return ItemState.ENABLED
        return ItemState.from_result(self.can_execute())

    def is_escape(self) -> bool:
        return bool(self.key) and self.key.casefold() == ESCAPE_KEY.casefold()


class MenuSeparator(MenuItem):
    """Inert row: never keyed, never selectable."""

    selectable = False

    def __init__(self, text: str = "", can_execute: Optional[Callable[[], Optional[bool]]] = None):
        super().__init__(text, can_execute=can_execute)


@dataclass
class MenuSettings:
    """Rendering and behaviour options of one ``show_menu`` call."""

    initial_blank_line: bool = True
    select_blank_line: bool = True
    indent: str = ""
    start_index: int = 1
    max_item_count: int = 1001  # 1000 items + the escape item

    def with_max_item_count(self, max_item_count: int) -> "MenuSettings":
        return replace(self, max_item_count=max_item_count)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MenuSettings":
        if not data:
            return cls()
        types = {f.name: f.type for f in fields(cls)}
        values = {}
        for name, value in data.items():
            if name not in types:
                raise ConfigError(f"Unknown menu setting: {name}")
            expected = {"bool": bool, "str": str, "int": int}[types[name]]
            if expected is int and isinstance(value, bool) or not isinstance(value, expected):
                raise ConfigError(f"Menu setting {name} must be of type {types[name]}, got {value!r}")
            values[name] = value
        settings = cls(**values)
        if settings.max_item_count < 1:
            raise ConfigError("max_item_count must be at least 1")
        return settings


class SelectableTag(Generic[T]):
    """Tag payload of a toggling check-box row."""

    def __init__(self, selected: bool, value: Optional[T] = None):
        self.selected = selected
        self.value = value

    def __repr__(self) -> str:
        return f"SelectableTag(selected={self.selected!r}, value={self.value!r})"
