"""Helpers for assembling menu item lists."""
from __future__ import annotations

from typing import Any, Callable, Optional

from termkit.menu.types import MenuItem, MenuSeparator, SelectableTag

Evaluator = Optional[Callable[[], Optional[bool]]]


def checkbox_text(state: Optional[bool], text: str) -> str:
    if state is None:
        return "[?] " + text
    return ("[X] " if state else "[ ] ") + text


class MenuItems(list):
    """List of menu items with shortcuts for the common row kinds."""

    def add(
        self,
        text: str,
        action: Optional[Callable[[], Any]] = None,
        can_execute: Evaluator = None,
        key: Optional[str] = None,
        admin_required: bool = False,
        tag: Any = None,
    ) -> MenuItem:
        item = MenuItem(
            text,
            action,
            key=key,
            tag=tag,
            can_execute=can_execute,
            admin_required=admin_required,
        )
        self.append(item)
        return item

    def add_separator(self, text: str = "") -> MenuItem:
        item = MenuSeparator(text)
        self.append(item)
        return item

    def add_checkbox(
        self,
        key: Optional[str],
        text: str,
        state: bool,
        change_action: Callable[[bool], Any],
        can_execute: Evaluator = None,
    ) -> MenuItem:
        """Add a ``[X]``/``[ ]`` row whose action reports the flipped state."""

        return self.add(
            checkbox_text(bool(state), text),
            lambda: change_action(not state),
            can_execute=can_execute,
            key=key,
        )

    def add_checkbox_nullable(
        self,
        key: Optional[str],
        text: str,
        state: Optional[bool],
        change_action: Callable[[Optional[bool]], Any],
        can_execute: Evaluator = None,
    ) -> MenuItem:
        """Add a three-state row cycling True -> None -> False -> True."""

        def cycle() -> Any:
            if state is True:
                return change_action(None)
            if state is False:
                return change_action(True)
            return change_action(False)

        return self.add(checkbox_text(state, text), cycle, can_execute=can_execute, key=key)

    def add_selectable(
        self,
        key: Optional[str],
        text: str,
        tag: SelectableTag,
        should_flip: Optional[Callable[[SelectableTag], bool]] = None,
        can_execute: Evaluator = None,
    ) -> MenuItem:
        """Add a row that toggles ``tag.selected`` in place and relabels itself."""

        item = self.add(checkbox_text(tag.selected, text), can_execute=can_execute, key=key, tag=tag)

        def toggle() -> None:
            if should_flip is None or should_flip(tag):
                tag.selected = not tag.selected
                item.text = checkbox_text(tag.selected, text)

        item.action = toggle
        return item
