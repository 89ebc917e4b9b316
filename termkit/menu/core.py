#!/usr/bin/env python3
"""
Core Menu Framework

Renders numbered menus, reads the selection through the line editor and
dispatches the chosen item's action. Oversized menus are shown truncated;
text that matches no key then filters the list for another pass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from termkit.core.errors import InputCancelled, MenuCancelled
from termkit.core.line_editor import LineEditor
from termkit.core.markup import MarkupRenderer
from termkit.core.palette import Palette
from termkit.menu.types import ItemState, MenuItem, MenuSettings
from termkit.utils.privileges import is_elevated

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Select your option: "
INCOMPLETE_LIST_WARNING = "Incomplete list shown here, enter part of the text to filter items!"


@dataclass(frozen=True)
class MenuRow:
    """One item as seen by a single render pass."""

    item: MenuItem
    state: ItemState
    key: Optional[str]
    rendered: bool

    @property
    def enabled(self) -> bool:
        return self.item.selectable and self.state.enabled


@dataclass(frozen=True)
class MenuView:
    """Render snapshot: evaluated states and effective keys of all candidates."""

    rows: Tuple[MenuRow, ...]
    oversized: bool

    @classmethod
    def snapshot(cls, items: Sequence[MenuItem], settings: MenuSettings) -> "MenuView":
        rows: List[MenuRow] = []
        counter = settings.start_index
        for index, item in enumerate(items):
            state = item.evaluate()
            rendered = index < settings.max_item_count
            key = item.key if item.selectable else None
            if rendered and item.selectable and state.visible and not key:
                key = str(counter)
                counter += 1
            rows.append(MenuRow(item, state, key, rendered))
        return cls(tuple(rows), len(items) > settings.max_item_count)

    @property
    def escape_item(self) -> Optional[MenuItem]:
        for row in self.rows:
            if row.item.is_escape():
                return row.item
        return None

    def key_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.rows):
            return self.rows[index].key
        return None

    def match(self, text: str) -> Optional[MenuRow]:
        """Return the first enabled row whose key equals ``text`` ignoring case."""

        wanted = text.casefold()
        for row in self.rows:
            if row.key is not None and row.key.casefold() == wanted and row.enabled:
                return row
        return None


def filter_items(items: Iterable[MenuItem], text: str, escape_item: Optional[MenuItem]) -> List[MenuItem]:
    """Keep items whose text contains ``text`` (ignoring case), plus the escape item."""

    needle = text.casefold()
    filtered = [item for item in items if needle in item.text.casefold()]
    if escape_item is not None and escape_item not in filtered:
        filtered.append(escape_item)
    return filtered


def normalize_prompt(prompt: Optional[str], settings: MenuSettings) -> str:
    if prompt is None:
        prompt = DEFAULT_PROMPT
    if settings.select_blank_line and not prompt.startswith("\n"):
        prompt = "\n" + prompt
    if not prompt.endswith(": "):
        prompt += ": "
    return prompt


class MenuNavigator:
    """Keyboard driven menu on top of a markup renderer and a line editor."""

    def __init__(
        self,
        renderer: MarkupRenderer,
        editor: LineEditor,
        palette: Optional[Palette] = None,
        settings: Optional[MenuSettings] = None,
        elevated: Callable[[], bool] = is_elevated,
    ):
        self.renderer = renderer
        self.editor = editor
        self.palette = palette or Palette()
        self.settings = settings or MenuSettings()
        self.elevated = elevated

    def show_menu(
        self,
        prompt: Optional[str],
        items: Sequence[MenuItem],
        default_index: int = -1,
        settings: Optional[MenuSettings] = None,
        cancel_token=None,
    ) -> MenuItem:
        """Show ``items`` and return the selected one after running its action.

        Raises ``MenuCancelled`` when Escape is pressed and no item is keyed
        ``ESC``, and ``InputCancelled`` when ``cancel_token`` fires.
        """

        settings = settings or self.settings
        candidates = list(items)
        while True:
            view = self.render(candidates, settings)
            prompt = normalize_prompt(prompt, settings)
            selected, filter_text = self._select(view, prompt, settings, view.key_at(default_index), cancel_token)
            if selected is not None:
                return selected

            escape_item = view.escape_item
            candidates = filter_items(candidates, filter_text, escape_item)
            default_index = -1
            logger.debug("Filter pass for %r leaves %d items", filter_text, len(candidates))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, items: Sequence[MenuItem], settings: MenuSettings) -> MenuView:
        """Print the menu rows and return the snapshot they were printed from."""

        view = MenuView.snapshot(items, settings)
        logger.debug("Rendering %d of %d menu items", min(len(items), settings.max_item_count), len(items))
        if settings.initial_blank_line:
            self.renderer.newline()

        for row in view.rows:
            if not row.rendered:
                break
            if not row.state.visible:
                continue
            item = row.item
            if not item.selectable:
                self.renderer.write_line(f"{settings.indent}      {item.text}", self.palette.menu_inactive)
                continue
            if item.hidden_but_active:
                continue
            self._print_item(row, settings)

        if view.oversized:
            self.renderer.write_line(INCOMPLETE_LIST_WARNING, self.palette.warn)
        return view

    def _print_item(self, row: MenuRow, settings: MenuSettings) -> None:
        enabled = row.state.enabled
        key_color = self.palette.menu_select if enabled else self.palette.menu_inactive_select
        self.renderer.write(f"{settings.indent}{row.key:>3} : ", key_color)
        if enabled:
            self.renderer.markup_line(row.item.text)
        else:
            with self.renderer.color(self.palette.menu_inactive):
                self.renderer.markup_line(row.item.text)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _select(
        self,
        view: MenuView,
        prompt: str,
        settings: MenuSettings,
        default_text: Optional[str],
        cancel_token,
    ) -> Tuple[Optional[MenuItem], str]:
        escape_item = view.escape_item
        escape_text = escape_item.key if escape_item is not None else None
        while True:
            self._write_prompt(prompt, settings)
            with self.renderer.color(self.palette.menu_select):
                result = self.editor.read_line(default_text, escape_text=escape_text, cancel_token=cancel_token)
            if result.aborted:
                raise InputCancelled("menu input aborted")

            row = view.match(result.text)
            if row is not None:
                if self._admit(row.item):
                    logger.debug("Selected menu item %r (key %s)", row.item.text, row.key)
                    if row.item.action is not None:
                        row.item.action()
                    return row.item, result.text
            elif result.cancelled and escape_item is None:
                raise MenuCancelled("Escape pressed in a menu without an ESC item")

            # a wrong entry forfeits the pre-filled default
            default_text = None
            if row is None and view.oversized:
                return None, result.text

    def _write_prompt(self, prompt: str, settings: MenuSettings) -> None:
        if prompt.startswith("\n"):
            self.renderer.newline()
            prompt = prompt[1:]
        self.renderer.write(f"{settings.indent}{prompt}")

    def _admit(self, item: MenuItem) -> bool:
        if not item.admin_required or self.elevated():
            return True
        logger.warning("Refused menu item %r: administrative privileges required", item.text)
        self.renderer.write_line("This option requires administrative privileges.", self.palette.error)
        return False
