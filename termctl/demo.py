#!/usr/bin/env python3
"""
Interactive Demo

A main page in the style of a small maintenance tool: sub-pages with check
boxes, a long filterable list, text input and an admin-only entry.
"""
from __future__ import annotations

import logging
import platform
from typing import Dict, List, Optional

from termkit import __version__
from termkit.menu.builders import MenuItems
from termkit.menu.types import MenuItem, SelectableTag
from termkit.toolkit import Toolkit

logger = logging.getLogger(__name__)

COLOR_NAMES = (
    "Black", "DarkBlue", "DarkGreen", "DarkCyan", "DarkRed", "DarkMagenta", "DarkYellow", "Gray",
    "DarkGray", "Blue", "Green", "Cyan", "Red", "Magenta", "Yellow", "White",
)
FRUITS = ("apple", "banana", "cherry", "kiwi", "mango", "pear")
BIG_LIST_SIZE = 3000


class DemoApp:
    """Main page loop; Esc on the main page quits."""

    def __init__(self, toolkit: Toolkit):
        self.toolkit = toolkit
        self.dialogs = toolkit.dialogs
        self.renderer = toolkit.renderer
        self.options: Dict[str, Optional[bool]] = {"colors": True, "confirm": False, "strict": None}
        self.languages: List[SelectableTag] = [
            SelectableTag(True, "en"),
            SelectableTag(False, "de"),
            SelectableTag(False, "fr"),
        ]
        self.fruit: Optional[str] = None
        self.name = ""
        self._running = True

    def run(self) -> None:
        while self._running:
            self.toolkit.clear()
            self._show_banner()
            self.toolkit.show_menu("Main page", self._main_items(), default_index=0)

    def _show_banner(self) -> None:
        self.renderer.write_line("termkit demo", self.toolkit.palette.title)
        self.renderer.write_line(f"{__version__} running Python {platform.python_version()}")
        self.renderer.write_line("-" * 75)

    def _main_items(self) -> MenuItems:
        items = MenuItems()
        items.add("List all colours", self._show_colors)
        items.add("Settings", self._settings_page)
        items.add(f"Pick a fruit [DarkGray]({self.fruit or 'none'})[/]", self._pick_fruit)
        items.add(f"Big list ({BIG_LIST_SIZE} entries)", self._big_list)
        items.add("Enter your name", self._name_page)
        items.add_separator("---------------")
        items.add("[Red]Administrative task[/]", self._admin_task, admin_required=True)
        items.add("Only with strict mode", self._strict_task, can_execute=lambda: bool(self.options["strict"]))
        items.add("Only with colours", self._show_colors, can_execute=lambda: True if self.options["colors"] else None)
        items.add("Quit", self._quit, key="Esc")
        return items

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    def _show_colors(self) -> None:
        self.dialogs.write_subtitle("Console colours")
        for name in COLOR_NAMES:
            self.renderer.markup_line(f"  [{name}]{name:<12}[/] [White,_{name}]  sample  [/]")
        self.dialogs.enter_to_continue()

    def _settings_page(self) -> None:
        while True:
            items = MenuItems()
            items.add_checkbox("c", "Coloured output", bool(self.options["colors"]), self._setter("colors"))
            items.add_checkbox("a", "Ask before saving", bool(self.options["confirm"]), self._setter("confirm"))
            items.add_checkbox_nullable("s", "Strict mode", self.options["strict"], self._setter("strict"))
            items.add_separator("Languages")
            for tag in self.languages:
                items.add_selectable(None, tag.value, tag, should_flip=self._may_flip_language)
            back = items.add("<- Back", key="Esc")

            self.dialogs.write_title("Settings")
            if self.toolkit.show_menu(None, items) is back:
                return

    def _setter(self, name: str):
        def apply(value: Optional[bool]) -> None:
            logger.debug("Demo option %s set to %s", name, value)
            self.options[name] = value

        return apply

    def _may_flip_language(self, tag: SelectableTag) -> bool:
        # at least one language stays selected
        return not tag.selected or sum(t.selected for t in self.languages) > 1

    def _pick_fruit(self) -> None:
        ok, fruit = self.dialogs.select_item(FRUITS, "Fruit", self.fruit, str.title)
        if ok:
            self.fruit = fruit
            self.dialogs.success_message(f"You picked {fruit}.")

    def _big_list(self) -> None:
        items = [MenuItem(f"Entry {number:04d}", tag=number) for number in range(1, BIG_LIST_SIZE + 1)]
        ok, number = self.dialogs.select_menu_item("Number or part of the text", items)
        if ok:
            self.dialogs.message(f"Entry {number} selected.")

    def _name_page(self) -> None:
        result = self.dialogs.input_query2("Your name", self.name or None)
        if result.cancelled:
            return
        if self.options["confirm"] and not self.dialogs.boolean_question(f"Keep {result.text!r}?", default=True):
            return
        self.name = result.text
        self.dialogs.write_status(bool(self.name), f"Hello {self.name}!", "No name given.")
        self.dialogs.enter_to_continue()

    def _admin_task(self) -> None:
        self.dialogs.success_message("Running with administrative privileges.")

    def _strict_task(self) -> None:
        self.dialogs.warn_message("Strict mode is on.")

    def _quit(self) -> None:
        self._running = False
