"""Prompt helpers layered over the line editor and the menu navigator."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple, TypeVar

from termkit.core.errors import InputCancelled
from termkit.core.line_editor import LineResult
from termkit.menu.builders import MenuItems
from termkit.menu.core import MenuNavigator
from termkit.menu.types import MenuItem, MenuSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _noop() -> None:
    pass


def _checked(result: LineResult) -> LineResult:
    if result.aborted:
        raise InputCancelled("prompt aborted")
    return result


class Dialogs:
    """Messages, confirmations, questions and "pick one" prompts."""

    def __init__(self, navigator: MenuNavigator):
        self.navigator = navigator
        self.renderer = navigator.renderer
        self.editor = navigator.editor
        self.palette = navigator.palette

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def write_title(self, text: str) -> None:
        self.renderer.write_line(text, self.palette.title)
        self.renderer.write_line("=" * len(text))
        self.renderer.newline()

    def write_subtitle(self, text: str) -> None:
        self.renderer.write_line(text, self.palette.title)

    def write_status(self, success: bool, message: str, failure_message: Optional[str] = None) -> None:
        """Write ``message`` in the ok colour, or the failure text in the not-ok colour."""

        if success:
            self.renderer.write_line(message, self.palette.ok)
        else:
            self.renderer.write_line(failure_message or message, self.palette.not_ok)

    def enter_to_continue(self) -> None:
        self.renderer.write_line("\nHit <Enter> or <Esc> to continue.")
        self.editor.read_line()

    def message(self, text: str) -> None:
        self.renderer.write_line(text)
        self.enter_to_continue()

    def error_message(self, text: str, enter_to_continue: bool = True) -> None:
        self._colored_message(text, self.palette.error, enter_to_continue)

    def warn_message(self, text: str, enter_to_continue: bool = True) -> None:
        self._colored_message(text, self.palette.warn, enter_to_continue)

    def success_message(self, text: str, enter_to_continue: bool = True) -> None:
        self._colored_message(text, self.palette.ok, enter_to_continue)

    def _colored_message(self, text: str, color: str, enter_to_continue: bool) -> None:
        self.renderer.write_line(text, color)
        if enter_to_continue:
            self.enter_to_continue()

    # ------------------------------------------------------------------
    # Confirmations and questions
    # ------------------------------------------------------------------
    def confirm_with_1_or_back(self, message: str) -> bool:
        """Two-row menu: ``1`` confirms, ``Esc`` goes back."""

        self.renderer.write_line("Confirmation", self.palette.title)
        selected = self.navigator.show_menu(
            None,
            [
                MenuItem(message, _noop, tag=True),
                MenuItem("<- Back", _noop, key="Esc", tag=False),
            ],
        )
        return bool(selected.tag)

    def confirm_with_enter_or_back(self, message: str) -> bool:
        self.renderer.write_line("Confirmation:", self.palette.title)
        self.renderer.write_line(" " + message)
        self.renderer.write("<Enter>", self.palette.menu_select)
        self.renderer.write(" to continue")
        self.renderer.write(" <Esc>", self.palette.menu_select)
        self.renderer.write(" to cancel ")
        return not self.editor.read_line().cancelled

    def confirm_admin_restart(self) -> bool:
        return self.confirm_with_enter_or_back("Application needs administrative privileges - Restart?")

    def boolean_question(self, text: str, default: Optional[bool] = None, cancel_token=None) -> Optional[bool]:
        """Ask a y/n question; returns True, False, or None for Esc."""

        default_text = None if default is None else ("y" if default else "n")
        try:
            while True:
                self.renderer.write(text)
                self.renderer.write(" [y|n|Esc] ", self.palette.menu_select)
                result = _checked(self.editor.read_line(default_text, escape_text="Esc", cancel_token=cancel_token))
                answer = result.text.strip().lower()
                if answer == "esc":
                    return None
                if answer == "y":
                    return True
                if answer == "n":
                    return False
                logger.debug("Unrecognised answer %r to %r", answer, text)
        finally:
            self.renderer.newline()

    def confirm_overwrite(self, filename: str) -> bool:
        self.renderer.write_line(f"File already exists: {filename}")
        return bool(self.boolean_question("Overwrite file?"))

    # ------------------------------------------------------------------
    # Text input
    # ------------------------------------------------------------------
    def input_query(self, text: str) -> Optional[str]:
        """Ask for a line of text; None when Escape was pressed."""

        self.renderer.write_line(text)
        result = _checked(self.editor.read_line())
        return None if result.cancelled else result.text

    def input_query2(self, hint: str, default: Optional[str] = None, cancel_token=None) -> LineResult:
        self.renderer.write(hint + " (")
        self.renderer.write("Esc", self.palette.menu_select)
        self.renderer.write(" to cancel):")
        return _checked(self.editor.read_line(default, cancel_token=cancel_token))

    def input_password(self, text: str, mask: str = "*", cancel_token=None) -> Tuple[Optional[str], bool]:
        """Read a masked line; returns ``(password, cancelled)``, empty input counts as cancelled."""

        self.renderer.write_line(text)
        result = _checked(self.editor.read_line(mask=mask, cancel_token=cancel_token))
        password = "" if result.cancelled else result.text
        return (password or None), not password

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------
    @staticmethod
    def build_menu_items_with_text(items: Iterable[T], text_func: Callable[[T], Optional[str]]) -> MenuItems:
        menu_items = MenuItems()
        for value in items:
            menu_items.add(text_func(value) or "", tag=value)
        return menu_items

    def select_item_with_text(
        self,
        prompt: str,
        choices: Sequence[Tuple[str, T]],
        default: Optional[T] = None,
        settings: Optional[MenuSettings] = None,
    ) -> Tuple[bool, Optional[T]]:
        """Pick one of ``(text, value)`` pairs; returns ``(ok, value)``."""

        menu_items = [MenuItem(text, tag=value) for text, value in choices]
        return self.select_menu_item(prompt, menu_items, default, settings)

    def select_item(
        self,
        items: Iterable[T],
        prompt: str,
        default: Optional[T],
        text_func: Callable[[T], Optional[str]],
        settings: Optional[MenuSettings] = None,
    ) -> Tuple[bool, Optional[T]]:
        return self.select_menu_item(prompt, self.build_menu_items_with_text(items, text_func), default, settings)

    def select_menu_item(
        self,
        prompt: str,
        menu_items: Sequence[MenuItem],
        default: Any = None,
        settings: Optional[MenuSettings] = None,
    ) -> Tuple[bool, Any]:
        """Show ``menu_items`` plus a Cancel row keyed ``Esc``; returns ``(ok, tag)``."""

        escape = MenuItem("Cancel", key="Esc")
        items = list(menu_items) + [escape]
        default_index = -1
        if default is not None:
            default_index = next((i for i, item in enumerate(items) if item.tag == default), -1)

        selected = self.navigator.show_menu(prompt, items, default_index, settings)
        if selected is escape:
            return False, None
        return True, selected.tag
