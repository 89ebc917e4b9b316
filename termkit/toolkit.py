"""Wires console, screen, key source, renderer, editor, navigator and dialogs."""
from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console

from termkit.core.config import TermkitConfig
from termkit.core.keys import KeySource, TerminalKeySource
from termkit.core.line_editor import LineEditor, LineResult
from termkit.core.markup import MarkupRenderer
from termkit.core.screen import RichScreen, Screen
from termkit.menu.core import MenuNavigator
from termkit.menu.dialogs import Dialogs
from termkit.menu.types import MenuItem, MenuSettings


class Toolkit:
    """Everything an interactive program needs, built from one configuration.

    Pass ``screen``/``keys`` to run headless (e.g. ``MemoryScreen`` and
    ``ScriptedKeySource``); otherwise a rich console on stdout (or stderr)
    and the controlling terminal are used.
    """

    def __init__(
        self,
        config: Optional[TermkitConfig] = None,
        console: Optional[Console] = None,
        screen: Optional[Screen] = None,
        keys: Optional[KeySource] = None,
        stderr: bool = False,
    ):
        self.config = config if config is not None else TermkitConfig.load()
        if screen is None:
            console = console or Console(stderr=stderr, highlight=False)
            screen = RichScreen(console)
        self.console = console
        self.screen = screen
        self.keys = keys or TerminalKeySource()
        self.palette = self.config.palette
        self.renderer = MarkupRenderer(self.screen)
        self.editor = LineEditor(self.renderer, self.keys, self.config.poll_interval)
        self.navigator = MenuNavigator(self.renderer, self.editor, self.palette, self.config.menu_settings())
        self.dialogs = Dialogs(self.navigator)

    def show_menu(
        self,
        prompt: Optional[str],
        items: Sequence[MenuItem],
        default_index: int = -1,
        settings: Optional[MenuSettings] = None,
        cancel_token=None,
    ) -> MenuItem:
        return self.navigator.show_menu(prompt, items, default_index, settings, cancel_token)

    def read_line(self, default: Optional[str] = None, escape_text: Optional[str] = None, cancel_token=None) -> LineResult:
        return self.editor.read_line(default, escape_text=escape_text, cancel_token=cancel_token)

    def clear(self) -> None:
        if self.console is not None:
            self.console.clear()
