"""termkit - line editing and keyboard menus for the terminal."""

from .core.errors import InputCancelled, MenuCancelled, TermkitError
from .core.keys import Key, KeyEvent, Modifiers, ScriptedKeySource, TerminalKeySource
from .core.line_editor import LineEditor, LineResult
from .core.markup import MarkupRenderer, RenderContext
from .core.screen import MemoryScreen, RichScreen
from .core.config import TermkitConfig
from .menu import Dialogs, MenuItem, MenuItems, MenuNavigator, MenuSeparator, MenuSettings
from .toolkit import Toolkit

__version__ = "1.0.0"
__all__ = [
    "Dialogs",
    "InputCancelled",
    "Key",
    "KeyEvent",
    "LineEditor",
    "LineResult",
    "MarkupRenderer",
    "MemoryScreen",
    "MenuCancelled",
    "MenuItem",
    "MenuItems",
    "MenuNavigator",
    "MenuSeparator",
    "MenuSettings",
    "Modifiers",
    "RenderContext",
    "RichScreen",
    "ScriptedKeySource",
    "TermkitConfig",
    "TermkitError",
    "TerminalKeySource",
    "Toolkit",
]
