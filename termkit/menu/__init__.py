#!/usr/bin/env python3
"""
Menu System for termkit

Numbered, keyboard-driven menus plus the prompt dialogs built on them.
"""

from termkit.menu.builders import MenuItems
from termkit.menu.core import MenuNavigator, MenuRow, MenuView
from termkit.menu.dialogs import Dialogs
from termkit.menu.loader import MenuDefinition, load_menu, parse_menu
from termkit.menu.types import ItemState, MenuItem, MenuSeparator, MenuSettings, SelectableTag

__all__ = [
    'Dialogs',
    'ItemState',
    'MenuDefinition',
    'MenuItem',
    'MenuItems',
    'MenuNavigator',
    'MenuRow',
    'MenuSeparator',
    'MenuSettings',
    'MenuView',
    'SelectableTag',
    'load_menu',
    'parse_menu',
]
