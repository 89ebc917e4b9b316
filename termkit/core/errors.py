"""Exception hierarchy shared by the terminal toolkit."""
from __future__ import annotations


class TermkitError(Exception):
    """Base class for toolkit errors."""


class InputCancelled(TermkitError):
    """A pending line capture was aborted through its cancellation token."""


class MenuCancelled(InputCancelled):
    """Escape was pressed in a menu that offers no ``ESC`` item."""


class KeySourceExhausted(TermkitError):
    """A scripted key source has no events left to deliver."""


class ConfigError(TermkitError):
    """Configuration file is malformed or holds invalid values."""


class MenuDefinitionError(ConfigError):
    """A menu definition document does not match the menu schema."""
