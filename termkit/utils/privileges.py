"""Privilege checks for menu items that need an elevated process."""
from __future__ import annotations

import ctypes
import os


def is_elevated() -> bool:
    """Return True when running as root (POSIX) or as administrator (Windows)."""

    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False
