#!/usr/bin/env python3
"""
termctl main module entry point.
Enables running termctl as a module: python -m termctl
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
