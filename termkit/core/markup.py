"""Colour/markup renderer.

Text may carry inline colour directives::

    normal [Red,_Yellow]red on yellow[/] normal again

A directive names a foreground colour, a background colour (prefixed with
``_``) or both, using the console colour names from ``palette``. ``[/]``
restores the colours that were active before the matching directive. Opens
left at the end of a call are closed implicitly. A directive that names no
known colour is printed as it was written, brackets included.
"""
from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from rich.style import Style

from .palette import resolve_color
from .screen import Screen

logger = logging.getLogger(__name__)

_DIRECTIVE = re.compile(r"\[(.*?)\]", re.DOTALL)
_COLOR_SEPARATORS = re.compile(r"[,\s]+")

ColorPair = Tuple[Optional[str], Optional[str]]


class RenderContext:
    """Stack of (foreground, background) colour pairs for one output stream."""

    def __init__(self) -> None:
        self._stack: List[ColorPair] = [(None, None)]

    @property
    def depth(self) -> int:
        return len(self._stack) - 1

    @property
    def current(self) -> ColorPair:
        return self._stack[-1]

    @property
    def style(self) -> Optional[Style]:
        fore, back = self.current
        if fore is None and back is None:
            return None
        return Style(color=fore, bgcolor=back)

    def push(self, fore: Optional[str] = None, back: Optional[str] = None) -> None:
        """Push rich colours; a missing half keeps the current colour."""

        current_fore, current_back = self.current
        self._stack.append((fore or current_fore, back or current_back))

    def pop(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()

    def unwind(self, depth: int) -> None:
        while self.depth > depth:
            self._stack.pop()


def parse_directive(body: str) -> Optional[ColorPair]:
    """Return the rich colours a directive body selects, None if it selects none."""

    fore = back = None
    for part in _COLOR_SEPARATORS.split(body.strip()):
        if not part:
            continue
        if part.startswith("_"):
            back = part[1:]
        else:
            fore = part
    fore_color, back_color = resolve_color(fore), resolve_color(back)
    if fore_color is None and back_color is None:
        return None
    return fore_color, back_color


class MarkupRenderer:
    """Writes plain and marked-up text to a screen."""

    def __init__(self, screen: Screen, context: Optional[RenderContext] = None):
        self.screen = screen
        self.context = context or RenderContext()

    @property
    def current_style(self) -> Optional[Style]:
        return self.context.style

    # ------------------------------------------------------------------
    # Colour stack
    # ------------------------------------------------------------------
    def push_color(self, fore: Optional[str] = None, back: Optional[str] = None) -> None:
        """Push console colour names onto the stack."""

        self.context.push(resolve_color(fore), resolve_color(back))

    def pop_color(self) -> None:
        self.context.pop()

    @contextmanager
    def color(self, fore: Optional[str] = None, back: Optional[str] = None) -> Iterator[None]:
        depth = self.context.depth
        self.push_color(fore, back)
        try:
            yield
        finally:
            self.context.unwind(depth)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def write(self, text: str, fore: Optional[str] = None) -> None:
        """Write text verbatim, optionally in a colour."""

        if fore is None:
            self.screen.write(text, self.current_style)
            return
        with self.color(fore):
            self.screen.write(text, self.current_style)

    def write_line(self, text: str = "", fore: Optional[str] = None) -> None:
        self.write(text, fore)
        self.screen.newline()

    def newline(self) -> None:
        self.screen.newline()

    def markup(self, text: str) -> None:
        """Write text, interpreting colour directives."""

        base = self.context.depth
        pos = 0
        try:
            for match in _DIRECTIVE.finditer(text):
                if match.start() > pos:
                    self.screen.write(text[pos:match.start()], self.current_style)
                pos = match.end()
                self._apply(match.group(1), base)
            if pos < len(text):
                self.screen.write(text[pos:], self.current_style)
        finally:
            self.context.unwind(base)

    def markup_line(self, text: str) -> None:
        self.markup(text)
        self.screen.newline()

    def _apply(self, body: str, base: int) -> None:
        if body == "/":
            if self.context.depth > base:
                self.context.pop()
            return
        colors = parse_directive(body)
        if colors is None:
            logger.debug("Unrecognised colour directive %r printed verbatim", body)
            self.screen.write(f"[{body}]", self.current_style)
            return
        self.context.push(*colors)
