"""Single-line editor driven by raw key events.

The editor owns a fixed origin cell on the screen (the position of the
cursor when the capture started) and redraws the buffer from there. A
pre-filled default is shown in reverse video: the first character typed
replaces it, a cursor key keeps it for editing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from rich.style import Style

from .errors import InputCancelled
from .keys import Key, KeyEvent, KeySource, Modifiers
from .markup import MarkupRenderer
from .screen import Position, Screen

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.05
_REVERSE = Style(reverse=True)


@dataclass(frozen=True)
class LineResult:
    """Outcome of one line capture.

    ``cancelled`` is set when Escape ended the capture (``text`` then holds
    the escape text) and when the cancellation token fired (``aborted`` is
    also set and ``text`` is empty). ``modifiers`` are those of the key that
    ended the capture.
    """

    text: str
    cancelled: bool = False
    modifiers: Modifiers = Modifiers.NONE
    aborted: bool = False


@dataclass
class EditState:
    """Buffer, cursor and mode flags of one capture."""

    buffer: List[str] = field(default_factory=list)
    cursor: int = 0
    overwrite: bool = False
    cancelled: bool = False

    @property
    def text(self) -> str:
        return "".join(self.buffer)


class _Capture:
    """Key handling and incremental rendering for a single ``read_line`` call."""

    def __init__(
        self,
        screen: Screen,
        style: Optional[Style],
        default: Optional[str],
        escape_text: Optional[str],
        mask: Optional[str],
    ):
        self.screen = screen
        self.style = style
        self.preview_style = style + _REVERSE if style else _REVERSE
        self.escape_text = escape_text or ""
        self.mask = mask
        self.state = EditState(list(default or ""), len(default or ""))
        self.origin: Position = screen.position
        self.finished = False
        self.modifiers = Modifiers.NONE
        self._handlers: Dict[Key, Callable[[KeyEvent], None]] = {
            Key.BACKSPACE: self._backspace,
            Key.DELETE: self._delete,
            Key.LEFT: self._left,
            Key.RIGHT: self._right,
            Key.HOME: self._home,
            Key.END: self._end,
            Key.ESCAPE: self._escape,
            Key.ENTER: self._enter,
        }

    def start(self) -> None:
        if self.state.buffer:
            self.state.overwrite = True
            self.screen.write(self._display(), self.preview_style)

    def handle(self, event: KeyEvent) -> None:
        self.modifiers = event.modifiers
        if event.printable:
            self._insert(event.char)
            return
        handler = self._handlers.get(event.key)
        if handler is None:
            self._place_cursor()
            return
        handler(event)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _display(self, start: int = 0) -> str:
        text = self.state.text[start:]
        if self.mask:
            return self.mask * len(text)
        return text

    def _cell(self, index: int) -> Position:
        column, row = self.origin
        width = self.screen.width
        total = column + index
        return total % width, row + total // width

    def _place_cursor(self, index: Optional[int] = None) -> None:
        self.screen.move_to(*self._cell(self.state.cursor if index is None else index))

    def _erase(self) -> None:
        self.screen.move_to(*self.origin)
        self.screen.write(" " * len(self._display()), self.style)

    def _redraw(self) -> None:
        self.screen.move_to(*self.origin)
        self.screen.write(self._display(), self.style)
        self._place_cursor()

    def _leave_overwrite(self) -> None:
        # the default stays, shown as ordinary text from now on
        self.state.overwrite = False
        self.screen.move_to(*self.origin)
        self.screen.write(self._display(), self.style)

    def _clear_default(self) -> None:
        self._erase()
        self.state.buffer.clear()
        self.state.cursor = 0
        self.state.overwrite = False
        self.screen.move_to(*self.origin)

    # ------------------------------------------------------------------
    # Key handlers
    # ------------------------------------------------------------------
    def _insert(self, char: str) -> None:
        state = self.state
        if state.overwrite:
            self._erase()
            state.buffer[:] = [char]
            state.cursor = 1
            state.overwrite = False
        else:
            state.buffer.insert(state.cursor, char)
            state.cursor += 1
        self._redraw()

    def _backspace(self, event: KeyEvent) -> None:
        state = self.state
        if state.overwrite:
            self._clear_default()
            return
        if state.cursor > 0:
            self._erase()
            state.cursor -= 1
            del state.buffer[state.cursor]
        self._redraw()

    def _delete(self, event: KeyEvent) -> None:
        state = self.state
        if state.overwrite:
            self._clear_default()
            return
        if state.cursor < len(state.buffer):
            del state.buffer[state.cursor]
            self._place_cursor()
            self.screen.write(self._display(state.cursor) + " ", self.style)
        self._place_cursor()

    def _left(self, event: KeyEvent) -> None:
        if event.modifiers & Modifiers.SHIFT:
            return
        state = self.state
        if state.overwrite:
            self._leave_overwrite()
            state.cursor = 0
        elif state.cursor > 0:
            state.cursor -= 1
        self._place_cursor()

    def _right(self, event: KeyEvent) -> None:
        if event.modifiers & Modifiers.SHIFT:
            return
        state = self.state
        if state.overwrite:
            self._leave_overwrite()
            state.cursor = len(state.buffer)
        elif state.cursor < len(state.buffer):
            state.cursor += 1
        self._place_cursor()

    def _home(self, event: KeyEvent) -> None:
        if self.state.overwrite:
            self._leave_overwrite()
        self.state.cursor = 0
        self._place_cursor()

    def _end(self, event: KeyEvent) -> None:
        if self.state.overwrite:
            self._leave_overwrite()
        self.state.cursor = len(self.state.buffer)
        self._place_cursor()

    def _escape(self, event: KeyEvent) -> None:
        state = self.state
        self._erase()
        state.buffer[:] = list(self.escape_text)
        state.cursor = 0
        state.overwrite = False
        self._redraw()
        state.cancelled = True
        self.finished = True

    def _enter(self, event: KeyEvent) -> None:
        self.finished = True

    def finish(self) -> None:
        # leave the cursor behind the text so the newline never splits it
        self._place_cursor(len(self.state.buffer))


class LineEditor:
    """Captures one line of input from a key source."""

    def __init__(
        self,
        renderer: MarkupRenderer,
        keys: KeySource,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.renderer = renderer
        self.keys = keys
        self.poll_interval = poll_interval

    def read_line(
        self,
        default: Optional[str] = None,
        escape_text: Optional[str] = None,
        cancel_token=None,
        mask: Optional[str] = None,
    ) -> LineResult:
        """Read a line, returning the text and whether it was cancelled.

        ``cancel_token`` is any object with ``raise_if_cancelled()``; it is
        checked before every key poll.
        """

        capture = _Capture(
            self.renderer.screen,
            self.renderer.current_style,
            default,
            escape_text,
            mask,
        )
        try:
            with self.keys.session():
                capture.start()
                while not capture.finished:
                    capture.handle(self._next_key(cancel_token))
        except InputCancelled:
            logger.debug("Line capture aborted by its cancellation token")
            return LineResult("", cancelled=True, aborted=True)

        capture.finish()
        self.renderer.newline()
        state = capture.state
        logger.debug("Captured %d characters (cancelled=%s)", len(state.buffer), state.cancelled)
        return LineResult(state.text, state.cancelled, capture.modifiers)

    def _next_key(self, cancel_token) -> KeyEvent:
        while True:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            event = self.keys.poll(self.poll_interval)
            if event is not None:
                return event
