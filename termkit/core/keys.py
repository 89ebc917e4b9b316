"""Key events, key decoding and key sources.

A key event carries a logical key identifier, the character it produced and
the modifier flags. Editors decide what a key does from ``Key`` alone; the
character is only consulted to know what to insert.
"""
from __future__ import annotations

import codecs
import enum
import logging
import os
import re
import sys
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable, ContextManager, Deque, Dict, Iterable, Iterator, List, Optional, Protocol, Union

import readchar

from .errors import KeySourceExhausted

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty

logger = logging.getLogger(__name__)


class Key(enum.Enum):
    """Logical key identifiers."""

    CHARACTER = "character"
    SPACE = "space"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    TAB = "tab"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    UNKNOWN = "unknown"


class Modifiers(enum.IntFlag):
    """Modifier keys held while a key was pressed."""

    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4


PRINTABLE_KEYS = frozenset({Key.CHARACTER, Key.SPACE})


@dataclass(frozen=True)
class KeyEvent:
    """One key press."""

    key: Key
    char: str = ""
    modifiers: Modifiers = Modifiers.NONE

    @property
    def printable(self) -> bool:
        return self.key in PRINTABLE_KEYS

    @classmethod
    def of(cls, key: Key, modifiers: Modifiers = Modifiers.NONE) -> "KeyEvent":
        """Build an event for a non-character key."""

        return cls(key, _KEY_CHARS.get(key, ""), modifiers)

    @classmethod
    def typed(cls, char: str) -> "KeyEvent":
        """Build the event a terminal produces when ``char`` is typed."""

        return decode_key(char)


_KEY_CHARS = {
    Key.ENTER: "\r",
    Key.ESCAPE: "\x1b",
    Key.TAB: "\t",
    Key.SPACE: " ",
    Key.BACKSPACE: "\x7f",
}


def events_for_text(text: str) -> List[KeyEvent]:
    """Return the key events typing ``text`` would produce."""

    return [KeyEvent.typed(ch) for ch in text]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------
_CONTROL_KEYS: Dict[str, Key] = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\t": Key.TAB,
    "\x1b": Key.ESCAPE,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}

_CSI = re.compile(r"^\x1b\[(?:(\d+)(?:;(\d+))?)?([A-Za-z~])$")

_CSI_FINAL = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
    "H": Key.HOME,
    "F": Key.END,
    "P": Key.F1,
    "Q": Key.F2,
    "R": Key.F3,
    "S": Key.F4,
    "Z": Key.TAB,
}

_CSI_TILDE = {
    1: Key.HOME,
    2: Key.INSERT,
    3: Key.DELETE,
    4: Key.END,
    5: Key.PAGE_UP,
    6: Key.PAGE_DOWN,
    7: Key.HOME,
    8: Key.END,
    11: Key.F1,
    12: Key.F2,
    13: Key.F3,
    14: Key.F4,
    15: Key.F5,
    17: Key.F6,
    18: Key.F7,
    19: Key.F8,
    20: Key.F9,
    21: Key.F10,
    23: Key.F11,
    24: Key.F12,
}

_SS3_FINAL = dict(_CSI_FINAL, M=Key.ENTER)
del _SS3_FINAL["Z"]

# readchar names whose platform-specific sequences we understand.
_READCHAR_NAMES = {
    "UP": Key.UP,
    "DOWN": Key.DOWN,
    "LEFT": Key.LEFT,
    "RIGHT": Key.RIGHT,
    "HOME": Key.HOME,
    "END": Key.END,
    "INSERT": Key.INSERT,
    "SUPR": Key.DELETE,
    "DELETE": Key.DELETE,
    "PAGE_UP": Key.PAGE_UP,
    "PAGE_DOWN": Key.PAGE_DOWN,
    "BACKSPACE": Key.BACKSPACE,
    "ENTER": Key.ENTER,
    "ESC": Key.ESCAPE,
    "TAB": Key.TAB,
    "F1": Key.F1,
    "F2": Key.F2,
    "F3": Key.F3,
    "F4": Key.F4,
    "F5": Key.F5,
    "F6": Key.F6,
    "F7": Key.F7,
    "F8": Key.F8,
    "F9": Key.F9,
    "F10": Key.F10,
    "F11": Key.F11,
    "F12": Key.F12,
}


def _platform_sequences() -> Dict[str, Key]:
    table: Dict[str, Key] = {}
    for name, key in _READCHAR_NAMES.items():
        seq = getattr(readchar.key, name, None)
        if isinstance(seq, str) and seq and not seq.isprintable():
            table[seq] = key
    return table


_SEQUENCES: Dict[str, Key] = {**_platform_sequences(), **_CONTROL_KEYS}


def _modifiers_from_param(param: Optional[str]) -> Modifiers:
    # xterm encodes modifiers as 1 + bitmask(shift=1, alt=2, ctrl=4)
    if not param:
        return Modifiers.NONE
    try:
        bits = int(param) - 1
    except ValueError:
        return Modifiers.NONE
    return Modifiers(bits & 0b111) if bits > 0 else Modifiers.NONE


def decode_key(seq: str) -> KeyEvent:
    """Translate one raw key sequence into a ``KeyEvent``."""

    if seq == "\x1b[Z":
        return KeyEvent(Key.TAB, "\t", Modifiers.SHIFT)
    if seq in _SEQUENCES:
        key = _SEQUENCES[seq]
        return KeyEvent(key, _KEY_CHARS.get(key, ""))

    match = _CSI.match(seq)
    if match:
        number, modifier, final = match.groups()
        modifiers = _modifiers_from_param(modifier)
        if final == "~":
            key = _CSI_TILDE.get(int(number or 0), Key.UNKNOWN)
        else:
            key = _CSI_FINAL.get(final, Key.UNKNOWN)
            if final == "Z":
                modifiers |= Modifiers.SHIFT
        return KeyEvent(key, _KEY_CHARS.get(key, ""), modifiers)

    if len(seq) == 3 and seq.startswith("\x1bO"):
        key = _SS3_FINAL.get(seq[2], Key.UNKNOWN)
        return KeyEvent(key, _KEY_CHARS.get(key, ""))

    if len(seq) > 2 and seq.startswith("\x1b\x1b"):
        inner = decode_key(seq[1:])
        return replace(inner, modifiers=inner.modifiers | Modifiers.ALT)

    if len(seq) == 2 and seq[0] == "\x1b":
        inner = decode_key(seq[1])
        return replace(inner, modifiers=inner.modifiers | Modifiers.ALT)

    if len(seq) == 1:
        if seq == " ":
            return KeyEvent(Key.SPACE, " ")
        if seq.isprintable():
            return KeyEvent(Key.CHARACTER, seq, Modifiers.SHIFT if seq.isupper() else Modifiers.NONE)
        if ord(seq) < 0x20:
            return KeyEvent(Key.UNKNOWN, seq, Modifiers.CTRL)

    logger.debug("Undecoded key sequence %r", seq)
    return KeyEvent(Key.UNKNOWN, seq)


def _sequence_end(data: str, start: int) -> int:
    """End index of the CSI or SS3 sequence whose ESC is at ``start``."""

    if data[start + 1] == "O":
        return min(start + 3, len(data))
    j = start + 2
    while j < len(data) and not ("\x40" <= data[j] <= "\x7e"):
        j += 1
    return min(j + 1, len(data))


def split_sequences(data: str) -> List[str]:
    """Split a chunk of terminal input into individual key sequences."""

    out: List[str] = []
    i = 0
    n = len(data)
    while i < n:
        ch = data[i]
        if ch != "\x1b" or i + 1 == n:
            out.append(ch)
            i += 1
            continue
        nxt = data[i + 1]
        if nxt == "[":
            end = _sequence_end(data, i)
            out.append(data[i:end])
            i = end
        elif nxt == "O" and i + 2 < n:
            out.append(data[i:i + 3])
            i += 3
        elif nxt == "\x1b" and i + 2 < n and data[i + 2] in "[O":
            # Alt sent as an ESC prefix in front of a CSI or SS3 sequence
            end = _sequence_end(data, i + 1)
            out.append(data[i:end])
            i = end
        elif nxt == "\x1b":
            out.append(ch)
            i += 1
        else:
            out.append(data[i:i + 2])
            i += 2
    return out


# ---------------------------------------------------------------------------
# Key sources
# ---------------------------------------------------------------------------
class KeySource(Protocol):
    """Anything that can deliver key events to an editor."""

    def session(self) -> ContextManager[None]:
        ...

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        ...


class TerminalKeySource:
    """Reads key events from the controlling terminal.

    While a session is open the terminal is in cbreak mode so single key
    presses become readable immediately; ``poll`` waits at most ``timeout``
    seconds for one.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._pending: Deque[str] = deque()
        encoding = getattr(self.stream, "encoding", None) or "utf-8"
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    @contextmanager
    def session(self) -> Iterator[None]:
        if os.name == "nt" or not self.stream.isatty():
            yield
            return
        fd = self.stream.fileno()
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        if self._pending:
            return decode_key(self._pending.popleft())
        if os.name == "nt":
            return self._poll_console(timeout)

        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, 64)
        if not data:
            raise EOFError("terminal input closed")
        self._pending.extend(split_sequences(self._decoder.decode(data)))
        if not self._pending:
            return None
        return decode_key(self._pending.popleft())

    def _poll_console(self, timeout: float) -> Optional[KeyEvent]:
        if not msvcrt.kbhit():
            time.sleep(timeout)
            return None
        return decode_key(readchar.readkey())


ScriptEntry = Union[KeyEvent, Key, str]


class ScriptedKeySource:
    """Replays a fixed sequence of key events.

    Strings expand to the characters they contain and bare ``Key`` members
    to their key event. Once the script is used up ``on_exhausted`` is called
    on every poll, or ``KeySourceExhausted`` is raised when it is not set.
    """

    def __init__(self, events: Iterable[ScriptEntry] = (), on_exhausted: Optional[Callable[[], None]] = None):
        self._events: Deque[KeyEvent] = deque()
        self.on_exhausted = on_exhausted
        self.polls = 0
        self.feed(*events)

    def feed(self, *events: ScriptEntry) -> None:
        for entry in events:
            if isinstance(entry, KeyEvent):
                self._events.append(entry)
            elif isinstance(entry, Key):
                self._events.append(KeyEvent.of(entry))
            else:
                self._events.extend(events_for_text(entry))

    @property
    def remaining(self) -> int:
        return len(self._events)

    @contextmanager
    def session(self) -> Iterator[None]:
        yield

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        self.polls += 1
        if self._events:
            return self._events.popleft()
        if self.on_exhausted is None:
            raise KeySourceExhausted("no scripted key events left")
        self.on_exhausted()
        return None
