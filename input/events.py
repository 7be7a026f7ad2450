# input/events.py
from dataclasses import dataclass
from typing import Dict, Optional, Union

import pygame

@dataclass(frozen=True)
class KeyDown:
    symbol: str
    repeat: bool = False

@dataclass(frozen=True)
class KeyUp:
    symbol: str

@dataclass(frozen=True)
class PointerDown:
    note: str

@dataclass(frozen=True)
class PointerUp:
    note: str

InputEvent = Union[KeyDown, KeyUp, PointerDown, PointerUp]


class KeyTranslator:
    """pygame KEYDOWN/KEYUP -> KeyDown/KeyUp.

    pygame does not flag auto-repeat, so a KEYDOWN for a keycode that is still held
    is reported as a repeat. The symbol captured at key-down is reused at key-up,
    since KEYUP.unicode is empty on some platforms.
    """
    def __init__(self):
        self.held: Dict[int, str] = {}

    def translate(self, e: pygame.event.Event) -> Optional[InputEvent]:
        if e.type == pygame.KEYDOWN:
            if e.key in self.held:
                return KeyDown(self.held[e.key], repeat=True)
            symbol = getattr(e, "unicode", "") or ""
            if not symbol:
                return None
            self.held[e.key] = symbol
            return KeyDown(symbol)
        if e.type == pygame.KEYUP:
            symbol = self.held.pop(e.key, None)
            if symbol is None:
                return None
            return KeyUp(symbol)
        return None

    def reset(self):
        self.held.clear()
