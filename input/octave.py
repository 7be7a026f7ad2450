# input/octave.py
import logging
from typing import Callable, Dict, Optional

from input.keymap import generate_keymap

class OctaveController:
    """Owns the base octave and the key map generated from it.

    The key map is replaced as a whole on every change; readers always see either
    the old map or the new one.
    """
    def __init__(self, initial: int = 4, lo: int = 0, hi: int = 7,
                 on_change: Optional[Callable[[int], None]] = None):
        self.lo, self.hi = lo, hi
        self.octave = initial
        self.keymap: Dict[str, str] = generate_keymap(initial)
        self.on_change = on_change

    def change_octave(self, delta: int) -> bool:
        new_octave = self.octave + delta
        if not (self.lo <= new_octave <= self.hi):
            return False
        self.octave = new_octave
        self.keymap = generate_keymap(new_octave)
        logging.debug("Octave -> %d", new_octave)
        if self.on_change:
            self.on_change(new_octave)
        return True
