# ========================= input/keymap.py =========================
from typing import Dict, List

from notes.model import NATURALS, FLATS, note_id

# 固定鍵位配置，只有八度偏移隨 octave 改變
LOWER_WHITE = ["z", "x", "c", "v", "b", "n", "m"]
MIDDLE_WHITE = ["a", "s", "d", "f", "g", "h", "j"]
MIDDLE_EXTRA = "k"                                   # C at octave+2
LOWER_BLACK = ["q", "w", "r", "t", "y"]
MIDDLE_BLACK = ["u", "i", "o", "p", "["]
SHIFT_LOWER_WHITE = [s.upper() for s in LOWER_WHITE]   # octave-1
SHIFT_UPPER_WHITE = [s.upper() for s in MIDDLE_WHITE]  # octave+2

KEYMAP_SIZE = 39

def _band(symbols: List[str], names: List[str], octave: int) -> Dict[str, str]:
    return {sym: note_id(name, octave) for sym, name in zip(symbols, names)}

def generate_keymap(octave: int) -> Dict[str, str]:
    """Symbol -> note identifier for the given base octave.

    No range check: octave 0 yields 'C-1' and octave 7 yields 'C9', which simply
    have no sound asset.
    """
    km: Dict[str, str] = {}
    km.update(_band(LOWER_WHITE, NATURALS, octave))
    km.update(_band(MIDDLE_WHITE, NATURALS, octave + 1))
    km[MIDDLE_EXTRA] = note_id("C", octave + 2)
    km.update(_band(LOWER_BLACK, FLATS, octave))
    km.update(_band(MIDDLE_BLACK, FLATS, octave + 1))
    km.update(_band(SHIFT_LOWER_WHITE, NATURALS, octave - 1))
    km.update(_band(SHIFT_UPPER_WHITE, NATURALS, octave + 2))
    return km

def labels_by_note(keymap: Dict[str, str]) -> Dict[str, str]:
    """Note -> symbol label for the on-screen keys.

    Only the lower-case symbols are reachable from the keyboard, so only those
    are shown.
    """
    out: Dict[str, str] = {}
    for sym, note in keymap.items():
        if sym == sym.lower():
            out.setdefault(note, sym)
    return out
