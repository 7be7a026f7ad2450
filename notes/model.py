# notes/model.py
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

NATURALS = ["C", "D", "E", "F", "G", "A", "B"]
FLATS = ["Db", "Eb", "Gb", "Ab", "Bb"]

# pitch class -> 名稱（只用降記號，與音檔命名一致）
PC_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
_PC_BY_NAME = {name: pc for pc, name in enumerate(PC_NAMES)}

_NOTE_RE = re.compile(r"^([A-G]b?)(-?\d+)$")

def note_id(name: str, octave: int) -> str:
    return f"{name}{octave}"

def parse_note(note: str) -> Optional[Tuple[str, int]]:
    m = _NOTE_RE.match(note)
    if not m or m.group(1) not in _PC_BY_NAME:
        return None
    return m.group(1), int(m.group(2))

def note_to_midi(note: str) -> Optional[int]:
    """'C4' -> 60. Returns None for strings that are not note identifiers."""
    parsed = parse_note(note)
    if parsed is None:
        return None
    name, octave = parsed
    return 12 * (octave + 1) + _PC_BY_NAME[name]

def midi_to_note(pitch: int) -> str:
    return note_id(PC_NAMES[pitch % 12], pitch // 12 - 1)

def is_black(note: str) -> bool:
    parsed = parse_note(note)
    return parsed is not None and parsed[0].endswith("b")


@dataclass(frozen=True)
class NoteEvent:
    note: str        # NoteIdentifier
    time: int        # ms since recording start
    duration: float  # seconds (length of the triggered buffer)


class Recording:
    """Immutable, capture-ordered sequence of NoteEvents."""
    __slots__ = ("_events",)

    def __init__(self, events: Iterable[NoteEvent] = ()):
        self._events: Tuple[NoteEvent, ...] = tuple(events)

    @property
    def events(self) -> Tuple[NoteEvent, ...]:
        return self._events

    @property
    def last(self) -> Optional[NoteEvent]:
        return self._events[-1] if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[NoteEvent]:
        return iter(self._events)

    def __getitem__(self, i):
        return self._events[i]

    def __bool__(self) -> bool:
        return bool(self._events)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Recording):
            return NotImplemented
        return self._events == other._events

    def __hash__(self) -> int:
        return hash(self._events)

    def __repr__(self) -> str:
        return f"Recording({len(self._events)} events)"
