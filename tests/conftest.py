import pytest

from input.octave import OctaveController
from notes.player import NotePlayer
from timeline.clock import ManualClock
from timeline.recorder import RecordingSession
from ui.controls import ControlSurface


class FakeBuffer:
    def __init__(self, note, length=1.5):
        self.note = note
        self.length = length


class FakeBackend:
    ready = True

    def __init__(self, length=1.5):
        self.triggered = []
        self._length = length

    def decode(self, data: bytes):
        if not data:
            raise ValueError("empty sample")
        return FakeBuffer(data.decode(), self._length)

    def trigger(self, buf):
        self.triggered.append(buf.note)

    def length(self, buf) -> float:
        return buf.length


class FakeStore:
    """note -> bytes; notes listed in `broken` raise like a missing file."""
    def __init__(self, broken=()):
        self.broken = set(broken)

    def read(self, note: str) -> bytes:
        if note in self.broken:
            raise FileNotFoundError(note)
        return note.encode()


class FakeSounds:
    def __init__(self, notes, backend):
        self.buffers = {n: FakeBuffer(n, backend._length) for n in notes}

    def has(self, note):
        return note in self.buffers

    def get(self, note):
        return self.buffers.get(note)


class FakeDisplay:
    def __init__(self, keys=None):
        self.keys = keys
        self.active = set()
        self.flashed = []

    def has_key(self, note):
        return self.keys is None or note in self.keys

    def press(self, note, hold=True):
        self.flashed.append(note)
        if hold:
            self.active.add(note)

    def release(self, note):
        self.active.discard(note)


LOADED = ["C3", "D3", "C4", "D4", "E4", "Db4", "C5", "Bb4"]


@pytest.fixture
def clock():
    return ManualClock()

@pytest.fixture
def controls():
    return ControlSurface()

@pytest.fixture
def backend():
    return FakeBackend()

@pytest.fixture
def recorder(clock, controls):
    return RecordingSession(clock, controls)

@pytest.fixture
def display():
    return FakeDisplay()

@pytest.fixture
def player(backend, recorder, display):
    return NotePlayer(FakeSounds(LOADED, backend), backend, recorder, display=display)

@pytest.fixture
def octaves():
    return OctaveController()
