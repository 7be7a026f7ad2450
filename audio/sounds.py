# audio/sounds.py
import logging
import os
from typing import Any, Dict, Iterable, List

from notes.model import NATURALS, FLATS, note_id

def default_note_list() -> List[str]:
    """Every note the piano sample set ships: A0..C8 plus Db8."""
    notes = ["A0", "B0", "Bb0"]
    for octave in range(1, 8):
        notes += [note_id(n, octave) for n in NATURALS]
        notes += [note_id(n, octave) for n in FLATS]
    notes += ["C8", "Db8"]
    return notes


class DirectoryAssetStore:
    """note -> raw bytes, read from <root>/<note><ext>."""
    def __init__(self, root: str, ext: str = ".mp3"):
        self.root = root
        self.ext = ext

    def path_for(self, note: str) -> str:
        return os.path.join(self.root, f"{note}{self.ext}")

    def read(self, note: str) -> bytes:
        with open(self.path_for(note), "rb") as f:
            return f.read()


class SoundBank:
    """Decoded buffers by note. A note that failed to load stays missing for the
    rest of the session; there is no retry."""
    def __init__(self, store, backend):
        self.store = store
        self.backend = backend
        self.buffers: Dict[str, Any] = {}
        self.failed: List[str] = []

    def load(self, note: str) -> bool:
        try:
            data = self.store.read(note)
            self.buffers[note] = self.backend.decode(data)
            return True
        except Exception as e:
            logging.error("Error loading sound %s: %s", note, e)
            self.failed.append(note)
            return False

    def load_all(self, notes: Iterable[str] = None) -> int:
        if not getattr(self.backend, "ready", True):
            logging.warning("Audio backend not ready, skipping sound loading")
            return 0
        notes = default_note_list() if notes is None else list(notes)
        loaded = sum(1 for n in notes if self.load(n))
        logging.info("Loaded %d/%d sounds (%d failed)", loaded, len(notes), len(self.failed))
        return loaded

    def has(self, note: str) -> bool:
        return note in self.buffers

    def get(self, note: str):
        return self.buffers.get(note)

    def __len__(self) -> int:
        return len(self.buffers)
