# timeline/recorder.py
import enum
import logging
from typing import List, Optional

from notes.model import NoteEvent, Recording
from ui.controls import ControlSurface

class RecState(enum.Enum):
    IDLE = "idle"
    RECORDING = "recording"


class RecordingSession:
    """Captures a timestamped sequence of triggered notes.

    start -> RECORDING, stop -> IDLE. Starting again while recording throws away
    the current take and restarts timing from zero.
    """
    def __init__(self, clock, controls: Optional[ControlSurface] = None):
        self.clock = clock
        self.controls = controls
        self.state = RecState.IDLE
        self.start_time: Optional[int] = None
        self._buffer: List[NoteEvent] = []
        self.last_recording = Recording()

    @property
    def is_recording(self) -> bool:
        return self.state is RecState.RECORDING

    @property
    def captured(self) -> int:
        return len(self._buffer) if self.is_recording else len(self.last_recording)

    def start_recording(self):
        self._buffer = []
        self.last_recording = Recording()
        self.start_time = self.clock.now_ms()
        self.state = RecState.RECORDING
        if self.controls:
            self.controls.set_enabled(record=False, stop=True, play=False, save=False, load=False)
        logging.info("Recording started")

    def on_note_triggered(self, note: str, duration: float):
        if self.state is not RecState.RECORDING:
            return
        offset = self.clock.now_ms() - self.start_time
        self._buffer.append(NoteEvent(note=note, time=int(offset), duration=float(duration)))

    def stop_recording(self) -> Recording:
        if self.state is RecState.RECORDING:
            self.last_recording = Recording(self._buffer)
            logging.info("Recording stopped: %d notes", len(self.last_recording))
        self.state = RecState.IDLE
        if self.controls:
            self.controls.set_enabled(record=True, stop=False, play=True, save=True, load=True)
        return self.last_recording

    def load(self, recording: Recording):
        """Replace the last take wholesale (file load)."""
        if self.is_recording:
            raise RuntimeError("cannot load while recording")
        self._buffer = []
        self.last_recording = recording
