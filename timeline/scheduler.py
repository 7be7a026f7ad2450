# timeline/scheduler.py
import logging
from typing import Callable, List, Optional

from notes.model import Recording
from ui.controls import ControlSurface

class PlaybackScheduler:
    """Replays a Recording, polled once per frame via update().

    Each event waits its full `time` offset counted from the previous trigger
    (not the delta to the previous event), so a replay lasts the sum of all
    offsets. After the last note it waits that note's duration before giving the
    controls back.
    """
    def __init__(self, clock, trigger: Callable[[str], None],
                 controls: Optional[ControlSurface] = None):
        self.clock = clock
        self.trigger = trigger
        self.controls = controls
        self.recording: Optional[Recording] = None
        self.i = 0
        self.deadline: Optional[int] = None
        self.finishing = False

    @property
    def is_playing(self) -> bool:
        return self.recording is not None

    def play(self, recording: Recording) -> bool:
        if not recording:
            return False
        if self.is_playing:
            logging.warning("Playback already running, ignoring play()")
            return False
        self.recording = recording
        self.i = 0
        self.finishing = False
        self.deadline = self.clock.now_ms() + recording[0].time
        if self.controls:
            self.controls.set_enabled(record=False, stop=False, play=False, save=False, load=False)
        logging.info("Playback started: %d notes", len(recording))
        return True

    def update(self) -> List[str]:
        """Fire everything that is due; returns the notes triggered this call."""
        fired: List[str] = []
        while self.recording is not None and self.clock.now_ms() >= self.deadline:
            now = self.clock.now_ms()
            if self.finishing:
                self._finish()
                break
            ev = self.recording[self.i]
            self.trigger(ev.note)
            fired.append(ev.note)
            self.i += 1
            if self.i < len(self.recording):
                self.deadline = now + self.recording[self.i].time
            else:
                # 等最後一個音播完（估計值，mixer 沒有完成回呼）
                self.finishing = True
                self.deadline = now + int(round(ev.duration * 1000))
        return fired

    def reset(self):
        """Drop any running playback without touching the controls (shutdown)."""
        self.recording = None
        self.deadline = None
        self.finishing = False
        self.i = 0

    def _finish(self):
        self.reset()
        if self.controls:
            self.controls.set_enabled(record=True, play=True, save=True, load=True)
        logging.info("Playback finished")
