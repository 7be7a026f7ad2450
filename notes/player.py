# notes/player.py

class NotePlayer:
    """The one trigger path shared by keyboard, pointer and playback.

    A note without an on-screen key or without a loaded sound is skipped
    entirely: no feedback, no audio, nothing recorded.
    """
    def __init__(self, sounds, backend, recorder, display=None):
        self.sounds = sounds
        self.backend = backend
        self.recorder = recorder
        self.display = display

    def can_play(self, note: str) -> bool:
        if self.display is not None and not self.display.has_key(note):
            return False
        return self.sounds.has(note)

    def play(self, note: str, hold: bool = True) -> bool:
        if not self.can_play(note):
            return False
        buf = self.sounds.get(note)
        if self.display is not None:
            self.display.press(note, hold=hold)
        self.backend.trigger(buf)
        self.recorder.on_note_triggered(note, self.backend.length(buf))
        return True

    def release(self, note: str):
        if self.display is not None:
            self.display.release(note)

    def flash(self, note: str) -> bool:
        """Trigger without leaving the key held (used by playback)."""
        return self.play(note, hold=False)
