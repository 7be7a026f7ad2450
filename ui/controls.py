# ui/controls.py
from typing import Dict

CONTROLS = ("record", "stop", "play", "save", "load")

class ControlSurface:
    """Enabled/disabled state of the transport buttons plus the shown octave.

    Recorder and scheduler flip these; the renderer only reads them.
    """
    def __init__(self, octave: int = 4):
        self.enabled: Dict[str, bool] = {name: True for name in CONTROLS}
        self.enabled["stop"] = False
        self.octave = octave

    def set_enabled(self, **flags: bool):
        for name, on in flags.items():
            if name not in self.enabled:
                raise KeyError(f"Unknown control: {name}")
            self.enabled[name] = bool(on)

    def is_enabled(self, name: str) -> bool:
        return self.enabled.get(name, False)

    def set_octave(self, octave: int):
        self.octave = octave
