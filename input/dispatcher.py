# input/dispatcher.py
from input.events import InputEvent, KeyDown, KeyUp, PointerDown, PointerUp
from input.octave import OctaveController

class InputDispatcher:
    """Routes key/pointer events to the note player.

    Key lookups are lower-cased before matching, so the upper-case (shifted)
    entries of the key map are never reached from the keyboard. Pointer events
    carry their own note and bypass the key map.
    """
    def __init__(self, octaves: OctaveController, player):
        self.octaves = octaves
        self.player = player

    def dispatch(self, event: InputEvent):
        if isinstance(event, KeyDown):
            self.on_key_down(event.symbol, event.repeat)
        elif isinstance(event, KeyUp):
            self.on_key_up(event.symbol)
        elif isinstance(event, PointerDown):
            self.on_pointer_down(event.note)
        elif isinstance(event, PointerUp):
            self.on_pointer_up(event.note)

    def on_key_down(self, symbol: str, is_repeat: bool = False):
        if is_repeat:
            return
        note = self.octaves.keymap.get(symbol.lower())
        if note:
            self.player.play(note)

    def on_key_up(self, symbol: str):
        note = self.octaves.keymap.get(symbol.lower())
        if note:
            self.player.release(note)

    def on_pointer_down(self, note: str):
        self.player.play(note)

    def on_pointer_up(self, note: str):
        self.player.release(note)
