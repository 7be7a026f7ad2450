# timeline/clock.py
import pygame

class TicksClock:
    """Milliseconds since pygame.init()."""
    def now_ms(self) -> int:
        return pygame.time.get_ticks()

class ManualClock:
    """Virtual clock; time only moves when told to."""
    def __init__(self, start_ms: int = 0):
        self.t = int(start_ms)

    def now_ms(self) -> int:
        return self.t

    def advance(self, ms: int) -> int:
        self.t += int(ms)
        return self.t

    def set(self, ms: int):
        self.t = int(ms)
