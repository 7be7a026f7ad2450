# render/renderer.py
import os, pygame, logging
from typing import Dict, List, Optional, Set, Tuple

from config import RenderConfig
from notes.model import midi_to_note
from ui.controls import ControlSurface

STATUS_H = 36
BTN_PAD_X = 12
BTN_GAP = 10
WHITE_SET = {0, 2, 4, 5, 7, 9, 11}

BUTTONS = ["RECORD", "STOP", "PLAY", "SAVE", "LOAD", "EXPORT MIDI", "IMPORT MIDI",
           "OCT -", "OCT +", "KEY RANGE", "QUIT"]
# 按鈕 -> 控制項名稱（沒列出的永遠可按）
BUTTON_CONTROL = {"RECORD": "record", "STOP": "stop", "PLAY": "play",
                  "SAVE": "save", "LOAD": "load",
                  "EXPORT MIDI": "save", "IMPORT MIDI": "load"}

KEY_RANGES = {"88": (21, 108), "76": (28, 103), "61": (36, 96)}

class Renderer:
    """Window, status bar and on-screen keyboard.

    Also the visual-feedback sink of the note player: has_key / press / release.
    """
    def __init__(self, cfg: RenderConfig):
        pygame.init()
        self.cfg = cfg
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("piano-rec")
        try:
            icon_path = os.path.join(os.path.dirname(__file__), "..", "static", "img", "icon", "icon.png")
            pygame.display.set_icon(pygame.image.load(icon_path))
        except (pygame.error, FileNotFoundError) as e:
            logging.debug("set_icon skipped: %s", e)
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()
        self.button_rects: Dict[str, pygame.Rect] = {}

        self.first_midi = 21
        self.last_midi = 108
        self.white_w = float(self.cfg.window_w)
        self.white_rects: List[Tuple[str, pygame.Rect]] = []
        self.black_rects: List[Tuple[str, pygame.Rect]] = []
        self.keys: Set[str] = set()

        self.active: Set[str] = set()          # 按住中的鍵
        self.pressed: Dict[str, int] = {}      # note -> 閃爍結束的 ticks
        self.labels: Dict[str, str] = {}       # note -> 電腦鍵標籤

        self.set_key_range(self.cfg.key_range)

    # ------- layout -------
    def _rebuild_layout(self):
        whites = [p for p in range(self.first_midi, self.last_midi + 1) if (p % 12) in WHITE_SET]
        self.white_w = float(self.cfg.window_w) / float(len(whites) or 1)
        top = self.cfg.window_h - self.cfg.piano_h
        ph = self.cfg.piano_h

        self.white_rects, self.black_rects = [], []
        for i, p in enumerate(whites):
            x = i * self.white_w
            rect = pygame.Rect(int(x), top, int(self.white_w) - 1, ph)
            self.white_rects.append((midi_to_note(p), rect))
            # 黑鍵跟在 C D F G A 後面，且右邊還有白鍵時才畫
            if (p % 12) in {0, 2, 5, 7, 9} and i + 1 < len(whites):
                bx = x + self.white_w * 0.7
                brect = pygame.Rect(int(bx), top, int(self.white_w * 0.6), int(ph * 0.6))
                self.black_rects.append((midi_to_note(p + 1), brect))
        self.keys = {n for n, _ in self.white_rects} | {n for n, _ in self.black_rects}
        logging.debug("Keyboard layout rebuilt: range=[%d,%d], keys=%d, white_w=%.3f",
                      self.first_midi, self.last_midi, len(self.keys), self.white_w)

    def set_key_range(self, mode: str):
        self.first_midi, self.last_midi = KEY_RANGES.get(str(mode), KEY_RANGES["88"])
        self.cfg.key_range = str(mode) if str(mode) in KEY_RANGES else "88"
        self._rebuild_layout()
        self.active &= self.keys
        self.pressed = {n: t for n, t in self.pressed.items() if n in self.keys}

    def next_key_range(self) -> str:
        order = list(KEY_RANGES)
        mode = order[(order.index(self.cfg.key_range) + 1) % len(order)]
        self.set_key_range(mode)
        return mode

    # ------- feedback -------
    def has_key(self, note: str) -> bool:
        return note in self.keys

    def press(self, note: str, hold: bool = True):
        if hold:
            self.active.add(note)
        self.pressed[note] = pygame.time.get_ticks() + self.cfg.flash_ms

    def release(self, note: str):
        self.active.discard(note)

    def release_all(self):
        self.active.clear()
        self.pressed.clear()

    def set_labels(self, labels: Dict[str, str]):
        self.labels = dict(labels)

    def note_at(self, pos) -> Optional[str]:
        """Pointer hit test; black keys sit on top of white keys."""
        for note, rect in self.black_rects:
            if rect.collidepoint(pos):
                return note
        for note, rect in self.white_rects:
            if rect.collidepoint(pos):
                return note
        return None

    def button_at(self, pos, controls: ControlSurface) -> Optional[str]:
        for label, rect in self.button_rects.items():
            if rect.collidepoint(pos):
                ctl = BUTTON_CONTROL.get(label)
                if ctl and not controls.is_enabled(ctl):
                    return None
                return label
        return None

    # ------- frame -------
    def tick(self, fps=60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill((12, 12, 14))
        now = pygame.time.get_ticks()
        self.pressed = {n: t for n, t in self.pressed.items() if t > now}

    def end_frame(self):
        pygame.display.flip()

    def draw_status_bar(self, controls: ControlSurface, right_info_text: str = ""):
        pygame.draw.rect(self.screen, (24, 24, 28), (0, 0, self.cfg.window_w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 66), (0, STATUS_H), (self.cfg.window_w, STATUS_H), 1)

        x = 10; self.button_rects.clear()
        for label in BUTTONS:
            ctl = BUTTON_CONTROL.get(label)
            enabled = ctl is None or controls.is_enabled(ctl)
            fg = (220, 220, 230) if enabled else (95, 95, 105)
            if label == "RECORD" and not controls.is_enabled("record") and controls.is_enabled("stop"):
                fg = (225, 70, 70)  # 錄音中
            surf = self.font_small.render(label, True, fg)
            rect = surf.get_rect(); rect.topleft = (x + BTN_PAD_X, (STATUS_H - rect.height)//2)
            box = pygame.Rect(x, 4, rect.width + BTN_PAD_X*2, STATUS_H - 8)
            pygame.draw.rect(self.screen, (40, 40, 46) if enabled else (30, 30, 34), box, border_radius=6)
            pygame.draw.rect(self.screen, (75, 75, 85), box, 1, border_radius=6)
            self.screen.blit(surf, rect)
            self.button_rects[label] = box
            x += box.width + BTN_GAP

        if right_info_text:
            right = self.font_small.render(right_info_text, True, (180, 180, 190))
            self.screen.blit(right, (self.cfg.window_w - right.get_width() - 10,
                                     STATUS_H + (STATUS_H - right.get_height())//2))

    # ------- piano -------
    def _key_fill(self, note: str, base, lit_active, lit_pressed):
        if note in self.pressed:
            return lit_pressed
        if note in self.active:
            return lit_active
        return base

    def draw_keyboard(self):
        w, h, ph = self.cfg.window_w, self.cfg.window_h, self.cfg.piano_h
        pygame.draw.rect(self.screen, (28, 28, 32), (0, h - ph, w, ph))

        for note, rect in self.white_rects:
            fill = self._key_fill(note, (230, 230, 230), (255, 240, 170), (255, 215, 90))
            pygame.draw.rect(self.screen, fill, rect)
            pygame.draw.rect(self.screen, (60, 60, 66), rect, 1)
            label = self.labels.get(note)
            if label:
                s = self.font_small.render(label, True, (40, 40, 48))
                self.screen.blit(s, (rect.centerx - s.get_width()//2, rect.bottom - 38))
            if note.startswith("C") and not note.startswith("C-"):
                s = self.font_small.render(note, True, (120, 120, 128))
                self.screen.blit(s, (rect.centerx - s.get_width()//2, rect.bottom - 18))

        for note, rect in self.black_rects:
            fill = self._key_fill(note, (18, 18, 20), (255, 200, 120), (255, 170, 60))
            pygame.draw.rect(self.screen, fill, rect)
            pygame.draw.rect(self.screen, (60, 60, 66), rect, 1)
            label = self.labels.get(note)
            if label:
                s = self.font_small.render(label, True, (210, 210, 220))
                self.screen.blit(s, (rect.centerx - s.get_width()//2, rect.bottom - 18))

        pygame.draw.line(self.screen, (90, 90, 90), (0, h - ph - 6), (w, h - ph - 6), 2)
