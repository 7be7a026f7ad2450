# app.py
import logging
import os
from typing import Optional

import pygame

from config import AppConfig
from audio.backend import AudioBackend
from audio.sounds import DirectoryAssetStore, SoundBank
from input.dispatcher import InputDispatcher
from input.events import KeyTranslator, PointerDown, PointerUp
from input.keymap import labels_by_note
from input.octave import OctaveController
from midi.convert import read_recording_midi, write_recording_midi
from notes.player import NotePlayer
from notes.storage import RecordingFormatError, load_recording, save_recording
from render.renderer import Renderer
from timeline.clock import TicksClock
from timeline.recorder import RecordingSession
from timeline.scheduler import PlaybackScheduler
from ui.controls import ControlSurface
from utils.crashlog import log_exception
from utils.path import asset_dir

JSON_TYPES = [("Recording JSON", "*.json"), ("All files", "*.*")]
MIDI_TYPES = [("MIDI files", "*.mid *.midi"), ("All files", "*.*")]

def pick_file_dialog(title: str, patterns: list[tuple[str, str]]) -> Optional[str]:
    try:
        import tkinter as tk
        from tkinter import filedialog
        root = tk.Tk(); root.withdraw()
        file = filedialog.askopenfilename(title=title, filetypes=patterns)
        root.update(); root.destroy()
        return file or None
    except Exception:
        logging.exception("File dialog failed")
        return None

def save_file_dialog(title: str, default_ext: str, patterns: list[tuple[str, str]]) -> Optional[str]:
    try:
        import tkinter as tk
        from tkinter import filedialog
        root = tk.Tk(); root.withdraw()
        file = filedialog.asksaveasfilename(title=title, defaultextension=default_ext, filetypes=patterns)
        root.update(); root.destroy()
        return file or None
    except Exception:
        logging.exception("File dialog failed")
        return None

class App:
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        # 音訊：整個程式只開一次 mixer
        self.audio = AudioBackend(cfg.audio)
        self.audio.open()
        self.renderer = Renderer(cfg.render)
        kb = cfg.keyboard
        pygame.key.set_repeat(kb.repeat_delay_ms, kb.repeat_interval_ms)
        store = DirectoryAssetStore(asset_dir(cfg.audio.asset_dir), cfg.audio.asset_ext)
        self.sounds = SoundBank(store, self.audio)
        self.sounds.load_all()

        self.clock = TicksClock()
        self.controls = ControlSurface(octave=kb.initial_octave)
        self.recorder = RecordingSession(self.clock, self.controls)
        self.player = NotePlayer(self.sounds, self.audio, self.recorder, display=self.renderer)
        self.scheduler = PlaybackScheduler(self.clock, self.player.flash, self.controls)
        self.octaves = OctaveController(kb.initial_octave, kb.min_octave, kb.max_octave,
                                        on_change=self._on_octave_changed)
        self.dispatcher = InputDispatcher(self.octaves, self.player)
        self.keys = KeyTranslator()
        self.pointer_note: Optional[str] = None
        self.renderer.set_labels(labels_by_note(self.octaves.keymap))

        # UI 訊息（toast）
        self._msg = ""
        self._msg_time = 0.0

        if cfg.open_path:
            self.load_recording_from(cfg.open_path)

    # ---------- UI 訊息 ----------
    def _toast(self, msg: str, secs: float = 4.0):
        self._msg = msg
        self._msg_time = max(self._msg_time, secs)

    def _on_octave_changed(self, octave: int):
        self.controls.set_octave(octave)
        self.renderer.set_labels(labels_by_note(self.octaves.keymap))

    def _busy(self) -> bool:
        return self.recorder.is_recording or self.scheduler.is_playing

    # ---------- Save / Load ----------
    def save_interactive(self) -> bool:
        if self._busy() or not self.recorder.last_recording:
            self._toast("Nothing to save", 2.0)
            return False
        path = save_file_dialog("Save Recording", ".json", JSON_TYPES)
        if not path:
            return False
        try:
            save_recording(path, self.recorder.last_recording)
            logging.info("Saved %d notes to %s", len(self.recorder.last_recording), path)
            self._toast(f"Saved {os.path.basename(path)}", 2.0)
            return True
        except OSError as e:
            log_exception("save_interactive", e)
            self._toast("Failed to save (see logs)", 6.0)
            return False

    def load_recording_from(self, path: str) -> bool:
        try:
            rec = load_recording(path)
        except (OSError, RecordingFormatError) as e:
            log_exception("load_recording", e)
            logging.error("Failed to load %s: %s", path, e)
            self._toast("Failed to load recording (see logs)", 6.0)
            return False
        self.recorder.load(rec)
        logging.info("Loaded %d notes from %s", len(rec), path)
        self._toast(f"Loaded {os.path.basename(path)}", 2.0)
        return True

    def load_interactive(self) -> bool:
        if self._busy():
            return False
        path = pick_file_dialog("Load Recording", JSON_TYPES)
        return self.load_recording_from(path) if path else False

    def export_midi_interactive(self) -> bool:
        if self._busy() or not self.recorder.last_recording:
            self._toast("Nothing to export", 2.0)
            return False
        path = save_file_dialog("Export MIDI", ".mid", MIDI_TYPES)
        if not path:
            return False
        try:
            n = write_recording_midi(self.recorder.last_recording, path)
            logging.info("Exported %d notes to %s", n, path)
            self._toast(f"Exported {os.path.basename(path)}", 2.0)
            return True
        except (OSError, ValueError) as e:
            log_exception("export_midi_interactive", e)
            self._toast("Failed to export MIDI (see logs)", 6.0)
            return False

    def import_midi_interactive(self) -> bool:
        if self._busy():
            return False
        path = pick_file_dialog("Import MIDI", MIDI_TYPES)
        if not path:
            return False
        try:
            rec = read_recording_midi(path)
        except (OSError, ValueError, EOFError) as e:
            log_exception("import_midi_interactive", e)
            self._toast("Failed to import MIDI (see logs)", 6.0)
            return False
        self.recorder.load(rec)
        logging.info("Imported %d notes from %s", len(rec), path)
        self._toast(f"Imported {os.path.basename(path)}", 2.0)
        return True

    # ---------- Controls ----------
    def _on_button(self, label: str) -> bool:
        """Returns False when the app should quit."""
        if label == "RECORD":
            self.recorder.start_recording()
        elif label == "STOP":
            self.recorder.stop_recording()
        elif label == "PLAY":
            self.scheduler.play(self.recorder.last_recording)
        elif label == "SAVE":
            self.save_interactive()
        elif label == "LOAD":
            self.load_interactive()
        elif label == "EXPORT MIDI":
            self.export_midi_interactive()
        elif label == "IMPORT MIDI":
            self.import_midi_interactive()
        elif label == "OCT -":
            self.octaves.change_octave(-1)
        elif label == "OCT +":
            self.octaves.change_octave(1)
        elif label == "KEY RANGE":
            self._toast(f"Key range: {self.renderer.next_key_range()}", 2.0)
        elif label == "QUIT":
            return False
        return True

    def _shutdown(self):
        self.scheduler.reset()
        self.renderer.release_all()
        self.audio.close()
        pygame.quit()

    # ---------- Main loop ----------
    def run(self):
        running = True
        while running:
            dt = self.renderer.tick(self.cfg.render.fps)
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False; break

                if e.type == pygame.KEYDOWN and e.key in (pygame.K_LEFT, pygame.K_RIGHT):
                    self.octaves.change_octave(-1 if e.key == pygame.K_LEFT else 1)
                    continue

                if e.type in (pygame.KEYDOWN, pygame.KEYUP):
                    ev = self.keys.translate(e)
                    if ev is not None:
                        self.dispatcher.dispatch(ev)
                    continue

                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    label = self.renderer.button_at(e.pos, self.controls)
                    if label:
                        running = self._on_button(label)
                        continue
                    note = self.renderer.note_at(e.pos)
                    if note:
                        self.pointer_note = note
                        self.dispatcher.dispatch(PointerDown(note))

                if e.type == pygame.MOUSEBUTTONUP and e.button == 1 and self.pointer_note:
                    self.dispatcher.dispatch(PointerUp(self.pointer_note))
                    self.pointer_note = None

                # 視窗失焦時 KEYUP 可能收不到
                if e.type == pygame.WINDOWFOCUSLOST:
                    self.keys.reset()
                    self.renderer.release_all()

            if not running: break

            self.scheduler.update()

            # ===== 訊息倒數（toast） =====
            if self._msg_time > 0:
                self._msg_time -= dt
                if self._msg_time <= 0:
                    self._msg_time = 0
                    self._msg = ""

            # ----- Render -----
            self.renderer.begin_frame()
            right_fields = [
                f"OCTAVE: {self.controls.octave}",
                f"REC: {'ON' if self.recorder.is_recording else 'OFF'}",
                f"PLAY: {'ON' if self.scheduler.is_playing else 'OFF'}",
                f"NOTES: {self.recorder.captured}",
                f"SOUNDS: {len(self.sounds)}",
            ]
            if self._msg: right_fields.append(self._msg)
            self.renderer.draw_status_bar(self.controls, "  |  ".join(right_fields))
            self.renderer.draw_keyboard()
            self.renderer.end_frame()

        self._shutdown()
