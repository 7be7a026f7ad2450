# midi/convert.py
import logging
from typing import List, Tuple

import mido

from notes.model import NoteEvent, Recording, midi_to_note, note_to_midi

TICKS_PER_BEAT = 480
TEMPO = 500000  # 120 bpm

def write_recording_midi(rec: Recording, path: str, velocity: int = 100) -> int:
    """Single-track MIDI: note_on at each onset, note_off after the note's duration.
    Returns the number of notes written."""
    timed: List[Tuple[int, int, mido.Message]] = []
    for ev in rec:
        pitch = note_to_midi(ev.note)
        if pitch is None or not (0 <= pitch <= 127):
            logging.warning("Skipping note %r: not representable in MIDI", ev.note)
            continue
        on = round(mido.second2tick(ev.time / 1000.0, TICKS_PER_BEAT, TEMPO))
        off = on + max(1, round(mido.second2tick(ev.duration, TICKS_PER_BEAT, TEMPO)))
        # 同一 tick 時 note_off 排在 note_on 前面
        timed.append((on, 1, mido.Message("note_on", note=pitch, velocity=velocity)))
        timed.append((off, 0, mido.Message("note_off", note=pitch, velocity=0)))
    timed.sort(key=lambda t: (t[0], t[1]))

    mid = mido.MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=TEMPO, time=0))
    last = 0
    for tick, _, msg in timed:
        track.append(msg.copy(time=tick - last))
        last = tick
    track.append(mido.MetaMessage("end_of_track", time=0))
    mid.save(path)
    return len(timed) // 2

def read_recording_midi(path: str) -> Recording:
    """All tracks merged, tempo changes honoured, events ordered by onset."""
    mid = mido.MidiFile(path)
    tpb = mid.ticks_per_beat
    tempo = TEMPO
    time_sec = 0.0
    active = {}
    notes: List[Tuple[float, float, int]] = []  # (start, end, pitch)

    for msg in mido.merge_tracks(mid.tracks):
        time_sec += mido.tick2second(msg.time, tpb, tempo)
        if msg.is_meta:
            if msg.type == 'set_tempo':
                tempo = msg.tempo
            continue
        if msg.type == 'note_on' and msg.velocity > 0:
            active[(msg.channel, msg.note)] = time_sec
        elif msg.type == 'note_off' or (msg.type == 'note_on' and msg.velocity == 0):
            st = active.pop((msg.channel, msg.note), None)
            if st is not None:
                notes.append((st, time_sec, msg.note))
    # close dangling
    for (_, p), st in active.items():
        notes.append((st, time_sec, p))

    notes.sort(key=lambda n: (n[0], n[2]))
    return Recording(
        NoteEvent(note=midi_to_note(p), time=int(round(st * 1000)), duration=max(0.0, end - st))
        for st, end, p in notes
    )
