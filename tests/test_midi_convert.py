import mido

from midi.convert import read_recording_midi, write_recording_midi
from notes.model import NoteEvent, Recording


def test_export_then_import(tmp_path):
    rec = Recording([
        NoteEvent("C4", 0, 0.5),
        NoteEvent("Eb4", 250, 0.25),
        NoteEvent("C4", 1000, 1.0),
    ])
    path = str(tmp_path / "take.mid")
    assert write_recording_midi(rec, path) == 3

    back = read_recording_midi(path)
    assert [e.note for e in back] == ["C4", "Eb4", "C4"]
    assert [e.time for e in back] == [0, 250, 1000]
    for got, want in zip(back, rec):
        assert abs(got.duration - want.duration) < 0.01


def test_unrepresentable_notes_skipped(tmp_path):
    rec = Recording([NoteEvent("C-1", 0, 0.5), NoteEvent("C9", 10, 0.5), NoteEvent("??", 20, 0.5)])
    path = str(tmp_path / "odd.mid")
    # C-1 is MIDI 0 and C9 is 120, both fine; '??' is dropped
    assert write_recording_midi(rec, path) == 2
    assert [e.note for e in read_recording_midi(path)] == ["C-1", "C9"]


def test_import_honours_tempo_and_orders_by_onset(tmp_path):
    mid = mido.MidiFile(ticks_per_beat=100)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=1_000_000, time=0))  # 1 s per beat
    track.append(mido.Message("note_on", note=62, velocity=90, time=50))   # D4 @ 0.5 s
    track.append(mido.Message("note_on", note=60, velocity=90, time=0))    # C4 @ 0.5 s
    track.append(mido.Message("note_off", note=62, velocity=0, time=100))
    track.append(mido.Message("note_on", note=60, velocity=0, time=0))
    path = str(tmp_path / "in.mid")
    mid.save(path)

    rec = read_recording_midi(path)
    assert [(e.note, e.time) for e in rec] == [("C4", 500), ("D4", 500)]
    assert abs(rec[0].duration - 1.0) < 1e-6
