import json

import pytest

from notes.model import NoteEvent, Recording
from notes.storage import (RecordingFormatError, load_recording, recording_from_json,
                           recording_to_json, save_recording)

REC = Recording([
    NoteEvent("C4", 0, 1.25),
    NoteEvent("Bb3", 215, 0.8),
    NoteEvent("C-1", 215, 0.0),
    NoteEvent("Db8", 1042, 3.140625),
])


def test_json_shape():
    assert recording_to_json(REC)[1] == {"note": "Bb3", "time": 215, "duration": 0.8}


def test_file_round_trip_is_field_exact(tmp_path):
    path = tmp_path / "take.json"
    save_recording(str(path), REC)
    loaded = load_recording(str(path))
    assert loaded == REC
    assert [e.time for e in loaded] == [0, 215, 215, 1042]
    assert all(isinstance(e.time, int) for e in loaded)


def test_empty_recording(tmp_path):
    path = tmp_path / "empty.json"
    save_recording(str(path), Recording())
    assert load_recording(str(path)) == Recording()


def test_order_is_kept_not_sorted():
    rec = recording_from_json([
        {"note": "D4", "time": 500, "duration": 1},
        {"note": "C4", "time": 200, "duration": 1},
    ])
    assert [e.note for e in rec] == ["D4", "C4"]


@pytest.mark.parametrize("bad", [
    {"note": "C4"},
    [{"note": "C4", "time": 1}],
    [{"time": 1, "duration": 1.0}],
    ["C4"],
    [{"note": "C4", "time": "soon", "duration": 1.0}],
])
def test_missing_fields_rejected(bad):
    with pytest.raises(RecordingFormatError):
        recording_from_json(bad)


def test_extra_fields_are_ignored():
    rec = recording_from_json([{"note": "C4", "time": 3, "duration": 0.5, "velocity": 99}])
    assert rec[0] == NoteEvent("C4", 3, 0.5)


def test_not_json(tmp_path):
    path = tmp_path / "junk.json"
    path.write_text("not json", encoding="utf-8")
    with pytest.raises(RecordingFormatError):
        load_recording(str(path))


def test_written_file_is_plain_list(tmp_path):
    path = tmp_path / "take.json"
    save_recording(str(path), REC)
    obj = json.loads(path.read_text(encoding="utf-8"))
    assert isinstance(obj, list) and len(obj) == 4


def test_binary_file_is_a_format_error(tmp_path):
    path = tmp_path / "take.mid"
    path.write_bytes(b"MThd\x00\x00\x00\x06\xff\xfe\x80")
    with pytest.raises(RecordingFormatError):
        load_recording(str(path))


@pytest.mark.parametrize("text", [
    '[{"note": "C4", "time": 0, "duration": NaN}]',
    '[{"note": "C4", "time": 0, "duration": Infinity}]',
    '[{"note": "C4", "time": 0, "duration": -Infinity}]',
    '[{"note": "C4", "time": NaN, "duration": 1.0}]',
    '[{"note": "C4", "time": Infinity, "duration": 1.0}]',
])
def test_non_finite_numbers_rejected(tmp_path, text):
    path = tmp_path / "take.json"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(RecordingFormatError):
        load_recording(str(path))


@pytest.mark.parametrize("time", [200.9, True, False, None, [1]])
def test_time_must_be_whole_ms(time):
    with pytest.raises(RecordingFormatError):
        recording_from_json([{"note": "C4", "time": time, "duration": 1.0}])


def test_duration_rejects_bool():
    with pytest.raises(RecordingFormatError):
        recording_from_json([{"note": "C4", "time": 0, "duration": True}])


def test_integral_float_time_accepted():
    rec = recording_from_json([{"note": "C4", "time": 200.0, "duration": 1}])
    assert rec[0] == NoteEvent("C4", 200, 1.0)
    assert isinstance(rec[0].time, int)


def test_loaded_recording_plays_to_the_end(tmp_path):
    from timeline.clock import ManualClock
    from timeline.scheduler import PlaybackScheduler

    path = tmp_path / "take.json"
    path.write_text('[{"note": "C4", "time": 10, "duration": 0.5}]', encoding="utf-8")
    clock = ManualClock()
    fired = []
    sched = PlaybackScheduler(clock, fired.append)
    assert sched.play(load_recording(str(path)))
    for _ in range(600):
        clock.advance(1)
        sched.update()
    assert fired == ["C4"]
    assert not sched.is_playing
