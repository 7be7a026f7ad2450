from conftest import FakeBackend, FakeDisplay, FakeSounds
from notes.player import NotePlayer


def test_play_records_buffer_length(player, recorder, backend, clock):
    recorder.start_recording()
    clock.advance(120)
    assert player.play("C4") is True
    rec = recorder.stop_recording()
    assert backend.triggered == ["C4"]
    assert [(e.note, e.time, e.duration) for e in rec] == [("C4", 120, 1.5)]


def test_missing_asset_is_skipped_entirely(player, recorder, backend, display):
    recorder.start_recording()
    assert player.play("F#4") is False      # not a note we ship
    assert player.play("A7") is False       # valid name, sample never loaded
    rec = recorder.stop_recording()
    assert backend.triggered == []
    assert display.flashed == []
    assert len(rec) == 0


def test_note_without_onscreen_key_is_silent(recorder):
    backend = FakeBackend()
    display = FakeDisplay(keys={"C4"})
    p = NotePlayer(FakeSounds(["C4", "D4"], backend), backend, recorder, display=display)
    recorder.start_recording()
    assert p.play("D4") is False
    assert p.play("C4") is True
    assert [e.note for e in recorder.stop_recording()] == ["C4"]


def test_flash_does_not_hold_key(player, display, backend):
    player.flash("D4")
    assert display.flashed == ["D4"]
    assert "D4" not in display.active
    assert backend.triggered == ["D4"]


def test_release_only_clears_feedback(player, display, backend):
    player.play("E4")
    player.release("E4")
    assert "E4" not in display.active
    assert backend.triggered == ["E4"]
