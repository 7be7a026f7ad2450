import pytest

from input.keymap import KEYMAP_SIZE, generate_keymap, labels_by_note


@pytest.mark.parametrize("octave", range(0, 8))
def test_generate_is_deterministic(octave):
    first = generate_keymap(octave)
    assert first == generate_keymap(octave)
    assert len(first) == KEYMAP_SIZE == 39


def test_default_octave_layout():
    km = generate_keymap(4)
    assert [km[s] for s in "zxcvbnm"] == ["C4", "D4", "E4", "F4", "G4", "A4", "B4"]
    assert [km[s] for s in "asdfghj"] == ["C5", "D5", "E5", "F5", "G5", "A5", "B5"]
    assert km["k"] == "C6"
    assert [km[s] for s in "qwrty"] == ["Db4", "Eb4", "Gb4", "Ab4", "Bb4"]
    assert [km[s] for s in "uiop["] == ["Db5", "Eb5", "Gb5", "Ab5", "Bb5"]
    assert [km[s] for s in "ZXCVBNM"] == ["C3", "D3", "E3", "F3", "G3", "A3", "B3"]
    assert [km[s] for s in "ASDFGHJ"] == ["C6", "D6", "E6", "F6", "G6", "A6", "B6"]


def test_only_offsets_change_between_octaves():
    lo, hi = generate_keymap(2), generate_keymap(3)
    assert set(lo) == set(hi)
    assert lo["z"] == "C2" and hi["z"] == "C3"


def test_extreme_octaves_are_not_clamped():
    assert generate_keymap(0)["Z"] == "C-1"
    assert generate_keymap(7)["A"] == "C9"
    assert generate_keymap(7)["k"] == "C9"


def test_labels_skip_uppercase_symbols():
    labels = labels_by_note(generate_keymap(4))
    assert labels["C4"] == "z"
    # C6 is reachable via 'k' only; 'A' is never typed as such
    assert labels["C6"] == "k"
    assert "C3" not in labels
    assert all(sym == sym.lower() for sym in labels.values())
