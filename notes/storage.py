# notes/storage.py
import json
import math
import numbers
from typing import Any, Dict, List

from notes.model import NoteEvent, Recording

FIELDS = ("note", "time", "duration")

class RecordingFormatError(ValueError):
    pass

def _check_time(value) -> int:
    # bool 是 int 的子類別，要先排除
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"time must be a number, got {value!r}")
    if not math.isfinite(value) or value != int(value):
        raise ValueError(f"time must be a whole number of ms, got {value!r}")
    return int(value)

def _check_duration(value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"duration must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"duration must be finite, got {value!r}")
    return float(value)

def recording_to_json(rec: Recording) -> List[Dict[str, Any]]:
    return [{"note": ev.note, "time": ev.time, "duration": ev.duration} for ev in rec]

def recording_from_json(obj: Any) -> Recording:
    """Checks field presence and that time/duration are finite numbers; no versioning."""
    if not isinstance(obj, list):
        raise RecordingFormatError(f"Expected a list of note events, got {type(obj).__name__}")
    events: List[NoteEvent] = []
    for i, item in enumerate(obj):
        if not isinstance(item, dict):
            raise RecordingFormatError(f"Event #{i} is not an object")
        missing = [k for k in FIELDS if k not in item]
        if missing:
            raise RecordingFormatError(f"Event #{i} missing field(s): {', '.join(missing)}")
        try:
            events.append(NoteEvent(note=str(item["note"]), time=_check_time(item["time"]),
                                    duration=_check_duration(item["duration"])))
        except (TypeError, ValueError) as e:
            raise RecordingFormatError(f"Event #{i}: {e}") from e
    return Recording(events)

def save_recording(path: str, rec: Recording):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(recording_to_json(rec), f, ensure_ascii=False, indent=2)

def load_recording(path: str) -> Recording:
    with open(path, "r", encoding="utf-8") as f:
        try:
            obj = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RecordingFormatError(f"Not a JSON file: {e}") from e
    return recording_from_json(obj)
