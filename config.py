# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional

@dataclass
class RenderConfig:
    window_w: int = 1600
    window_h: int = 320
    piano_h: int = 170
    key_range: str = "88"
    fps: int = 60
    flash_ms: int = 100   # 按下瞬間的高亮時間

@dataclass
class KeyboardConfig:
    initial_octave: int = 4
    min_octave: int = 0
    max_octave: int = 7
    repeat_delay_ms: int = 400
    repeat_interval_ms: int = 40

@dataclass
class AudioConfig:
    asset_dir: str = "piano-mp3"
    asset_ext: str = ".mp3"
    sample_rate: int = 44100
    buffer: int = 512
    channels: int = 32

@dataclass
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    open_path: Optional[str] = None
    log_level: str = "INFO"
    log_dir: Optional[str] = None   # None -> ./logs
