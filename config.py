# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Tuple

@dataclass
class PlaybackConfig:
    sustain_ms: float = 200.0      # note-off this long after each note-on
    default_tempo: int = 500000    # MIDI default, 120 bpm
    threshold_ratio: float = 0.6   # default chord threshold = ratio * mean delta

@dataclass
class PortConfig:
    output_name: str = "Virtuoso"
    keyboard_label: str = "Computer keyboard"

@dataclass
class RenderConfig:
    window_w: int = 720
    window_h: int = 200
    piano_h: int = 90
    fps: int = 500           # loop rate; scheduler resolution is 1/fps
    draw_fps: int = 30
    exit_hint: str = "Esc to quit"

@dataclass
class AppConfig:
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    ports: PortConfig = field(default_factory=PortConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    exit_chars: Tuple[str, ...] = ("\x03", "\x04", "\x1b")  # ctrl-c, ctrl-d, esc
