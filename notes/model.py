# notes/model.py
from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True)
class NormalizedNote:
    note: int        # MIDI note number
    velocity: int
    delta_ms: float  # ms since previous note-on (inside a Chord: offset from its first note)

@dataclass(frozen=True)
class Chord:
    """Notes sounded by one trigger.

    notes[0].delta_ms is always 0; later notes carry their offset from notes[0].
    gap_ms keeps the original distance from the previous chord.
    """
    notes: Tuple[NormalizedNote, ...]
    gap_ms: float = 0.0

    def __post_init__(self):
        if not self.notes:
            raise ValueError("a chord needs at least one note")

    def __len__(self) -> int:
        return len(self.notes)

    def __iter__(self):
        return iter(self.notes)

@dataclass(frozen=True)
class TrackChoice:
    index: int
    name: str
    notes: Tuple[NormalizedNote, ...]

    @property
    def label(self) -> str:
        # e.g. "Piano right (1512 notes)"
        return f"{self.name} ({len(self.notes)} notes)"
