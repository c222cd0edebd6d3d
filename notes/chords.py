# ========================= notes/chords.py =========================
import math
from dataclasses import replace
from typing import List, Optional, Sequence
from notes.model import NormalizedNote, Chord

def default_threshold(notes: Sequence[NormalizedNote], ratio: float = 0.6) -> int:
    """60% of the track's mean delta time. Tuned for readability, not correctness."""
    if not notes:
        return 0
    # halves round up, not to even
    return math.floor(ratio * sum(n.delta_ms for n in notes) / len(notes) + 0.5)

def group_chords(notes: Sequence[NormalizedNote], group: bool = True,
                 threshold_ms: Optional[float] = None) -> List[Chord]:
    """Split a normalized track into chords, one per trigger.

    A note joins the current chord when grouping is on and its own delta
    is within the threshold. Joined notes are re-based to the chord's
    first note, so a fast run can span more than the threshold.
    """
    if group and threshold_ms is None:
        threshold_ms = default_threshold(notes)

    chords: List[Chord] = []
    current: List[NormalizedNote] = []
    gap = 0.0      # time from previous chord head to current chord head
    offset = 0.0   # time from current chord head to this note

    for i, n in enumerate(notes):
        offset += n.delta_ms
        if i == 0 or not group or n.delta_ms > threshold_ms:
            if current:
                chords.append(Chord(notes=tuple(current), gap_ms=gap))
            gap = offset
            offset = 0.0
            current = [replace(n, delta_ms=0.0)]
        else:
            current.append(replace(n, delta_ms=offset))

    if current:
        chords.append(Chord(notes=tuple(current), gap_ms=gap))
    return chords
