# midi/parser.py
import logging
import mido
from typing import Iterable, List, Sequence
from notes.model import NormalizedNote, TrackChoice
from errors import FatalInputError

log = logging.getLogger(__name__)

DEFAULT_TEMPO = 500000  # default 120 bpm
FALLBACK_NAME = "Mystery track"

def normalize_track(track: Iterable, ticks_per_beat: int,
                    tempo: int = DEFAULT_TEMPO) -> List[NormalizedNote]:
    """Keep only note_on messages, with delta times in milliseconds.

    Ticks of dropped messages are carried onto the next note_on. A tempo
    change only affects ticks after it. Velocity 0 note_ons are kept as-is.
    """
    elapsed_ms = 0.0
    notes: List[NormalizedNote] = []

    for msg in track:
        elapsed_ms += mido.tick2second(msg.time, ticks_per_beat, tempo) * 1000.0
        if msg.type == 'set_tempo':
            tempo = msg.tempo
        elif msg.type == 'note_on':
            notes.append(NormalizedNote(note=msg.note, velocity=msg.velocity, delta_ms=elapsed_ms))
            elapsed_ms = 0.0
    return notes

def track_name(track: Iterable, fallback: str = FALLBACK_NAME) -> str:
    for msg in track:
        if msg.type == 'track_name' and msg.name.strip():
            return msg.name.strip()
    return fallback

def total_ms(notes: Sequence[NormalizedNote]) -> float:
    return sum(n.delta_ms for n in notes)

def tracks_from_midi(mid: mido.MidiFile, tempo: int = DEFAULT_TEMPO) -> List[TrackChoice]:
    choices: List[TrackChoice] = []
    for i, track in enumerate(mid.tracks):
        notes = normalize_track(track, mid.ticks_per_beat, tempo)
        if not notes:
            log.debug("Track %d (%s) has no note_on events, skipped", i, track_name(track))
            continue
        choices.append(TrackChoice(index=i, name=track_name(track), notes=tuple(notes)))
    return choices

def load_tracks(path: str, tempo: int = DEFAULT_TEMPO) -> List[TrackChoice]:
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError, KeyError, IndexError) as e:
        log.debug("mido failed to read %s", path, exc_info=True)
        raise FatalInputError(f"Oh no! I can't read the MIDI file {path!r} ({e}).") from e

    choices = tracks_from_midi(mid, tempo)
    if not choices:
        raise FatalInputError("Oh no! I can't read any note data from the provided track.")
    log.info("Loaded %s: %d track(s), %d playable, ticks_per_beat=%d",
             path, len(mid.tracks), len(choices), mid.ticks_per_beat)
    return choices
