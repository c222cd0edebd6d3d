# timeline/playback.py
import logging
from collections import deque
from typing import Iterable
from notes.model import Chord
from timeline.scheduler import Scheduler
from errors import PlaybackExhausted

log = logging.getLogger(__name__)

IDLE, PLAYING, FINISHED = "idle", "playing", "finished"

class PlaybackDriver:
    """Plays one chord per trigger.

    advance() only schedules; note-ons and note-offs fire later from the
    scheduler, so a new trigger can start the next chord while the
    previous one is still sounding.
    """
    def __init__(self, chords: Iterable[Chord], synth, scheduler: Scheduler,
                 sustain_ms: float = 200.0):
        self.queue = deque(chords)
        self.total = len(self.queue)
        self.synth = synth
        self.scheduler = scheduler
        self.sustain_ms = sustain_ms

    @property
    def remaining(self) -> int:
        return len(self.queue)

    @property
    def played(self) -> int:
        return self.total - len(self.queue)

    @property
    def finished(self) -> bool:
        return not self.queue

    @property
    def sounding(self):
        return set(self.synth.sounding)

    @property
    def state(self) -> str:
        if self.scheduler.pending:
            return PLAYING
        return FINISHED if self.finished else IDLE

    def advance(self) -> Chord:
        if not self.queue:
            raise PlaybackExhausted("No chords left to play")
        chord = self.queue.popleft()
        for n in chord:
            self.scheduler.call_later(n.delta_ms, self._on(n.note, n.velocity))
            self.scheduler.call_later(n.delta_ms + self.sustain_ms, self._off(n.note))
        log.debug("Chord %d/%d, %.0f ms after the previous one in the score: %s",
                  self.played, self.total, chord.gap_ms, [(n.note, round(n.delta_ms, 1)) for n in chord])
        return chord

    def _on(self, pitch: int, vel: int):
        return lambda: self.synth.note_on(pitch, vel)

    def _off(self, pitch: int):
        return lambda: self.synth.note_off(pitch)
