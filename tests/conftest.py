"""Shared fakes for the player tests."""
import os
import sys
from pathlib import Path

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import mido
import pytest

from audio.synth import Synth
from timeline.scheduler import Scheduler

SAMPLE = Path(__file__).resolve().parent.parent / "assets" / "sample.mid"


class FakeClock:
    """Whole milliseconds, reported in seconds like time.monotonic."""

    def __init__(self, ms: int = 0):
        self.ms = ms

    @property
    def t(self) -> float:
        return self.ms / 1000.0

    def __call__(self) -> float:
        return self.t

    def advance_ms(self, ms: int):
        self.ms += ms


class FakePort:
    """Stands in for a mido output port; keeps the raw bytes sent."""

    def __init__(self, name: str = "fake"):
        self.name = name
        self.sent = []
        self.closed = False

    def send(self, msg):
        self.sent.append(tuple(msg.bytes()))

    def close(self):
        self.closed = True


class FakeInputPort:
    def __init__(self, messages=()):
        self.name = "Fake keyboard"
        self.pending = list(messages)
        self.closed = False

    def iter_pending(self):
        while self.pending:
            yield self.pending.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock=clock)


@pytest.fixture
def port():
    return FakePort()


@pytest.fixture
def synth(port):
    return Synth(port)


def make_track(*messages) -> mido.MidiTrack:
    track = mido.MidiTrack()
    track.extend(messages)
    return track


def note_on(note: int, time: int, velocity: int = 64) -> mido.Message:
    return mido.Message("note_on", note=note, velocity=velocity, time=time)


def tempo(us_per_beat: int, time: int = 0) -> mido.MetaMessage:
    return mido.MetaMessage("set_tempo", tempo=us_per_beat, time=time)
