# audio/synth.py
import logging
from collections import Counter
import mido
from errors import FatalInputError

log = logging.getLogger(__name__)

NOTE_ON = 0x90
NOTE_OFF = 0x80

class Synth:
    """
    MIDI out for the player. Sends raw note-on/note-off on channel 1 to a
    port (normally the virtual "Virtuoso" port a DAW listens to):
    - note_on(p, v)  -> 0x90 p v
    - note_off(p)    -> 0x80 p 0
    - all_notes_off() silences whatever is still sounding
    """
    def __init__(self, port):
        self.port = port
        self.sounding: Counter = Counter()  # pitch -> note-ons not yet released
        self.sent = 0

    @classmethod
    def open_virtual(cls, name: str = "Virtuoso") -> "Synth":
        try:
            port = mido.open_output(name, virtual=True)
        except (OSError, NotImplementedError, ImportError) as e:
            raise FatalInputError(f"Could not open virtual MIDI port {name!r}: {e}") from e
        log.info("Opened virtual MIDI output %r", name)
        return cls(port)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _send(self, data):
        self.port.send(mido.Message.from_bytes(data))
        self.sent += 1

    def note_on(self, pitch: int, vel: int):
        self._send([NOTE_ON, int(pitch), int(vel)])
        self.sounding[int(pitch)] += 1

    def note_off(self, pitch: int):
        self._send([NOTE_OFF, int(pitch), 0])
        p = int(pitch)
        if self.sounding[p] > 1:
            self.sounding[p] -= 1
        else:
            self.sounding.pop(p, None)

    def all_notes_off(self):
        for p in list(self.sounding):
            self._send([NOTE_OFF, p, 0])
        self.sounding.clear()

    def close(self):
        if self.port is None:
            return
        try:
            self.all_notes_off()
        finally:
            self.port.close()
            self.port = None
            log.debug("MIDI output closed after %d message(s)", self.sent)
