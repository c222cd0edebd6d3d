# ========================= input/triggers.py =========================
import logging
import pygame
import mido
from typing import List, Sequence
from errors import FatalInputError

log = logging.getLogger(__name__)

EXIT_KEYS = {pygame.K_ESCAPE}
CTRL_EXIT_KEYS = {pygame.K_c, pygame.K_d}  # ctrl-c, ctrl-d
MODIFIER_KEYS = {
    pygame.K_LCTRL, pygame.K_RCTRL, pygame.K_LSHIFT, pygame.K_RSHIFT,
    pygame.K_LALT, pygame.K_RALT, pygame.K_LMETA, pygame.K_RMETA, pygame.K_CAPSLOCK,
}
TRIGGER_CHANNEL = 0  # status 0x90: note-on, channel 1

def list_input_ports() -> List[str]:
    try:
        return list(mido.get_input_names())
    except (ImportError, OSError) as e:
        log.warning("MIDI input ports unavailable (%s); only the computer keyboard can be used", e)
        return []

def is_exit_event(e, exit_chars: Sequence[str] = ("\x03", "\x04", "\x1b")) -> bool:
    """Window close, Esc, ctrl-c or ctrl-d."""
    if e.type == pygame.QUIT:
        return True
    if e.type != pygame.KEYDOWN:
        return False
    if e.key in EXIT_KEYS:
        return True
    if e.key in CTRL_EXIT_KEYS and (getattr(e, "mod", 0) & pygame.KMOD_CTRL):
        return True
    return getattr(e, "unicode", "") in exit_chars

class KeyboardTrigger:
    """Every key press in the player window is a trigger, bare modifiers aside."""
    label = "Computer keyboard"

    def handle_event(self, e) -> int:
        if e.type != pygame.KEYDOWN:
            return 0
        if e.key in MODIFIER_KEYS and not getattr(e, "unicode", ""):
            return 0
        return 1

    def poll(self) -> int:
        return 0

    def close(self):
        pass

class MidiTrigger:
    """Note-ons (velocity > 0, channel 1) arriving on a MIDI input port are triggers."""
    def __init__(self, port, label: str = ""):
        self.port = port
        self.label = label or getattr(port, "name", "MIDI input")

    @classmethod
    def open(cls, name: str) -> "MidiTrigger":
        try:
            port = mido.open_input(name)
        except (OSError, ImportError) as e:
            raise FatalInputError(f"Could not open MIDI input {name!r}: {e}") from e
        log.info("Listening for note-ons on %r", name)
        return cls(port, name)

    def handle_event(self, e) -> int:
        return 0

    @staticmethod
    def is_trigger(msg) -> bool:
        return msg.type == 'note_on' and msg.channel == TRIGGER_CHANNEL and msg.velocity > 0

    def poll(self) -> int:
        if self.port is None:
            return 0
        return sum(1 for msg in self.port.iter_pending() if self.is_trigger(msg))

    def close(self):
        if self.port is not None:
            self.port.close()
            self.port = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
