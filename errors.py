# errors.py


class VirtuosoError(Exception):
    """Base class for errors raised by the player."""


class FatalInputError(VirtuosoError):
    """Input the session cannot recover from: bad file, no notes, no ports."""


class ValidationRejection(VirtuosoError, ValueError):
    """Malformed answer to a prompt. The prompt asks again."""


class PlaybackExhausted(VirtuosoError):
    """advance() was called with no chords left."""
