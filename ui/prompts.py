# ui/prompts.py
"""Numbered-menu prompts on the terminal.

Each question loops until it gets a valid answer. Bad answers raise
ValidationRejection internally and are turned into a retry message here,
never into a crash. EOF / ctrl-c abort the session with FatalInputError.
"""
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar
from errors import FatalInputError, ValidationRejection

T = TypeVar("T")

YES = {"y", "yes", "true", "1"}
NO = {"n", "no", "false", "0"}

def _ask(ask: Callable[[str], str], text: str) -> str:
    try:
        return ask(text)
    except (EOFError, KeyboardInterrupt) as e:
        raise FatalInputError("Cancelled. See you next time!") from e

def _loop(ask, out, text: str, parse: Callable[[str], T]) -> T:
    while True:
        raw = _ask(ask, text).strip()
        try:
            return parse(raw)
        except ValidationRejection as e:
            out(str(e))

def choose(options: Sequence[Tuple[str, T]], message: str,
           ask: Callable[[str], str] = input, out: Callable[[str], None] = print) -> T:
    """options: (label, value) pairs. Empty answer picks the first."""
    if not options:
        raise FatalInputError(f"Nothing to choose from: {message}")
    out(f"\n{message}")
    for i, (label, _) in enumerate(options):
        out(f"  [{i}] {label}")

    def parse(raw: str):
        if raw == "":
            return options[0][1]
        try:
            idx = int(raw)
        except ValueError:
            raise ValidationRejection(f"Please type a number between 0 and {len(options) - 1}.")
        if not 0 <= idx < len(options):
            raise ValidationRejection(f"Please type a number between 0 and {len(options) - 1}.")
        return options[idx][1]

    return _loop(ask, out, f"Select index 0..{len(options) - 1} [0]: ", parse)

def confirm(message: str, default: bool = True,
            ask: Callable[[str], str] = input, out: Callable[[str], None] = print) -> bool:
    hint = "Y/n" if default else "y/N"

    def parse(raw: str) -> bool:
        if raw == "":
            return default
        if raw.lower() in YES:
            return True
        if raw.lower() in NO:
            return False
        raise ValidationRejection("Please answer y or n.")

    return _loop(ask, out, f"{message} ({hint}) ", parse)

def parse_threshold(raw: str, default: Optional[float] = None) -> float:
    if raw == "" and default is not None:
        return float(default)
    try:
        value = float(raw)
    except ValueError:
        raise ValidationRejection("I was hoping for a number...")
    if value != value or value < 0 or value == float("inf"):
        raise ValidationRejection("I was hoping for a number...")
    return value

def ask_threshold(default: float, ask: Callable[[str], str] = input,
                  out: Callable[[str], None] = print) -> float:
    text = ("Will do! How far apart should two notes be for me to "
            f"consider them separate? (in milliseconds) [{default}] ")
    return _loop(ask, out, text, lambda raw: parse_threshold(raw, default))

def instrument_options(port_names: Sequence[str], keyboard_label: str) -> List[Tuple[str, Optional[str]]]:
    # None stands for the computer keyboard
    return [(name, name) for name in port_names] + [(keyboard_label, None)]
