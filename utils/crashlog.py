# utils/crashlog.py
"""Crash and error reports for a playing session.

Reports land in logs/ and start with whatever the session has recorded
so far (MIDI file, track, progress) so a bug report says where it broke.
"""
import os, sys, faulthandler, datetime, traceback
from typing import Callable, Dict, Union

_fault_file = None
_session: Dict[str, Union[str, Callable[[], str]]] = {}

def log_dir() -> str:
    d = os.path.join(getattr(sys, "_MEIPASS", os.getcwd()), "logs")
    os.makedirs(d, exist_ok=True)
    return d

def _new_log_path(prefix: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")

def note_session(**info):
    """Record session facts; callables are evaluated when a report is written."""
    _session.update(info)

def clear_session():
    _session.clear()

def session_lines():
    lines = []
    for key, value in _session.items():
        lines.append(f"{key}: {value() if callable(value) else value}")
    return lines

def _write_report(prefix: str, title: str, exc: BaseException) -> str:
    path = _new_log_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"[{title}] {type(exc).__name__}: {exc}\n")
        for line in session_lines():
            out.write(line + "\n")
        out.write("Traceback:\n")
        out.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return path

def setup_crashlog():
    """faulthandler for native rtmidi/SDL crashes, excepthook for the rest."""
    global _fault_file
    try:
        if _fault_file is None:
            _fault_file = open(_new_log_path("native"), "w", encoding="utf-8")
        faulthandler.enable(_fault_file)
    except OSError:
        _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            _write_report("crash", "Uncaught exception", exc)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook

def log_exception(title: str, exc: BaseException) -> str:
    return _write_report("error", title, exc)
