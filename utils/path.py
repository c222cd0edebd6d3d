# utils/path.py
import sys, os

def resource_path(rel: str) -> str:
    """
    Path of a bundled file relative to the project root, or inside the
    PyInstaller temp dir when frozen.
    e.g. resource_path("assets/sample.mid")
    """
    base = getattr(sys, "_MEIPASS", os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
    return os.path.join(base, rel)
