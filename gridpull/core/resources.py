from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

BEGINNER_LEVELS = "Levels/BeginnerLevels"
SAVED_LEVELS_FILENAME = "SavedLevels.yaml"


def bundled_path(resource: str) -> Path:
    """Map a logical resource name such as ``Levels/BeginnerLevels`` to its file."""
    return DATA_DIR / f"{resource}.yaml"


def load_bundled_bytes(resource: str) -> bytes:
    """Raw contents of a bundled pack, line endings untouched."""
    path = bundled_path(resource)
    if not path.exists():
        raise FileNotFoundError(f"Bundled level pack not found: {path}")
    return path.read_bytes()


def load_bundled_text(resource: str) -> str:
    return load_bundled_bytes(resource).decode("utf-8")
