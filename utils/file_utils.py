"""Safe JSON loading helpers."""

import json
from pathlib import Path


def load_json(path: str | Path) -> dict:
    """Read a JSON object from disk; a missing file reads as {}."""
    p = Path(path)
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def load_json_list(path: str | Path) -> list:
    """Read a JSON array from disk (used for tab snapshots)."""
    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list in {path}")
    return data
