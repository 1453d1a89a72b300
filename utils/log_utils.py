"""Timestamped logging helpers."""

from __future__ import annotations

import builtins
import sys
import time
from typing import Any


_LEVELS = {"DEEP", "DEBUG", "INFO", "WARN", "ERROR"}


def _split_tags(message: str) -> tuple[list[str], str]:
    """Peel leading "[TAG]" groups off a message."""
    tags: list[str] = []
    remaining = message.lstrip()
    while remaining.startswith("["):
        end = remaining.find("]")
        if end == -1:
            break
        tag = remaining[1:end].strip()
        if not tag:
            break
        tags.append(tag)
        remaining = remaining[end + 1 :].lstrip()
    return tags, remaining


def _format_message(message: str) -> str:
    # Level tags go after the system tag: "[DEEP][NAV] x" -> "[NAV][DEEP] x"
    tags, remaining = _split_tags(message)
    if not tags:
        return f"[NAV] {remaining}" if remaining else "[NAV]"
    if tags[0].upper() in _LEVELS and len(tags) > 1:
        tags = [tags[1], tags[0].upper()] + tags[2:]
    head = "".join(f"[{tag}]" for tag in tags[:2])
    extra = f" [{' '.join(tags[2:])}]" if len(tags) > 2 else ""
    suffix = f" {remaining}" if remaining else ""
    return f"{head}{extra}{suffix}"


def tprint(*args: Any, **kwargs: Any) -> None:
    """Print with a timestamp prefix and normalized tag order."""
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    message = " ".join(str(arg) for arg in args)
    kwargs.setdefault("file", sys.stderr)
    builtins.print(f"[{timestamp}]{_format_message(message)}", **kwargs)


def log(system: str, message: str, variant: str | None = None) -> None:
    """Log with explicit system and optional variant."""
    if variant:
        tprint(f"[{system}][{variant}] {message}")
    else:
        tprint(f"[{system}] {message}")
