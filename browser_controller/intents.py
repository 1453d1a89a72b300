"""Step schema, validation, and structured errors for browser commands."""

from __future__ import annotations

from typing import Any


class WebExecutionError(RuntimeError):
    """Structured error from a browser command step."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class NoMatchError(WebExecutionError):
    """No open tab scored at or above the match threshold."""

    def __init__(self, query: str, best_score: float | None = None) -> None:
        if best_score is None:
            message = f"No open tabs to match {query!r}"
        else:
            message = f"No tab matching {query!r} (best score {best_score:.1f})"
        super().__init__(code="TAB_NO_MATCH", message=message)
        self.query = query
        self.best_score = best_score


ALLOWED_INTENTS = {
    "switch_tab",
    "navigate",
}


def normalize_steps(payload: Any) -> list[dict]:
    """Return a normalized list of intent steps from a parsed payload."""
    if isinstance(payload, list):
        return [step for step in payload if isinstance(step, dict)]
    if isinstance(payload, dict):
        steps = payload.get("steps")
        if isinstance(steps, list):
            return [step for step in steps if isinstance(step, dict)]
        if "intent" in payload:
            return [payload]
    return []


def validate_step(step: dict) -> dict:
    """Validate an intent step and return a sanitized copy."""
    intent = str(step.get("intent", "")).strip()
    if intent not in ALLOWED_INTENTS:
        raise ValueError(f"Unsupported intent '{intent}'")

    cleaned: dict[str, Any] = {"intent": intent}
    if intent == "switch_tab":
        query = str(step.get("query") or "").strip()
        if not query:
            raise ValueError("switch_tab requires 'query'")
        cleaned["query"] = query
        return cleaned

    if intent == "navigate":
        text = str(step.get("input") or step.get("url") or "").strip()
        if not text:
            raise ValueError("navigate requires 'input'")
        cleaned["input"] = text
        tab_id = step.get("tab_id")
        if tab_id is not None:
            try:
                cleaned["tab_id"] = int(tab_id)
            except (TypeError, ValueError):
                raise ValueError("navigate requires integer 'tab_id'")
        return cleaned

    raise ValueError(f"Unsupported intent '{intent}'")


def validate_steps(steps: list[dict]) -> list[dict]:
    """Validate a list of steps and return sanitized copies."""
    return [validate_step(step) for step in steps]
