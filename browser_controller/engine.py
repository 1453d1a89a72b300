"""Resolve voice commands to tabs or URLs and apply them to the browser."""

from __future__ import annotations

from dataclasses import dataclass
import re
import time
from typing import Any

from browser_controller.intents import (
    NoMatchError,
    WebExecutionError,
    normalize_steps,
    validate_steps,
)
from browser_controller.navigation import NavigationResult, is_safe_url, resolve_navigation
from browser_controller.tab_controller import PlaywrightTabController, TabProvider
from browser_controller.tab_selector import TabCandidate, TabSelection, select_tab
from browser_controller.web_constants import DEFAULT_SEARCH_ENGINE_URL, MIN_TAB_SCORE
from utils.log_utils import tprint
from utils.settings_store import deep_log, get_settings


_SWITCH_PATTERNS = (
    re.compile(
        r"^(?:switch|change|jump)\s+to\s+(?:the\s+)?(?P<target>.+?)(?:\s+tab)?$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(?:go\s+to|show(?:\s+me)?|find|open)\s+(?:the\s+)?(?P<target>.+?)\s+tab$",
        re.IGNORECASE,
    ),
)
_NAVIGATE_PATTERNS = (
    re.compile(r"^(?:go|navigate|take\s+me)\s+to\s+(?P<target>.+)$", re.IGNORECASE),
    re.compile(r"^(?:open|visit|load)\s+(?P<target>.+)$", re.IGNORECASE),
)


@dataclass
class ExecutionResult:
    intent: str
    status: str
    details: dict[str, Any] | None = None
    elapsed_ms: int | None = None
    resolved_url: str | None = None
    speak: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "intent": self.intent,
            "status": self.status,
        }
        if self.details is not None:
            payload["details"] = self.details
        if self.elapsed_ms is not None:
            payload["elapsed_ms"] = self.elapsed_ms
        if self.resolved_url is not None:
            payload["resolved_url"] = self.resolved_url
        if self.speak is not None:
            payload["speak"] = self.speak
        return payload


def parse_utterance(text: str) -> dict | None:
    """Map a common tab/navigation phrase to a step, or None.

    Tab phrases are checked first, so "go to github tab" switches tabs while
    "go to github" navigates.
    """
    normalized = " ".join(text.strip().rstrip(".!?").split())
    if not normalized:
        return None
    for pattern in _SWITCH_PATTERNS:
        match = pattern.match(normalized)
        if match:
            return {"intent": "switch_tab", "query": match.group("target")}
    for pattern in _NAVIGATE_PATTERNS:
        match = pattern.match(normalized)
        if match:
            return {"intent": "navigate", "input": match.group("target")}
    return None


class CommandEngine:
    def __init__(
        self,
        *,
        tabs: TabProvider | None = None,
        settings: dict | None = None,
    ) -> None:
        self.tabs = tabs if tabs is not None else PlaywrightTabController(settings)
        self._settings = settings
        self._last_result: dict | None = None

    def _get_settings(self) -> dict:
        return self._settings if self._settings is not None else get_settings()

    def _browser_call(self, fn, *args):
        """Run a tab provider call, reporting driver failures as WEB_BROWSER_ERROR."""
        try:
            return fn(*args)
        except WebExecutionError:
            raise
        except Exception as exc:
            raise WebExecutionError(code="WEB_BROWSER_ERROR", message=str(exc)) from exc

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def list_tabs(self) -> list[TabCandidate]:
        return self._browser_call(self.tabs.list_tabs)

    def resolve_tab(self, query: str) -> TabSelection:
        """Pick the open tab best matching query; raises NoMatchError."""
        threshold = float(self._get_settings().get("tab_match_threshold", MIN_TAB_SCORE))
        tabs = self.list_tabs()
        selection = select_tab(query, tabs, threshold=threshold)
        deep_log(
            f"[DEEP][ENGINE] query={query!r} selected tab={selection.candidate.id} "
            f"score={selection.score:.1f} of {len(tabs)} tabs"
        )
        return selection

    def resolve_url(self, raw_input: str) -> NavigationResult:
        search_engine_url = self._get_settings().get(
            "search_engine_url", DEFAULT_SEARCH_ENGINE_URL
        )
        result = resolve_navigation(raw_input, search_engine_url)
        deep_log(f"[DEEP][ENGINE] input={raw_input!r} url={result.url} rule={result.rule}")
        return result

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute_step(self, step: dict) -> ExecutionResult:
        intent = step.get("intent")
        start = time.monotonic()
        if intent == "switch_tab":
            result = self._switch_tab(step["query"])
        elif intent == "navigate":
            result = self._navigate(step["input"], step.get("tab_id"))
        else:
            raise ValueError(f"Unsupported intent '{intent}'")
        result.elapsed_ms = int((time.monotonic() - start) * 1000)
        return result

    def _switch_tab(self, query: str) -> ExecutionResult:
        selection = self.resolve_tab(query)
        tab = selection.candidate
        self._browser_call(self.tabs.activate_tab, tab.id, tab.window_id)
        tprint(f"[ENGINE] Switched to tab {tab.id} for query={query!r}")
        return ExecutionResult(
            intent="switch_tab",
            status="ok",
            details=selection.to_dict(),
            speak=f"Switched to {tab.title or tab.url}",
        )

    def _navigate(self, raw_input: str, tab_id: int | None = None) -> ExecutionResult:
        resolution = self.resolve_url(raw_input)
        block_private = bool(self._get_settings().get("block_private_hosts", False))
        if not is_safe_url(resolution.url, block_private_hosts=block_private):
            raise WebExecutionError(
                code="WEB_UNSAFE_URL",
                message=f"Resolved URL is not safe to open: {resolution.url}",
            )
        tab = self._browser_call(self.tabs.navigate_tab, tab_id, resolution.url)
        if resolution.rule == "search":
            speak = f"Searching for {raw_input.strip()}"
        else:
            speak = f"Opening {resolution.url}"
        return ExecutionResult(
            intent="navigate",
            status="ok",
            details={"rule": resolution.rule, "input": resolution.input, "tab_id": tab.id},
            resolved_url=resolution.url,
            speak=speak,
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self, *, text: str) -> dict:
        if not text.strip():
            result = {"status": "ignored", "reason": "empty"}
            self._store_result(result)
            return result

        step = parse_utterance(text)
        if step is None:
            tprint(f"[ENGINE] No tab or navigation command in {text!r}")
            result = {"status": "ignored", "reason": "unrecognized"}
            self._store_result(result)
            return result
        return self.run_steps(steps=[step])

    def run_steps(self, *, steps: Any) -> dict:
        steps = normalize_steps(steps)
        if not steps:
            result = {"status": "ignored", "reason": "no_steps"}
            self._store_result(result)
            return result

        try:
            cleaned_steps = validate_steps(steps)
        except ValueError as exc:
            tprint(f"[ENGINE][ERROR] Command steps invalid: {exc}")
            result = {"status": "error", "reason": str(exc)}
            self._store_result(result)
            return result
        deep_log(f"[DEEP][ENGINE] run_steps cleaned_steps={cleaned_steps}")
        return self._safe_execute(cleaned_steps)

    def _safe_execute(self, steps: list[dict]) -> dict:
        """Execute steps, turning browser errors into spoken error payloads."""
        results: list[dict] = []
        try:
            for step in steps:
                results.append(self.execute_step(step).to_dict())
        except WebExecutionError as exc:
            tprint(f"[ENGINE][ERROR] Execution failed: {exc}")
            error_info: dict = {
                "status": "error",
                "code": exc.code,
                "reason": str(exc),
                "speak": _speak_for_error(exc),
            }
            if results:
                error_info["results"] = results
            self._store_result(error_info)
            return error_info
        result = {"status": "ok", "results": results}
        speak = [item["speak"] for item in results if item.get("speak")]
        if speak:
            result["speak"] = " ".join(speak)
        self._store_result(result)
        return result

    def get_last_result(self) -> dict | None:
        return self._last_result

    def _store_result(self, result: dict) -> None:
        payload = dict(result)
        payload["timestamp"] = time.time()
        self._last_result = payload


def _speak_for_error(exc: WebExecutionError) -> str:
    if isinstance(exc, NoMatchError):
        return f"I couldn't find a tab matching {exc.query}."
    if exc.code == "WEB_UNSAFE_URL":
        return "I can't open that address."
    return "Sorry, the browser couldn't do that."
