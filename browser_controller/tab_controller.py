"""Playwright-backed tab enumeration, activation, and navigation."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Protocol

from browser_controller.intents import WebExecutionError
from browser_controller.tab_selector import TabCandidate
from utils.log_utils import tprint
from utils.settings_store import deep_log, get_settings


class TabProvider(Protocol):
    """The browser effects the command engine depends on."""

    def list_tabs(self) -> list[TabCandidate]:
        ...

    def activate_tab(self, tab_id: int, window_id: int) -> None:
        ...

    def navigate_tab(self, tab_id: int | None, url: str) -> TabCandidate:
        ...

    def active_tab(self) -> TabCandidate | None:
        ...


class PlaywrightTabController:
    """Drives real browser tabs through Playwright's sync API.

    Either launches a persistent Chromium context (one window) or attaches to
    a running Chrome over CDP when ``playwright_cdp_url`` is set, in which
    case every browser context is reported as its own window.

    Playwright's sync objects are bound to the thread that started them, so
    every public call is handed to a single worker thread.
    """

    def __init__(self, settings: dict | None = None) -> None:
        self._settings = settings
        self._playwright = None
        self._browser = None
        self._context = None
        self._initialized = False
        self._tab_ids: dict[Any, int] = {}
        self._next_tab_id = 1
        self._active_page = None
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="playwright-tabs"
        )

    # ------------------------------------------------------------------
    # Lazy initialisation
    # ------------------------------------------------------------------

    def _get_settings(self) -> dict:
        return self._settings if self._settings is not None else get_settings()

    def _on_browser_thread(self, fn: Callable[..., Any], *args: Any) -> Any:
        return self._executor.submit(fn, *args).result()

    def _ensure_browser(self) -> None:
        """Start Playwright and open or attach to a browser on first call."""
        if self._initialized:
            return

        from playwright.sync_api import sync_playwright

        settings = self._get_settings()
        cdp_url = settings.get("playwright_cdp_url")

        self._playwright = sync_playwright().start()
        try:
            if cdp_url:
                self._browser = self._playwright.chromium.connect_over_cdp(cdp_url)
                tprint(f"[TAB_CTRL] Attached to running browser at {cdp_url}")
            else:
                profile_dir = settings.get(
                    "playwright_profile_dir", "user_data/playwright_profile"
                )
                Path(profile_dir).mkdir(parents=True, exist_ok=True)
                self._context = self._playwright.chromium.launch_persistent_context(
                    user_data_dir=profile_dir,
                    headless=bool(settings.get("playwright_headless", False)),
                    accept_downloads=False,
                )
                if not self._context.pages:
                    self._context.new_page()
                tprint("[TAB_CTRL] Playwright browser context initialized")
        except Exception as exc:
            self._playwright.stop()
            self._playwright = None
            raise WebExecutionError(
                code="WEB_BROWSER_UNAVAILABLE",
                message=(
                    f"Failed to start browser: {exc}\n"
                    "If Chromium is not installed, run: playwright install chromium"
                ),
            ) from exc
        self._initialized = True

    def _contexts(self) -> list:
        if self._context is not None:
            return [self._context]
        if self._browser is not None:
            return list(self._browser.contexts)
        return []

    def _tab_id_for(self, page) -> int:
        tab_id = self._tab_ids.get(page)
        if tab_id is None:
            tab_id = self._next_tab_id
            self._next_tab_id += 1
            self._tab_ids[page] = tab_id
        return tab_id

    def _snapshot(self) -> list[tuple[TabCandidate, Any]]:
        """Read every open page once, pruning ids of closed pages."""
        self._ensure_browser()
        entries: list[tuple[TabCandidate, Any]] = []
        live_pages = []
        for window_id, context in enumerate(self._contexts()):
            for page in context.pages:
                if page.is_closed():
                    continue
                live_pages.append(page)
                try:
                    title = page.title()
                except Exception:
                    # Pages mid-navigation can refuse title(); the URL is still usable.
                    title = ""
                tab = TabCandidate(
                    id=self._tab_id_for(page),
                    title=title,
                    url=page.url or "",
                    window_id=window_id,
                )
                entries.append((tab, page))
        for page in list(self._tab_ids):
            if page not in live_pages:
                del self._tab_ids[page]
        return entries

    def _find_page(self, tab_id: int):
        for tab, page in self._snapshot():
            if tab.id == tab_id:
                return tab, page
        raise WebExecutionError(
            code="TAB_NOT_FOUND", message=f"Tab {tab_id} is no longer open"
        )

    # ------------------------------------------------------------------
    # TabProvider
    # ------------------------------------------------------------------

    def list_tabs(self) -> list[TabCandidate]:
        return self._on_browser_thread(self._list_tabs)

    def activate_tab(self, tab_id: int, window_id: int) -> None:
        self._on_browser_thread(self._activate_tab, tab_id, window_id)

    def navigate_tab(self, tab_id: int | None, url: str) -> TabCandidate:
        return self._on_browser_thread(self._navigate_tab, tab_id, url)

    def active_tab(self) -> TabCandidate | None:
        return self._on_browser_thread(self._active_tab)

    def shutdown(self) -> None:
        """Close the browser and stop Playwright on the browser thread."""
        self._on_browser_thread(self._shutdown)

    # ------------------------------------------------------------------
    # Browser-thread implementations
    # ------------------------------------------------------------------

    def _list_tabs(self) -> list[TabCandidate]:
        tabs = [tab for tab, _ in self._snapshot()]
        deep_log(f"[DEEP][TAB_CTRL] Enumerated {len(tabs)} tabs")
        return tabs

    def _activate_tab(self, tab_id: int, window_id: int) -> None:
        tab, page = self._find_page(tab_id)
        if tab.window_id != window_id:
            deep_log(
                f"[DEEP][TAB_CTRL] Tab {tab_id} reported window {tab.window_id}, expected {window_id}"
            )
        page.bring_to_front()
        self._active_page = page
        tprint(f"[TAB_CTRL] Activated tab {tab_id} ({tab.title!r})")

    def _navigate_tab(self, tab_id: int | None, url: str) -> TabCandidate:
        if tab_id is None:
            page = self._current_page()
        else:
            _, page = self._find_page(tab_id)
        timeout_ms = self._get_settings().get("navigation_timeout_ms", 30000)
        page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        page.bring_to_front()
        self._active_page = page
        tprint(f"[TAB_CTRL] Navigated to {url}")
        return self._describe(page)

    def _active_tab(self) -> TabCandidate | None:
        page = self._active_page
        if page is None or page.is_closed():
            return None
        return self._describe(page)

    def _current_page(self):
        if self._active_page is not None and not self._active_page.is_closed():
            return self._active_page
        entries = self._snapshot()
        if entries:
            return entries[0][1]
        contexts = self._contexts()
        if not contexts:
            raise WebExecutionError(
                code="WEB_BROWSER_UNAVAILABLE", message="No browser window is open"
            )
        return contexts[0].new_page()

    def _describe(self, page) -> TabCandidate:
        for tab, candidate_page in self._snapshot():
            if candidate_page is page:
                return tab
        return TabCandidate(id=self._tab_id_for(page), title="", url=page.url or "", window_id=0)

    def _shutdown(self) -> None:
        # Closing a CDP-attached browser only disconnects; the user's Chrome stays up.
        if self._context is not None:
            try:
                self._context.close()
            except Exception as exc:
                tprint(f"[TAB_CTRL] Failed to close context: {exc}")
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception as exc:
                tprint(f"[TAB_CTRL] Failed to disconnect browser: {exc}")
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as exc:
                tprint(f"[TAB_CTRL] Failed to stop Playwright: {exc}")
        self._playwright = None
        self._browser = None
        self._context = None
        self._active_page = None
        self._tab_ids.clear()
        self._initialized = False
