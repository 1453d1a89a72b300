"""Tab disambiguation and site navigation for voice browser commands."""

from browser_controller.fuzzy_match import fuzzy_match_score
from browser_controller.intents import NoMatchError, WebExecutionError
from browser_controller.navigation import resolve_navigation, resolve_navigation_url
from browser_controller.tab_selector import TabCandidate, rank_tabs, select_tab

__all__ = [
    "NoMatchError",
    "TabCandidate",
    "WebExecutionError",
    "fuzzy_match_score",
    "rank_tabs",
    "resolve_navigation",
    "resolve_navigation_url",
    "select_tab",
]
