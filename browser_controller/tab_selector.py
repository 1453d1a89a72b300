"""Pick the open tab that best matches a spoken query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from browser_controller.fuzzy_match import fuzzy_match_score
from browser_controller.intents import NoMatchError
from browser_controller.web_constants import MIN_TAB_SCORE


@dataclass(frozen=True)
class TabCandidate:
    """A live browser tab as seen by the resolver."""

    id: int
    title: str
    url: str
    window_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TabCandidate":
        """Build from a Chrome-style tab dict ({id, title, url, windowId})."""
        window_id = data.get("windowId", data.get("window_id", 0))
        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            window_id=int(window_id or 0),
        )


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: TabCandidate
    score: float
    title_score: float = 0.0
    url_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tab_id": self.candidate.id,
            "window_id": self.candidate.window_id,
            "title": self.candidate.title,
            "url": self.candidate.url,
            "score": round(self.score, 2),
        }


TabSelection = ScoredCandidate


def score_tab(query: str, tab: TabCandidate) -> ScoredCandidate:
    title_score = fuzzy_match_score(query, tab.title)
    url_score = fuzzy_match_score(query, tab.url)
    return ScoredCandidate(
        candidate=tab,
        score=max(title_score, url_score),
        title_score=title_score,
        url_score=url_score,
    )


def rank_tabs(query: str, tabs: Iterable[TabCandidate]) -> list[ScoredCandidate]:
    """Score every tab and sort best first.

    The sort is stable, so equal scores keep the order the tabs were
    enumerated in.
    """
    scored = [score_tab(query, tab) for tab in tabs]
    return sorted(scored, key=lambda item: item.score, reverse=True)


def select_tab(
    query: str,
    tabs: Iterable[TabCandidate],
    threshold: float = MIN_TAB_SCORE,
) -> ScoredCandidate:
    """Return the best-scoring tab or raise NoMatchError below threshold."""
    ranked = rank_tabs(query, tabs)
    if not ranked:
        raise NoMatchError(query)
    best = ranked[0]
    if best.score < threshold:
        raise NoMatchError(query, best.score)
    return best
