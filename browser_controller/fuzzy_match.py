"""Score how well a spoken query matches a tab title or URL."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from browser_controller.phonetic import phonetic_similarity
from browser_controller.web_constants import (
    PHONETIC_ACCEPT_THRESHOLD,
    PHONETIC_FALLBACK_WEIGHT,
    SCORE_ALL_WORDS,
    SCORE_CHARACTER_SPAN,
    SCORE_EXACT,
    SCORE_PREFIX,
    SCORE_SOME_WORDS_BASE,
    SCORE_SOME_WORDS_SPAN,
    SCORE_SUBSTRING,
)


class MatchKind(str, Enum):
    """Which rule of the decision list produced a score."""

    NONE = "none"
    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    PHONETIC = "phonetic"
    ALL_WORDS = "all_words"
    SOME_WORDS = "some_words"
    CHARACTER = "character"
    WEAK_PHONETIC = "weak_phonetic"


@dataclass(frozen=True)
class FuzzyMatch:
    kind: MatchKind
    score: float


NO_MATCH = FuzzyMatch(MatchKind.NONE, 0.0)


def classify_match(query: str | None, text: str | None) -> FuzzyMatch:
    """Run the ordered match rules and return the first one that fires.

    Precise matches win outright; noisy or partial voice input still earns
    a graded score from the word, phonetic and character fallbacks.
    """
    if not text:
        return NO_MATCH
    q = (query or "").lower().strip()
    t = text.lower().strip()
    if not q or not t:
        return NO_MATCH

    if q == t:
        return FuzzyMatch(MatchKind.EXACT, SCORE_EXACT)
    if t.startswith(q):
        return FuzzyMatch(MatchKind.PREFIX, SCORE_PREFIX)
    if q in t:
        return FuzzyMatch(MatchKind.SUBSTRING, SCORE_SUBSTRING)

    phonetic = phonetic_similarity(q, t)
    if phonetic > PHONETIC_ACCEPT_THRESHOLD:
        return FuzzyMatch(MatchKind.PHONETIC, phonetic)

    word_match = _word_boundary_match(q, t)
    if word_match is not None:
        return word_match

    character = _character_score(q, t)
    weak_phonetic = phonetic * PHONETIC_FALLBACK_WEIGHT
    if weak_phonetic > character:
        return FuzzyMatch(MatchKind.WEAK_PHONETIC, weak_phonetic)
    return FuzzyMatch(MatchKind.CHARACTER, character)


def fuzzy_match_score(query: str | None, text: str | None) -> float:
    """Return a 0-100 score for query against text (0 when text is empty)."""
    return classify_match(query, text).score


def _word_boundary_match(query: str, text: str) -> FuzzyMatch | None:
    query_words = query.split()
    text_words = text.split()
    if not query_words or not text_words:
        return None
    matched = sum(
        1 for word in query_words if any(word in text_word for text_word in text_words)
    )
    if matched == len(query_words):
        return FuzzyMatch(MatchKind.ALL_WORDS, SCORE_ALL_WORDS)
    if matched:
        fraction = matched / len(query_words)
        return FuzzyMatch(
            MatchKind.SOME_WORDS,
            SCORE_SOME_WORDS_BASE + fraction * SCORE_SOME_WORDS_SPAN,
        )
    return None


def _character_score(query: str, text: str) -> float:
    # Greedy in-order match; the cursor only moves forward.
    cursor = 0
    matched = 0
    for char in query:
        found = text.find(char, cursor)
        if found != -1:
            matched += 1
            cursor = found + 1
    return matched / len(query) * SCORE_CHARACTER_SPAN
