"""Similarity scoring tuned for speech-to-text misrecognitions."""

from __future__ import annotations

import re
from dataclasses import dataclass

from browser_controller.edit_distance import levenshtein_distance

PATTERN_MATCH_SCORE = 95.0

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class MatchPattern:
    """A known confusion between what was said and what was meant."""

    spoken: str
    written: str


# Spoken forms are compared after normalize_phonetic(), so spacing and
# punctuation in this table are irrelevant.
PHONETIC_PATTERNS: tuple[MatchPattern, ...] = (
    MatchPattern("getup", "github"),
    MatchPattern("get hub", "github"),
    MatchPattern("git hub", "github"),
    MatchPattern("youtoo", "youtube"),
    MatchPattern("slak", "slack"),
    MatchPattern("krome", "chrome"),
    MatchPattern("g mail", "gmail"),
    MatchPattern("gee mail", "gmail"),
    MatchPattern("jemail", "gmail"),
    MatchPattern("face book", "facebook"),
    MatchPattern("linked in", "linkedin"),
    MatchPattern("twiter", "twitter"),
    MatchPattern("netflicks", "netflix"),
    MatchPattern("wiki pedia", "wikipedia"),
    MatchPattern("stock overflow", "stackoverflow"),
    MatchPattern("chat gpt", "chatgpt"),
    MatchPattern("chat gbt", "chatgpt"),
    MatchPattern("fig ma", "figma"),
    MatchPattern("this cord", "discord"),
)


def normalize_phonetic(text: str | None) -> str:
    """Lowercase and drop everything outside [a-z0-9]."""
    if not text:
        return ""
    return _NON_ALNUM.sub("", text.lower())


_NORMALIZED_PATTERNS: tuple[tuple[str, str], ...] = tuple(
    (normalize_phonetic(p.spoken), normalize_phonetic(p.written))
    for p in PHONETIC_PATTERNS
)


def matches_known_pattern(a: str, b: str) -> bool:
    """Return True when a and b hit the two sides of one confusion pattern.

    Both arguments must already be normalized.
    """
    for spoken, written in _NORMALIZED_PATTERNS:
        if spoken in a and written in b:
            return True
        if spoken in b and written in a:
            return True
    return False


def phonetic_similarity(a: str | None, b: str | None) -> float:
    """Score two strings from 0 to 100 for how alike they sound.

    Known confusion pairs score PATTERN_MATCH_SCORE; anything else, including
    strings that normalize identically, falls back to normalized edit distance.
    """
    norm_a = normalize_phonetic(a)
    norm_b = normalize_phonetic(b)

    if norm_a and norm_b and norm_a != norm_b and matches_known_pattern(norm_a, norm_b):
        return PATTERN_MATCH_SCORE

    max_len = max(len(norm_a), len(norm_b))
    if max_len == 0:
        return 0.0
    distance = levenshtein_distance(norm_a, norm_b)
    return (max_len - distance) / max_len * 100.0
