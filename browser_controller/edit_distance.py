"""Levenshtein edit distance."""

from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Return the number of single-character edits needed to turn a into b."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    rows = len(a) + 1
    cols = len(b) + 1
    table = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,  # delete
                table[i][j - 1] + 1,  # insert
                table[i - 1][j - 1] + cost,  # substitute
            )
    return table[rows - 1][cols - 1]
