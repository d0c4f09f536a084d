"""Typo suggestions for unknown commands.

Uses the Levenshtein edit distance: the minimum number of single
character insertions, deletions and substitutions that turn one string
into the other.  ``hepl`` → ``help`` is 2 (two substitutions).
"""

from collections.abc import Iterable

# Typos further away than this are not worth suggesting.
MAX_SUGGESTION_DISTANCE = 3


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between *a* and *b* (case sensitive)."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def closest(
    word: str,
    candidates: Iterable[str],
    *,
    max_distance: int = MAX_SUGGESTION_DISTANCE,
) -> str | None:
    """Return the candidate nearest to *word*, or None if none is close.

    Ties go to the candidate seen first.
    """
    best: str | None = None
    best_distance = max_distance + 1
    for candidate in candidates:
        distance = edit_distance(word, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best
