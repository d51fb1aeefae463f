"""Edit-distance based string similarity used by the fuzzy search bucket."""

from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """
    Case-insensitive Levenshtein distance between two strings.

    Substitution, insertion and deletion each cost 1; transpositions are not
    special-cased. Only two rows of the DP table are kept, sized on the shorter
    string.
    """
    a = a.lower()
    b = b.lower()
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return ``1 - distance / max(len(a), len(b))``, in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    # lower() can lengthen some non-ASCII strings
    return max(0.0, 1.0 - levenshtein_distance(a, b) / longest)


__all__ = ["levenshtein_distance", "similarity"]
