"""Tokenization and sequence helpers shared by the text metrics.

Tokenization is whitespace splitting only: no stemming, no case folding,
punctuation stays attached to its word.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence


def tokenize(text: str) -> list[str]:
    return text.split()


SENTENCE_BREAK = "<n>"


def tokenize_sentences(text: str) -> list[str]:
    """Tokenize line by line, with a ``<n>`` token between non-empty lines."""
    tokens: list[str] = []
    for line in text.split("\n"):
        words = tokenize(line)
        if not words:
            continue
        if tokens:
            tokens.append(SENTENCE_BREAK)
        tokens.extend(words)
    return tokens


def ngram_counts(tokens: Sequence[str], n: int) -> Counter:
    """Count every contiguous n-gram (as a tuple) in ``tokens``."""
    return Counter(tuple(tokens[i:i + n]) for i in range(len(tokens) - n + 1))


def lcs_length(a: Sequence, b: Sequence) -> int:
    """Length of the longest common subsequence, O(len(a) * len(b))."""
    if not a or not b:
        return 0
    prev = [0] * (len(b) + 1)
    for x in a:
        curr = [0] * (len(b) + 1)
        for j, y in enumerate(b, 1):
            curr[j] = prev[j - 1] + 1 if x == y else max(prev[j], curr[j - 1])
        prev = curr
    return prev[-1]


def levenshtein_distance(a: Sequence, b: Sequence) -> int:
    """Minimum number of unit-cost insertions, deletions and substitutions."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, x in enumerate(a, 1):
        curr = [i] + [0] * len(b)
        for j, y in enumerate(b, 1):
            cost = 0 if x == y else 1
            curr[j] = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
        prev = curr
    return prev[-1]
