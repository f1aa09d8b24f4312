"""Corpus-level BLEU with optional smoothing.

Math:
    p_n  = Σ_sentences Σ_g min(count_cand(g), max_ref count_ref(g))
           / Σ_sentences Σ_g count_cand(g)                       for n = 1..N
    BP   = 1                 if c >= r
           exp(1 - r / c)    otherwise
    BLEU = BP · exp((1/N) Σ_n log p_n)

c is the total candidate length and r the sum over sentences of the
reference length closest to each candidate (the shorter one on ties).

Smoothing of orders with zero clipped matches:
    none         p_n = 0, so BLEU = 0
    additive     p_n = epsilon / max(total_n, 1)
    exponential  the k-th such order gets p_n = 1 / (2^k · max(total_n, 1))
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Sequence

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError, InvalidConfigurationError
from ..utils import METRIC_REGISTRY
from ..utils.validation import check_choice, check_positive, check_text_batch
from .tokenize import ngram_counts, tokenize

logger = logging.getLogger(__name__)

SMOOTHING_METHODS = ("none", "additive", "exponential")


def closest_reference_length(candidate_len: int, reference_lens: Sequence[int]) -> int:
    return min(reference_lens, key=lambda ref_len: (abs(ref_len - candidate_len), ref_len))


def brevity_penalty(candidate_len: int, reference_len: int) -> float:
    if candidate_len >= reference_len:
        return 1.0
    if candidate_len == 0:
        return 0.0
    return math.exp(1.0 - reference_len / candidate_len)


@METRIC_REGISTRY.register("bleu")
class Bleu(BaseMetric):
    """BLEU accumulated over every sentence pair seen since the last reset.

    Each target is either one reference string or a sequence of reference
    strings for the corresponding candidate.
    """

    name = "bleu"

    def __init__(self, max_n: int = 4, smoothing: str = "none", epsilon: float = 0.1):
        self.max_n = check_positive(max_n, "max_n")
        self.smoothing = check_choice(smoothing, SMOOTHING_METHODS, "smoothing")
        if not epsilon > 0:
            raise InvalidConfigurationError(f"epsilon must be positive, got {epsilon}")
        self.epsilon = epsilon
        super().__init__()

    @staticmethod
    def _reference_tokens(target) -> list[list[str]]:
        if isinstance(target, str):
            return [tokenize(target)]
        if isinstance(target, (list, tuple)) and target and all(isinstance(r, str) for r in target):
            return [tokenize(r) for r in target]
        raise IncompatibleInputError(
            "a reference string or a non-empty sequence of reference strings",
            type(target).__name__,
        )

    def update(self, predictions: Sequence[str], targets: Sequence) -> None:
        check_text_batch(predictions, targets)
        references = [self._reference_tokens(t) for t in targets]

        numerator = [0] * self.max_n
        denominator = [0] * self.max_n
        candidate_len = 0
        reference_len = 0
        for prediction, refs in zip(predictions, references):
            candidate = tokenize(prediction)
            candidate_len += len(candidate)
            reference_len += closest_reference_length(len(candidate), [len(r) for r in refs])
            for n in range(1, self.max_n + 1):
                candidate_counts = ngram_counts(candidate, n)
                max_ref_counts = Counter()
                for ref in refs:
                    max_ref_counts |= ngram_counts(ref, n)
                numerator[n - 1] += sum((candidate_counts & max_ref_counts).values())
                denominator[n - 1] += sum(candidate_counts.values())

        for i in range(self.max_n):
            self.numerator[i] += numerator[i]
            self.denominator[i] += denominator[i]
        self.candidate_len += candidate_len
        self.reference_len += reference_len
        self.num_sentences += len(predictions)

    def precisions(self) -> list[float]:
        """Modified n-gram precisions p_1..p_N after smoothing."""
        precisions = []
        decay = 1
        for num, denom in zip(self.numerator, self.denominator):
            if num > 0:
                precisions.append(num / denom)
            elif self.smoothing == "additive":
                precisions.append(self.epsilon / max(denom, 1))
            elif self.smoothing == "exponential":
                decay *= 2
                precisions.append(1.0 / (decay * max(denom, 1)))
            else:
                precisions.append(0.0)
        return precisions

    def compute(self) -> float | None:
        if self.num_sentences == 0:
            return None
        if self.candidate_len == 0:
            return 0.0
        precisions = self.precisions()
        if min(precisions) == 0.0:
            logger.debug("BLEU has a zero n-gram precision without smoothing; score is 0")
            return 0.0
        log_mean = sum(math.log(p) for p in precisions) / self.max_n
        return brevity_penalty(self.candidate_len, self.reference_len) * math.exp(log_mean)

    def reset(self) -> None:
        self.numerator = [0] * self.max_n
        self.denominator = [0] * self.max_n
        self.candidate_len = 0
        self.reference_len = 0
        self.num_sentences = 0

    def __repr__(self) -> str:
        return f"Bleu(max_n={self.max_n}, smoothing={self.smoothing!r})"
