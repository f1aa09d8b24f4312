"""ROUGE overlap scores averaged per sentence pair.

Unlike BLEU, ROUGE is not corpus level: each pair gets its own
precision/recall/F1 and the reported value is the running mean of the
per-pair F1.

overlap_mode:
    lcs     overlap = LCS length, normalised by token counts   (ROUGE-L)
    lcs_sum like lcs, but lines are kept apart by a <n> token  (ROUGE-Lsum)
    n_gram  overlap = clipped n-gram matches, normalised by
            n-gram counts                                       (ROUGE-N)
"""

from __future__ import annotations

from typing import Sequence

import torch

from ..core.base import BaseMetric
from ..core.reduction import MetricAggregator, Reduction
from ..utils import METRIC_REGISTRY
from ..utils.validation import check_choice, check_positive, check_text_batch, verify_strings
from .tokenize import lcs_length, ngram_counts, tokenize, tokenize_sentences

OVERLAP_MODES = ("lcs", "lcs_sum", "n_gram")
KEY_PREFIXES = {"lcs": "rougeL", "lcs_sum": "rougeLsum"}


def precision_recall_f1(overlap: int, candidate_total: int, reference_total: int) -> tuple[float, float, float]:
    if overlap == 0 or candidate_total == 0 or reference_total == 0:
        return 0.0, 0.0, 0.0
    precision = overlap / candidate_total
    recall = overlap / reference_total
    return precision, recall, 2 * precision * recall / (precision + recall)


@METRIC_REGISTRY.register("rouge")
class Rouge(BaseMetric):
    name = "rouge"

    def __init__(self, overlap_mode: str = "lcs", n: int = 1):
        self.overlap_mode = check_choice(overlap_mode, OVERLAP_MODES, "overlap_mode")
        self.n = check_positive(n, "n")
        self.precision = MetricAggregator(Reduction.MEAN)
        self.recall = MetricAggregator(Reduction.MEAN)
        self.fmeasure = MetricAggregator(Reduction.MEAN)
        super().__init__()

    def score_pair(self, candidate: str, reference: str) -> tuple[float, float, float]:
        """(precision, recall, F1) for a single candidate/reference pair."""
        if self.overlap_mode == "lcs_sum":
            cand = tokenize_sentences(candidate)
            ref = tokenize_sentences(reference)
            return precision_recall_f1(lcs_length(cand, ref), len(cand), len(ref))
        cand = tokenize(candidate)
        ref = tokenize(reference)
        if self.overlap_mode == "lcs":
            return precision_recall_f1(lcs_length(cand, ref), len(cand), len(ref))
        cand_counts = ngram_counts(cand, self.n)
        ref_counts = ngram_counts(ref, self.n)
        overlap = sum((cand_counts & ref_counts).values())
        return precision_recall_f1(overlap, sum(cand_counts.values()), sum(ref_counts.values()))

    def update(self, predictions: Sequence[str], targets: Sequence[str]) -> None:
        check_text_batch(predictions, targets)
        verify_strings(targets, "targets")
        scores = torch.tensor(
            [self.score_pair(p, t) for p, t in zip(predictions, targets)], dtype=torch.float64
        )
        self.precision.update(scores[:, 0])
        self.recall.update(scores[:, 1])
        self.fmeasure.update(scores[:, 2])

    def compute(self) -> float | None:
        return self.fmeasure.compute()

    def compute_dict(self) -> dict[str, float]:
        if self.fmeasure.total == 0:
            return {}
        prefix = KEY_PREFIXES.get(self.overlap_mode, f"rouge{self.n}")
        return {
            f"{prefix}_precision": self.precision.compute(),
            f"{prefix}_recall": self.recall.compute(),
            f"{prefix}_fmeasure": self.fmeasure.compute(),
        }

    def reset(self) -> None:
        self.precision.reset()
        self.recall.reset()
        self.fmeasure.reset()

    def __repr__(self) -> str:
        return f"Rouge(overlap_mode={self.overlap_mode!r}, n={self.n})"
