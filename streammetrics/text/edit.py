"""Levenshtein edit distance between candidate and reference strings."""

from __future__ import annotations

from typing import Sequence

import torch

from ..core.base import BaseMetric
from ..core.reduction import MetricAggregator, Reduction
from ..utils import METRIC_REGISTRY
from ..utils.validation import check_choice, check_text_batch, verify_strings
from .tokenize import levenshtein_distance, tokenize

UNITS = ("char", "word")


@METRIC_REGISTRY.register("edit_distance")
class EditDistance(BaseMetric):
    """Per-pair edit distance reduced with ``reduction`` (sum or mean).

    ``unit="char"`` compares characters; ``unit="word"`` compares whitespace
    tokens.
    """

    name = "edit_distance"

    def __init__(self, reduction: Reduction | str = Reduction.MEAN, unit: str = "char"):
        self.unit = check_choice(unit, UNITS, "unit")
        self.aggregator = MetricAggregator(reduction)
        super().__init__()

    def _units(self, text: str) -> Sequence[str]:
        return text if self.unit == "char" else tokenize(text)

    def update(self, predictions: Sequence[str], targets: Sequence[str]) -> None:
        check_text_batch(predictions, targets)
        verify_strings(targets, "targets")
        distances = torch.tensor(
            [levenshtein_distance(self._units(p), self._units(t)) for p, t in zip(predictions, targets)],
            dtype=torch.float64,
        )
        self.aggregator.update(distances)

    def compute(self) -> float | None:
        return self.aggregator.compute()

    def reset(self) -> None:
        self.aggregator.reset()

    def __repr__(self) -> str:
        return f"EditDistance(reduction={self.aggregator.reduction.value!r}, unit={self.unit!r})"
