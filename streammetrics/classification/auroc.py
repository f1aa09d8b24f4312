"""Area under the ROC curve for binary classifiers.

BinaryAuroc keeps every score and is exact; BinnedBinaryAuroc keeps a fixed
histogram over [0, 1] and approximates. Neither is defined until both classes
have been seen.
"""

from __future__ import annotations

import torch
from torch import Tensor

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError, InvalidConfigurationError
from ..utils import METRIC_REGISTRY
from ..utils.validation import (
    as_float_tensor,
    as_label_tensor,
    check_same_length,
    verify_labels,
    verify_range,
)


def _validate_binary_batch(predictions, targets) -> tuple[Tensor, Tensor]:
    scores = as_float_tensor(predictions, "predictions")
    labels = as_label_tensor(targets, "targets")
    if scores.dim() != 1 or labels.dim() != 1:
        raise IncompatibleInputError("1-D predictions and targets", f"{tuple(scores.shape)} and {tuple(labels.shape)}")
    check_same_length(scores, labels)
    verify_labels(labels, 2)
    return scores, labels


def _roc_area(tps: Tensor, fps: Tensor) -> float | None:
    """Trapezoidal area under the curve through (0, 0) and the cumulative
    (fps, tps) points, normalised by the final totals."""
    n_pos = tps[-1].item()
    n_neg = fps[-1].item()
    if n_pos == 0 or n_neg == 0:
        return None
    zero = torch.zeros(1, dtype=torch.float64)
    tpr = torch.cat([zero, tps.to(torch.float64) / n_pos])
    fpr = torch.cat([zero, fps.to(torch.float64) / n_neg])
    return torch.trapezoid(tpr, fpr).item()


@METRIC_REGISTRY.register("binary_auroc")
class BinaryAuroc(BaseMetric):
    """Exact AUROC from the full set of retained scores.

    Samples with equal scores cross the decision threshold together, giving
    one diagonal step instead of a staircase whose shape would depend on
    input order.
    """

    name = "auroc"

    def update(self, predictions, targets) -> None:
        scores, labels = _validate_binary_batch(predictions, targets)
        self.all_scores.append(scores)
        self.all_labels.append(labels)

    def compute(self) -> float | None:
        if not self.all_scores:
            return None
        scores = torch.cat(self.all_scores)
        labels = torch.cat(self.all_labels)

        order = torch.argsort(scores, descending=True, stable=True)
        scores = scores[order]
        labels = labels[order]

        tps = torch.cumsum(labels, dim=0)
        fps = torch.cumsum(1 - labels, dim=0)

        # last index of every run of equal scores
        distinct = torch.nonzero(scores[1:] != scores[:-1]).flatten()
        last = torch.tensor([scores.numel() - 1])
        threshold_idx = torch.cat([distinct, last])
        return _roc_area(tps[threshold_idx], fps[threshold_idx])

    def reset(self) -> None:
        self.all_scores: list[Tensor] = []
        self.all_labels: list[Tensor] = []

    @property
    def num_samples(self) -> int:
        return sum(s.numel() for s in self.all_scores)


@METRIC_REGISTRY.register("binned_binary_auroc")
class BinnedBinaryAuroc(BaseMetric):
    """Approximate AUROC over ``bins`` equal-width bins of [0, 1].

    Bin ``i`` covers ``[i/bins, (i+1)/bins)``, the last bin also includes 1.0.
    The ``bins + 1`` boundaries are the candidate thresholds; scores in the
    same bin are treated as tied.
    """

    name = "auroc"

    def __init__(self, bins: int = 100):
        if isinstance(bins, bool) or not isinstance(bins, int) or bins < 1:
            raise InvalidConfigurationError(f"bins must be a positive integer, got {bins!r}")
        self.bins = bins
        super().__init__()

    def update(self, predictions, targets) -> None:
        scores, labels = _validate_binary_batch(predictions, targets)
        verify_range(scores, 0.0, 1.0, "predictions")

        bin_idx = (scores * self.bins).floor().to(torch.long).clamp(max=self.bins - 1)
        positive = labels == 1
        self.pos_hist += torch.bincount(bin_idx[positive], minlength=self.bins)
        self.neg_hist += torch.bincount(bin_idx[~positive], minlength=self.bins)

    def compute(self) -> float | None:
        # sweep thresholds from the top boundary down
        tps = torch.cumsum(self.pos_hist.flip(0), dim=0)
        fps = torch.cumsum(self.neg_hist.flip(0), dim=0)
        return _roc_area(tps, fps)

    def reset(self) -> None:
        self.pos_hist = torch.zeros(self.bins, dtype=torch.long)
        self.neg_hist = torch.zeros(self.bins, dtype=torch.long)

    def __repr__(self) -> str:
        return f"BinnedBinaryAuroc(bins={self.bins})"


@METRIC_REGISTRY.register("auroc")
def auroc(bin_count: int = 0) -> BaseMetric:
    """Build an exact (``bin_count == 0``) or binned AUROC metric."""
    if isinstance(bin_count, bool) or not isinstance(bin_count, int) or bin_count < 0:
        raise InvalidConfigurationError(f"bin_count must be a non-negative integer, got {bin_count!r}")
    if bin_count == 0:
        return BinaryAuroc()
    return BinnedBinaryAuroc(bins=bin_count)
