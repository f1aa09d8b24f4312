"""True/false positive/negative counters shared by classification metrics.

Binary inputs are probabilities (or 0/1 labels) thresholded inclusively:
``prediction >= threshold`` is a positive decision. Multiclass inputs are
either class indices ``(N,)`` or per-class scores ``(N, C)`` reduced with
argmax, decomposed one-vs-rest into per-class counts.
"""

from __future__ import annotations

import torch
from torch import Tensor

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError, InvalidConfigurationError
from ..utils.validation import (
    as_float_tensor,
    as_label_tensor,
    check_same_length,
    verify_labels,
    verify_range,
)

AVERAGE_METHODS = ("macro", "micro", "weighted", "none")


def safe_divide(num: Tensor, denom: Tensor) -> Tensor:
    """Element-wise ``num / denom`` with 0/0 (or x/0) resolved to 0.0."""
    num = num.to(torch.float64)
    denom = denom.to(torch.float64)
    safe_denom = torch.where(denom > 0, denom, torch.ones_like(denom))
    return torch.where(denom > 0, num / safe_denom, torch.zeros_like(num))


class BinaryStatScores:
    """Confusion counts for a binary classifier."""

    def __init__(self, threshold: float = 0.5):
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidConfigurationError(f"threshold must be a number, got {threshold!r}")
        if not 0.0 <= threshold <= 1.0:
            raise InvalidConfigurationError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold
        self.reset()

    def update(self, predictions, targets) -> None:
        preds = as_float_tensor(predictions, "predictions")
        target = as_label_tensor(targets, "targets")
        if preds.dim() != 1 or target.dim() != 1:
            raise IncompatibleInputError("1-D predictions and targets", f"{tuple(preds.shape)} and {tuple(target.shape)}")
        check_same_length(preds, target)
        verify_range(preds, 0.0, 1.0, "predictions")
        verify_labels(target, 2)

        pred_pos = preds >= self.threshold
        actual_pos = target == 1
        self.true_positive += (pred_pos & actual_pos).sum().item()
        self.false_positive += (pred_pos & ~actual_pos).sum().item()
        self.false_negative += (~pred_pos & actual_pos).sum().item()
        self.true_negative += (~pred_pos & ~actual_pos).sum().item()
        self.total += target.numel()

    def reset(self) -> None:
        self.true_positive = 0
        self.false_positive = 0
        self.false_negative = 0
        self.true_negative = 0
        self.total = 0

    def as_tensors(self) -> tuple[Tensor, Tensor, Tensor, Tensor]:
        """Return (tp, fp, tn, fn) as 0-dim float64 tensors."""
        return tuple(
            torch.tensor(v, dtype=torch.float64)
            for v in (self.true_positive, self.false_positive, self.true_negative, self.false_negative)
        )


class MulticlassStatScores:
    """One-vs-rest confusion counts for each of ``num_classes`` classes.

    Also keeps the full ``C x C`` confusion matrix (rows = target,
    columns = prediction); every per-class count derives from it.
    """

    def __init__(self, num_classes: int):
        if isinstance(num_classes, bool) or not isinstance(num_classes, int) or num_classes < 2:
            raise InvalidConfigurationError(f"num_classes must be an integer >= 2, got {num_classes!r}")
        self.num_classes = num_classes
        self.reset()

    def _to_class_indices(self, predictions) -> Tensor:
        preds = as_float_tensor(predictions, "predictions")
        if preds.dim() == 2:
            if preds.shape[1] != self.num_classes:
                raise IncompatibleInputError(
                    f"scores with {self.num_classes} columns", f"{preds.shape[1]} columns"
                )
            # argmax returns the first maximal index on ties
            return preds.argmax(dim=1)
        if preds.dim() == 1:
            if not torch.equal(preds, preds.round()):
                raise IncompatibleInputError("integer class predictions", "fractional values")
            indices = preds.to(torch.long)
            verify_labels(indices, self.num_classes)
            return indices
        raise IncompatibleInputError("predictions of shape (N,) or (N, C)", f"{tuple(preds.shape)}")

    def update(self, predictions, targets) -> None:
        pred_idx = self._to_class_indices(predictions)
        target = as_label_tensor(targets, "targets")
        if target.dim() != 1:
            raise IncompatibleInputError("1-D targets", f"{tuple(target.shape)}")
        check_same_length(pred_idx, target)
        verify_labels(target, self.num_classes)

        flat = target * self.num_classes + pred_idx
        counts = torch.bincount(flat, minlength=self.num_classes ** 2)
        self.confmat += counts.reshape(self.num_classes, self.num_classes)
        self.total += target.numel()

    def reset(self) -> None:
        self.confmat = torch.zeros(self.num_classes, self.num_classes, dtype=torch.long)
        self.total = 0

    @property
    def true_positive(self) -> Tensor:
        return self.confmat.diagonal().clone()

    @property
    def false_positive(self) -> Tensor:
        return self.confmat.sum(dim=0) - self.true_positive

    @property
    def false_negative(self) -> Tensor:
        return self.confmat.sum(dim=1) - self.true_positive

    @property
    def true_negative(self) -> Tensor:
        return self.total - self.true_positive - self.false_positive - self.false_negative

    @property
    def support(self) -> Tensor:
        """Number of samples whose target is each class."""
        return self.confmat.sum(dim=1)


def reduce_per_class(num: Tensor, denom: Tensor, support: Tensor, average: str):
    """Average per-class ``num / denom`` ratios.

    ``micro`` pools the counts before dividing; ``macro`` is the unweighted
    mean over all classes; ``weighted`` weights by support; ``none``
    returns the per-class tensor.
    """
    if average == "micro":
        return safe_divide(num.sum(), denom.sum()).item()
    per_class = safe_divide(num, denom)
    if average == "none":
        return per_class
    if average == "weighted":
        weights = support.to(torch.float64)
        return safe_divide((per_class * weights).sum(), weights.sum()).item()
    return per_class.mean().item()


class BinaryStatMetric(BaseMetric):
    """Binary metric whose state is a ``BinaryStatScores``."""

    def __init__(self, threshold: float = 0.5):
        self.stat_scores = BinaryStatScores(threshold)
        super().__init__()

    def update(self, predictions, targets) -> None:
        self.stat_scores.update(predictions, targets)

    def reset(self) -> None:
        self.stat_scores.reset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(threshold={self.stat_scores.threshold})"


class MulticlassStatMetric(BaseMetric):
    """Multiclass metric whose state is a ``MulticlassStatScores``.

    ``reduction`` is accepted as another name for ``average``; when given it
    takes precedence.
    """

    def __init__(self, num_classes: int, average: str = "macro", reduction: str | None = None):
        if reduction is not None:
            average = reduction
        if average not in AVERAGE_METHODS:
            raise InvalidConfigurationError(
                f"average must be one of {list(AVERAGE_METHODS)}, got {average!r}"
            )
        self.average = average
        self.stat_scores = MulticlassStatScores(num_classes)
        super().__init__()

    def update(self, predictions, targets) -> None:
        self.stat_scores.update(predictions, targets)

    def reset(self) -> None:
        self.stat_scores.reset()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_classes={self.stat_scores.num_classes}, "
            f"average={self.average!r})"
        )
