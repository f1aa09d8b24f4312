"""Hinge loss on raw classifier margins.

Binary:     loss_i = max(0, 1 - y_i * s_i),  y_i in {-1, +1}
Multiclass: loss_i = max(0, 1 - (s_i[y_i] - max_{j != y_i} s_i[j]))   (Crammer-Singer)

With ``squared=True`` each loss term is squared. The reported value is the
running mean over all samples.
"""

import torch
from torch import Tensor

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError, InvalidConfigurationError
from ..core.reduction import MetricAggregator, Reduction
from ..utils import METRIC_REGISTRY
from ..utils.validation import (
    as_float_tensor,
    as_label_tensor,
    check_same_length,
    verify_labels,
)


@METRIC_REGISTRY.register("binary_hinge")
class BinaryHingeLoss(BaseMetric):
    """Mean hinge loss for binary targets.

    Targets are encoded as -1 / +1; a target of 0 is read as -1 so that
    0/1 labels work as well.
    """

    name = "hinge"

    def __init__(self, squared: bool = False):
        self.squared = squared
        self.aggregator = MetricAggregator(Reduction.MEAN)
        super().__init__()

    def update(self, predictions, targets) -> None:
        scores = as_float_tensor(predictions, "predictions")
        target = as_label_tensor(targets, "targets")
        if scores.dim() != 1 or target.dim() != 1:
            raise IncompatibleInputError("1-D predictions and targets", f"{tuple(scores.shape)} and {tuple(target.shape)}")
        check_same_length(scores, target)
        if ((target != -1) & (target != 0) & (target != 1)).any():
            raise IncompatibleInputError("targets in {-1, 0, 1}", "other values")

        signs = torch.where(target == 1, torch.ones_like(scores), -torch.ones_like(scores))
        losses = (1.0 - signs * scores).clamp(min=0.0)
        if self.squared:
            losses = losses ** 2
        self.aggregator.update(losses)

    def compute(self) -> float | None:
        return self.aggregator.compute()

    def reset(self) -> None:
        self.aggregator.reset()


@METRIC_REGISTRY.register("multiclass_hinge")
class MulticlassHingeLoss(BaseMetric):
    """Crammer-Singer multiclass hinge loss over ``(N, C)`` scores."""

    name = "hinge"

    def __init__(self, num_classes: int, squared: bool = False):
        if isinstance(num_classes, bool) or not isinstance(num_classes, int) or num_classes < 2:
            raise InvalidConfigurationError(f"num_classes must be an integer >= 2, got {num_classes!r}")
        self.num_classes = num_classes
        self.squared = squared
        self.aggregator = MetricAggregator(Reduction.MEAN)
        super().__init__()

    def update(self, predictions, targets) -> None:
        scores = as_float_tensor(predictions, "predictions")
        target = as_label_tensor(targets, "targets")
        check_same_length(scores, target)
        if scores.dim() != 2 or scores.shape[1] != self.num_classes:
            raise IncompatibleInputError(f"scores of shape (N, {self.num_classes})", f"{tuple(scores.shape)}")
        if target.dim() != 1:
            raise IncompatibleInputError("1-D targets", f"{tuple(target.shape)}")
        verify_labels(target, self.num_classes)

        true_scores = scores.gather(1, target.unsqueeze(1)).squeeze(1)
        others = scores.scatter(1, target.unsqueeze(1), float("-inf"))
        margins = true_scores - others.max(dim=1).values
        losses = (1.0 - margins).clamp(min=0.0)
        if self.squared:
            losses = losses ** 2
        self.aggregator.update(losses)

    def compute(self) -> float | None:
        return self.aggregator.compute()

    def reset(self) -> None:
        self.aggregator.reset()


@METRIC_REGISTRY.register("hinge")
def hinge_loss(num_classes: int = 1, squared: bool = False) -> BaseMetric:
    if num_classes == 1:
        return BinaryHingeLoss(squared=squared)
    return MulticlassHingeLoss(num_classes, squared=squared)
