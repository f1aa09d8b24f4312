"""Regression metrics computed from running sums over every batch seen."""

from __future__ import annotations

import math

from torch import Tensor

from ..core.base import BaseMetric
from ..utils import METRIC_REGISTRY
from ..utils.validation import as_float_tensor, check_choice, check_same_length


def _regression_batch(predictions, targets) -> tuple[Tensor, Tensor]:
    preds = as_float_tensor(predictions, "predictions").flatten()
    target = as_float_tensor(targets, "targets").flatten()
    check_same_length(preds, target)
    return preds, target


def merge_moments(total: int, mean: float, m2: float, batch: Tensor) -> tuple[int, float, float]:
    """Fold a batch into a running (count, mean, M2) with Chan's pairwise update.

    M2 is the sum of squared deviations from the running mean.
    """
    batch_n = batch.numel()
    batch_mean = batch.mean().item()
    batch_m2 = ((batch - batch_mean) ** 2).sum().item()
    new_total = total + batch_n
    delta = batch_mean - mean
    m2 += batch_m2 + delta * delta * total * batch_n / new_total
    mean += delta * batch_n / new_total
    return new_total, mean, m2


@METRIC_REGISTRY.register("mse")
class MeanSquaredError(BaseMetric):
    name = "mse"

    def update(self, predictions, targets) -> None:
        preds, target = _regression_batch(predictions, targets)
        self.sum_squared_error += ((preds - target) ** 2).sum().item()
        self.total += target.numel()

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        return self.sum_squared_error / self.total

    def reset(self) -> None:
        self.sum_squared_error = 0.0
        self.total = 0


@METRIC_REGISTRY.register("mae")
class MeanAbsoluteError(BaseMetric):
    name = "mae"

    def update(self, predictions, targets) -> None:
        preds, target = _regression_batch(predictions, targets)
        self.sum_abs_error += (preds - target).abs().sum().item()
        self.total += target.numel()

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        return self.sum_abs_error / self.total

    def reset(self) -> None:
        self.sum_abs_error = 0.0
        self.total = 0


@METRIC_REGISTRY.register("mape")
class MeanAbsolutePercentageError(BaseMetric):
    """Mean of |ŷ−y| / |y| as a fraction (not multiplied by 100).

    Pairs whose target is exactly zero are skipped; ``compute`` stays None
    until at least one usable pair has been seen.
    """

    name = "mape"

    def update(self, predictions, targets) -> None:
        preds, target = _regression_batch(predictions, targets)
        usable = target != 0
        ratios = (preds[usable] - target[usable]).abs() / target[usable].abs()
        self.sum_abs_per_error += ratios.sum().item()
        self.total += int(usable.sum().item())

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        return self.sum_abs_per_error / self.total

    def reset(self) -> None:
        self.sum_abs_per_error = 0.0
        self.total = 0


@METRIC_REGISTRY.register("r2")
class R2Score(BaseMetric):
    """Coefficient of determination, 1 - SSE / SST.

    SST is the running M2 of the targets; constant targets (SST = 0) give 0.0.
    """

    name = "r2"

    def update(self, predictions, targets) -> None:
        preds, target = _regression_batch(predictions, targets)
        self.sum_squared_error += ((preds - target) ** 2).sum().item()
        self.total, self.mean, self.m2 = merge_moments(self.total, self.mean, self.m2, target)

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        if self.m2 <= 0:
            return 0.0
        return 1.0 - self.sum_squared_error / self.m2

    def reset(self) -> None:
        self.sum_squared_error = 0.0
        self.mean = 0.0
        self.m2 = 0.0
        self.total = 0


@METRIC_REGISTRY.register("nrmse")
class NormalizedRootMeanSquaredError(BaseMetric):
    """RMSE divided by a statistic of the targets.

    The target mean and M2 are merged batch by batch with ``merge_moments``.
    A zero normaliser gives 0.0.
    """

    name = "nrmse"
    NORMALIZATIONS = ("mean", "range", "std", "l2")

    def __init__(self, normalization: str = "mean"):
        self.normalization = check_choice(normalization, self.NORMALIZATIONS, "normalization")
        super().__init__()

    def update(self, predictions, targets) -> None:
        preds, target = _regression_batch(predictions, targets)
        self.sum_squared_error += ((preds - target) ** 2).sum().item()
        self.target_squared += (target ** 2).sum().item()
        batch_min = target.min().item()
        batch_max = target.max().item()
        self.min_val = batch_min if self.min_val is None else min(self.min_val, batch_min)
        self.max_val = batch_max if self.max_val is None else max(self.max_val, batch_max)
        self.total, self.mean, self.m2 = merge_moments(self.total, self.mean, self.m2, target)

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        if self.normalization == "mean":
            denom = self.mean
        elif self.normalization == "range":
            denom = self.max_val - self.min_val
        elif self.normalization == "std":
            denom = math.sqrt(self.m2 / self.total)
        else:
            denom = math.sqrt(self.target_squared)
        if denom == 0:
            return 0.0
        rmse = math.sqrt(self.sum_squared_error / self.total)
        return rmse / denom

    def reset(self) -> None:
        self.sum_squared_error = 0.0
        self.target_squared = 0.0
        self.mean = 0.0
        self.m2 = 0.0
        self.min_val: float | None = None
        self.max_val: float | None = None
        self.total = 0

    def __repr__(self) -> str:
        return f"NormalizedRootMeanSquaredError(normalization={self.normalization!r})"
