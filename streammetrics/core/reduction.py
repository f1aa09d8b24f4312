"""Sum / mean / min / max aggregation of per-sample values."""

from __future__ import annotations

from enum import Enum

import torch
from torch import Tensor

from .errors import InvalidConfigurationError


class Reduction(str, Enum):
    SUM = "sum"
    MEAN = "mean"
    MAX = "max"
    MIN = "min"

    @classmethod
    def parse(cls, value: "Reduction | str") -> "Reduction":
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigurationError(
                f"reduction must be one of {[r.value for r in cls]}, got {value!r}"
            ) from None


class MetricAggregator:
    """Running reduction over a stream of scalar values.

    Keeps the count, sum, min and max so any ``Reduction`` can be served
    from O(1) state.
    """

    def __init__(self, reduction: Reduction | str = Reduction.MEAN):
        self.reduction = Reduction.parse(reduction)
        self.reset()

    def update(self, values: Tensor) -> None:
        values = values.detach().to(torch.float64).flatten()
        if values.numel() == 0:
            return
        self.total += values.numel()
        self.sum += values.sum().item()
        batch_min = values.min().item()
        batch_max = values.max().item()
        self.min = batch_min if self.min is None else min(self.min, batch_min)
        self.max = batch_max if self.max is None else max(self.max, batch_max)

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        if self.reduction is Reduction.SUM:
            return self.sum
        if self.reduction is Reduction.MEAN:
            return self.sum / self.total
        if self.reduction is Reduction.MIN:
            return self.min
        return self.max

    def reset(self) -> None:
        self.total = 0
        self.sum = 0.0
        self.min: float | None = None
        self.max: float | None = None
