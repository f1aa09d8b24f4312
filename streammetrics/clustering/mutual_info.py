"""Mutual information between predicted cluster labels and true labels."""

from __future__ import annotations

import math
from collections import Counter

from ..core.base import BaseMetric
from ..core.errors import IncompatibleInputError
from ..utils import METRIC_REGISTRY
from ..utils.validation import as_label_tensor, check_same_length


@METRIC_REGISTRY.register("mutual_info")
class MutualInfoScore(BaseMetric):
    """Mutual information in nats.

    Math:
        MI = Σ_{t,p} (n_tp / N) · log(N · n_tp / (n_t · n_p))

    Only the joint label-pair counts are stored, so memory is bounded by the
    number of distinct (target, prediction) pairs rather than by N.
    """

    name = "mutual_info"

    def update(self, predictions, targets) -> None:
        preds = as_label_tensor(predictions, "predictions")
        target = as_label_tensor(targets, "targets")
        if preds.dim() != 1 or target.dim() != 1:
            raise IncompatibleInputError("1-D label sequences", f"{tuple(preds.shape)} and {tuple(target.shape)}")
        check_same_length(preds, target)
        self.joint_counts.update(zip(target.tolist(), preds.tolist()))
        self.total += target.numel()

    def compute(self) -> float | None:
        if self.total == 0:
            return None
        target_counts: Counter = Counter()
        pred_counts: Counter = Counter()
        for (t, p), count in self.joint_counts.items():
            target_counts[t] += count
            pred_counts[p] += count

        mi = 0.0
        for (t, p), count in sorted(self.joint_counts.items()):
            mi += (count / self.total) * math.log(self.total * count / (target_counts[t] * pred_counts[p]))
        return mi

    def reset(self) -> None:
        self.joint_counts: Counter = Counter()
        self.total = 0
