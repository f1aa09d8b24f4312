"""Confusion matrix metrics.

Rows are targets and columns are predictions, so the binary matrix reads
``[[TN, FP], [FN, TP]]``.
"""

import torch
from torch import Tensor

from ..utils import METRIC_REGISTRY
from .stat_scores import BinaryStatMetric, MulticlassStatMetric


@METRIC_REGISTRY.register("binary_confusion_matrix")
class BinaryConfusionMatrix(BinaryStatMetric):
    name = "confusion_matrix"

    def compute(self) -> Tensor | None:
        s = self.stat_scores
        if s.total == 0:
            return None
        return torch.tensor(
            [[s.true_negative, s.false_positive], [s.false_negative, s.true_positive]],
            dtype=torch.long,
        )


@METRIC_REGISTRY.register("multiclass_confusion_matrix")
class MulticlassConfusionMatrix(MulticlassStatMetric):
    name = "confusion_matrix"

    def __init__(self, num_classes: int):
        super().__init__(num_classes, average="none")

    def compute(self) -> Tensor | None:
        if self.stat_scores.total == 0:
            return None
        return self.stat_scores.confmat.clone()


@METRIC_REGISTRY.register("confusion_matrix")
def confusion_matrix(num_classes: int = 1, threshold: float = 0.5):
    if num_classes == 1:
        return BinaryConfusionMatrix(threshold=threshold)
    return MulticlassConfusionMatrix(num_classes)
