"""Accuracy for binary and multiclass classifiers."""

from ..utils import METRIC_REGISTRY
from .stat_scores import BinaryStatMetric, MulticlassStatMetric, reduce_per_class


@METRIC_REGISTRY.register("binary_accuracy")
class BinaryAccuracy(BinaryStatMetric):
    """(TP + TN) / total over thresholded probabilities."""

    name = "accuracy"

    def compute(self) -> float | None:
        s = self.stat_scores
        if s.total == 0:
            return None
        return (s.true_positive + s.true_negative) / s.total


@METRIC_REGISTRY.register("multiclass_accuracy")
class MulticlassAccuracy(MulticlassStatMetric):
    """Multiclass accuracy.

    micro = correct / total; macro = unweighted mean of per-class recall;
    weighted = support-weighted per-class recall; none = per-class recall.
    """

    name = "accuracy"

    def compute(self):
        s = self.stat_scores
        if s.total == 0:
            return None
        tp = s.true_positive
        return reduce_per_class(tp, tp + s.false_negative, s.support, self.average)


@METRIC_REGISTRY.register("accuracy")
def accuracy(
    num_classes: int = 1, threshold: float = 0.5, average: str = "macro", reduction: str | None = None
):
    """Build a binary (``num_classes == 1``) or multiclass accuracy metric."""
    if num_classes == 1:
        return BinaryAccuracy(threshold=threshold)
    return MulticlassAccuracy(num_classes, average=average, reduction=reduction)
