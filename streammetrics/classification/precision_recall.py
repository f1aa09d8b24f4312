"""Precision and recall for binary and multiclass classifiers.

Math (per class):
    precision_c = TP_c / (TP_c + FP_c)
    recall_c    = TP_c / (TP_c + FN_c)

A zero denominator yields 0.0 rather than an error.
"""

from ..utils import METRIC_REGISTRY
from .stat_scores import BinaryStatMetric, MulticlassStatMetric, reduce_per_class, safe_divide


@METRIC_REGISTRY.register("binary_precision")
class BinaryPrecision(BinaryStatMetric):
    name = "precision"

    def compute(self) -> float | None:
        if self.stat_scores.total == 0:
            return None
        tp, fp, _, _ = self.stat_scores.as_tensors()
        return safe_divide(tp, tp + fp).item()


@METRIC_REGISTRY.register("multiclass_precision")
class MulticlassPrecision(MulticlassStatMetric):
    name = "precision"

    def compute(self):
        s = self.stat_scores
        if s.total == 0:
            return None
        tp = s.true_positive
        return reduce_per_class(tp, tp + s.false_positive, s.support, self.average)


@METRIC_REGISTRY.register("binary_recall")
class BinaryRecall(BinaryStatMetric):
    name = "recall"

    def compute(self) -> float | None:
        if self.stat_scores.total == 0:
            return None
        tp, _, _, fn = self.stat_scores.as_tensors()
        return safe_divide(tp, tp + fn).item()


@METRIC_REGISTRY.register("multiclass_recall")
class MulticlassRecall(MulticlassStatMetric):
    name = "recall"

    def compute(self):
        s = self.stat_scores
        if s.total == 0:
            return None
        tp = s.true_positive
        return reduce_per_class(tp, tp + s.false_negative, s.support, self.average)


@METRIC_REGISTRY.register("precision")
def precision(
    num_classes: int = 1, threshold: float = 0.5, average: str = "macro", reduction: str | None = None
):
    if num_classes == 1:
        return BinaryPrecision(threshold=threshold)
    return MulticlassPrecision(num_classes, average=average, reduction=reduction)


@METRIC_REGISTRY.register("recall")
def recall(
    num_classes: int = 1, threshold: float = 0.5, average: str = "macro", reduction: str | None = None
):
    if num_classes == 1:
        return BinaryRecall(threshold=threshold)
    return MulticlassRecall(num_classes, average=average, reduction=reduction)
