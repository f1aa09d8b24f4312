"""F1 score, the harmonic mean of precision and recall.

Computed from counts as 2*TP / (2*TP + FP + FN), which equals
2*P*R / (P + R) and is 0.0 when there are no true positives.
"""

from ..utils import METRIC_REGISTRY
from .stat_scores import BinaryStatMetric, MulticlassStatMetric, reduce_per_class, safe_divide


@METRIC_REGISTRY.register("binary_f1")
class BinaryF1Score(BinaryStatMetric):
    name = "f1"

    def compute(self) -> float | None:
        if self.stat_scores.total == 0:
            return None
        tp, fp, _, fn = self.stat_scores.as_tensors()
        return safe_divide(2 * tp, 2 * tp + fp + fn).item()


@METRIC_REGISTRY.register("multiclass_f1")
class MulticlassF1Score(MulticlassStatMetric):
    """Per-class F1, averaged according to ``average``.

    macro averages the per-class F1 values (not the F1 of the averaged
    precision and recall).
    """

    name = "f1"

    def compute(self):
        s = self.stat_scores
        if s.total == 0:
            return None
        tp = s.true_positive
        return reduce_per_class(
            2 * tp, 2 * tp + s.false_positive + s.false_negative, s.support, self.average
        )


@METRIC_REGISTRY.register("f1")
def f1_score(
    num_classes: int = 1, threshold: float = 0.5, average: str = "macro", reduction: str | None = None
):
    if num_classes == 1:
        return BinaryF1Score(threshold=threshold)
    return MulticlassF1Score(num_classes, average=average, reduction=reduction)
