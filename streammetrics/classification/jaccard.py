"""Jaccard index (intersection over union).

    J = TP / (TP + FP + FN)

Defined as 0.0 when the denominator is 0, i.e. no positive predictions and
no positive targets were observed.
"""

from ..utils import METRIC_REGISTRY
from .stat_scores import BinaryStatMetric, MulticlassStatMetric, reduce_per_class, safe_divide


@METRIC_REGISTRY.register("binary_jaccard")
class BinaryJaccardIndex(BinaryStatMetric):
    name = "jaccard"

    def compute(self) -> float | None:
        if self.stat_scores.total == 0:
            return None
        tp, fp, _, fn = self.stat_scores.as_tensors()
        return safe_divide(tp, tp + fp + fn).item()


@METRIC_REGISTRY.register("multiclass_jaccard")
class MulticlassJaccardIndex(MulticlassStatMetric):
    name = "jaccard"

    def compute(self):
        s = self.stat_scores
        if s.total == 0:
            return None
        tp = s.true_positive
        return reduce_per_class(tp, tp + s.false_positive + s.false_negative, s.support, self.average)


@METRIC_REGISTRY.register("jaccard")
def jaccard_index(
    num_classes: int = 1, threshold: float = 0.5, average: str = "macro", reduction: str | None = None
):
    if num_classes == 1:
        return BinaryJaccardIndex(threshold=threshold)
    return MulticlassJaccardIndex(num_classes, average=average, reduction=reduction)
