"""Classification metrics.

Every class here implements ``BaseMetric``; the lower-case factories pick the
binary (``num_classes == 1``) or multiclass implementation.
"""

from .accuracy import BinaryAccuracy, MulticlassAccuracy, accuracy
from .auroc import BinaryAuroc, BinnedBinaryAuroc, auroc
from .confusion_matrix import BinaryConfusionMatrix, MulticlassConfusionMatrix, confusion_matrix
from .f1 import BinaryF1Score, MulticlassF1Score, f1_score
from .hinge import BinaryHingeLoss, MulticlassHingeLoss, hinge_loss
from .jaccard import BinaryJaccardIndex, MulticlassJaccardIndex, jaccard_index
from .precision_recall import (
    BinaryPrecision,
    BinaryRecall,
    MulticlassPrecision,
    MulticlassRecall,
    precision,
    recall,
)
from .stat_scores import BinaryStatScores, MulticlassStatScores

__all__ = [
    "BinaryStatScores",
    "MulticlassStatScores",
    "BinaryAccuracy",
    "MulticlassAccuracy",
    "BinaryPrecision",
    "MulticlassPrecision",
    "BinaryRecall",
    "MulticlassRecall",
    "BinaryF1Score",
    "MulticlassF1Score",
    "BinaryJaccardIndex",
    "MulticlassJaccardIndex",
    "BinaryConfusionMatrix",
    "MulticlassConfusionMatrix",
    "BinaryHingeLoss",
    "MulticlassHingeLoss",
    "BinaryAuroc",
    "BinnedBinaryAuroc",
    "accuracy",
    "precision",
    "recall",
    "f1_score",
    "jaccard_index",
    "confusion_matrix",
    "hinge_loss",
    "auroc",
]
