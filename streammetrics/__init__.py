"""Incremental evaluation metrics: update with batches, compute at any time."""

from .core import (
    BaseMetric,
    EmptyInputError,
    IncompatibleInputError,
    InvalidConfigurationError,
    InvalidLabelError,
    LengthMismatchError,
    MetricAggregator,
    MetricError,
    Reduction,
)
from .utils import METRIC_REGISTRY

# Import submodules so that @register decorators execute
from . import classification  # noqa: F401
from . import clustering  # noqa: F401
from . import regression  # noqa: F401
from . import text  # noqa: F401

from .classification import (
    BinaryAccuracy,
    BinaryAuroc,
    BinaryConfusionMatrix,
    BinaryF1Score,
    BinaryHingeLoss,
    BinaryJaccardIndex,
    BinaryPrecision,
    BinaryRecall,
    BinnedBinaryAuroc,
    MulticlassAccuracy,
    MulticlassConfusionMatrix,
    MulticlassF1Score,
    MulticlassHingeLoss,
    MulticlassJaccardIndex,
    MulticlassPrecision,
    MulticlassRecall,
)
from .clustering import MutualInfoScore
from .regression import (
    MeanAbsoluteError,
    MeanAbsolutePercentageError,
    MeanSquaredError,
    NormalizedRootMeanSquaredError,
    R2Score,
)
from .text import Bleu, EditDistance, Rouge, SentenceSimilarity, TransformerVectorizer
from .config import EvaluationConfig, build_metric, build_metrics, load_metrics

__version__ = "0.1.0"
