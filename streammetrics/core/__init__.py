from .base import BaseMetric
from .errors import (
    EmptyInputError,
    IncompatibleInputError,
    InvalidConfigurationError,
    InvalidLabelError,
    LengthMismatchError,
    MetricError,
)
from .reduction import MetricAggregator, Reduction

__all__ = [
    "BaseMetric",
    "MetricError",
    "LengthMismatchError",
    "EmptyInputError",
    "InvalidLabelError",
    "IncompatibleInputError",
    "InvalidConfigurationError",
    "MetricAggregator",
    "Reduction",
]
