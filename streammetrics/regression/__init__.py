from .metrics import (
    MeanAbsoluteError,
    MeanAbsolutePercentageError,
    MeanSquaredError,
    NormalizedRootMeanSquaredError,
    R2Score,
)

__all__ = [
    "MeanSquaredError",
    "MeanAbsoluteError",
    "MeanAbsolutePercentageError",
    "R2Score",
    "NormalizedRootMeanSquaredError",
]
