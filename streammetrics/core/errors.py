"""Exceptions raised by metric construction and updates."""


class MetricError(ValueError):
    """Base class for every error raised by a metric.

    Raised before any state is mutated, so a failed ``update`` leaves the
    metric exactly as it was.
    """


class LengthMismatchError(MetricError):
    """Predictions and targets have a different number of elements."""

    def __init__(self, predictions: int, targets: int):
        self.predictions = predictions
        self.targets = targets
        super().__init__(
            f"predictions and targets must be the same length "
            f"({predictions} vs {targets})"
        )


class EmptyInputError(MetricError):
    """An update batch contains no elements."""

    def __init__(self, message: str = "update batch must not be empty"):
        super().__init__(message)


class InvalidLabelError(MetricError):
    """A class index lies outside ``[0, num_classes)``."""

    def __init__(self, label, num_classes: int):
        self.label = label
        self.num_classes = num_classes
        super().__init__(f"label {label} is not a valid class index for {num_classes} classes")


class IncompatibleInputError(MetricError):
    """Input values have the wrong shape, type or range."""

    def __init__(self, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__(f"expected {expected}, got {got}")


class InvalidConfigurationError(MetricError):
    """A metric was constructed with an unusable configuration."""
