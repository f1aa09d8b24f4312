"""Abstract base class for incremental metrics."""

from abc import ABC, abstractmethod

from torch import Tensor


class BaseMetric(ABC):
    """Base class that every metric must inherit from.

    Metrics accumulate sufficient statistics over batches, then compute the
    current value from those statistics alone. Subclasses set ``name`` to the
    key used when reporting results.
    """

    name: str = "metric"

    def __init__(self):
        self.reset()

    @abstractmethod
    def update(self, predictions, targets) -> None:
        """Accumulate a batch of predictions and targets.

        Raises:
            MetricError: if the batch is invalid. State is left untouched.
        """

    @abstractmethod
    def compute(self):
        """Compute the current value from all accumulated data.

        Returns:
            the metric value, or None when nothing has been accumulated or
            the value is undefined for the data seen so far.
        """

    @abstractmethod
    def reset(self) -> None:
        """Reset internal state for a new evaluation run."""

    def compute_dict(self) -> dict[str, float]:
        """Return ``compute()`` as a flat name -> float mapping."""
        value = self.compute()
        if value is None:
            return {}
        if isinstance(value, Tensor):
            if value.dim() == 0:
                return {self.name: value.item()}
            flat = value.flatten().tolist()
            if value.dim() == 1:
                return {f"{self.name}_class_{i}": float(v) for i, v in enumerate(flat)}
            cols = value.shape[-1]
            return {f"{self.name}_{i // cols}_{i % cols}": float(v) for i, v in enumerate(flat)}
        return {self.name: float(value)}

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
