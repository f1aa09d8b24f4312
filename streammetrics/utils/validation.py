"""Shared batch validation.

Every helper here only inspects its inputs; metrics call them on the whole
batch before touching their own state.
"""

from __future__ import annotations

from typing import Sequence

import torch
from torch import Tensor

from ..core.errors import (
    EmptyInputError,
    IncompatibleInputError,
    InvalidConfigurationError,
    InvalidLabelError,
    LengthMismatchError,
)


def as_float_tensor(values, name: str = "values") -> Tensor:
    """Convert a sequence or tensor to a finite 1-D-or-more float64 CPU tensor."""
    if isinstance(values, Tensor):
        tensor = values.detach().cpu()
        if tensor.is_complex() or tensor.dtype == torch.bool:
            raise IncompatibleInputError(f"real-valued {name}", str(tensor.dtype))
        tensor = tensor.to(torch.float64)
    else:
        try:
            tensor = torch.as_tensor(values, dtype=torch.float64)
        except (TypeError, ValueError, RuntimeError) as exc:
            raise IncompatibleInputError(f"numeric {name}", type(values).__name__) from exc
    if tensor.dim() == 0:
        raise IncompatibleInputError(f"a batch of {name}", "a scalar")
    if not torch.isfinite(tensor).all():
        raise IncompatibleInputError(f"finite {name}", "nan or inf")
    return tensor


def as_label_tensor(values, name: str = "targets") -> Tensor:
    """Convert integral class labels to an int64 tensor.

    Float inputs are accepted as long as every value is a whole number.
    """
    tensor = as_float_tensor(values, name)
    if not torch.equal(tensor, tensor.round()):
        raise IncompatibleInputError(f"integer {name}", "fractional values")
    return tensor.to(torch.long)


def check_same_length(predictions, targets) -> int:
    """Return the shared batch size, rejecting empty or mismatched batches."""
    num_preds = len(predictions)
    num_targets = len(targets)
    if num_preds != num_targets:
        raise LengthMismatchError(num_preds, num_targets)
    if num_preds == 0:
        raise EmptyInputError()
    return num_preds


def verify_range(values: Tensor, low: float, high: float, name: str = "values") -> None:
    """Raise unless every element lies in ``[low, high]``."""
    if values.numel() == 0:
        return
    bad = (values < low) | (values > high)
    if bad.any():
        first = values[bad].flatten()[0].item()
        raise IncompatibleInputError(f"{name} within [{low}, {high}]", f"{first}")


def verify_labels(labels: Tensor, num_classes: int) -> None:
    """Raise ``InvalidLabelError`` for the first label outside ``[0, num_classes)``."""
    bad = (labels < 0) | (labels >= num_classes)
    if bad.any():
        raise InvalidLabelError(labels[bad].flatten()[0].item(), num_classes)


def verify_strings(values: Sequence, name: str = "values") -> None:
    for value in values:
        if not isinstance(value, str):
            raise IncompatibleInputError(f"{name} of type str", type(value).__name__)


def check_text_batch(predictions: Sequence[str], targets: Sequence) -> int:
    """Validate a batch of candidate strings against per-candidate targets.

    A bare string is rejected on either side; it would otherwise be read as
    a sequence of one-character candidates.
    """
    for name, values in (("predictions", predictions), ("targets", targets)):
        if isinstance(values, str):
            raise IncompatibleInputError(f"a sequence of {name}", "a single str")
    size = check_same_length(predictions, targets)
    verify_strings(predictions, "predictions")
    return size


def check_choice(value: str, choices, option: str) -> str:
    """Validate an enum-like configuration option at construction time."""
    if value not in choices:
        raise InvalidConfigurationError(
            f"{option} must be one of {sorted(choices)}, got {value!r}"
        )
    return value


def check_positive(value: int, option: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(f"{option} must be a positive integer, got {value!r}")
    return value
