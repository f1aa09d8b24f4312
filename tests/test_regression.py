"""Tests for regression and clustering metrics."""

import math

import pytest
import torch

from streammetrics import (
    MeanAbsoluteError,
    MeanAbsolutePercentageError,
    MeanSquaredError,
    MutualInfoScore,
    NormalizedRootMeanSquaredError,
    R2Score,
)
from streammetrics.core import InvalidConfigurationError, LengthMismatchError


def test_mse_and_mae():
    mse = MeanSquaredError()
    mae = MeanAbsoluteError()
    for metric in (mse, mae):
        metric.update([2.5, 0.0, 2.0, 8.0], [3.0, -0.5, 2.0, 7.0])
    assert mse.compute() == pytest.approx(0.375)
    assert mae.compute() == pytest.approx(0.5)


def test_mse_accumulates_over_batches():
    metric = MeanSquaredError()
    metric.update([0.0, 1.0], [1.0, 1.0])
    metric.update(torch.tensor([2.0, 5.0]), torch.tensor([0.0, 4.0]))
    # (1 + 0 + 4 + 1) / 4
    assert metric.compute() == pytest.approx(1.5)


def test_mse_example_from_docs():
    metric = MeanSquaredError()
    metric.update([3.0, 5.0, 2.5, 7.0], [2.5, 5.0, 4.0, 8.0])
    assert metric.compute() == pytest.approx(0.875)


def test_mape_relative_error():
    metric = MeanAbsolutePercentageError()
    metric.update([1.0, 10.0, 1e6], [0.9, 15.0, 1.2e6])
    expected = (0.1 / 0.9 + 5.0 / 15.0 + 0.2e6 / 1.2e6) / 3
    assert metric.compute() == pytest.approx(expected)


def test_mape_skips_zero_targets():
    metric = MeanAbsolutePercentageError()
    metric.update([1.0], [0.0])
    assert metric.compute() is None
    metric.update([2.0], [4.0])
    assert metric.compute() == pytest.approx(0.5)


def test_r2_over_batches():
    metric = R2Score()
    metric.update([2.5, 0.0], [3.0, -0.5])
    metric.update([2.0, 8.0], [2.0, 7.0])
    assert metric.compute() == pytest.approx(0.9486081370449679)


def test_r2_targets_on_large_offset():
    offset = 1e9
    metric = R2Score()
    metric.update([offset + 1.0, offset + 2.0], [offset + 1.0, offset + 2.0])
    metric.update([offset + 3.0], [offset + 4.0])
    # SST = 14 / 3 around the mean, SSE = 1
    assert metric.compute() == pytest.approx(1.0 - 3.0 / 14.0)


def test_nrmse_std_on_large_offset():
    offset = 1e9
    metric = NormalizedRootMeanSquaredError(normalization="std")
    metric.update([offset + 1.0, offset + 2.0], [offset + 1.0, offset + 2.0])
    metric.update([offset + 3.0, offset + 5.0], [offset + 3.0, offset + 4.0])
    assert metric.compute() == pytest.approx(0.5 / math.sqrt(1.25))


def test_r2_constant_targets():
    metric = R2Score()
    metric.update([1.0, 2.0], [3.0, 3.0])
    assert metric.compute() == 0.0


@pytest.mark.parametrize(
    "normalization,denom",
    [
        ("mean", 2.5),
        ("range", 3.0),
        ("std", math.sqrt(1.25)),
        ("l2", math.sqrt(30.0)),
    ],
)
def test_nrmse_normalizations(normalization, denom):
    metric = NormalizedRootMeanSquaredError(normalization=normalization)
    metric.update([1.0, 2.0], [1.0, 2.0])
    metric.update([3.0, 5.0], [3.0, 4.0])
    assert metric.compute() == pytest.approx(0.5 / denom)


def test_nrmse_invalid_normalization():
    with pytest.raises(InvalidConfigurationError):
        NormalizedRootMeanSquaredError(normalization="median")


def test_failed_update_keeps_state():
    metric = MeanAbsoluteError()
    metric.update([1.0], [2.0])
    with pytest.raises(LengthMismatchError):
        metric.update([1.0, 2.0], [2.0])
    assert metric.compute() == pytest.approx(1.0)
    assert metric.total == 1


def test_reset_restores_initial_state():
    metric = R2Score()
    metric.update([1.0, 2.0, 3.0], [1.0, 2.5, 2.0])
    metric.reset()
    assert metric.compute() is None
    assert metric.total == 0


def test_mutual_info_identical_and_independent():
    metric = MutualInfoScore()
    metric.update([0, 0, 1, 1], [0, 0, 1, 1])
    assert metric.compute() == pytest.approx(math.log(2))

    metric.reset()
    metric.update([0, 1], [0, 0])
    metric.update([0, 1], [1, 1])
    assert metric.compute() == pytest.approx(0.0, abs=1e-12)


def test_mutual_info_is_label_permutation_invariant():
    a = MutualInfoScore()
    b = MutualInfoScore()
    a.update([0, 0, 1, 2, 2, 2], [1, 1, 0, 0, 2, 2])
    b.update([5, 5, 3, 4, 4, 4], [1, 1, 0, 0, 2, 2])
    assert a.compute() == pytest.approx(b.compute())


if __name__ == "__main__":
    test_mse_and_mae()
    test_mse_accumulates_over_batches()
    test_mse_example_from_docs()
    test_mape_relative_error()
    test_mape_skips_zero_targets()
    test_r2_over_batches()
    test_r2_targets_on_large_offset()
    test_r2_constant_targets()
    test_failed_update_keeps_state()
    test_mutual_info_identical_and_independent()
    print("All regression tests passed!")
