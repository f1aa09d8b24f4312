"""Tests for exact and binned AUROC."""

import pytest
import torch

from streammetrics import BinaryAuroc, BinnedBinaryAuroc
from streammetrics.classification import auroc
from streammetrics.core import IncompatibleInputError, InvalidConfigurationError, InvalidLabelError


def _separable_scores(n=400, seed=0):
    gen = torch.Generator().manual_seed(seed)
    labels = torch.randint(0, 2, (n,), generator=gen)
    scores = 0.35 * labels + 0.65 * torch.rand(n, generator=gen, dtype=torch.float64)
    return scores, labels


def test_exact_auroc_uninformative():
    metric = BinaryAuroc()
    metric.update([0.0, 0.5, 0.7, 0.8], [0, 1, 1, 0])
    assert metric.compute() == pytest.approx(0.5)


def test_exact_auroc_perfect_and_inverted():
    metric = BinaryAuroc()
    metric.update([0.2, 0.9, 0.1, 0.8], [0, 1, 0, 1])
    assert metric.compute() == pytest.approx(1.0)

    metric.reset()
    metric.update([0.2, 0.9, 0.1, 0.8], [1, 0, 1, 0])
    assert metric.compute() == pytest.approx(0.0)


def test_exact_auroc_accepts_raw_logits():
    metric = BinaryAuroc()
    metric.update([-3.2, 4.1, 0.0, 1.5], [0, 1, 0, 1])
    assert metric.compute() == pytest.approx(1.0)


def test_exact_auroc_counts_ranked_pairs():
    metric = BinaryAuroc()
    metric.update([0.9, 0.8, 0.7], [1, 1, 0])
    metric.update([0.4, 0.2], [0, 1])
    # 4 of the 6 positive/negative pairs are ranked correctly
    assert metric.compute() == pytest.approx(2 / 3)
    assert metric.num_samples == 5


def test_tied_scores_give_a_diagonal_step():
    metric = BinaryAuroc()
    metric.update([0.5, 0.5], [1, 0])
    assert metric.compute() == pytest.approx(0.5)

    metric.reset()
    metric.update([0.3, 0.3, 0.3, 0.3], [1, 0, 0, 1])
    assert metric.compute() == pytest.approx(0.5)


def test_exact_auroc_is_order_independent():
    gen = torch.Generator().manual_seed(7)
    scores = torch.round(torch.rand(200, generator=gen) * 10) / 10  # many ties
    labels = torch.randint(0, 2, (200,), generator=gen)

    reference = BinaryAuroc()
    reference.update(scores, labels)
    expected = reference.compute()

    perm = torch.randperm(200, generator=gen)
    shuffled = BinaryAuroc()
    shuffled.update(scores[perm][:50], labels[perm][:50])
    shuffled.update(scores[perm][50:], labels[perm][50:])
    assert shuffled.compute() == pytest.approx(expected, abs=1e-12)


def test_single_class_is_undefined():
    exact = BinaryAuroc()
    binned = BinnedBinaryAuroc(bins=10)
    assert exact.compute() is None
    assert binned.compute() is None
    for metric in (exact, binned):
        metric.update([0.3, 0.6, 0.9], [1, 1, 1])
        assert metric.compute() is None


def test_binned_auroc_matches_distinct_bins():
    metric = BinnedBinaryAuroc(bins=100)
    metric.update([0.9, 0.8, 0.7, 0.4, 0.2], [1, 1, 0, 0, 1])
    assert metric.compute() == pytest.approx(2 / 3)


def test_binned_auroc_includes_one_in_last_bin():
    metric = BinnedBinaryAuroc(bins=4)
    metric.update([1.0, 0.0], [1, 0])
    assert metric.compute() == pytest.approx(1.0)
    assert metric.pos_hist.tolist() == [0, 0, 0, 1]


def test_binned_auroc_converges_to_exact():
    scores, labels = _separable_scores()
    exact = BinaryAuroc()
    exact.update(scores, labels)
    expected = exact.compute()

    errors = {}
    for bins in (10, 1000):
        metric = BinnedBinaryAuroc(bins=bins)
        metric.update(scores, labels)
        errors[bins] = abs(metric.compute() - expected)

    assert errors[1000] < 1e-2
    assert errors[1000] <= errors[10]


def test_binned_memory_does_not_grow():
    scores, labels = _separable_scores(n=100)
    metric = BinnedBinaryAuroc(bins=16)
    for _ in range(5):
        metric.update(scores, labels)
    assert metric.pos_hist.shape == (16,)
    assert metric.pos_hist.sum().item() + metric.neg_hist.sum().item() == 500


def test_binned_rejects_scores_outside_unit_interval():
    metric = BinnedBinaryAuroc()
    with pytest.raises(IncompatibleInputError):
        metric.update([0.5, 1.5], [0, 1])
    assert metric.compute() is None


def test_labels_must_be_binary():
    metric = BinaryAuroc()
    with pytest.raises(InvalidLabelError):
        metric.update([0.1, 0.2], [0, 2])
    assert metric.num_samples == 0


def test_auroc_factory():
    assert isinstance(auroc(), BinaryAuroc)
    binned = auroc(bin_count=50)
    assert isinstance(binned, BinnedBinaryAuroc)
    assert binned.bins == 50
    with pytest.raises(InvalidConfigurationError):
        auroc(bin_count=-1)
    with pytest.raises(InvalidConfigurationError):
        BinnedBinaryAuroc(bins=0)


if __name__ == "__main__":
    test_exact_auroc_uninformative()
    test_exact_auroc_counts_ranked_pairs()
    test_tied_scores_give_a_diagonal_step()
    test_exact_auroc_is_order_independent()
    test_single_class_is_undefined()
    test_binned_auroc_matches_distinct_bins()
    test_binned_auroc_converges_to_exact()
    test_auroc_factory()
    print("All AUROC tests passed!")
