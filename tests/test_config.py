"""Tests for YAML-driven metric construction."""

import pytest

from streammetrics import BinnedBinaryAuroc, Bleu, MulticlassAccuracy, build_metric, load_metrics
from streammetrics.config import EvaluationConfig, build_metrics, load_config
from streammetrics.core import InvalidConfigurationError

CONFIG = """
evaluation:
  batch_size: 8
  unused_key: 1
metrics:
  - name: accuracy
    num_classes: 3
    average: micro
  - name: auroc
    bin_count: 20
  - name: bleu
    smoothing: exponential
"""


def test_load_metrics_from_yaml(tmp_path):
    path = tmp_path / "metrics.yaml"
    path.write_text(CONFIG)

    metrics = load_metrics(path)
    assert [type(m) for m in metrics] == [MulticlassAccuracy, BinnedBinaryAuroc, Bleu]
    assert metrics[0].average == "micro"
    assert metrics[1].bins == 20
    assert metrics[2].smoothing == "exponential"


def test_evaluation_config_ignores_unknown_keys(tmp_path):
    path = tmp_path / "metrics.yaml"
    path.write_text(CONFIG)

    eval_config = EvaluationConfig.from_dict(load_config(path)["evaluation"])
    assert eval_config.batch_size == 8
    assert eval_config.prediction_key == "prediction"


def test_built_metrics_are_independent():
    first = build_metric({"name": "mse"})
    second = build_metric({"name": "mse"})
    first.update([1.0], [0.0])
    assert second.compute() is None


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"metrics": []},
        {"metrics": [{"num_classes": 3}]},
        {"metrics": [{"name": "perplexity"}]},
        {"metrics": [{"name": "rouge", "mode": "lcs"}]},
        {"metrics": [{"name": "accuracy", "threshold": 2.0}]},
    ],
)
def test_bad_configs_rejected(config):
    with pytest.raises(InvalidConfigurationError):
        build_metrics(config)


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- accuracy\n- f1\n")
    with pytest.raises(InvalidConfigurationError):
        load_config(path)
