"""YAML-driven metric configuration.

Example file:

    evaluation:
      batch_size: 64
    metrics:
      - name: accuracy
        num_classes: 3
      - name: auroc
        bin_count: 200
      - name: bleu
        smoothing: exponential
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from .core.base import BaseMetric
from .core.errors import InvalidConfigurationError
from .utils import METRIC_REGISTRY

logger = logging.getLogger(__name__)


@dataclass
class EvaluationConfig:
    """How records are batched and read by the evaluation script."""
    batch_size: int = 32
    prediction_key: str = "prediction"
    target_key: str = "target"

    @classmethod
    def from_dict(cls, d: dict) -> "EvaluationConfig":
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


def load_config(path: str | Path) -> dict:
    with open(path) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise InvalidConfigurationError(f"{path}: top level must be a mapping")
    logger.info(f"Loaded config from {path}")
    return config


def build_metric(entry: dict) -> BaseMetric:
    """Build one metric from a ``{name: ..., <options>}`` mapping."""
    if not isinstance(entry, dict) or "name" not in entry:
        raise InvalidConfigurationError(f"metric entry must be a mapping with a 'name' key, got {entry!r}")
    options = {k: v for k, v in entry.items() if k != "name"}
    return METRIC_REGISTRY.build(entry["name"], **options)


def build_metrics(config: dict) -> list[BaseMetric]:
    entries = config.get("metrics")
    if not entries:
        raise InvalidConfigurationError("config must list at least one entry under 'metrics'")
    metrics = [build_metric(entry) for entry in entries]
    logger.info(f"Built metrics: {', '.join(repr(m) for m in metrics)}")
    return metrics


def load_metrics(path: str | Path) -> list[BaseMetric]:
    return build_metrics(load_config(path))
