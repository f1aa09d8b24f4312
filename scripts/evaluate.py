"""Evaluate stored predictions with a config-driven set of metrics.

Usage:
    python scripts/evaluate.py --config configs/classification.yaml --predictions outputs/preds.jsonl

Each line of the predictions file is a JSON object holding one prediction and
its target, under the keys configured in the `evaluation:` section
(default "prediction" / "target").
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from streammetrics.config import EvaluationConfig, build_metrics, load_config
from streammetrics.core.errors import MetricError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def iter_batches(path: Path, config: EvaluationConfig):
    """Yield (predictions, targets) lists of at most batch_size records."""
    predictions, targets = [], []
    with open(path) as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                continue
            record = json.loads(line)
            try:
                predictions.append(record[config.prediction_key])
                targets.append(record[config.target_key])
            except KeyError as exc:
                raise KeyError(f"{path}:{line_no} is missing key {exc}") from None
            if len(predictions) == config.batch_size:
                yield predictions, targets
                predictions, targets = [], []
    if predictions:
        yield predictions, targets


def main():
    parser = argparse.ArgumentParser(description="Evaluate predictions with streaming metrics")
    parser.add_argument("--config", type=str, required=True, help="Path to YAML config file")
    parser.add_argument("--predictions", type=str, required=True, help="Path to JSON-lines predictions")
    args = parser.parse_args()

    config = load_config(args.config)
    eval_config = EvaluationConfig.from_dict(config.get("evaluation", {}))
    metrics = build_metrics(config)

    for batch_predictions, batch_targets in tqdm(iter_batches(Path(args.predictions), eval_config), desc="Evaluating"):
        for m in metrics:
            try:
                m.update(batch_predictions, batch_targets)
            except MetricError as exc:
                logger.error(f"{m!r} rejected a batch: {exc}")
                return 1

    results = {}
    for m in metrics:
        results.update(m.compute_dict())
    if not results:
        logger.warning("No metric produced a value; is the predictions file empty?")
    for name, value in results.items():
        logger.info(f"{name}: {value:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
