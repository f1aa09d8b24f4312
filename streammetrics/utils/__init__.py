from .registry import Registry

METRIC_REGISTRY = Registry("metrics")

__all__ = ["Registry", "METRIC_REGISTRY"]
