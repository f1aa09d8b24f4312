"""Generic registry for pluggable metric constructors."""

import inspect
import logging
from typing import Callable, Dict

from ..core.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class Registry:
    """A simple string-to-constructor mapping registry.

    Entries are metric classes or factory functions returning a metric.

    Usage:
        REGISTRY = Registry("metrics")

        @REGISTRY.register("accuracy")
        def accuracy(num_classes=1, ...): ...

        metric = REGISTRY.build("accuracy", num_classes=3)
    """

    def __init__(self, name: str):
        self.name = name
        self._registry: Dict[str, Callable] = {}

    def register(self, name: str):
        """Decorator that registers a class or factory under the given name."""
        def decorator(obj):
            if name in self._registry:
                raise ValueError(
                    f"[{self.name}] '{name}' is already registered by {self._registry[name]}"
                )
            self._registry[name] = obj
            return obj
        return decorator

    def get(self, name: str) -> Callable:
        """Retrieve a registered constructor by name."""
        if name not in self._registry:
            raise InvalidConfigurationError(
                f"[{self.name}] '{name}' not found. "
                f"Available: {list(self._registry.keys())}"
            )
        return self._registry[name]

    def build(self, name: str, **options):
        """Construct the entry registered under ``name`` with keyword options.

        Options the constructor does not accept raise InvalidConfigurationError
        instead of a bare TypeError.
        """
        constructor = self.get(name)
        try:
            inspect.signature(constructor).bind(**options)
        except TypeError as exc:
            raise InvalidConfigurationError(f"[{self.name}] bad options for '{name}': {exc}") from exc
        logger.debug(f"Building {self.name} entry '{name}' with options {options}")
        return constructor(**options)

    def list(self) -> list:
        """Return all registered names."""
        return list(self._registry.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._registry
