"""
Sample datasets behind a fetch-by-key interface.

Routers never read sample files directly; they ask a DataProvider for a key.
JsonFileDataProvider serves data/samples/<key>.json. A provider backed by a
real feed (weather API, mandi prices, inference service) only has to
implement fetch() and be returned from get_data_provider().
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any

from .config import settings

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_DIR = os.path.join(os.path.dirname(__file__), "..", "data", "samples")


class DataProvider(ABC):

    @abstractmethod
    def fetch(self, key: str) -> Any:
        """Return the dataset stored under `key`. Raises KeyError if unknown."""

    def keys(self) -> list[str]:
        return []


class JsonFileDataProvider(DataProvider):
    """Reads <directory>/<key>.json once and serves copies from memory."""

    def __init__(self, directory: str = None):
        self.directory = os.path.abspath(directory or settings.SAMPLE_DATA_DIR or DEFAULT_SAMPLE_DIR)
        self._cache: dict[str, Any] = {}

    def fetch(self, key: str) -> Any:
        if key not in self._cache:
            if not key.replace("_", "").isalnum():
                raise KeyError(key)
            path = os.path.join(self.directory, f"{key}.json")
            try:
                with open(path, encoding="utf-8") as f:
                    self._cache[key] = json.load(f)
            except FileNotFoundError:
                raise KeyError(key) from None
            logger.info("Loaded sample dataset '%s' from %s", key, path)
        # Callers may mutate what they get back
        return deepcopy(self._cache[key])

    def keys(self) -> list[str]:
        if not os.path.isdir(self.directory):
            return []
        return sorted(name[:-5] for name in os.listdir(self.directory) if name.endswith(".json"))


class InMemoryDataProvider(DataProvider):
    """Provider over a plain dict. Handy for tests and fixtures."""

    def __init__(self, datasets: dict):
        self.datasets = dict(datasets)

    def fetch(self, key: str) -> Any:
        return deepcopy(self.datasets[key])

    def keys(self) -> list[str]:
        return sorted(self.datasets)


_provider = None


def get_data_provider() -> DataProvider:
    """FastAPI dependency. Override via app.dependency_overrides to swap sources."""
    global _provider
    if _provider is None:
        _provider = JsonFileDataProvider()
    return _provider
