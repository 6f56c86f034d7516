import copy
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self):
        self._data = {}

    def get(self, key):
        value = self._data.get(key)
        return copy.deepcopy(value)

    def set(self, key, value):
        self._data[key] = copy.deepcopy(value)

    def remove(self, key):
        self._data.pop(key, None)


class JsonFileStorage:
    """One JSON file per key under ``directory``; survives process restarts."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key):
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", path, e)
            return None

    def set(self, key, value):
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(value, fh)
        os.replace(tmp, path)

    def remove(self, key):
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
