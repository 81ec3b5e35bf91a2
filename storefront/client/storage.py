import json
import os
import threading
from typing import Any, Optional


class LocalStore:
    """
    Small persistent key/value store playing the part of browser local storage.

    Values are JSON encoded and the whole mapping is rewritten on each change.
    With no path the store lives in memory only. A missing or unreadable file
    reads as empty.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.RLock()
        self._data = self._read()

    def _read(self) -> dict:
        if not self.path or not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"[ERROR] Ignoring unreadable store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self):
        if not self.path:
            return
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f)
        os.replace(tmp_path, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any):
        with self._lock:
            self._data[key] = value
            self._write()

    def remove(self, *keys: str):
        with self._lock:
            for key in keys:
                self._data.pop(key, None)
            self._write()

    def clear(self):
        with self._lock:
            self._data = {}
            self._write()
