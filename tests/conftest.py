import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Dict, Optional

import pytest
from PySide6.QtGui import QGuiApplication

from backend.errors import StorageWriteError
from backend.interfaces import KeyValueStoreInterface


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app


class MemoryPreferences(KeyValueStoreInterface):
    """Dict-backed preference store; flip fail_writes to simulate an unavailable backend."""

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.fail_writes = False
        self.writes = 0

    def get_string(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set_string(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"cannot write {key}")
        self.writes += 1
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self.values


@pytest.fixture
def memory_prefs() -> MemoryPreferences:
    return MemoryPreferences()
