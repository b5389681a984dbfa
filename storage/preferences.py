# storage/preferences.py

import os
from typing import Optional
from PySide6.QtCore import QSettings
from backend.errors import StorageWriteError
from backend.interfaces import KeyValueStoreInterface


class QtSettingsStore(KeyValueStoreInterface):
    """
    基于 QSettings 的键值偏好存储
    职责：只负责字符串的读写，不关心内容格式
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        parent = os.path.dirname(os.path.abspath(file_path))
        if not os.path.exists(parent):
            os.makedirs(parent)
        self._settings = QSettings(file_path, QSettings.IniFormat)

    def get_string(self, key: str) -> Optional[str]:
        if not self._settings.contains(key):
            return None
        value = self._settings.value(key)
        if value is None:
            return None
        if isinstance(value, list):
            # INI 中未加引号的逗号会被 Qt 拆成列表
            return ", ".join(str(v) for v in value)
        return str(value)

    def set_string(self, key: str, value: str) -> None:
        self._commit(key, lambda s: s.setValue(key, value), f"write '{key}'")

    def remove(self, key: str) -> None:
        self._commit(key, lambda s: s.remove(key), f"remove '{key}'")

    def contains(self, key: str) -> bool:
        return self._settings.contains(key)

    def _reopen(self):
        # status() 只记录第一次错误且不会复位，只能换一个新实例
        self._settings = QSettings(self.file_path, QSettings.IniFormat)

    def _commit(self, key: str, change, action: str):
        if self._settings.status() != QSettings.NoError:
            self._reopen()

        existed = self._settings.contains(key)
        previous = self._settings.value(key) if existed else None

        change(self._settings)
        self._settings.sync()
        status = self._settings.status()
        if status == QSettings.NoError:
            return

        # 写盘失败：内存缓存回滚到旧值，避免读到未保存的数据
        if existed:
            self._settings.setValue(key, previous)
        else:
            self._settings.remove(key)
        self._reopen()
        raise StorageWriteError(f"Failed to {action} in {self.file_path}: {status}")
