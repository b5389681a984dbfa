# backend/interfaces.py

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from backend.entity import Note, DrawingPoint


class KeyValueStoreInterface(ABC):
    """字符串键值偏好存储"""

    @abstractmethod
    def get_string(self, key: str) -> Optional[str]:
        """不存在时返回 None"""
        pass

    @abstractmethod
    def set_string(self, key: str, value: str) -> None:
        """一次性覆盖写入，失败时抛出 StorageWriteError"""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    @abstractmethod
    def contains(self, key: str) -> bool:
        pass


class NoteStorageInterface(ABC):
    @abstractmethod
    def load_all(self) -> List[Note]:
        pass

    @abstractmethod
    def save_all(self, notes: Sequence[Note]) -> None:
        pass

    @abstractmethod
    def add(self, note: Note) -> None:
        pass

    @abstractmethod
    def update(self, note: Note) -> bool:
        """
        按 id 覆盖更新一条笔记
        :return: 找不到对应 id 时返回 False，且不做任何写入
        """
        pass

    @abstractmethod
    def remove(self, note_id: str) -> int:
        """删除所有匹配 id 的笔记，返回删除数量"""
        pass

    @abstractmethod
    def get(self, note_id: str) -> Optional[Note]:
        pass


class FileStoreInterface(ABC):
    @abstractmethod
    def ensure_notes_directory(self) -> str:
        pass

    @abstractmethod
    def store_image(self, source_path: str) -> str:
        pass

    @abstractmethod
    def store_drawing(self, points: Sequence[DrawingPoint]) -> str:
        pass

    @abstractmethod
    def delete_file(self, path: str) -> bool:
        pass
