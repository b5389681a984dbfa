# ui/worker.py

from typing import Sequence
from PySide6.QtCore import QThread, Signal
from backend.entity import DrawingPoint, Note
from backend.interfaces import FileStoreInterface, NoteStorageInterface


class LoadNotesWorker(QThread):
    """后台加载全部笔记"""
    # 信号: (笔记列表, 错误信息)
    finished_signal = Signal(object, str)

    def __init__(self, storage: NoteStorageInterface):
        super().__init__()
        self.storage = storage

    def run(self):
        try:
            self.finished_signal.emit(self.storage.load_all(), "")
        except Exception as e:
            self.finished_signal.emit([], str(e))


class SaveWorker(QThread):
    """
    后台保存线程
    职责：接收一个新 Note 和 Storage，在后台追加保存
    """
    # 信号：(是否成功, 提示信息)
    finished_signal = Signal(bool, str)

    def __init__(self, storage: NoteStorageInterface, note: Note):
        super().__init__()
        self.storage = storage
        self.note = note

    def run(self):
        try:
            self.storage.add(self.note)
            self.finished_signal.emit(True, "Saved successfully")
        except Exception as e:
            self.finished_signal.emit(False, str(e))


class UpdateWorker(QThread):
    """更新 Note"""
    finished_signal = Signal(bool, str)

    def __init__(self, storage: NoteStorageInterface, note: Note):
        super().__init__()
        self.storage = storage
        self.note = note

    def run(self):
        try:
            if self.storage.update(self.note):
                self.finished_signal.emit(True, "Updated successfully")
            else:
                self.finished_signal.emit(False, "Note not found")
        except Exception as e:
            self.finished_signal.emit(False, str(e))


class DeleteWorker(QThread):
    finished_signal = Signal(bool, str)

    def __init__(self, storage: NoteStorageInterface, note_id: str):
        super().__init__()
        self.storage = storage
        self.note_id = note_id

    def run(self):
        try:
            removed = self.storage.remove(self.note_id)
            self.finished_signal.emit(True, f"Deleted {removed} note(s)")
        except Exception as e:
            self.finished_signal.emit(False, str(e))


class StoreImageWorker(QThread):
    """复制图片到笔记目录"""
    # 信号: (新路径, 错误信息)
    finished_signal = Signal(str, str)

    def __init__(self, file_store: FileStoreInterface, source_path: str):
        super().__init__()
        self.file_store = file_store
        self.source_path = source_path

    def run(self):
        try:
            self.finished_signal.emit(self.file_store.store_image(self.source_path), "")
        except Exception as e:
            self.finished_signal.emit("", str(e))


class StoreDrawingWorker(QThread):
    finished_signal = Signal(str, str)

    def __init__(self, file_store: FileStoreInterface, points: Sequence[DrawingPoint]):
        super().__init__()
        self.file_store = file_store
        self.points = list(points)

    def run(self):
        try:
            self.finished_signal.emit(self.file_store.store_drawing(self.points), "")
        except Exception as e:
            self.finished_signal.emit("", str(e))
