# storage/files.py

import os
import shutil
from typing import Sequence
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter
from backend.drawing import paint_points
from backend.entity import DrawingPoint, new_id
from backend.interfaces import FileStoreInterface
from utils import get_logger

logger = get_logger()

NOTES_DIR_NAME = "notes"
DEFAULT_IMAGE_EXT = ".jpg"


class LocalFileStore(FileStoreInterface):
    """
    附件文件管理
    职责：把选中的图片复制进笔记目录、把手绘栅格化为 PNG，返回稳定的绝对路径
    """

    def __init__(self, base_dir: str = "./my_notes_data", canvas_width: int = 500, canvas_height: int = 500):
        self.base_dir = base_dir
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    @property
    def notes_dir(self) -> str:
        return os.path.abspath(os.path.join(self.base_dir, NOTES_DIR_NAME))

    def ensure_notes_directory(self) -> str:
        path = self.notes_dir
        os.makedirs(path, exist_ok=True)
        return path

    def store_image(self, source_path: str) -> str:
        ext = os.path.splitext(source_path)[1] or DEFAULT_IMAGE_EXT
        target = os.path.join(self.ensure_notes_directory(), f"note_{new_id()}{ext}")
        # 复制而不是移动，原图保持不变
        shutil.copyfile(source_path, target)
        logger.info(f"🖼️ Image stored: {target}")
        return target

    def render_drawing(self, points: Sequence[DrawingPoint]) -> QImage:
        image = QImage(self.canvas_width, self.canvas_height, QImage.Format_ARGB32)
        image.fill(Qt.white)

        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            paint_points(painter, points)
        finally:
            painter.end()
        return image

    def store_drawing(self, points: Sequence[DrawingPoint]) -> str:
        image = self.render_drawing(points)
        target = os.path.join(self.ensure_notes_directory(), f"drawing_{new_id()}.png")
        if not image.save(target, "PNG"):
            raise OSError(f"Failed to write drawing to {target}")
        logger.info(f"✏️ Drawing stored: {target} ({len(points)} points)")
        return target

    def delete_file(self, path: str) -> bool:
        """只删除笔记目录内的文件，目录外的路径一律忽略"""
        target = os.path.abspath(path)
        if os.path.dirname(target) != self.notes_dir or not os.path.isfile(target):
            return False
        os.remove(target)
        logger.info(f"🗑️ Deleted attachment file: {target}")
        return True
