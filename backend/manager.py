import os
from typing import List, Optional, Sequence, Union
from backend.drawing import DrawingRecorder
from backend.entity import Attachment, DrawingPoint, DrawingSketch, Note
from backend.errors import NoteValidationError
from backend.interfaces import FileStoreInterface, NoteStorageInterface
from utils import get_logger

logger = get_logger()


class NoteManager:
    """
    核心业务控制器
    UI -> Note / Attachment -> Storage / FileStore
    """

    def __init__(self, storage: NoteStorageInterface, file_store: FileStoreInterface):
        self.storage = storage
        self.file_store = file_store

    def list_notes(self) -> List[Note]:
        return self.storage.load_all()

    def get_note(self, note_id: str) -> Optional[Note]:
        return self.storage.get(note_id)

    def search_notes(self, query: str) -> List[Note]:
        """只按标题做不区分大小写的包含匹配"""
        notes = self.storage.load_all()
        needle = query.lower()
        if not needle:
            return notes
        return [n for n in notes if needle in n.title.lower()]

    def create_note(self, title: str, content: str = "",
                    attachments: Optional[Sequence[Attachment]] = None) -> Optional[Note]:
        attachments = list(attachments or [])

        # 什么都没填，直接放弃，不算错误
        if not title and not content and not attachments:
            return None
        if not title:
            raise NoteValidationError("Title is required")

        note = Note(title=title, content=content, attachments=attachments)
        self.storage.add(note)
        logger.info(f"📝 Note created: {note.id}")
        return note

    def edit_note(self, note: Note, title: Optional[str] = None, content: Optional[str] = None,
                  attachments: Optional[Sequence[Attachment]] = None) -> Note:
        if title == "":
            raise NoteValidationError("Title is required")

        updated = note.copy_with(
            title=title,
            content=content,
            attachments=list(attachments) if attachments is not None else None,
        )
        if not self.storage.update(updated):
            logger.warning(f"⚠️ Edit skipped: note {note.id} no longer exists")
        return updated

    def delete_note(self, note_id: str, delete_files: bool = False) -> int:
        note = self.storage.get(note_id) if delete_files else None
        removed = self.storage.remove(note_id)

        if note:
            for attachment in note.attachments:
                self.file_store.delete_file(attachment.path)
        return removed

    def attach_image(self, source_path: str, file_name: Optional[str] = None) -> Attachment:
        saved_path = self.file_store.store_image(source_path)
        return Attachment(
            path=saved_path,
            file_name=file_name or os.path.basename(source_path),
            is_image=True,
        )

    def attach_drawing(self, drawing: Union[DrawingRecorder, Sequence[DrawingPoint]]) -> Attachment:
        if isinstance(drawing, DrawingRecorder):
            sketch = drawing.to_sketch()
        else:
            sketch = DrawingSketch(points=list(drawing))

        if not sketch.points:
            raise NoteValidationError("Please draw something first")

        sketch.saved_path = self.file_store.store_drawing(sketch.points)
        return sketch.to_attachment()

    def remove_attachment(self, note: Note, attachment_id: str) -> Note:
        """返回去掉该附件的工作副本，需要调用 edit_note / update 才会保存"""
        remaining = [a for a in note.attachments if a.id != attachment_id]
        return note.copy_with(attachments=remaining)
