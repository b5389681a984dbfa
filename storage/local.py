# storage/local.py

import json
import threading
from typing import List, Optional, Sequence
from backend.entity import Note
from backend.errors import NoteDecodeError, NoteStoreError
from backend.interfaces import KeyValueStoreInterface, NoteStorageInterface
from utils import get_logger, shorten

logger = get_logger()

DEFAULT_NOTES_KEY = "notes_list"
CORRUPT_POLICIES = ("backup", "discard", "raise")


class LocalNoteStorage(NoteStorageInterface):
    """
    本地笔记持久化
    整个笔记列表序列化为一个 JSON 字符串，存放在偏好存储的同一个 key 下；
    增删改都是 "读全部 -> 内存修改 -> 写全部"
    """

    def __init__(self, prefs: KeyValueStoreInterface, key: str = DEFAULT_NOTES_KEY,
                 on_corrupt: str = "backup"):
        if on_corrupt not in CORRUPT_POLICIES:
            raise ValueError(f"on_corrupt must be one of {CORRUPT_POLICIES}, got {on_corrupt!r}")
        self.prefs = prefs
        self.key = key
        self.on_corrupt = on_corrupt
        self._lock = threading.RLock()

    @property
    def backup_key(self) -> str:
        return f"{self.key}.corrupt"

    def _encode(self, notes: Sequence[Note]) -> str:
        return json.dumps([n.to_dict() for n in notes], ensure_ascii=False)

    def _decode(self, raw: str) -> List[Note]:
        decoded = json.loads(raw)
        if not isinstance(decoded, list):
            raise TypeError(f"expected a JSON array, got {type(decoded).__name__}")
        return [Note.from_dict(item) for item in decoded]

    def load_all(self) -> List[Note]:
        with self._lock:
            try:
                raw = self.prefs.get_string(self.key)
            except NoteStoreError as e:
                logger.error(f"[Local] Load Error: {e}")
                return []

            if raw is None:
                return []

            try:
                return self._decode(raw)
            except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as e:
                return self._handle_corrupt(raw, e)

    def _handle_corrupt(self, raw: str, error: Exception) -> List[Note]:
        if self.on_corrupt == "raise":
            raise NoteDecodeError(f"Stored notes under '{self.key}' cannot be decoded: {error}", raw) from error

        logger.warning(f"⚠️ [Local] Discarding undecodable notes under '{self.key}': {error} (raw: {shorten(raw)})")
        if self.on_corrupt == "backup":
            try:
                self.prefs.set_string(self.backup_key, raw)
                logger.warning(f"💾 [Local] Raw value kept under '{self.backup_key}'")
            except NoteStoreError as e:
                logger.error(f"[Local] Backup Error: {e}")
        return []

    def save_all(self, notes: Sequence[Note]) -> None:
        payload = self._encode(notes)
        with self._lock:
            try:
                self.prefs.set_string(self.key, payload)
            except Exception as e:
                logger.error(f"[Local] Save Error: {e}")
                raise

    def add(self, note: Note) -> None:
        with self._lock:
            notes = self.load_all()
            notes.append(note)
            self.save_all(notes)

    def update(self, note: Note) -> bool:
        with self._lock:
            notes = self.load_all()
            for index, existing in enumerate(notes):
                if existing.id == note.id:
                    notes[index] = note
                    self.save_all(notes)
                    return True

        logger.debug(f"[Local] Update skipped, no note with id {note.id}")
        return False

    def remove(self, note_id: str) -> int:
        with self._lock:
            notes = self.load_all()
            kept = [n for n in notes if n.id != note_id]
            self.save_all(kept)
            return len(notes) - len(kept)

    def get(self, note_id: str) -> Optional[Note]:
        for note in self.load_all():
            if note.id == note_id:
                return note
        return None
