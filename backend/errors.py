# backend/errors.py


class NoteStoreError(RuntimeError):
    pass


class StorageWriteError(NoteStoreError):
    """偏好存储写入失败 (磁盘满 / 无权限 / 文件格式错误)"""
    pass


class NoteDecodeError(NoteStoreError):
    """已保存的笔记列表无法解析，raw 保留原始内容以便恢复"""

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw


class NoteValidationError(ValueError):
    pass
