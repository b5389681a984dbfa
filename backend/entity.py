# backend/entity.py

import uuid
import datetime
from dataclasses import dataclass, field, replace
from typing import List, Dict, Optional, Any


def new_id() -> str:
    return uuid.uuid4().hex


def _parse_time(value: Any) -> datetime.datetime:
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be an ISO-8601 string, got {type(value).__name__}")
    return datetime.datetime.fromisoformat(value)


def _require_str(data: Dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


@dataclass
class Attachment:
    """
    笔记附件 (图片 / 手绘)
    path 由 FileStore 负责，这里只保存引用
    """
    path: str
    file_name: str
    is_image: bool = True
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "path": self.path,
            "fileName": self.file_name,
            "isImage": self.is_image,
        }

    @classmethod
    def from_dict(cls, data: dict):
        is_image = data["isImage"]
        if not isinstance(is_image, bool):
            raise TypeError("'isImage' must be a boolean")
        return cls(
            id=_require_str(data, "id"),
            path=_require_str(data, "path"),
            file_name=_require_str(data, "fileName"),
            is_image=is_image,
        )


@dataclass
class Note:
    """
    笔记实体类
    id 和 created_at 创建后不可变，修改请使用 copy_with
    """
    title: str
    content: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    id: str = field(default_factory=new_id)
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)
    updated_at: Optional[datetime.datetime] = None

    def copy_with(self, title: Optional[str] = None, content: Optional[str] = None,
                  attachments: Optional[List[Attachment]] = None) -> "Note":
        """复制一份工作副本，保留 id / created_at，并刷新 updated_at"""
        return replace(
            self,
            title=self.title if title is None else title,
            content=self.content if content is None else content,
            attachments=list(self.attachments if attachments is None else attachments),
            updated_at=datetime.datetime.now(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
            # 没有更新时间时显式写 null，而不是省略字段
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "attachments": [a.to_dict() for a in self.attachments],
        }

    @classmethod
    def from_dict(cls, data: dict):
        updated_raw = data.get("updatedAt")
        attachments_data = data.get("attachments") or []

        return cls(
            id=_require_str(data, "id"),
            title=_require_str(data, "title"),
            content=_require_str(data, "content"),
            created_at=_parse_time(data["createdAt"]),
            updated_at=_parse_time(updated_raw) if updated_raw is not None else None,
            attachments=[Attachment.from_dict(item) for item in attachments_data],
        )


@dataclass(frozen=True)
class StrokeStyle:
    color: str = "#000000"
    width: float = 3.0


@dataclass(frozen=True)
class DrawingPoint:
    """手绘采样点：坐标 + 该点之后线段的笔触"""
    x: float
    y: float
    style: StrokeStyle = StrokeStyle()


@dataclass
class DrawingSketch:
    points: List[DrawingPoint]
    id: str = field(default_factory=new_id)
    file_name: str = field(default_factory=lambda: f"drawing_{new_id()}.png")
    saved_path: Optional[str] = None

    def to_attachment(self) -> Attachment:
        if not self.saved_path:
            raise ValueError("sketch has not been saved yet")
        return Attachment(id=self.id, path=self.saved_path, file_name=self.file_name, is_image=True)
