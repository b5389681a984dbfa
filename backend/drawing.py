# backend/drawing.py

from typing import List, Sequence
from PySide6.QtCore import Qt, QPointF
from PySide6.QtGui import QColor, QPainter, QPen
from backend.entity import DrawingPoint, DrawingSketch, StrokeStyle


class DrawingRecorder:
    """
    手绘采集器
    职责：按拖动顺序记录 (坐标, 笔触) 采样点，不做任何平滑处理
    """

    def __init__(self, color: str = "#000000", width: float = 3.0):
        self.style = StrokeStyle(color=color, width=width)
        self._points: List[DrawingPoint] = []

    def set_color(self, color: str):
        self.style = StrokeStyle(color=color, width=self.style.width)

    def set_width(self, width: float):
        self.style = StrokeStyle(color=self.style.color, width=width)

    def pen_down(self, x: float, y: float):
        self._points.append(DrawingPoint(x, y, self.style))

    def pen_move(self, x: float, y: float):
        self._points.append(DrawingPoint(x, y, self.style))

    def pen_up(self):
        # 抬笔记为原点处的一个采样点，回放时会多出一条连向 (0, 0) 的线段
        self._points.append(DrawingPoint(0.0, 0.0, self.style))

    def clear(self):
        self._points.clear()

    def is_empty(self) -> bool:
        return not self._points

    @property
    def points(self) -> List[DrawingPoint]:
        return list(self._points)

    def to_sketch(self) -> DrawingSketch:
        return DrawingSketch(points=self.points)


def make_pen(style: StrokeStyle) -> QPen:
    pen = QPen(QColor(style.color))
    pen.setWidthF(style.width)
    pen.setCapStyle(Qt.RoundCap)
    pen.setJoinStyle(Qt.RoundJoin)
    return pen


def paint_points(painter: QPainter, points: Sequence[DrawingPoint]):
    """相邻采样点连线，每段使用前一个点的笔触"""
    for current, following in zip(points, points[1:]):
        painter.setPen(make_pen(current.style))
        painter.drawLine(QPointF(current.x, current.y), QPointF(following.x, following.y))
