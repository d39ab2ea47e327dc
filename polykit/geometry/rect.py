"""Axis-aligned rectangle."""

from dataclasses import dataclass
from typing import Any, Dict, List

from .vect import Vect


@dataclass
class Rect:
    """Rectangle with top-left corner (x, y) in y-down coordinates."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Vect:
        return Vect(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def json(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @property
    def points(self) -> List[Vect]:
        """Corners, starting at (x, y) and heading along the x axis first."""
        return [
            Vect(self.x, self.y),
            Vect(self.x + self.width, self.y),
            Vect(self.x + self.width, self.y + self.height),
            Vect(self.x, self.y + self.height),
        ]

    def contains(self, p) -> bool:
        """Inclusive of the boundary."""
        return (
            self.x <= p.x <= self.x + self.width
            and self.y <= p.y <= self.y + self.height
        )

    @staticmethod
    def from_json(value: Any) -> "Rect":
        if isinstance(value, dict):
            return Rect(value["x"], value["y"], value["width"], value["height"])
        return Rect(value.x, value.y, value.width, value.height)

    @staticmethod
    def from_points(*points) -> "Rect":
        if not points:
            return Rect()
        min_x = min(p.x for p in points)
        max_x = max(p.x for p in points)
        min_y = min(p.y for p in points)
        max_y = max(p.y for p in points)
        return Rect(min_x, min_y, max_x - min_x, max_y - min_y)
