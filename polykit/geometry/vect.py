"""Two dimensional coordinate."""

import logging
import math
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .polygon import format_number, round_half_up, round_to_places

logger = logging.getLogger(__name__)


@dataclass
class Vect:
    """A mutable 2D point/vector.

    Mutating methods return `self` so calls can be chained. Methods taking
    another point accept anything exposing `x` and `y`.
    """
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"{format_number(self.x)},{format_number(self.y)}"

    @property
    def angle(self) -> float:
        """Radians."""
        return math.atan2(self.y, self.x)

    @property
    def coord(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def degrees(self) -> float:
        """2 decimal places."""
        return round_half_up(100 * math.degrees(self.angle)) / 100

    @property
    def json(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    @staticmethod
    def zero() -> "Vect":
        return Vect(0.0, 0.0)

    def add(self, v) -> "Vect":
        return self.translate(v.x, v.y)

    def add_scaled(self, v, s: float) -> "Vect":
        self.x += v.x * s
        self.y += v.y * s
        return self

    def angle_to(self, p) -> float:
        """Radians, clockwise from east (y down)."""
        return math.atan2(p.y - self.y, p.x - self.x)

    @staticmethod
    def average(vectors: Sequence) -> "Vect":
        total = Vect.zero()
        for v in vectors:
            total.add(v)
        if len(vectors) > 0:
            total.scale(1 / len(vectors))
        return total

    def clone(self) -> "Vect":
        return Vect(self.x, self.y)

    def copy(self, p) -> "Vect":
        return self.set(p.x, p.y)

    @staticmethod
    def distance_between(p, q) -> float:
        return math.sqrt((q.x - p.x) ** 2 + (q.y - p.y) ** 2)

    def distance_to(self, p) -> float:
        return math.hypot(p.x - self.x, p.y - self.y)

    def distance_to_squared(self, p) -> float:
        return (p.x - self.x) ** 2 + (p.y - self.y) ** 2

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y

    def dot_args(self, ox: float, oy: float) -> float:
        return self.x * ox + self.y * oy

    def equals(self, p) -> bool:
        return self.x == p.x and self.y == p.y

    def equals_almost(self, p, error: float = sys.float_info.epsilon) -> bool:
        return abs(self.x - p.x) <= error and abs(self.y - p.y) <= error

    @staticmethod
    def from_json(value: Any, y: Optional[float] = None) -> "Vect":
        """Build from `(x, y)` numbers, a `{"x", "y"}` mapping, a pair, or an object with x/y."""
        if isinstance(value, (int, float)):
            return Vect(float(value), float(y if y is not None else 0.0))
        if isinstance(value, dict):
            return Vect(float(value["x"]), float(value["y"]))
        if isinstance(value, (list, tuple)):
            return Vect(float(value[0]), float(value[1]))
        return Vect(float(value.x), float(value.y))

    @staticmethod
    def from_coords(coords: Sequence[float]) -> List["Vect"]:
        """Pair up a flat `[x0, y0, x1, y1, ...]` list.

        A trailing unpaired value `z` becomes `Vect(z, z)`.
        """
        return [
            Vect(coords[i], coords[i + 1] if i + 1 < len(coords) else coords[i])
            for i in range(0, len(coords), 2)
        ]

    @staticmethod
    def is_vect_json(value: Any) -> bool:
        if isinstance(value, dict):
            return isinstance(value.get("x"), (int, float)) and isinstance(value.get("y"), (int, float))
        return isinstance(getattr(value, "x", None), (int, float)) and \
            isinstance(getattr(value, "y", None), (int, float))

    @staticmethod
    def top_left(*vectors) -> "Vect":
        """Minimal y, ties broken by minimal x."""
        agg = Vect(math.inf, math.inf)
        for v in vectors:
            if v.y < agg.y or (v.y == agg.y and v.x < agg.x):
                agg.copy(v)
        return agg

    def normalize(self, new_length: float = 1) -> "Vect":
        length = self.length
        if length > 0:
            return self.scale(new_length / length)
        logger.error("Cannot normalize Vect '%s' to length '%s'", self, new_length)
        return self

    def precision(self, dp: int) -> "Vect":
        """Snap to `dp` decimal places."""
        return self.set(round_to_places(self.x, dp), round_to_places(self.y, dp))

    def rotate(self, radians: float) -> "Vect":
        x, y = self.x, self.y
        self.x = math.cos(radians) * x - math.sin(radians) * y
        self.y = math.sin(radians) * x + math.cos(radians) * y
        return self

    def round(self) -> "Vect":
        self.x = round_half_up(self.x)
        self.y = round_half_up(self.y)
        return self

    def scale(self, sx: float, sy: Optional[float] = None) -> "Vect":
        self.x *= sx
        self.y *= sx if sy is None else sy
        return self

    def set(self, x: float, y: float) -> "Vect":
        self.x = x
        self.y = y
        return self

    def sub(self, v) -> "Vect":
        return self.translate(-v.x, -v.y)

    def sub_vectors(self, p, q) -> "Vect":
        self.x = p.x - q.x
        self.y = p.y - q.y
        return self

    def translate(self, dx: float, dy: float) -> "Vect":
        self.x += dx
        self.y += dy
        return self
