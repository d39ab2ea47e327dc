"""A (2 row) x (3 col) affine 2D transformation matrix.

String format is CSS-like `matrix(a, b, c, d, e, f)`, acting as

    (x, y) -> (a * x + c * y + e, b * x + d * y + f)
"""

import math
from typing import Any, List, Sequence

from ..errors import MatrixNotInvertibleError
from .polygon import format_number, round_half_up, round_to_places
from .vect import Vect

INVERTIBLE_EPSILON = 1e-14


class Mat:
    """Mutable affine matrix; mutators return `self`."""

    def __init__(self, source: Any = None):
        self.a = 1.0
        self.b = 0.0
        self.c = 0.0
        self.d = 1.0
        self.e = 0.0
        self.f = 0.0
        self.set_matrix_value(source)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mat):
            return NotImplemented
        return self.to_array() == other.to_array()

    def __repr__(self) -> str:
        return f"Mat({self.to_array()!r})"

    def __str__(self) -> str:
        return "matrix(" + ", ".join(format_number(v) for v in self.to_array()) + ")"

    @property
    def determinant(self) -> float:
        """Determinant of the 2x2 linear part."""
        return self.a * self.d - self.b * self.c

    @property
    def is_identity(self) -> bool:
        return (
            self.a == 1 and self.b == 0
            and self.c == 0 and self.d == 1
            and self.e == 0 and self.f == 0
        )

    @property
    def is_invertible(self) -> bool:
        return abs(self.determinant) >= INVERTIBLE_EPSILON

    def clone(self) -> "Mat":
        return Mat(self.to_array())

    def feed_from_array(self, values: Sequence[float]) -> "Mat":
        a, b, c, d, e, f = values
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.e = e
        self.f = f
        return self

    def get_inverse_matrix(self) -> "Mat":
        """New matrix undoing this one; `self` is unchanged.

        Raises:
            MatrixNotInvertibleError: if the matrix is singular and not the identity.
        """
        if self.is_identity:
            return Mat()
        if not self.is_invertible:
            raise MatrixNotInvertibleError(f"Matrix is not invertible: {self}")

        a, b, c, d, e, f = self.to_array()
        dt = a * d - b * c
        return Mat([
            d / dt,
            -b / dt,
            -c / dt,
            a / dt,
            (c * f - d * e) / dt,
            -(a * f - b * e) / dt,
        ])

    def post_multiply(self, other) -> "Mat":
        """Compute `other * self`: apply `self` first, then `other`."""
        a, b, c, d, e, f = _as_array(other)
        return self.feed_from_array([
            a * self.a + c * self.b,
            b * self.a + d * self.b,
            a * self.c + c * self.d,
            b * self.c + d * self.d,
            a * self.e + c * self.f + e,
            b * self.e + d * self.f + f,
        ])

    def pre_multiply(self, other) -> "Mat":
        """Compute `self * other`: apply `other` first, then `self`."""
        a, b, c, d, e, f = _as_array(other)
        return self.feed_from_array([
            self.a * a + self.c * b,
            self.b * a + self.d * b,
            self.a * c + self.c * d,
            self.b * c + self.d * d,
            self.a * e + self.c * f + self.e,
            self.b * e + self.d * f + self.f,
        ])

    def precision(self, dp: int) -> "Mat":
        return self.feed_from_array([round_to_places(v, dp) for v in self.to_array()])

    def set_identity(self) -> "Mat":
        return self.feed_from_array([1.0, 0.0, 0.0, 1.0, 0.0, 0.0])

    def set_matrix_value(self, source: Any = None) -> "Mat":
        """Accepts `matrix(a, b, c, d, e, f)`, six numbers, or anything with fields a..f."""
        if source is None:
            return self
        if isinstance(source, str):
            # Only comma separators are understood
            values = source.strip()[len("matrix("):-len(")")].split(",")
            return self.feed_from_array([float(v) for v in values])
        if isinstance(source, (list, tuple)):
            return self.feed_from_array([float(v) for v in source])
        if isinstance(source, dict):
            return self.feed_from_array([float(source[k]) for k in "abcdef"])
        return self.feed_from_array([float(getattr(source, k)) for k in "abcdef"])

    def set_rotation(self, radians: float) -> "Mat":
        return self.feed_from_array([
            math.cos(radians),
            math.sin(radians),
            -math.sin(radians),
            math.cos(radians),
            0.0,
            0.0,
        ])

    def set_rotation_about(self, radians: float, point) -> "Mat":
        """Rotate about `point`: translate(-point), rotate, translate(+point)."""
        self.feed_from_array([1.0, 0.0, 0.0, 1.0, -point.x, -point.y])
        self.post_multiply(Mat().set_rotation(radians))
        return self.translate(point.x, point.y)

    def to_array(self) -> List[float]:
        return [self.a, self.b, self.c, self.d, self.e, self.f]

    def transform_angle(self, radians: float) -> float:
        """Action on the unit vector at `radians`, as an angle in (-pi, pi]."""
        unit = Vect(math.cos(radians), math.sin(radians))
        self.transform_sans_translate(unit)
        return math.atan2(unit.y, unit.x)

    def transform_degrees(self, degrees: float) -> int:
        """Like `transform_angle` in degrees, rounded into [0, 360)."""
        new_degrees = math.degrees(self.transform_angle(math.radians(degrees)))
        if new_degrees < 0:
            new_degrees += 360
        return int(round_half_up(new_degrees)) % 360

    def transform_point(self, v):
        """Transform `v` in place and return it."""
        x = self.a * v.x + self.c * v.y + self.e
        y = self.b * v.x + self.d * v.y + self.f
        v.x = x
        v.y = y
        return v

    def transform_sans_translate(self, v):
        """Transform `v` in place ignoring translation, and return it."""
        x = self.a * v.x + self.c * v.y
        y = self.b * v.x + self.d * v.y
        v.x = x
        v.y = y
        return v

    def translate(self, dx: float, dy: float) -> "Mat":
        self.e += dx
        self.f += dy
        return self


def _as_array(value) -> Sequence[float]:
    if isinstance(value, Mat):
        return value.to_array()
    return list(value)
