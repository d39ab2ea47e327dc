"""Shared polygons for polykit tests."""

import pytest
from polykit.geometry import Poly, Vect


def _square(x: float, y: float, size: float) -> Poly:
    return Poly([
        Vect(x, y),
        Vect(x + size, y),
        Vect(x + size, y + size),
        Vect(x, y + size),
    ])


@pytest.fixture
def make_square():
    """Factory for axis-aligned squares `(x, y, size)`."""
    return _square


@pytest.fixture
def unit_square() -> Poly:
    """10x10 square at the origin."""
    return _square(0, 0, 10)


@pytest.fixture
def square_with_hole() -> Poly:
    """10x10 square with a 2x2 hole at (2, 2)."""
    return Poly(_square(0, 0, 10).outline, [_square(2, 2, 2).outline])
