"""
Immutable numeric vectors used by the integrator, transform and interpolator
"""

from __future__ import annotations

import numbers
from typing import Iterator

import numpy as np

from errors import DimensionMismatch, InvalidOperand


class Vector:
    """
    Fixed-length tuple of floats backed by a read-only numpy array.

    Arithmetic goes through ``add`` and ``mul`` and always returns a new
    Vector. Equality is identity; compare components with
    ``np.allclose``.
    """

    __slots__ = ("_data",)

    def __init__(self, *components):
        if len(components) == 1 and isinstance(components[0], (Vector, np.ndarray, list, tuple)):
            components = tuple(components[0])
        try:
            data = np.array(components, dtype=float)
        except (TypeError, ValueError) as err:
            raise InvalidOperand(f"{components!r} are not numeric components") from err
        if data.ndim != 1:
            raise InvalidOperand(f"Vector components must be scalars, got shape {data.shape}")
        data.setflags(write=False)
        self._data = data

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index):
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    def __add__(self, other):
        return add(self, other)

    def __mul__(self, scalar):
        return mul(self, scalar)

    __rmul__ = __mul__

    def __repr__(self) -> str:
        return f"Vector({', '.join(repr(x) for x in self)})"


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def add(a: Vector, b: Vector) -> Vector:
    """Component-wise sum of two vectors of equal length."""
    if not isinstance(a, Vector):
        raise InvalidOperand(f"{a!r} is not a Vector")
    if not isinstance(b, Vector):
        raise InvalidOperand(f"{b!r} is not a Vector")
    if len(a) != len(b):
        raise DimensionMismatch(
            f"Dimension mismatch on Vector addition ({len(a)} != {len(b)})"
        )
    return Vector(a._data + b._data)


def mul(v: Vector, scalar: float) -> Vector:
    """Scale every component of ``v`` by a real ``scalar``."""
    if not isinstance(v, Vector):
        raise InvalidOperand(f"{v!r} is not a Vector")
    if not _is_scalar(scalar):
        raise InvalidOperand(f"{scalar!r} is not a scalar")
    return Vector(v._data * float(scalar))
