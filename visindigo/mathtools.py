"""Combinatorics, easing curves and a simple numerical integrator."""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Callable, Optional

PI = 3.141592653


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def combination(n: int, m: int) -> int:
    result = 1
    for i in range(m):
        result *= n - i
    for i in range(m):
        result = _trunc_div(result, m - i)
    return result


def permutation(n: int, m: int) -> int:
    result = 1
    for i in range(m):
        result *= n - i
    return result


def sin_0_1(percent: float) -> float:
    return (math.sin(-PI / 2 + PI * percent) + 1.0) / 2.0


def cos_1_n1(percent: float) -> float:
    return math.cos(percent * PI)


def sin2_0_1(percent: float) -> float:
    return sin_0_1(percent) ** 2


def sin_0_1_0(percent: float) -> float:
    return math.sin(percent * PI)


class SimpleTransformation(Enum):
    LINE = auto()
    EXPONENTIAL = auto()
    LOGARITHMIC = auto()
    SQRT = auto()
    SQUARE = auto()
    INVERT = auto()
    INVERT_EXPONENTIAL = auto()
    INVERT_LOGARITHMIC = auto()
    INVERT_SQRT = auto()
    INVERT_SQUARE = auto()


def _exponential(p: float) -> float:
    return (math.exp(p) - 1) / (math.e - 1)


def _logarithmic(p: float) -> float:
    return math.log(p * (math.e - 1) + 1)


_TRANSFORMS: dict[SimpleTransformation, Callable[[float], float]] = {
    SimpleTransformation.LINE: lambda p: p,
    SimpleTransformation.EXPONENTIAL: _exponential,
    SimpleTransformation.LOGARITHMIC: _logarithmic,
    SimpleTransformation.SQRT: math.sqrt,
    SimpleTransformation.SQUARE: lambda p: p ** 2,
    SimpleTransformation.INVERT: lambda p: 1 - p,
    SimpleTransformation.INVERT_EXPONENTIAL: lambda p: 1 - _exponential(p),
    SimpleTransformation.INVERT_LOGARITHMIC: lambda p: 1 - _logarithmic(p),
    SimpleTransformation.INVERT_SQRT: lambda p: 1 - math.sqrt(p),
    SimpleTransformation.INVERT_SQUARE: lambda p: 1 - p ** 2,
}


def simple_transformation(
    percent: float, kind: SimpleTransformation = SimpleTransformation.LINE
) -> float:
    """Map a progress value in [0, 1] through the chosen curve."""
    return _TRANSFORMS.get(kind, lambda p: p)(percent)


class Dimension(Enum):
    ONE = 1
    TWO = 2
    THREE = 3


class MathFunction:
    """A function over a bounded domain; override f or pass a callable."""

    def __init__(
        self,
        dimension: Dimension = Dimension.ONE,
        func: Optional[Callable[..., float]] = None,
    ) -> None:
        self.dimension = dimension
        self._func = func
        self.xmin = self.xmax = 0.0
        self.ymin = self.ymax = 0.0
        self.zmin = self.zmax = 0.0

    def set_x_range(self, xmin: float, xmax: float) -> None:
        self.xmin, self.xmax = xmin, xmax

    def set_y_range(self, ymin: float, ymax: float) -> None:
        self.ymin, self.ymax = ymin, ymax

    def set_z_range(self, zmin: float, zmax: float) -> None:
        self.zmin, self.zmax = zmin, zmax

    def f(self, *args: float) -> float:
        if self._func is not None:
            return self._func(*args)
        return 0.0


def _simpson_d1(function: MathFunction, infinitesimal: float) -> float:
    length = function.xmax - function.xmin
    previous = function.f(function.xmin) * length
    points = [function.xmin]
    while True:
        length /= 2
        new_points = [x + length for x in points]
        current = previous * 0.5 + sum(function.f(x) * length for x in new_points)
        if abs(previous - current) <= infinitesimal:
            return current
        previous = current
        points.extend(new_points)


def simpson(function: MathFunction, infinitesimal: float = 0.00001) -> float:
    """Integrate over the function's x range by successive halving.

    Only one-dimensional functions are integrated; others give 0.
    """
    if function.dimension is Dimension.ONE:
        return _simpson_d1(function, infinitesimal)
    return 0.0