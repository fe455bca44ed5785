"""Points and arithmetic on short Weierstrass curves over a prime field."""

from __future__ import annotations

from dataclasses import dataclass

from curvework.modulo import Modulus


@dataclass(frozen=True)
class Point:
    """An affine point; (0, 0) stands for the point at infinity."""

    x: int = 0
    y: int = 0

    def is_infinity(self) -> bool:
        """Return True for the point at infinity."""
        return self.x == 0 and self.y == 0

    def __str__(self) -> str:
        return f"({self.x},  {self.y})"


INFINITY = Point(0, 0)


class Curve:
    """The curve y^2 = x^3 + a4*x + a6 over the given prime field.

    The point (0, 0) marks infinity, which is sound as long as a6 != 0.
    """

    def __init__(self, a4: int, a6: int, field: Modulus) -> None:
        self.a4 = a4
        self.a6 = a6
        self.field = field

    def __repr__(self) -> str:
        return f"Curve(a4={self.a4}, a6={self.a6}, field={self.field!r})"

    def rhs(self, x: int) -> int:
        """Return x^3 + a4*x + a6."""
        f = self.field
        cube = f.mul(f.mul(x, x), x)
        return f.add(f.add(cube, f.mul(self.a4, x)), self.a6)

    def add(self, p: Point, q: Point) -> Point:
        """Return p + q, with one formula for both addition and doubling."""
        if p.is_infinity():
            return q
        if q.is_infinity():
            return p
        f = self.field
        numerator = f.add(
            f.add(f.add(f.mul(p.x, p.x), f.mul(p.x, q.x)), f.mul(q.x, q.x)),
            self.a4,
        )
        denominator = f.add(p.y, q.y)
        if denominator == 0:
            denominator = f.sub(q.x, p.x)
            if denominator == 0:
                return INFINITY
            numerator = f.sub(q.y, p.y)
        slope = f.div(numerator, denominator)
        x3 = f.sub(f.mul(slope, slope), f.add(p.x, q.x))
        y3 = f.sub(f.mul(f.sub(p.x, x3), slope), p.y)
        return Point(x3, y3)

    def multiply(self, p: Point, k: int) -> Point:
        """Return k*p by double-and-add from the top bit.

        A multiplier of 0 or 1 returns p unchanged.
        """
        if k < 0:
            raise ValueError("multiplier must not be negative")
        result = p
        for bit in bin(k)[3:]:
            result = self.add(result, result)
            if bit == "1":
                result = self.add(result, p)
        return result

    def embed(self, x: int) -> tuple[Point, Point]:
        """Find the first x' >= x on the curve; return both points there.

        The point with the smaller y comes first.
        """
        f = self.field
        x %= f.value
        while f.legendre(self.rhs(x)) <= 0:
            x = f.add(x, 1)
        y = f.sqrt(self.rhs(x))
        other = f.neg(y)
        low, high = (other, y) if other < y else (y, other)
        return Point(x, low), Point(x, high)

    def random_point(self) -> Point:
        """Return a random point on the curve."""
        r = self.field.rand()
        low, high = self.embed(r)
        return low if r & 1 else high