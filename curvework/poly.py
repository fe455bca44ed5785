"""Polynomials over a prime field and arithmetic in its extension fields."""

from __future__ import annotations

import math
from dataclasses import dataclass

from curvework.modulo import Modulus

MAXDEGREE = 32


@dataclass(frozen=True)
class Poly:
    """A polynomial, coefficients stored lowest power first.

    Leading zero coefficients are dropped; the zero polynomial is (0,).
    """

    coefs: tuple[int, ...] = (0,)

    def __post_init__(self) -> None:
        values = [int(c) for c in self.coefs]
        while len(values) > 1 and values[-1] == 0:
            values.pop()
        if not values:
            values = [0]
        object.__setattr__(self, "coefs", tuple(values))

    def degree(self) -> int:
        """Return the degree; the zero polynomial has degree 0."""
        return len(self.coefs) - 1

    def is_zero(self) -> bool:
        """Return True for the zero polynomial."""
        return self.coefs == (0,)

    def format(self, modulus: int) -> str:
        """Render in the input syntax of common algebra systems."""
        terms = [
            f"Mod({c}, {modulus})*x^{i} + "
            for i, c in reversed(list(enumerate(self.coefs)))
            if i > 0 and c != 0
        ]
        return "".join(terms) + f"Mod({self.coefs[0]}, {modulus})"


_ZERO = Poly((0,))
_ONE = Poly((1,))


def _canon(field: Modulus, a: Poly) -> Poly:
    return Poly(tuple(c % field.value for c in a.coefs))


def _scale(field: Modulus, a: Poly, c: int) -> Poly:
    return Poly(tuple(field.mul(v, c) for v in a.coefs))


def _monomial(c: int, k: int) -> Poly:
    return Poly((0,) * k + (c,))


def _poly_mul(field: Modulus, a: Poly, b: Poly) -> Poly:
    out = [0] * (len(a.coefs) + len(b.coefs) - 1)
    for i, x in enumerate(a.coefs):
        if x == 0:
            continue
        for j, y in enumerate(b.coefs):
            out[i + j] = field.add(out[i + j], field.mul(x, y))
    return Poly(tuple(out))


def poly_add(field: Modulus, a: Poly, b: Poly) -> Poly:
    """Return a + b."""
    size = max(len(a.coefs), len(b.coefs))
    left = a.coefs + (0,) * (size - len(a.coefs))
    right = b.coefs + (0,) * (size - len(b.coefs))
    return Poly(tuple(field.add(x, y) for x, y in zip(left, right)))


def poly_sub(field: Modulus, a: Poly, b: Poly) -> Poly:
    """Return a - b."""
    return poly_add(field, a, Poly(tuple(field.neg(c) for c in b.coefs)))


def poly_normal(field: Modulus, a: Poly) -> Poly:
    """Return a scaled so that its leading coefficient is 1."""
    a = _canon(field, a)
    lead = a.coefs[-1]
    if lead in (0, 1):
        return a
    return _scale(field, a, field.inv(lead))


def poly_divmod(field: Modulus, a: Poly, b: Poly) -> tuple[Poly, Poly]:
    """Return (q, r) with a = q*b + r and deg r < deg b."""
    a = _canon(field, a)
    b = _canon(field, b)
    if b.is_zero():
        raise ZeroDivisionError("polynomial division by zero")
    if b.degree() > a.degree():
        return _ZERO, a
    quotient = [0] * (a.degree() - b.degree() + 1)
    lead_inv = field.inv(b.coefs[-1])
    r = a
    while not r.is_zero() and r.degree() >= b.degree():
        shift = r.degree() - b.degree()
        s = field.mul(r.coefs[-1], lead_inv)
        quotient[shift] = s
        r = poly_sub(field, r, _poly_mul(field, _monomial(s, shift), b))
    return Poly(tuple(quotient)), r


def poly_gcd(field: Modulus, a: Poly, b: Poly) -> Poly:
    """Return a greatest common divisor of a and b (not made monic)."""
    a = _canon(field, a)
    b = _canon(field, b)
    if a.is_zero():
        return b
    if b.is_zero():
        return a
    aw, bw = (a, b) if a.degree() >= b.degree() else (b, a)
    while bw.degree() > 0:
        _, r = poly_divmod(field, aw, bw)
        aw, bw = bw, r
    return aw if bw.is_zero() else bw


def poly_pseudo_div(field: Modulus, a: Poly, b: Poly) -> tuple[Poly, Poly]:
    """Return (q, r) with d^(m-n+1)*a = b*q + r, d the leading coefficient of b."""
    a = _canon(field, a)
    b = _canon(field, b)
    if b.is_zero():
        raise ZeroDivisionError("polynomial division by zero")
    d = b.coefs[-1]
    e = a.degree() - b.degree() + 1
    q = _ZERO
    r = a
    while not r.is_zero() and r.degree() >= b.degree():
        s = _monomial(r.coefs[-1], r.degree() - b.degree())
        q = poly_add(field, _scale(field, q, d), s)
        r = poly_sub(field, _scale(field, r, d), _poly_mul(field, s, b))
        e -= 1
    if e >= 1:
        factor = field.powi(d, e)
        q = _scale(field, q, factor)
        r = _scale(field, r, factor)
    return q, r


def poly_content(a: Poly) -> int:
    """Return the integer gcd of all coefficients."""
    return math.gcd(*a.coefs)


def poly_resultant(field: Modulus, a: Poly, b: Poly) -> int:
    """Return the resultant of a and b modulo the field prime.

    The arguments are put in order of decreasing degree first, so for
    deg a < deg b the value returned is that of (b, a).
    """
    a = _canon(field, a)
    b = _canon(field, b)
    if a.is_zero() or b.is_zero():
        return 0

    def strip_content(poly: Poly, other_degree: int) -> tuple[Poly, int]:
        content = poly_content(poly)
        if content == 1:
            return poly, 1
        reduced = Poly(tuple(field.div(c, content) for c in poly.coefs))
        return reduced, field.powi(content, other_degree)

    aa, ta = strip_content(a, b.degree())
    bb, tb = strip_content(b, a.degree())
    g = h = 1
    sign = 1
    if a.degree() < b.degree():
        aa, bb = bb, aa
    while bb.degree() > 0:
        delta = aa.degree() - bb.degree()
        if aa.degree() & 1 and bb.degree() & 1:
            sign = -sign
        _, rem = poly_pseudo_div(field, aa, bb)
        aa = bb
        scale = field.mul(field.powi(h, delta), g)
        bb = Poly(tuple(field.div(c, scale) for c in rem.coefs))
        g = aa.coefs[-1]
        h = field.mul(field.powi(h, 1 - delta), field.powi(g, delta))
    h = field.mul(
        field.powi(h, 1 - aa.degree()), field.powi(bb.coefs[0], aa.degree())
    )
    result = field.mul(field.mul(h, ta), tb)
    return field.neg(result) if sign < 0 else result


class ExtensionField:
    """GF(p^k) as polynomials modulo an irreducible polynomial of degree k."""

    def __init__(self, field: Modulus, irreducible: Poly) -> None:
        irreducible = _canon(field, irreducible)
        if irreducible.degree() < 1:
            raise ValueError("irreducible polynomial must have degree at least 1")
        self.field = field
        self.irreducible = irreducible

    def __repr__(self) -> str:
        return f"ExtensionField({self.field!r}, {self.irreducible!r})"

    def _reduce(self, a: Poly) -> Poly:
        a = _canon(self.field, a)
        if a.degree() < self.irreducible.degree():
            return a
        return poly_divmod(self.field, a, self.irreducible)[1]

    def order(self) -> int:
        """Return p^k, the number of field elements."""
        return self.field.value ** self.irreducible.degree()

    def mul(self, a: Poly, b: Poly) -> Poly:
        """Return a*b reduced modulo the irreducible polynomial."""
        return self._reduce(_poly_mul(self.field, a, b))

    def xp(self, x: Poly) -> Poly:
        """Return x^p, p being the prime of the base field."""
        return self.pow(x, self.field.value)

    def pow(self, g: Poly, k: int) -> Poly:
        """Return g^k by square-and-multiply from the top bit.

        Exponents 0 and 1 both return g unchanged.
        """
        if k < 0:
            raise ValueError("exponent must not be negative")
        result = g
        for bit in bin(k)[3:]:
            result = self.mul(result, result)
            if bit == "1":
                result = self.mul(result, g)
        return result

    def gpow_p2(self, g: Poly) -> Poly:
        """Return g^((p-1)/2)."""
        return self.pow(g, (self.field.value - 1) // 2)

    def is_residue(self, x: Poly) -> bool:
        """Return True if x is a square, judged by the norm of x."""
        p = self.field.value
        res = poly_resultant(self.field, x, self.irreducible)
        return pow(res, (p - 1) // 2, p) == 1

    def sqrt(self, a: Poly) -> Poly:
        """Return a square root of a; raise ValueError if there is none."""
        a = self._reduce(a)
        if a.is_zero():
            return a
        q_total = self.order()
        if q_total & 3 == 3:
            root = self.pow(a, (q_total + 1) // 4)
        else:
            root = self._tonelli_shanks(a, q_total)
        if self.mul(root, root) != a:
            raise ValueError("value is not a quadratic residue")
        return root

    def _tonelli_shanks(self, a: Poly, q_total: int) -> Poly:
        q = q_total - 1
        r = 0
        while q % 2 == 0:
            q //= 2
            r += 1
        y = self.rand()
        while self.is_residue(y):
            y = self.rand()
        y = self.pow(y, q)
        b = self.pow(a, q)
        x = self.pow(a, (q + 1) // 2)
        while b != _ONE:
            m = 0
            bpw = _ZERO
            while bpw != _ONE:
                m += 1
                bpw = self.pow(b, 1 << m)
                if m == r:
                    raise ValueError("square root failed")
            t = self.pow(y, 1 << (r - m - 1))
            y = self.mul(t, t)
            r = m
            x = self.mul(x, t)
            b = self.mul(b, y)
        return x

    def invert(self, b: Poly) -> Poly:
        """Return 1/b; raise ZeroDivisionError if b is not invertible."""
        field = self.field
        b = self._reduce(b)
        if b.is_zero():
            raise ZeroDivisionError("inverse of zero polynomial")
        r0, r1 = self.irreducible, b
        s0, s1 = _ZERO, _ONE
        while not r1.is_zero():
            q, rem = poly_divmod(field, r0, r1)
            r0, r1 = r1, rem
            s0, s1 = s1, poly_sub(field, s0, _poly_mul(field, q, s1))
        if r0.degree() > 0:
            raise ZeroDivisionError("polynomial is not invertible")
        return self._reduce(_scale(field, s0, field.inv(r0.coefs[0])))

    def div(self, b: Poly, c: Poly) -> Poly:
        """Return b / c."""
        return self.mul(b, self.invert(c))

    def rand(self) -> Poly:
        """Return a random element of degree k-1 with nonzero coefficients."""
        return Poly(tuple(self.field.rand() for _ in range(self.irreducible.degree())))


def find_irreducible(field: Modulus, n: int) -> Poly | None:
    """Return the first irreducible x^n + x + j, j = 2 .. p-1, or None.

    Uses the Ben-Or test.
    """
    if n > MAXDEGREE:
        raise ValueError(f"degree must not exceed {MAXDEGREE}")
    if n < 1:
        raise ValueError("degree must be at least 1")
    x = Poly((0, 1))
    for j in range(2, field.value):
        coefs = [0] * (n + 1)
        coefs[0] = j
        coefs[1] = 1
        coefs[n] = 1
        candidate = Poly(tuple(coefs))
        ext = ExtensionField(field, candidate)
        power = x
        reducible = False
        for _ in range(n // 2):
            power = ext.xp(power)
            common = poly_gcd(field, poly_sub(field, power, x), candidate)
            if common.degree() > 0:
                reducible = True
                break
        if not reducible:
            return candidate
    return None