"""Building blocks of a small quadratic arithmetic program (QAP) for a SNARK.

Polynomial coefficient lists here are ordered highest power first, and all
arithmetic is carried out with a :class:`~curvework.modulo.Modulus`, normally
the order of the torsion group, since values live "in the exponent".
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Sequence

from curvework.modulo import Modulus

EXAMPLE_POINTS = (31, 37, 41, 43, 47)
EXAMPLE_SWITCH = (0, 1, 2, 5, 7, 3, 4, 6, 8, 9)
EXAMPLE_LAST_STATEMENT = 4


def _check_index(index: int, count: int) -> None:
    if not 0 <= index < count:
        raise IndexError(f"index {index} out of range for {count} points")


def p_i(i: int, points: Sequence[int], mod: Modulus) -> int:
    """Return the product of (points[i] - points[j]) over all j != i."""
    _check_index(i, len(points))
    result = 1
    for j, other in enumerate(points):
        if j != i:
            result = mod.mul(result, mod.sub(points[i], other))
    return result


def li_lj(i: int, j: int, points: Sequence[int], mod: Modulus) -> list[int]:
    """Expand the product of (x - points[m]) over every m other than i and j.

    With i == j this is the numerator of the Lagrange basis polynomial l_i
    (n coefficients); otherwise it is the numerator of l_i*l_j/t
    (n - 1 coefficients).
    """
    _check_index(i, len(points))
    _check_index(j, len(points))
    coefs = [1]
    for m, root in enumerate(points):
        if m in (i, j):
            continue
        shift = mod.neg(root)
        coefs = [
            mod.add(high, mod.mul(shift, low))
            for high, low in zip(coefs + [0], [0] + coefs)
        ]
    return coefs


def liofx(i: int, points: Sequence[int], mod: Modulus) -> list[int]:
    """Return the coefficients of the Lagrange basis polynomial l_i(x)."""
    scale = mod.inv(p_i(i, points, mod))
    return [mod.mul(c, scale) for c in li_lj(i, i, points, mod)]


def liljofx(i: int, j: int, points: Sequence[int], mod: Modulus) -> list[int]:
    """Return the coefficients of l_i(x)*l_j(x)/t(x) for i != j."""
    if i == j:
        raise ValueError("cross term needs two different indexes")
    scale = mod.inv(mod.mul(p_i(i, points, mod), p_i(j, points, mod)))
    return [mod.mul(c, scale) for c in li_lj(i, j, points, mod)]


def all_lilj(points: Sequence[int], mod: Modulus) -> list[int]:
    """Return every l_i*l_j/t for i < j, concatenated in order of (i, j).

    The table holds n*(n-1)^2/2 values, n - 1 for each pair.
    """
    n = len(points)
    return [
        c
        for i in range(n - 1)
        for j in range(i + 1, n)
        for c in liljofx(i, j, points, mod)
    ]


def lcalc(z: int, coef: Sequence[int], mod: Modulus) -> int:
    """Evaluate a polynomial, coefficients highest power first, at z."""
    if not coef:
        raise ValueError("polynomial needs at least one coefficient")
    result = coef[0] % mod.value
    for c in coef[1:]:
        result = mod.add(mod.mul(result, z), c)
    return result


def tofzgrth(z: int, points: Sequence[int], mod: Modulus) -> int:
    """Return t(z), the product of (z - point) over all gate points."""
    result = 1
    for point in points:
        result = mod.mul(result, mod.sub(z, point))
    return result


def matflat(mat: Sequence[int], width: int, coef: Sequence[int], mod: Modulus) -> list[int]:
    """Weight each row of a row-major matrix by coef and sum the rows.

    The matrix has len(coef) rows of ``width`` columns.
    """
    if width < 0:
        raise ValueError("width must not be negative")
    if len(mat) < width * len(coef):
        raise ValueError("matrix has fewer entries than width * len(coef)")
    rows = [mat[r * width:(r + 1) * width] for r in range(len(coef))]
    result = [0] * width
    for row, weight in zip(rows, coef):
        result = [mod.add(acc, mod.mul(entry, weight)) for acc, entry in zip(result, row)]
    return result


def crossterms(a: Sequence[int], mod: Modulus) -> list[int]:
    """Return the ten l_i*l_j coefficients of the five-gate example circuit.

    ``a`` holds the wire values a_0 .. a_9 (a_9 is not needed here).
    """
    if len(a) < 9:
        raise ValueError("need at least nine wire values")
    add, mul = mod.add, mod.mul
    s12 = add(a[1], a[2])
    s34 = add(a[3], a[4])
    return [
        add(mul(a[1], a[2]), mul(a[0], a[3])),      # l0-l1
        add(mul(s12, a[0]), mul(a[1], a[5])),       # l0-l2
        add(mul(s34, a[0]), mul(a[1], a[6])),       # l0-l3
        add(mul(a[0], a[8]), mul(a[1], a[7])),      # l0-l4
        add(mul(s12, a[2]), mul(a[3], a[5])),       # l1-l2
        add(mul(s34, a[2]), mul(a[3], a[6])),       # l1-l3
        add(mul(a[3], a[7]), mul(a[2], a[8])),      # l1-l4
        add(mul(s12, a[6]), mul(s34, a[5])),        # l2-l3
        add(mul(s12, a[7]), mul(a[5], a[8])),       # l2-l4
        add(mul(s34, a[7]), mul(a[6], a[8])),       # l3-l4
    ]


def wires(a1: int, a2: int, a3: int, mod: Modulus) -> list[int]:
    """Return all ten wire values of the example circuit.

    a1 is the medicine number, a2 the dose and a3 the patient; wire 4 is
    drawn at random and the rest follow from the gates.
    """
    a4 = mod.rand()
    a6 = mod.mul(a2, a3)
    a7 = mod.mul(mod.add(a1, a2), a1)
    a8 = mod.mul(mod.add(a3, a4), a6)
    a9 = mod.mul(a8, a7)
    return [1, a1, a2, a3, a4, a1, a6, a7, a8, a9]


@dataclass(frozen=True)
class Qap:
    """A quadratic arithmetic program.

    ``v``, ``w`` and ``y`` hold one row of n coefficients per wire (m rows,
    row-major); ``h`` holds the l_i*l_j/t table from :func:`all_lilj`.
    ``sw`` orders the wires so that sw[0 .. last_statement] are the public
    statement wires and the rest are witness wires.
    """

    points: tuple[int, ...]
    sw: tuple[int, ...]
    last_statement: int
    v: tuple[int, ...]
    w: tuple[int, ...]
    y: tuple[int, ...]
    h: tuple[int, ...]

    def __post_init__(self) -> None:
        for name in ("points", "sw", "v", "w", "y", "h"):
            object.__setattr__(self, name, tuple(int(x) for x in getattr(self, name)))
        n, m = self.n, self.m
        for name in ("v", "w", "y"):
            if len(getattr(self, name)) != n * m:
                raise ValueError(f"{name} must hold {n * m} values")
        if len(self.h) != n * (n - 1) * (n - 1) // 2:
            raise ValueError("h table has the wrong size")
        if not -1 <= self.last_statement < m:
            raise ValueError("last statement index out of range")

    @property
    def n(self) -> int:
        """Number of gates."""
        return len(self.points)

    @property
    def m(self) -> int:
        """Number of wires."""
        return len(self.sw)

    @property
    def statement_wires(self) -> tuple[int, ...]:
        """Wire indexes that are public."""
        return self.sw[: self.last_statement + 1]

    @property
    def witness_wires(self) -> tuple[int, ...]:
        """Wire indexes that are private."""
        return self.sw[self.last_statement + 1:]


def _add_rows(mod: Modulus, *rows: Sequence[int]) -> list[int]:
    return [sum(column) % mod.value for column in zip(*rows)]


def build_example_qap(mod: Modulus) -> Qap:
    """Build the QAP of the five-gate, ten-wire example circuit."""
    points = EXAMPLE_POINTS
    n = len(points)
    m = len(EXAMPLE_SWITCH)
    basis = [liofx(i, points, mod) for i in range(n)]
    zero = [0] * n
    v = [zero] * m
    w = [zero] * m
    y = [zero] * m

    v[0] = basis[0]
    w[1] = _add_rows(mod, basis[2], basis[0])
    v[2] = basis[1]
    w[2] = basis[2]
    w[4] = basis[3]
    w[3] = _add_rows(mod, basis[1], basis[3])
    v[5], y[5] = basis[2], basis[0]
    v[6], y[6] = basis[3], basis[1]
    v[7], y[7] = basis[4], basis[2]
    w[8], y[8] = basis[4], basis[3]
    y[9] = basis[4]

    def flat(rows: list[list[int]]) -> tuple[int, ...]:
        return tuple(c for row in rows for c in row)

    return Qap(
        points=points,
        sw=EXAMPLE_SWITCH,
        last_statement=EXAMPLE_LAST_STATEMENT,
        v=flat(v),
        w=flat(w),
        y=flat(y),
        h=tuple(all_lilj(points, mod)),
    )


def _write_int(stream: BinaryIO, value: int) -> None:
    stream.write(struct.pack("<i", value))


def _write_mpz(stream: BinaryIO, value: int) -> None:
    magnitude = abs(value)
    nbytes = (magnitude.bit_length() + 7) // 8
    stream.write(struct.pack(">i", -nbytes if value < 0 else nbytes))
    stream.write(magnitude.to_bytes(nbytes, "big"))


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    data = stream.read(count)
    if len(data) != count:
        raise ValueError("truncated QAP data")
    return data


def _read_int(stream: BinaryIO) -> int:
    return struct.unpack("<i", _read_exact(stream, 4))[0]


def _read_mpz(stream: BinaryIO) -> int:
    size = struct.unpack(">i", _read_exact(stream, 4))[0]
    magnitude = int.from_bytes(_read_exact(stream, abs(size)), "big")
    return -magnitude if size < 0 else magnitude


def write_qap(qap: Qap, stream: BinaryIO) -> None:
    """Write a QAP: n, m, sw, l as 32-bit ints, then the big integers."""
    _write_int(stream, qap.n)
    _write_int(stream, qap.m)
    stream.write(struct.pack(f"<{qap.m}i", *qap.sw))
    _write_int(stream, qap.last_statement)
    for values in (qap.points, qap.v, qap.w, qap.y, qap.h):
        for value in values:
            _write_mpz(stream, value)


def read_qap(stream: BinaryIO) -> Qap:
    """Read a QAP written by :func:`write_qap`."""
    n = _read_int(stream)
    m = _read_int(stream)
    if n < 1 or m < 0:
        raise ValueError("bad QAP dimensions")
    sw = struct.unpack(f"<{m}i", _read_exact(stream, 4 * m))
    last_statement = _read_int(stream)
    points = [_read_mpz(stream) for _ in range(n)]
    v = [_read_mpz(stream) for _ in range(n * m)]
    w = [_read_mpz(stream) for _ in range(n * m)]
    y = [_read_mpz(stream) for _ in range(n * m)]
    h = [_read_mpz(stream) for _ in range(n * (n - 1) * (n - 1) // 2)]
    return Qap(points, sw, last_statement, v, w, y, h)