"""Searches for pairing-friendly curve parameters.

Three families are covered: the cyclotomic Phi_4k construction with
alpha = u^2 * alphabase (a table-driven "gen" search and a brute-force
"sweep"), and the Phi_6k construction.
"""

from __future__ import annotations

import math
import sys
from typing import Sequence, TextIO

from curvework.modulo import is_probable_prime

_MAX_PHI4_DEGREE = 37

_PHI6_TABLES: dict[int, tuple[int, ...]] = {
    5: (1, 1, 0, -1, -1, -1, 0, 1, 1),
    7: (1, 1, 0, -1, -1, 0, 1, 0, -1, -1, 0, 1, 1),
    11: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, -1,
         0, 1, 1, 0, -1, -1, 0, 1, 1),
    13: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1),
    17: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 1, 0, -1, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1),
    19: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 1, 0, -1, -1, 0, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1,
         0, -1, -1, 0, 1, 1),
    23: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, -1, 0, 1, 1, 0, -1, -1,
         0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1),
    29: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, -1,
         0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1,
         0, 1, 1, 0, -1, -1, 0, 1, 1),
    31: (1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0,
         1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1,
         0, -1, -1, 0, 1, 1, 0, -1, -1, 0, 1, 1),
}


def _bits(value: int) -> int:
    return max(abs(value).bit_length(), 1)


def _alternating_sum(k: int, z: int) -> int:
    return sum((-z) ** e for e in range(k))


def phi4k(k: int, alpha: int, x: int) -> int:
    """Return Phi_4k(z) = 1 - z + z^2 - ... + z^(k-1) with z = alpha*x^2.

    k must be a prime no larger than 37.
    """
    if k > _MAX_PHI4_DEGREE or is_probable_prime(k, 5) != 2:
        raise ValueError(f"k must be a prime no larger than {_MAX_PHI4_DEGREE}")
    return _alternating_sum(k, alpha * x * x)


def xstart(lg2r: int) -> tuple[int, int, int]:
    """Choose (k, max, alphabase) for a target size of log2(r) bits."""
    if lg2r < 192:
        k, alphabase = 7, 3
    elif lg2r < 224:
        k, alphabase = 11, 3
    elif lg2r < 320:
        k, alphabase = 19, 3
    elif lg2r < 384:
        k, alphabase = 19, 43
    elif lg2r < 448:
        k, alphabase = 23, 67
    else:
        k, alphabase = 31, 3
    lga = math.log2(alphabase) / 2.0
    w = lg2r / (k - 1.0) / 2.0 - lga
    return k, int(2.0 ** (w + 0.5)), alphabase


def mkalpha(u: int, alphabase: int) -> int:
    """Return alpha = u^2 * alphabase."""
    return u * u * alphabase


def _qofz(k: int, alpha: int, x: int, middle_sign: int) -> int | None:
    z = alpha * x * x
    k2 = (k + 1) // 2
    total = z ** (k + 1) + z ** k + middle_sign * 4 * z ** k2 + z + 1
    if total % 4:
        return None
    return total // 4


def gen_qofz(k: int, alpha: int, x: int) -> int | None:
    """Return q(z) of the table-driven search, or None if 4 does not divide 4q."""
    sign = -1 if ((k + 1) // 2) & 1 else 1
    return _qofz(k, alpha, x, sign)


def gen_tofz(k: int, alpha: int, x: int) -> int:
    """Return the trace t(z) of the table-driven search."""
    k1 = (k + 1) // 2
    power = (alpha * x * x) ** k1
    return 1 - power if k1 & 1 else 1 + power


def sweep_qofz(k: int, alpha: int, x: int) -> int | None:
    """Return q(z) of the sweep search, or None if 4 does not divide 4q."""
    return _qofz(k, alpha, x, 1)


def sweep_tofz(k: int, alpha: int, x: int) -> int:
    """Return the trace t(z) = z^((k+1)/2) + 1 of the sweep search."""
    return (alpha * x * x) ** ((k + 1) // 2) + 1


def phi_coefficients(k: int) -> tuple[int, ...]:
    """Return the coefficients of Phi_6k, lowest power first (2k-1 of them)."""
    try:
        return _PHI6_TABLES[k]
    except KeyError:
        raise ValueError("k must be a prime from 5 to 31") from None


def phi6k(k: int, x: int) -> int:
    """Return Phi_6k(x)."""
    return sum(c * x ** i for i, c in enumerate(phi_coefficients(k)) if c)


def tofx1(k: int, x: int) -> int:
    """Return t(x) = 1 + x - x^(k+1), for k = 1 mod 6."""
    return 1 + x - x ** (k + 1)


def tofx5(k: int, x: int) -> int:
    """Return t(x) = x^3 + 1, for k = 5 mod 6."""
    return x ** 3 + 1


def qofx1(k: int, x: int) -> int:
    """Return q(x) for k = 1 mod 6."""
    xp = x ** k
    t1 = (xp * xp - xp + 1) * (x + 1) ** 2
    return t1 // 3 - x ** (2 * k + 1)


def qofx5(k: int, x: int) -> int:
    """Return q(x) for k = 5 mod 6."""
    xp = x ** k
    t1 = (xp * xp - xp + 1) * (x * x - x + 1)
    return t1 // 3 + xp * x


def _write_record(out: TextIO, head: str, r: int, q: int, t: int, tail: str) -> None:
    rsz, qsz = _bits(r), _bits(q)
    out.write(head)
    out.write(f"r = {r} numbits: {rsz}\n")
    out.write(f"q = {q}  numbits: {qsz}\n")
    out.write(f"rho = {qsz / rsz:.6f}\n")
    out.write(f"t = {t}\n{tail}")


def gen_search(lg2r: int, out: TextIO) -> int:
    """Search with parameters chosen from log2(r); return records written."""
    if lg2r < 2:
        raise ValueError("log2(r) is too small")
    k, limit, alphabase = xstart(lg2r)
    out.write(f"k= {k} alphabase = {alphabase} max = {limit}\n")
    found = 0
    for m in range(1, limit):
        x0 = m
        jlo = limit // (m + 1)
        jhi = limit // m
        if jlo == jhi:
            jhi += 1
        out.write(f"{m} {jlo} {jhi}\n")
        for j in range(jlo, jhi):
            alpha = mkalpha(j, alphabase)
            r = phi4k(k, alpha, x0)
            if not is_probable_prime(r, 25):
                continue
            q = gen_qofz(k, alpha, x0)
            if q is None or not is_probable_prime(q, 25):
                continue
            head = f"k= {k} alpha = {alpha}  x = {x0}\n"
            _write_record(out, head, r, q, gen_tofz(k, alpha, x0), "")
            found += 1
    return found


def phi6_search(k: int, limit: int, out: TextIO) -> int:
    """Scan x = 1 .. limit for Phi_6k curves; return records written."""
    phi_coefficients(k)
    if limit < 2:
        raise ValueError("search limit must be at least 2")
    found = 0
    for x in range(1, limit + 1):
        r = phi6k(k, x)
        if not is_probable_prime(r, 25):
            continue
        if k % 6 == 1:
            q, t = qofx1(k, x), tofx1(k, x)
        else:
            q, t = qofx5(k, x), tofx5(k, x)
        if not is_probable_prime(q, 25):
            continue
        _write_record(out, f"k= {k}  x = {x}\n", r, q, t, "\n")
        found += 1
    return found


def sweep_search(k: int, limit: int, out: TextIO) -> int:
    """Sweep 40 alpha bases, odd u and x up to limit; return the count of prime r."""
    if not k & 1:
        raise ValueError("k must be odd")
    if not 1 <= k <= _MAX_PHI4_DEGREE:
        raise ValueError(f"k must lie between 1 and {_MAX_PHI4_DEGREE}")
    if limit < 1:
        raise ValueError("search limit must be positive")
    prime_count = 0
    for m in range(40):
        alphabase = 3 + 4 * m
        for u in range(1, limit, 2):
            alpha = mkalpha(u, alphabase)
            for x in range(1, limit + 1):
                r = _alternating_sum(k, alpha * x * x)
                if not is_probable_prime(r, 25):
                    continue
                prime_count += 1
                q = sweep_qofz(k, alpha, x)
                if q is None or not is_probable_prime(q, 25):
                    continue
                head = f"k= {k} alpha = {alpha}  x = {x}\n"
                _write_record(out, head, r, q, sweep_tofz(k, alpha, x), "\n")
    return prime_count


def _args(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def gen_main(argv: Sequence[str] | None = None) -> int:
    """Command: search curves for a given log2(r); writes pair.<lg2r>."""
    args = _args(argv)
    try:
        lg2r = int(args[0])
    except (IndexError, ValueError):
        print("Use: pairing_gen <log2(r)>")
        print("   where log2(r) is 2 to 512")
        return 1
    if lg2r < 2:
        print("Come on, that's too small!")
        return 1
    if lg2r > 576:
        print("OK, but security will be questionable.")
    with open(f"pair.{lg2r:03d}", "w") as out:
        gen_search(lg2r, out)
    return 0


def phi6_main(argv: Sequence[str] | None = None) -> int:
    """Command: Phi_6k search; writes pairing_phi6.<k>."""
    args = _args(argv)
    try:
        k = int(args[0])
        limit = int(args[1])
    except (IndexError, ValueError):
        print("use: pairing_phi6 <embedding degree> <search limit>")
        print("primes in 5 to 31 allowed for embedding degree")
        return 1
    if k < 5 or k > 31:
        print("bad embedding degree.")
        return 2
    if k not in _PHI6_TABLES:
        print("bad embedding degree!")
        return 3
    if limit < 2:
        print("bad limit!!")
        return 4
    with open(f"pairing_phi6.{k:02d}", "w") as out:
        phi6_search(k, limit, out)
    return 0


def sweep_main(argv: Sequence[str] | None = None) -> int:
    """Command: sweep search; writes pairings.<k>."""
    args = _args(argv)
    try:
        k = int(args[0])
        limit = int(args[1])
    except (IndexError, ValueError):
        print("Use: pairing_sweep <embedding degree>  <max range>")
        print("   where embedding degree is odd")
        print("   and max range is sweep limit on u and x")
        return 1
    if not k & 1:
        print("k must be odd!!")
        return 1
    if limit < 1:
        print("negative limit not allowed!")
        return 2
    if k > _MAX_PHI4_DEGREE or k < 1:
        print(f"k must lie between 1 and {_MAX_PHI4_DEGREE}")
        return 1
    with open(f"pairings.{k:02d}", "w") as out:
        count = sweep_search(k, limit, out)
    print(f"found {count} r primes")
    return 0