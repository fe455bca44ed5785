"""Modular integer arithmetic, with explicit or fixed moduli."""

from __future__ import annotations

import random

_SMALL_LIMIT = 1_000_000
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def mod_add(b: int, c: int, n: int) -> int:
    """Return (b + c) mod n."""
    return (b + c) % n


def mod_sub(b: int, c: int, n: int) -> int:
    """Return (b - c) mod n."""
    return (b - c) % n


def mod_mul(b: int, c: int, n: int) -> int:
    """Return (b * c) mod n."""
    return (b * c) % n


def mod_div(b: int, c: int, n: int) -> int:
    """Return b / c mod n; raise ZeroDivisionError if c has no inverse."""
    try:
        inverse = pow(c, -1, n)
    except ValueError:
        raise ZeroDivisionError("division by zero in mod_div") from None
    return (b * inverse) % n


def mod_neg(b: int, n: int) -> int:
    """Return -b mod n."""
    return (-b) % n


def _miller_rabin_round(n: int, base: int, d: int, s: int) -> bool:
    x = pow(base, d, n)
    if x in (1, n - 1):
        return True
    for _ in range(s - 1):
        x = x * x % n
        if x == n - 1:
            return True
    return False


def is_probable_prime(n: int, reps: int = 25) -> int:
    """Primality test: 2 if certainly prime, 1 if probably prime, 0 if composite.

    Numbers below one million are decided exactly by trial division; larger
    ones by Miller-Rabin with fixed small bases plus ``reps`` random bases.
    """
    n = abs(n)
    if n < 2:
        return 0
    if n < _SMALL_LIMIT:
        if n < 4:
            return 2
        if n % 2 == 0:
            return 0
        divisor = 3
        while divisor * divisor <= n:
            if n % divisor == 0:
                return 0
            divisor += 2
        return 2
    if n % 2 == 0:
        return 0
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1
    rng = random.Random(n)
    bases = list(_WITNESSES) + [rng.randrange(2, n - 1) for _ in range(max(reps, 0))]
    if all(_miller_rabin_round(n, base, d, s) for base in bases):
        return 1
    return 0


class Modulus:
    """Arithmetic modulo a fixed integer, with its own random source."""

    def __init__(self, value: int, rng: random.Random | None = None) -> None:
        if value < 2:
            raise ValueError("modulus must be at least 2")
        self.value = value
        self.rng = rng if rng is not None else random.Random()

    def __repr__(self) -> str:
        return f"Modulus({self.value})"

    def add(self, b: int, c: int) -> int:
        """Return b + c."""
        return mod_add(b, c, self.value)

    def sub(self, b: int, c: int) -> int:
        """Return b - c."""
        return mod_sub(b, c, self.value)

    def mul(self, b: int, c: int) -> int:
        """Return b * c."""
        return mod_mul(b, c, self.value)

    def div(self, b: int, c: int) -> int:
        """Return b / c; raise ZeroDivisionError if c is not invertible."""
        return mod_div(b, c, self.value)

    def inv(self, b: int) -> int:
        """Return 1 / b; raise ZeroDivisionError if b is not invertible."""
        return mod_div(1, b, self.value)

    def neg(self, b: int) -> int:
        """Return -b."""
        return mod_neg(b, self.value)

    def rand(self) -> int:
        """Return a uniform random value in 2 .. modulus - 1."""
        if self.value < 3:
            raise ValueError("modulus too small for random values")
        return self.rng.randrange(2, self.value)

    def legendre(self, x: int) -> int:
        """Return the Legendre symbol of x: 1, -1, or 0."""
        p = self.value
        x %= p
        if x == 0:
            return 0
        symbol = pow(x, (p - 1) // 2, p)
        return 1 if symbol == 1 else -1

    def powi(self, b: int, i: int) -> int:
        """Return b**i; a negative i raises the inverse of b."""
        p = self.value
        if i < 0:
            return pow(self.inv(b), -i, p)
        if i == 0:
            return 1
        return pow(b, i, p)

    def sqrt(self, a: int) -> int:
        """Return a square root of a; raise ValueError if there is none."""
        p = self.value
        a %= p
        if self.legendre(a) != 1:
            raise ValueError("value is not a quadratic residue")
        if p == 2:
            return a
        if p & 3 == 3:
            return pow(a, (p + 1) // 4, p)

        q = p - 1
        e = (q & -q).bit_length() - 1
        q >>= e
        while True:
            n = self.rand()
            if self.legendre(n) < 0:
                break

        y = pow(n, q, p)
        r = e
        x = pow(a, (q - 1) // 2, p)
        b = x * x % p * a % p
        x = x * a % p
        while b != 1:
            m = 1
            t1 = b
            while m < r:
                t1 = t1 * t1 % p
                if t1 == 1:
                    break
                m += 1
            if m == r:
                raise ValueError("square root failed")
            t = pow(y, 1 << (r - m - 1), p)
            y = t * t % p
            r = m
            x = x * t % p
            b = b * y % p
        return x