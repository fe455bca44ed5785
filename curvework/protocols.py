"""Key generation, key agreement and signatures on an elliptic curve."""

from __future__ import annotations

from dataclasses import dataclass

from Crypto.Hash import KangarooTwelve

from curvework.elliptic import Curve, Point
from curvework.modulo import Modulus, mod_add, mod_div, mod_mul, mod_sub

_CUSTOMIZATION = b"Hash_b pring&sig"


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def hash_to_int(data: bytes | str, prm: int) -> int:
    """Hash data with KangarooTwelve to an integer modulo prm.

    Extra bytes beyond the size of prm (80, 128, 192 or 256 bits, chosen by
    the security level) keep the reduced result close to uniform.
    """
    if prm < 1:
        raise ValueError("modulus must be positive")
    m = prm.bit_length()
    if m < 208:
        k = 80
    elif m < 320:
        k = 128
    elif m < 448:
        k = 192
    else:
        k = 256
    nbytes = (m + k + 7) // 8
    hasher = KangarooTwelve.new(data=_as_bytes(data), custom=_CUSTOMIZATION)
    digest = hasher.read(nbytes)
    return int.from_bytes(digest, "little") % prm


@dataclass(frozen=True)
class BaseSystem:
    """Curve, base point, its order and the curve cofactor shared by all users."""

    cofactor: int
    order: int
    base: Point
    curve: Curve


def load_base_system(text: str) -> BaseSystem:
    """Parse a curve parameter file.

    Layout by line: header, prime (hex), header, order (hex), header,
    cofactor (decimal), header, a4 and a6 (hex), two headers, base x and y (hex).
    """
    lines = text.splitlines()

    def tokens(index: int, count: int) -> list[str]:
        if index >= len(lines):
            raise ValueError(f"parameter file too short: missing line {index + 1}")
        found = lines[index].split()
        if len(found) < count:
            raise ValueError(f"line {index + 1} needs {count} value(s)")
        return found[:count]

    try:
        prime = int(tokens(1, 1)[0], 16)
        order = int(tokens(3, 1)[0], 16)
        cofactor = int(tokens(5, 1)[0], 10)
        a4, a6 = (int(t, 16) for t in tokens(7, 2))
        bx, by = (int(t, 16) for t in tokens(10, 2))
    except ValueError as exc:
        raise ValueError(f"malformed parameter file: {exc}") from exc
    curve = Curve(a4, a6, Modulus(prime))
    return BaseSystem(cofactor=cofactor, order=order, base=Point(bx, by), curve=curve)


def gen_key(phrase: bytes | str, system: BaseSystem) -> tuple[int, Point]:
    """Derive a secret key from a phrase; return (secret, public point)."""
    sk = hash_to_int(phrase, system.order)
    return sk, system.curve.multiply(system.base, sk)


def diffie_hellman(my_key: int, their_key: Point, curve: Curve) -> int:
    """Return the x coordinate of my_key * their_key."""
    return curve.multiply(their_key, my_key).x


def mqv_ephemeral(system: BaseSystem) -> tuple[int, Point]:
    """Return a random ephemeral secret and its public point."""
    ephem = system.curve.field.rand()
    return ephem, system.curve.multiply(system.base, ephem)


def avf(x: int, system: BaseSystem) -> int:
    """Low half of x with the bit just above it set, sized by the base order."""
    f = (system.order.bit_length() >> 1) + 1
    return (x & ((1 << f) - 1)) | (1 << f)


def mqv_share(
    my_key: int,
    my_public: Point,
    my_ephem: int,
    my_ephem_point: Point,
    their_key: Point,
    their_ephem: Point,
    system: BaseSystem,
) -> int:
    """Return the MQV shared value (an x coordinate)."""
    order = system.order
    curve = system.curve
    s = mod_add(mod_mul(avf(my_ephem_point.x, system), my_key, order), my_ephem, order)
    u = curve.multiply(their_key, avf(their_ephem.x, system))
    u = curve.add(u, their_ephem)
    u = curve.multiply(u, s)
    if system.cofactor > 1:
        u = curve.multiply(u, system.cofactor)
    return u.x


@dataclass(frozen=True)
class EcdsaSignature:
    """An ECDSA signature (c, d)."""

    c: int
    d: int


def ecdsa_sign(sk: int, pk: Point, msg: bytes | str, system: BaseSystem) -> EcdsaSignature:
    """Sign msg with the secret key sk."""
    order = system.order
    e = hash_to_int(msg, order)
    k = system.curve.field.rand()
    r = system.curve.multiply(system.base, k)
    c = r.x % order
    d = mod_div(mod_add(mod_mul(sk, c, order), e, order), k, order)
    return EcdsaSignature(c, d)


def ecdsa_verify(sig: EcdsaSignature, pk: Point, msg: bytes | str, system: BaseSystem) -> bool:
    """Return True if sig is a valid signature of msg under pk."""
    order = system.order
    curve = system.curve
    e = hash_to_int(msg, order)
    try:
        h = mod_div(1, sig.d, order)
    except ZeroDivisionError:
        return False
    h1 = mod_mul(e, h, order)
    h2 = mod_mul(sig.c, h, order)
    t = curve.multiply(pk, h2)
    s = curve.multiply(system.base, h1)
    r = curve.add(t, s)
    return r.x % order == sig.c


@dataclass(frozen=True)
class SchnorrSignature:
    """A Schnorr signature: commitment point q and response s."""

    q: Point
    s: int


def _schnorr_challenge(q: Point, msg: bytes | str, order: int) -> int:
    size = max((len(format(q.x, "x")) + 1) // 2, 1)
    x_bytes = (q.x % (1 << (8 * size))).to_bytes(size, "little")
    y_bytes = (q.y % (1 << (8 * size))).to_bytes(size, "little")
    return hash_to_int(x_bytes + y_bytes + _as_bytes(msg), order)


def schnorr_sign(sk: int, pk: Point, msg: bytes | str, system: BaseSystem) -> SchnorrSignature:
    """Sign msg with the secret key sk."""
    order = system.order
    k = system.curve.field.rand()
    q = system.curve.multiply(system.base, k)
    e = _schnorr_challenge(q, msg, order)
    s = mod_sub(k, mod_mul(sk, e, order), order)
    return SchnorrSignature(q, s)


def schnorr_verify(sig: SchnorrSignature, pk: Point, msg: bytes | str, system: BaseSystem) -> bool:
    """Return True if sig is a valid Schnorr signature of msg under pk."""
    curve = system.curve
    e = _schnorr_challenge(sig.q, msg, system.order)
    u = curve.multiply(system.base, sig.s)
    v = curve.multiply(pk, e)
    return curve.add(u, v) == sig.q