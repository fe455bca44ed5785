import random

import pytest

from curvework.elliptic import Curve, Point
from curvework.modulo import Modulus
from curvework.protocols import (
    BaseSystem,
    EcdsaSignature,
    SchnorrSignature,
    avf,
    diffie_hellman,
    ecdsa_sign,
    ecdsa_verify,
    gen_key,
    hash_to_int,
    load_base_system,
    mqv_ephemeral,
    mqv_share,
    schnorr_sign,
    schnorr_verify,
)

P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

OTHER_PHRASE = "Secret Key Test For Other Side 157 164 218 149 124 108 253 26 40 "
MESSAGE = b"The quick brown fox jumps over the lazy dog.\n"


def make_system(cofactor=1, seed=7):
    curve = Curve(0, 7, Modulus(P, random.Random(seed)))
    return BaseSystem(cofactor=cofactor, order=N, base=Point(GX, GY), curve=curve)


PARAM_TEXT = "\n".join(
    [
        "prime:",
        format(P, "x"),
        "order:",
        format(N, "x"),
        "cofactor:",
        "1",
        "curve a4 a6:",
        "0 7",
        "base point",
        "x y:",
        f"{GX:x} {GY:x}",
        "",
    ]
)


def test_load_base_system_reads_all_fields():
    system = load_base_system(PARAM_TEXT)
    assert system.order == N
    assert system.cofactor == 1
    assert system.base == Point(GX, GY)
    assert system.curve.a4 == 0 and system.curve.a6 == 7
    assert system.curve.field.value == P


def test_load_base_system_short_file():
    with pytest.raises(ValueError):
        load_base_system("prime:\nff\n")


def test_base_point_has_stated_order():
    system = make_system()
    curve = system.curve
    top = curve.multiply(system.base, N - 1)
    assert curve.add(top, system.base).is_infinity()


def test_hash_in_range_and_deterministic():
    a = hash_to_int(b"abc", N)
    assert 0 <= a < N
    assert hash_to_int(b"abc", N) == a
    assert hash_to_int("abc", N) == a
    assert hash_to_int(b"abd", N) != a


def test_hash_small_modulus_range():
    values = {hash_to_int(bytes([i]), 11) for i in range(100)}
    assert values <= set(range(11))
    assert len(values) > 5


def test_hash_bad_modulus():
    with pytest.raises(ValueError):
        hash_to_int(b"x", 0)


def test_gen_key_is_deterministic_and_consistent():
    system = make_system()
    sk, pk = gen_key(OTHER_PHRASE, system)
    sk2, pk2 = gen_key(OTHER_PHRASE.encode(), system)
    assert (sk, pk) == (sk2, pk2)
    assert sk == hash_to_int(OTHER_PHRASE, N)
    assert pk == system.curve.multiply(system.base, sk)
    assert system.curve.rhs(pk.x) == pk.y * pk.y % P


def test_diffie_hellman_keys_match():
    system = make_system()
    sk, pk = gen_key("my pass phrase", system)
    sok, pok = gen_key(OTHER_PHRASE, system)
    mine = diffie_hellman(sk, pok, system.curve)
    theirs = diffie_hellman(sok, pk, system.curve)
    assert mine == theirs


def test_avf_values():
    system = make_system()
    assert avf(0, system) == 1 << 129
    assert avf((1 << 300) - 1, system) == (1 << 130) - 1


@pytest.mark.parametrize("cofactor", [1, 2])
def test_mqv_keys_match(cofactor):
    system = make_system(cofactor=cofactor)
    sk, pk = gen_key("my pass phrase", system)
    sok, pok = gen_key(OTHER_PHRASE, system)
    my_rand, rk = mqv_ephemeral(system)
    their_rand, rok = mqv_ephemeral(system)
    assert rk == system.curve.multiply(system.base, my_rand)
    mine = mqv_share(sk, pk, my_rand, rk, pok, rok, system)
    theirs = mqv_share(sok, pok, their_rand, rok, pk, rk, system)
    assert mine == theirs


def test_ecdsa_round_trip_and_tamper():
    system = make_system()
    sk, pk = gen_key("my pass phrase", system)
    sig = ecdsa_sign(sk, pk, MESSAGE, system)
    assert ecdsa_verify(sig, pk, MESSAGE, system) is True
    assert ecdsa_verify(sig, pk, MESSAGE + b"!", system) is False
    _, other_pk = gen_key(OTHER_PHRASE, system)
    assert ecdsa_verify(sig, other_pk, MESSAGE, system) is False


def test_ecdsa_zero_d_rejected():
    system = make_system()
    sk, pk = gen_key("my pass phrase", system)
    assert ecdsa_verify(EcdsaSignature(5, 0), pk, MESSAGE, system) is False


def test_schnorr_round_trip_and_tamper():
    system = make_system()
    sk, pk = gen_key("my pass phrase", system)
    sig = schnorr_sign(sk, pk, MESSAGE, system)
    assert schnorr_verify(sig, pk, MESSAGE, system) is True
    assert schnorr_verify(sig, pk, b"another message", system) is False
    bad = SchnorrSignature(sig.q, (sig.s + 1) % N)
    assert schnorr_verify(bad, pk, MESSAGE, system) is False


def test_schnorr_commitment_on_curve():
    system = make_system()
    sk, pk = gen_key("my pass phrase", system)
    sig = schnorr_sign(sk, pk, "text message", system)
    assert system.curve.rhs(sig.q.x) == sig.q.y * sig.q.y % P
    assert 0 <= sig.s < N
    assert schnorr_verify(sig, pk, "text message", system) is True