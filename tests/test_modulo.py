import random

import pytest

from curvework.modulo import (
    Modulus,
    is_probable_prime,
    mod_add,
    mod_div,
    mod_mul,
    mod_neg,
    mod_sub,
)

N = 54881133298817149
B = 54881122831868268
C = 10022120677842


def test_mod_add_source_case():
    assert mod_add(B, C, N) == 10011653728961


def test_mod_sub_source_case():
    assert mod_sub(B, C, N) == 54871100711190426


def test_mod_div_inverts_mod_mul():
    quotient = mod_div(B, C, N)
    assert mod_mul(quotient, C, N) == B


def test_mod_mul_is_reduced():
    product = mod_mul(B, C, N)
    assert 0 <= product < N
    assert mod_div(product, C, N) == B


def test_mod_add_sub_round_trip():
    assert mod_sub(mod_add(B, C, N), C, N) == B


def test_mod_neg():
    assert mod_add(mod_neg(B, N), B, N) == 0
    assert mod_neg(0, N) == 0


def test_mod_div_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        mod_div(3, 0, 7)


def test_mod_div_not_invertible_raises():
    with pytest.raises(ZeroDivisionError):
        mod_div(1, 4, 8)


def test_modulus_rejects_small_value():
    with pytest.raises(ValueError):
        Modulus(1)


def test_modulus_methods_match_functions():
    field = Modulus(7)
    assert field.add(5, 4) == 2
    assert field.sub(2, 5) == 4
    assert field.mul(3, 5) == 1
    assert field.div(1, 3) == 5
    assert field.inv(3) == 5
    assert field.neg(3) == 4


def test_modulus_inv_of_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Modulus(7).inv(0)


def test_legendre_mod_seven():
    field = Modulus(7)
    assert [field.legendre(x) for x in range(7)] == [0, 1, 1, -1, 1, -1, -1]


def test_powi():
    field = Modulus(1847)
    assert field.powi(3, 0) == 1
    assert field.powi(3, -1) == field.inv(3)
    assert field.mul(field.powi(3, -5), field.powi(3, 5)) == 1
    assert field.powi(2, 10) == 1024 % 1847


def test_rand_in_range():
    field = Modulus(11, random.Random(5))
    values = {field.rand() for _ in range(500)}
    assert values <= set(range(2, 11))
    assert values == set(range(2, 11))


def test_rand_needs_modulus_above_two():
    with pytest.raises(ValueError):
        Modulus(2).rand()


def test_rand_is_reproducible_with_seed():
    first = Modulus(1847, random.Random(9))
    second = Modulus(1847, random.Random(9))
    assert [first.rand() for _ in range(10)] == [second.rand() for _ in range(10)]


@pytest.mark.parametrize("prime", [7, 41, 43, 97, 257, 1847, 2**61 - 1])
def test_sqrt_of_residues(prime):
    field = Modulus(prime, random.Random(3))
    for a in range(1, min(prime, 60)):
        if field.legendre(a) == 1:
            root = field.sqrt(a)
            assert field.mul(root, root) == a


def test_sqrt_non_residue_raises():
    field = Modulus(97, random.Random(1))
    non_residue = next(a for a in range(2, 97) if field.legendre(a) == -1)
    with pytest.raises(ValueError):
        field.sqrt(non_residue)


def test_sqrt_of_zero_raises():
    with pytest.raises(ValueError):
        Modulus(43).sqrt(0)


@pytest.mark.parametrize(
    "n, expected",
    [(0, 0), (1, 0), (2, 2), (7, 2), (8, 0), (561, 0), (999983, 2), (-7, 2)],
)
def test_is_probable_prime_small(n, expected):
    assert is_probable_prime(n, 5) == expected


def test_is_probable_prime_large():
    assert is_probable_prime(2**61 - 1, 25) == 1
    assert is_probable_prime(2**61 + 1, 25) == 0
    assert is_probable_prime(1000003 * 1000033, 25) == 0