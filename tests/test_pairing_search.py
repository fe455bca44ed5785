import io
import re

import pytest

from curvework.modulo import is_probable_prime
from curvework.pairing_search import (
    gen_main,
    gen_qofz,
    gen_search,
    gen_tofz,
    mkalpha,
    phi4k,
    phi6_main,
    phi6_search,
    phi6k,
    phi_coefficients,
    qofx1,
    sweep_main,
    sweep_qofz,
    sweep_search,
    sweep_tofz,
    tofx1,
    xstart,
)

TABLE_KS = (5, 7, 11, 13, 17, 19, 23, 29, 31)


def _records(text):
    pattern = re.compile(r"k= (\d+) (?:alpha = (\d+) )? x = (\d+)\nr = (\d+) numbits")
    return [tuple(int(g) if g else None for g in m.groups()) for m in pattern.finditer(text)]


@pytest.mark.parametrize("k", [3, 5, 7, 11])
@pytest.mark.parametrize("x", [1, 2, 3])
def test_phi4k_times_one_plus_z(k, x):
    alpha = mkalpha(1, 3)
    z = alpha * x * x
    assert phi4k(k, alpha, x) * (1 + z) == 1 + z ** k


@pytest.mark.parametrize("k", [4, 9, 41])
def test_phi4k_rejects_bad_k(k):
    with pytest.raises(ValueError):
        phi4k(k, 3, 1)


def test_mkalpha_scales_base():
    assert mkalpha(5, 7) == 5 * 5 * 7


@pytest.mark.parametrize(
    "lg2r, k, alphabase",
    [(100, 7, 3), (200, 11, 3), (300, 19, 3), (350, 19, 43), (400, 23, 67), (600, 31, 3)],
)
def test_xstart_table(lg2r, k, alphabase):
    got_k, limit, got_base = xstart(lg2r)
    assert (got_k, got_base) == (k, alphabase)
    assert limit >= 0


def test_xstart_limit_grows_with_size():
    assert xstart(180)[1] >= xstart(100)[1]


@pytest.mark.parametrize("k", [3, 7, 11])
@pytest.mark.parametrize("x", [1, 2, 3])
def test_qofz_variants_agree_when_half_degree_even(k, x):
    assert gen_qofz(k, 3, x) == sweep_qofz(k, 3, x)


def test_qofz_none_when_not_divisible():
    assert gen_qofz(7, 4, 1) is None
    assert sweep_qofz(7, 4, 1) is None


@pytest.mark.parametrize("k", [3, 7])
def test_tofz_agree_for_even_half(k):
    assert gen_tofz(k, 3, 2) == sweep_tofz(k, 3, 2)


@pytest.mark.parametrize("k", [5, 9])
def test_tofz_sum_for_odd_half(k):
    assert gen_tofz(k, 3, 2) + sweep_tofz(k, 3, 2) == 2


def test_phi_coefficients_table_for_five():
    assert phi_coefficients(5) == (1, 1, 0, -1, -1, -1, 0, 1, 1)


@pytest.mark.parametrize("k", TABLE_KS)
def test_phi_coefficients_length(k):
    assert len(phi_coefficients(k)) == 2 * k - 1


@pytest.mark.parametrize("k", [3, 9, 33])
def test_phi_coefficients_rejects(k):
    with pytest.raises(ValueError):
        phi_coefficients(k)


@pytest.mark.parametrize("k", TABLE_KS)
@pytest.mark.parametrize("x", [2, 3])
def test_phi6k_divides_x_power(k, x):
    assert (x ** (6 * k) - 1) % phi6k(k, x) == 0


@pytest.mark.parametrize("k", [7, 13, 19])
@pytest.mark.parametrize("x", [2, 5, 8])
def test_phi6_curve_order_divisible_by_r(k, x):
    r = phi6k(k, x)
    assert (qofx1(k, x) + 1 - tofx1(k, x)) % r == 0


def test_gen_search_header_and_records():
    buf = io.StringIO()
    count = gen_search(40, buf)
    text = buf.getvalue()
    k, limit, alphabase = xstart(40)
    assert text.startswith(f"k= {k} alphabase = {alphabase} max = {limit}\n")
    records = _records(text)
    assert len(records) == count
    for rk, alpha, x, r in records:
        assert r == phi4k(rk, alpha, x)
        assert is_probable_prime(r) > 0


def test_gen_search_rejects_small():
    with pytest.raises(ValueError):
        gen_search(1, io.StringIO())


def test_phi6_search_records():
    buf = io.StringIO()
    count = phi6_search(7, 30, buf)
    lines = buf.getvalue().splitlines()
    assert len(lines) == 6 * count
    for rk, _, x, r in _records(buf.getvalue()):
        assert rk == 7
        assert r == phi6k(7, x)
        assert is_probable_prime(r) > 0


def test_phi6_search_errors():
    with pytest.raises(ValueError):
        phi6_search(9, 10, io.StringIO())
    with pytest.raises(ValueError):
        phi6_search(7, 1, io.StringIO())


def test_sweep_search_records():
    buf = io.StringIO()
    count = sweep_search(3, 3, buf)
    records = _records(buf.getvalue())
    assert count >= len(records)
    for rk, alpha, x, r in records:
        assert r == phi4k(rk, alpha, x)
        assert sweep_qofz(rk, alpha, x) is not None


def test_sweep_search_errors():
    with pytest.raises(ValueError):
        sweep_search(4, 3, io.StringIO())
    with pytest.raises(ValueError):
        sweep_search(3, 0, io.StringIO())


def test_gen_main_writes_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert gen_main(["40"]) == 0
    content = (tmp_path / "pair.040").read_text()
    assert content.startswith("k= 7 alphabase = 3")


def test_gen_main_errors(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert gen_main([]) == 1
    assert gen_main(["1"]) == 1


def test_phi6_main_codes(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert phi6_main(["7"]) == 1
    assert phi6_main(["4", "10"]) == 2
    assert phi6_main(["9", "10"]) == 3
    assert phi6_main(["7", "1"]) == 4
    assert phi6_main(["7", "10"]) == 0
    assert (tmp_path / "pairing_phi6.07").exists()


def test_sweep_main_codes(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert sweep_main(["4", "3"]) == 1
    assert sweep_main(["3", "0"]) == 2
    assert sweep_main(["3", "2"]) == 0
    assert "r primes" in capsys.readouterr().out
    assert (tmp_path / "pairings.03").exists()