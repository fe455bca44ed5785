# curvework

Working pieces for elliptic curve cryptography over prime fields and their
extensions, written with plain Python integers.

## What is in the package

- `curvework.modulo`: modular arithmetic with an explicit modulus
  (`mod_add`, `mod_sub`, `mod_mul`, `mod_div`, `mod_neg`), a probable-prime
  test `is_probable_prime` (2 = certainly prime, 1 = probably prime,
  0 = composite), and the `Modulus` class. `Modulus` fixes a modulus and has
  its own random source. It offers `add`, `sub`, `mul`, `div`, `inv`, `neg`,
  `rand` (a value from 2 to modulus - 1), `legendre`, `powi` (negative powers
  use the inverse) and `sqrt` (Tonelli–Shanks). `div` and `inv` raise
  `ZeroDivisionError` when there is no inverse. `sqrt` raises `ValueError`
  for a non-residue.
- `curvework.elliptic`: `Point` and `Curve` for short Weierstrass curves
  `y^2 = x^3 + a4*x + a6`. `Curve` has `rhs`, `add` (one formula for both
  addition and doubling), `multiply`, `embed` and `random_point`. `embed`
  moves forward from `x` to the first point on the curve and returns both
  points there, smaller `y` first. The point `(0, 0)` stands for the point
  at infinity.
- `curvework.poly`: immutable polynomials over GF(p) (`Poly`, lowest power
  first) and the functions `poly_add`, `poly_sub`, `poly_normal`,
  `poly_divmod`, `poly_gcd`, `poly_pseudo_div`, `poly_content` and
  `poly_resultant`. `ExtensionField` works in GF(p^k) modulo an irreducible
  polynomial. It has `order`, `mul`, `pow`, `xp` (Frobenius), `gpow_p2`,
  `is_residue`, `sqrt`, `invert`, `div` and `rand`. `find_irreducible`
  returns the first irreducible trinomial `x^n + x + j` (Ben-Or test), or
  `None`.
- `curvework.protocols` covers the following:
  - `hash_to_int` hashes to an integer with KangarooTwelve.
  - `load_base_system` reads a `BaseSystem` (curve, base point, order,
    cofactor) from a parameter text.
  - `gen_key` derives a key from a pass phrase.
  - `diffie_hellman` does Diffie–Hellman key agreement.
  - `mqv_ephemeral`, `avf` and `mqv_share` do MQV key agreement.
  - `ecdsa_sign` and `ecdsa_verify` handle ECDSA signatures (`EcdsaSignature`).
  - `schnorr_sign` and `schnorr_verify` handle Schnorr signatures
    (`SchnorrSignature`).
- `curvework.snark` builds a quadratic arithmetic program from Lagrange
  interpolants:
  - `p_i`, `li_lj`, `liofx`, `liljofx`, `all_lilj` build the interpolants and
    their cross terms.
  - `lcalc` evaluates a polynomial.
  - `tofzgrth` evaluates the target polynomial.
  - `matflat` takes a weighted row sum.
  - `wires` and `crossterms` give the wire and cross-term values of a
    five-gate, ten-wire example circuit.
  - The `Qap` container goes with `build_example_qap`, `write_qap` and
    `read_qap` (binary format).
- `curvework.pairing_search`: searches for pairing-friendly curve parameters
  in the Phi_4k family (`phi4k`, `xstart`, `mkalpha`, `gen_qofz`,
  `gen_tofz`, `sweep_qofz`, `sweep_tofz`, `gen_search`, `sweep_search`). It
  also searches the Phi_6k family (`phi_coefficients`, `phi6k`, `tofx1`,
  `tofx5`, `qofx1`, `qofx5`, `phi6_search`).
- `curvework.curves`: `parse_curve_output` reads a curve-order search report
  into `CurveRecord` values. `sort_records` orders them by decreasing large
  prime. `format_record` renders one saved line.

## Quick look

```python
from curvework.modulo import Modulus, mod_add, mod_mul
from curvework.elliptic import Curve

mod_add(5, 4, 7)   # 2
mod_mul(3, 5, 7)   # 1

field = Modulus(43)
curve = Curve(23, 42, field)
p = curve.random_point()
q = curve.multiply(p, 5)
```

## Commands

Search for pairing-friendly parameters for a target size of `r` in bits.
Results go to `pair.NNN`:

    curvework-pairing-gen 160

Search the Phi_6k family for a prime embedding degree from 5 to 31 up to a
search limit. Results go to `pairing_phi6.NN`:

    curvework-pairing-phi6 7 1000

Sweep an odd embedding degree `k` over 40 alpha bases and values of `u` and
`x` up to a limit. Results go to `pairings.NN`, and the number of prime `r`
found is printed:

    curvework-pairing-sweep 7 200

Collect the curves in a curve search report and write them, largest prime
first, to a file ending in `.saved`. The name is cut at `.out`, or
`.saved` is appended if there is no `.out`:

    curvework-pull-curves curves_160.output

## What the package does not do

- It does not count points on curves. `curvework.curves` only reads a report
  that already holds the factored curve orders.
- It has no pairing computation and no curve arithmetic over the extension
  field.
- For the SNARK, it stops at building, storing and evaluating the QAP and the
  prover's wire values. It does not create a common reference string, produce
  proofs or verify them.

## Running the tests

    pip install -e ".[test]"
    pytest