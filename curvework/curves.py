"""Collect and rank curves found by a curve-order search.

The input is the text report of the search: one line per curve with the
coefficients followed, for curves of interest, by a factorisation of the
curve order such as ``2^2 * 3 * 5  * <large prime>``.
"""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

_CURVE_LINE = re.compile(r"(\S+)\s+2\^(\d+)\s*\*(.*)")


@dataclass(frozen=True)
class CurveRecord:
    """A curve with a4 = 1: its a6 (hex text), cofactor and large prime factor."""

    a6: str
    cofactor: int
    prime: int


def parse_curve_output(text: str) -> list[CurveRecord]:
    """Return a record for every line that carries a factored curve order."""
    records = []
    for number, line in enumerate(text.splitlines(), 1):
        match = _CURVE_LINE.search(line)
        if match is None:
            continue
        a6, power, rest = match.groups()
        tokens = [token.strip() for token in rest.split("*")]
        if not tokens or not all(token.isdigit() for token in tokens):
            raise ValueError(f"line {number}: malformed factorisation")
        factors = [int(token, 10) for token in tokens]
        cofactor = 2 ** int(power) * math.prod(factors[:-1])
        records.append(CurveRecord(a6=a6, cofactor=cofactor, prime=factors[-1]))
    return records


def sort_records(records: Iterable[CurveRecord]) -> list[CurveRecord]:
    """Order records by decreasing prime; ties keep their input order."""
    return sorted(records, key=lambda record: record.prime, reverse=True)


def format_record(record: CurveRecord) -> str:
    """Render one line of the saved file: a4, a6, cofactor, prime in hex."""
    return f"1 {record.a6.rjust(4)} {record.cofactor} {record.prime:x}"


def _saved_name(name: str) -> str:
    index = name.find(".out")
    if index < 0:
        return name + ".saved"
    return name[:index] + ".saved"


def main(argv: Sequence[str] | None = None) -> int:
    """Command: read a search report, write its curves sorted to <name>.saved."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("USE: pull_curves <filename>")
        return 1
    name = args[0]
    try:
        with open(name, "r", errors="replace") as source:
            text = source.read()
    except OSError:
        print(f"can't find file {name}")
        return 2
    records = sort_records(parse_curve_output(text))
    with open(_saved_name(name), "w") as saved:
        for record in records:
            saved.write(format_record(record) + "\n")
    return 0