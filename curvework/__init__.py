"""Modular, elliptic curve and extension field arithmetic, curve protocols, QAP pieces and curve parameter searches."""

__version__ = "0.1.0"