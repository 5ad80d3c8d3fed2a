"""Comparador de regimes tributários (Simples Nacional, Lucro Presumido, Lucro Real)."""

__version__ = "0.1.0"
