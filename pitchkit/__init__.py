"""Deterministic composition of leveled sales pitch documents."""

__version__ = "0.1.0"
