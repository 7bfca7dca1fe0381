"""Relational schema inference for semi-structured documents."""

__version__ = "0.1.0"
