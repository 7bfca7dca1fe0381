"""
Resolution of logical column types to SQLAlchemy column types.

Inference never builds catalog types itself; the materializer asks a
TypeResolver for the concrete type of every column.
"""

from typing import Protocol

from sqlalchemy import BigInteger, Boolean, DateTime, Double, Integer, String  # type: ignore
from sqlalchemy.types import TypeEngine  # type: ignore

from docrel.inference.column_types import ColumnType, TypeKind


class TypeResolver(Protocol):
    """Maps a logical column type to a concrete catalog type."""

    def resolve(self, column_type: ColumnType) -> TypeEngine:
        ...


class SqlAlchemyTypeResolver:
    """Default resolver producing portable SQLAlchemy types."""

    def resolve(self, column_type: ColumnType) -> TypeEngine:
        kind = column_type.kind
        if kind is TypeKind.STRING:
            if not column_type.width:
                raise ValueError("String columns need a width")
            return String(column_type.width)
        if kind is TypeKind.BIG_INTEGER:
            return BigInteger()
        if kind is TypeKind.DOUBLE:
            return Double()
        if kind is TypeKind.BOOLEAN:
            return Boolean()
        if kind is TypeKind.DATE_TIME:
            return DateTime()
        if kind is TypeKind.AUTO_INCREMENT_INTEGER:
            # SQLite only auto-increments INTEGER PRIMARY KEY columns
            return BigInteger().with_variant(Integer(), "sqlite")
        raise ValueError(f"Unsupported column type: {column_type}")
