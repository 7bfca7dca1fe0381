"""
Unit tests for logical to SQLAlchemy type resolution.
"""

import pytest
from sqlalchemy import BigInteger, Boolean, DateTime, Double, Integer, String
from sqlalchemy.dialects import sqlite

from docrel.catalog.type_resolver import SqlAlchemyTypeResolver
from docrel.inference.column_types import (
    AUTO_INCREMENT_INTEGER,
    BIG_INTEGER,
    BOOLEAN,
    DATE_TIME,
    DOUBLE,
    ColumnType,
    TypeKind,
)


class TestSqlAlchemyTypeResolver:
    """Tests for SqlAlchemyTypeResolver."""

    def setup_method(self):
        self.resolver = SqlAlchemyTypeResolver()

    def test_string_keeps_width(self):
        resolved = self.resolver.resolve(ColumnType.string(42))

        assert isinstance(resolved, String)
        assert resolved.length == 42

    def test_scalar_types(self):
        assert isinstance(self.resolver.resolve(BIG_INTEGER), BigInteger)
        assert isinstance(self.resolver.resolve(DOUBLE), Double)
        assert isinstance(self.resolver.resolve(BOOLEAN), Boolean)
        assert isinstance(self.resolver.resolve(DATE_TIME), DateTime)

    def test_auto_increment_is_plain_integer_on_sqlite(self):
        resolved = self.resolver.resolve(AUTO_INCREMENT_INTEGER)

        assert isinstance(resolved, BigInteger)
        assert isinstance(resolved.dialect_impl(sqlite.dialect()), Integer)
        assert not isinstance(resolved.dialect_impl(sqlite.dialect()), BigInteger)

    def test_string_without_width_is_rejected(self):
        with pytest.raises(ValueError):
            self.resolver.resolve(ColumnType(TypeKind.STRING))
