"""
Table definitions and the per-table schema builder.

Naming conventions for generated columns are part of the catalog
contract and must not change:

- primary key: ``_id``
- reference to the parent table: ``_<parent table name>_id``
- single column of an array-of-scalars table: ``value``
- placeholder column of a shapeless container: ``placeholder``
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from docrel.inference.column_types import (
    AUTO_INCREMENT_INTEGER,
    ColumnDefinition,
    ColumnType,
)

logger = logging.getLogger(__name__)

PK_COLUMN_NAME = "_id"
VALUE_COLUMN_NAME = "value"
PLACEHOLDER_COLUMN_NAME = "placeholder"


def parent_reference_column_name(parent_table: str) -> str:
    """Name of the column a child table uses to reference its parent."""
    return f"_{parent_table}{PK_COLUMN_NAME}"


class DuplicateColumnName(RuntimeError):
    """
    A column name was added twice to the same table.

    This points at a decomposition bug or at a nested field whose name
    collides with a generated column; it is not a recoverable data error.
    """

    def __init__(self, table_name: "TableName", column_name: str):
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(
            f"Column {column_name!r} already exists in table {table_name}")


@dataclass(frozen=True)
class TableName:
    """A table name qualified by an optional schema namespace."""
    schema: Optional[str]
    name: str

    @classmethod
    def parse(cls, qualified: str, default_schema: Optional[str] = None) -> "TableName":
        """Parse ``schema.table`` or ``table`` into a TableName."""
        schema, dot, name = qualified.rpartition(".")
        if not name or (dot and not schema):
            raise ValueError(f"Invalid table name: {qualified!r}")
        return cls(schema if dot else default_schema, name)

    def child(self, name: str) -> "TableName":
        """Name of a child table in the same schema."""
        return TableName(self.schema, name)

    def __str__(self) -> str:
        return f"{self.schema}.{self.name}" if self.schema else self.name


@dataclass(frozen=True)
class ParentJoin:
    """Join from a child table's reference column to its parent's key."""
    parent_table: TableName
    parent_column: str
    child_column: str


@dataclass
class TableDefinition:
    """A relational table under construction."""
    name: TableName
    columns: List[ColumnDefinition] = field(default_factory=list)
    primary_key: Optional[str] = None
    parent_join: Optional[ParentJoin] = None

    def column(self, name: str) -> Optional[ColumnDefinition]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def to_dict(self) -> Dict[str, Any]:
        join = None
        if self.parent_join:
            join = {
                "parent_table": str(self.parent_join.parent_table),
                "parent_column": self.parent_join.parent_column,
                "child_column": self.parent_join.child_column,
            }
        return {
            "name": str(self.name),
            "schema": self.name.schema,
            "table": self.name.name,
            "columns": [column.to_dict() for column in self.columns],
            "primary_key": self.primary_key,
            "parent_join": join,
        }


class TableSchemaBuilder:
    """
    Accumulates the columns of one table.

    The builder only ever appends; columns keep the order they were
    added in, which is the field order of the source document.
    """

    def __init__(self, table: TableDefinition):
        self.table = table

    @property
    def name(self) -> TableName:
        return self.table.name

    @property
    def is_empty(self) -> bool:
        return not self.table.columns

    def add_column(self, definition: ColumnDefinition) -> None:
        """
        Append a column.

        Raises:
            DuplicateColumnName: If the table already has a column of that name
        """
        if self.table.column(definition.name) is not None:
            raise DuplicateColumnName(self.table.name, definition.name)
        self.table.columns.append(definition)
        logger.debug("Column %s %s added to %s",
                     definition.name, definition.type, self.table.name)

    def ensure_primary_key(self) -> None:
        """Add the auto-increment ``_id`` primary key unless already present."""
        if self.table.primary_key is not None:
            return
        self.add_column(ColumnDefinition(
            PK_COLUMN_NAME, AUTO_INCREMENT_INTEGER, nullable=False))
        self.table.primary_key = PK_COLUMN_NAME

    def ensure_non_empty(self, default_width: int) -> None:
        """Add the placeholder string column if no column was added yet."""
        if not self.is_empty:
            return
        self.add_column(ColumnDefinition(
            PLACEHOLDER_COLUMN_NAME, ColumnType.string(default_width)))

    def join_to(self, parent: TableName, parent_column: str, child_column: str) -> None:
        """Record the join from this table to its parent."""
        self.table.parent_join = ParentJoin(parent, parent_column, child_column)
