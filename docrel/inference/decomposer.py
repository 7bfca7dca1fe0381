"""
Recursive decomposition of nested documents into joined tables.

Scalar fields of an object become columns of the current table. Each
container-valued field becomes a child table named after the field,
which references the current table through a generated key column.
"""

import logging
from typing import Any, Dict, List

from docrel.inference.column_types import BIG_INTEGER, ColumnDefinition, infer_column
from docrel.inference.document import classify
from docrel.inference.policy import InferencePolicy
from docrel.inference.schema_graph import SchemaGraph
from docrel.inference.table_builder import (
    PK_COLUMN_NAME,
    VALUE_COLUMN_NAME,
    TableName,
    TableSchemaBuilder,
    parent_reference_column_name,
)

logger = logging.getLogger(__name__)


class SchemaInferenceError(Exception):
    """Base class for errors caused by the shape of the input document."""
    pass


class TableNameCollision(SchemaInferenceError):
    """A nested field maps to a table name that is already in the graph."""

    def __init__(self, table_name: TableName, parent: TableName):
        self.table_name = table_name
        self.parent = parent
        super().__init__(
            f"Field {table_name.name!r} of table {parent} maps to table "
            f"{table_name}, which is already defined")


class RecursiveDecomposer:
    """Walks a document top-down, adding tables to a schema graph."""

    def __init__(self, graph: SchemaGraph, policy: InferencePolicy):
        self.graph = graph
        self.policy = policy

    @property
    def width(self) -> int:
        return self.policy.default_string_width

    def new_table(self, name: TableName) -> TableSchemaBuilder:
        """Register a new table, keyed up front if the policy says so."""
        logger.debug("Creating table %s", name)
        builder = TableSchemaBuilder(self.graph.add_table(name))
        if self.policy.always_with_primary_key:
            builder.ensure_primary_key()
        return builder

    def decompose(self, document: Any, builder: TableSchemaBuilder) -> None:
        """
        Decompose a container document into the builder's table.

        Args:
            document: Object or array document
            builder: Builder of the table the document maps to

        Raises:
            TypeError: If the document is a scalar
            TableNameCollision: If a nested field reuses a table name
        """
        classification = classify(document)
        if classification.is_object:
            self._decompose_object(document, builder)
        elif classification.is_array:
            self._decompose_array(document, builder)
        else:
            raise TypeError(
                f"Cannot decompose a {classification.scalar_kind.value} scalar "
                f"into table {builder.name}")

    def _decompose_object(self, document: Dict[str, Any], builder: TableSchemaBuilder) -> None:
        containers = []

        # Pass 1: scalar fields become columns, in field order
        for field_name, value in document.items():
            if classify(value).is_container:
                containers.append((str(field_name), value))
            else:
                builder.add_column(infer_column(str(field_name), value, self.width))

        if builder.is_empty:
            logger.debug("Adding placeholder column to %s", builder.name)
        builder.ensure_non_empty(self.width)

        # Pass 2: container fields become child tables
        for field_name, value in containers:
            builder.ensure_primary_key()
            self._decompose_child(field_name, value, builder)

    def _decompose_child(self, field_name: str, value: Any, parent: TableSchemaBuilder) -> None:
        child_name = parent.name.child(field_name)
        if child_name in self.graph:
            raise TableNameCollision(child_name, parent.name)

        child = self.new_table(child_name)
        self.decompose(value, child)

        reference = parent_reference_column_name(parent.name.name)
        child.add_column(ColumnDefinition(reference, BIG_INTEGER, nullable=False))
        child.join_to(parent.name, PK_COLUMN_NAME, reference)
        logger.debug("Joined %s.%s to %s.%s",
                     child_name, reference, parent.name, PK_COLUMN_NAME)

    def _decompose_array(self, document: List[Any], builder: TableSchemaBuilder) -> None:
        # Only the first object or scalar element contributes to the schema.
        # Nested arrays ahead of it are skipped.
        for element in document:
            classification = classify(element)
            if classification.is_object:
                self._decompose_object(element, builder)
                return
            if not classification.is_container:
                builder.add_column(infer_column(VALUE_COLUMN_NAME, element, self.width))
                return

        if builder.is_empty:
            logger.debug("Adding placeholder column to %s", builder.name)
        builder.ensure_non_empty(self.width)
