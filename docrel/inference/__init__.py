"""
Inference module for document decomposition.

Provides shape classification, column type inference, per-table schema
building and recursive decomposition of nested documents into a graph
of joined table definitions.
"""

from docrel.inference.document import (
    Classification,
    ScalarKind,
    Shape,
    classify,
)
from docrel.inference.column_types import (
    ColumnDefinition,
    ColumnType,
    TypeKind,
    infer_column,
    is_date_time,
)
from docrel.inference.table_builder import (
    DuplicateColumnName,
    ParentJoin,
    TableDefinition,
    TableName,
    TableSchemaBuilder,
    PK_COLUMN_NAME,
    PLACEHOLDER_COLUMN_NAME,
    VALUE_COLUMN_NAME,
    parent_reference_column_name,
)
from docrel.inference.schema_graph import SchemaGraph, SchemaGraphError
from docrel.inference.policy import InferencePolicy
from docrel.inference.decomposer import (
    RecursiveDecomposer,
    SchemaInferenceError,
    TableNameCollision,
)
from docrel.inference.assembler import (
    SchemaAssembler,
    UnsupportedRootShape,
    infer_schema,
)

__all__ = [  # ruff: noqa: RUF022
    # Classification
    "Classification",
    "ScalarKind",
    "Shape",
    "classify",
    # Column Types
    "ColumnDefinition",
    "ColumnType",
    "TypeKind",
    "infer_column",
    "is_date_time",
    # Table Building
    "DuplicateColumnName",
    "ParentJoin",
    "TableDefinition",
    "TableName",
    "TableSchemaBuilder",
    "PK_COLUMN_NAME",
    "PLACEHOLDER_COLUMN_NAME",
    "VALUE_COLUMN_NAME",
    "parent_reference_column_name",
    # Graph
    "SchemaGraph",
    "SchemaGraphError",
    # Decomposition
    "InferencePolicy",
    "RecursiveDecomposer",
    "SchemaInferenceError",
    "TableNameCollision",
    "SchemaAssembler",
    "UnsupportedRootShape",
    "infer_schema",
]
