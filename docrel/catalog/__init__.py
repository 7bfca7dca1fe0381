"""Catalog collaborators: type resolution and table materialization."""

from docrel.catalog.type_resolver import SqlAlchemyTypeResolver, TypeResolver
from docrel.catalog.materializer import (
    SchemaMaterializer,
    SqlAlchemyMaterializer,
    build_table,
    build_tables,
    render_ddl,
)

__all__ = [
    "SqlAlchemyTypeResolver",
    "TypeResolver",
    "SchemaMaterializer",
    "SqlAlchemyMaterializer",
    "build_table",
    "build_tables",
    "render_ddl",
]
