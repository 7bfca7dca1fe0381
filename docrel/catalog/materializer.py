"""
Materialization of schema graphs into a SQLAlchemy catalog.

Turns table definitions into SQLAlchemy ``Table`` objects and creates
them, parents before children, inside a single transaction. The same
translation backs dry runs that only render ``CREATE TABLE`` DDL.
"""

import logging
from typing import Dict, List, Optional, Protocol, Union

from sqlalchemy import Column, ForeignKey, MetaData, Table  # type: ignore
from sqlalchemy.dialects import mysql, postgresql, sqlite  # type: ignore
from sqlalchemy.engine import Connection, Dialect, Engine  # type: ignore
from sqlalchemy.schema import CreateTable  # type: ignore

from docrel.catalog.type_resolver import SqlAlchemyTypeResolver, TypeResolver
from docrel.inference.schema_graph import SchemaGraph
from docrel.inference.table_builder import TableDefinition, TableName

logger = logging.getLogger(__name__)

DIALECTS = {
    "sqlite": sqlite.dialect,
    "postgresql": postgresql.dialect,
    "mysql": mysql.dialect,
}


class SchemaMaterializer(Protocol):
    """Creates the physical table for a table definition."""

    def materialize(self, definition: TableDefinition) -> Table:
        ...


def _foreign_key_target(name: TableName, column: str) -> str:
    return f"{name}.{column}"


def build_table(
    definition: TableDefinition,
    metadata: MetaData,
    resolver: Optional[TypeResolver] = None,
) -> Table:
    """
    Translate a table definition into a SQLAlchemy Table.

    The primary key column is auto-incrementing; the parent reference
    column carries the foreign key to the parent's primary key.
    """
    resolver = resolver or SqlAlchemyTypeResolver()
    join = definition.parent_join
    columns = []

    for column in definition.columns:
        args = [column.name, resolver.resolve(column.type)]
        kwargs = {"nullable": column.nullable}

        if column.name == definition.primary_key:
            kwargs.update(primary_key=True, autoincrement=True)
        if join is not None and column.name == join.child_column:
            args.append(ForeignKey(
                _foreign_key_target(join.parent_table, join.parent_column)))

        columns.append(Column(*args, **kwargs))

    return Table(
        definition.name.name,
        metadata,
        *columns,
        schema=definition.name.schema,
    )


def build_tables(
    graph: SchemaGraph,
    metadata: MetaData,
    resolver: Optional[TypeResolver] = None,
) -> List[Table]:
    """Translate every table of a graph, in top-down order."""
    return [build_table(definition, metadata, resolver) for definition in graph]


def resolve_dialect(dialect: Union[str, Dialect]) -> Dialect:
    if not isinstance(dialect, str):
        return dialect
    try:
        return DIALECTS[dialect]()
    except KeyError:
        raise ValueError(
            f"Unknown dialect {dialect!r}; expected one of {sorted(DIALECTS)}") from None


def render_ddl(
    graph: SchemaGraph,
    dialect: Union[str, Dialect] = "sqlite",
    resolver: Optional[TypeResolver] = None,
) -> List[str]:
    """
    Render CREATE TABLE statements for a graph without a database.

    Args:
        graph: Inferred schema graph
        dialect: Dialect name (sqlite, postgresql, mysql) or instance
        resolver: Type resolver; defaults to SqlAlchemyTypeResolver

    Returns:
        One statement per table, parents before children
    """
    compiled_dialect = resolve_dialect(dialect)
    tables = build_tables(graph, MetaData(), resolver)
    return [
        str(CreateTable(table).compile(dialect=compiled_dialect)).strip()
        for table in tables
    ]


class SqlAlchemyMaterializer:
    """
    Creates tables for table definitions through a SQLAlchemy engine.

    Catalog errors (existing table, constraint violations) are raised
    unchanged as SQLAlchemy exceptions.
    """

    def __init__(
        self,
        engine: Engine,
        resolver: Optional[TypeResolver] = None,
        metadata: Optional[MetaData] = None,
    ):
        self.engine = engine
        self.resolver = resolver or SqlAlchemyTypeResolver()
        self.metadata = metadata or MetaData()

    def materialize(
        self,
        definition: TableDefinition,
        connection: Optional[Connection] = None,
    ) -> Table:
        """
        Create one table.

        A child table's parent must already be materialized through this
        materializer so its foreign key can be resolved.
        """
        table = build_table(definition, self.metadata, self.resolver)
        try:
            if connection is None:
                with self.engine.begin() as conn:
                    table.create(bind=conn, checkfirst=False)
            else:
                table.create(bind=connection, checkfirst=False)
        except Exception:
            self.metadata.remove(table)
            raise
        logger.info("Created table %s", definition.name)
        return table

    def materialize_graph(self, graph: SchemaGraph) -> Dict[TableName, Table]:
        """
        Create every table of a graph in one transaction.

        Returns:
            Created tables keyed by name, in creation order
        """
        created: Dict[TableName, Table] = {}
        try:
            with self.engine.begin() as conn:
                for definition in graph:
                    created[definition.name] = self.materialize(definition, conn)
        except Exception:
            self._forget(graph)
            raise
        return created

    def _forget(self, graph: SchemaGraph) -> None:
        # Drop half-registered tables so the graph can be materialized again
        for definition in graph:
            table = self.metadata.tables.get(str(definition.name))
            if table is not None:
                self.metadata.remove(table)
