"""
Schema graph: all table definitions produced by one inference run.

Tables form a tree rooted at the table named for the input document;
each non-root table carries exactly one parent join.
"""

from typing import Any, Dict, Iterator, List, Optional

from docrel.inference.table_builder import TableDefinition, TableName


class SchemaGraphError(RuntimeError):
    """The graph violates one of its structural invariants."""
    pass


class SchemaGraph:
    """
    Ordered collection of table definitions.

    Tables are kept in creation order. Because a parent is always created
    before any of its children, iteration order is a valid top-down
    creation order for the catalog.
    """

    def __init__(self, root: TableName):
        self.root_name = root
        self._tables: Dict[TableName, TableDefinition] = {}

    def __contains__(self, name: TableName) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[TableDefinition]:
        return iter(list(self._tables.values()))

    def __len__(self) -> int:
        return len(self._tables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaGraph):
            return NotImplemented
        return (
            self.root_name == other.root_name
            and list(self._tables.values()) == list(other._tables.values())
        )

    def __repr__(self) -> str:
        return f"SchemaGraph(root={self.root_name}, tables={len(self)})"

    @property
    def root(self) -> TableDefinition:
        return self._tables[self.root_name]

    def add_table(self, name: TableName) -> TableDefinition:
        """Create an empty table definition and register it."""
        if name in self._tables:
            raise SchemaGraphError(f"Table {name} is already defined")
        table = TableDefinition(name)
        self._tables[name] = table
        return table

    def get(self, name: TableName) -> Optional[TableDefinition]:
        return self._tables.get(name)

    def table(self, name: TableName) -> TableDefinition:
        try:
            return self._tables[name]
        except KeyError:
            raise KeyError(f"Unknown table {name}") from None

    def children(self, name: TableName) -> List[TableDefinition]:
        """Tables joined directly to the given table, in creation order."""
        return [
            table for table in self._tables.values()
            if table.parent_join and table.parent_join.parent_table == name
        ]

    def validate(self) -> None:
        """
        Check the structural invariants of the graph.

        Raises:
            SchemaGraphError: If the root is missing or has a parent, a
                non-root table has no parent join, a join points at a
                missing table or column, or the joins contain a cycle
        """
        if self.root_name not in self._tables:
            raise SchemaGraphError(f"Root table {self.root_name} is missing")
        if self.root.parent_join is not None:
            raise SchemaGraphError(f"Root table {self.root_name} has a parent join")

        for table in self._tables.values():
            if not table.columns:
                raise SchemaGraphError(f"Table {table.name} has no columns")
            if table.name == self.root_name:
                continue

            join = table.parent_join
            if join is None:
                raise SchemaGraphError(f"Table {table.name} has no parent join")
            parent = self._tables.get(join.parent_table)
            if parent is None:
                raise SchemaGraphError(
                    f"Table {table.name} joins to unknown table {join.parent_table}")
            if parent.primary_key != join.parent_column:
                raise SchemaGraphError(
                    f"Table {table.name} joins to {join.parent_table}.{join.parent_column}, "
                    f"which is not its primary key")
            if table.column(join.child_column) is None:
                raise SchemaGraphError(
                    f"Table {table.name} has no join column {join.child_column}")

            seen = {table.name}
            current = parent
            while current.parent_join is not None:
                if current.name in seen:
                    raise SchemaGraphError(f"Cycle through table {current.name}")
                seen.add(current.name)
                ancestor = self._tables.get(current.parent_join.parent_table)
                if ancestor is None:
                    raise SchemaGraphError(
                        f"Table {current.name} joins to unknown table "
                        f"{current.parent_join.parent_table}")
                current = ancestor
            if current.name != self.root_name:
                raise SchemaGraphError(f"Table {table.name} is not reachable from the root")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root_name),
            "tables": [table.to_dict() for table in self._tables.values()],
        }
