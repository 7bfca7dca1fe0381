"""
Schema assembly: document in, validated schema graph out.

Inference is a pure transformation. It performs no I/O and touches no
shared state, so independent documents can be inferred concurrently.
"""

import logging
from typing import Any, Optional, Union

from docrel.inference.decomposer import RecursiveDecomposer, SchemaInferenceError
from docrel.inference.document import ScalarKind, classify
from docrel.inference.policy import InferencePolicy
from docrel.inference.schema_graph import SchemaGraph
from docrel.inference.table_builder import TableName

logger = logging.getLogger(__name__)


class UnsupportedRootShape(SchemaInferenceError):
    """The top-level document is a bare scalar."""

    def __init__(self, table_name: TableName, kind: ScalarKind):
        self.table_name = table_name
        self.kind = kind
        super().__init__(
            f"Cannot infer table {table_name} from a top-level {kind.value} "
            f"scalar; expected an object or an array")


class SchemaAssembler:
    """Infers the schema graph of a document under a fixed policy."""

    def __init__(self, policy: Optional[InferencePolicy] = None):
        self.policy = policy or InferencePolicy()

    def infer(self, document: Any, table_name: TableName) -> SchemaGraph:
        """
        Infer the tables implied by a document.

        Args:
            document: Parsed object or array document
            table_name: Name of the root table

        Returns:
            Validated SchemaGraph rooted at table_name

        Raises:
            UnsupportedRootShape: If the document is a scalar
            TableNameCollision: If two containers map to the same table name
        """
        classification = classify(document)
        if not classification.is_container:
            raise UnsupportedRootShape(table_name, classification.scalar_kind)

        graph = SchemaGraph(table_name)
        decomposer = RecursiveDecomposer(graph, self.policy)
        decomposer.decompose(document, decomposer.new_table(table_name))
        graph.validate()

        logger.debug("Inferred %d table(s) for %s", len(graph), table_name)
        return graph


def infer_schema(
    document: Any,
    table_name: Union[TableName, str],
    policy: Optional[InferencePolicy] = None,
) -> SchemaGraph:
    """Infer a schema graph; ``table_name`` may be ``"schema.table"``."""
    if isinstance(table_name, str):
        table_name = TableName.parse(table_name)
    return SchemaAssembler(policy).infer(document, table_name)
