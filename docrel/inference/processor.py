"""
Entity Schema Processor.

Runs schema inference for a document and hands the finished graph to
the catalog. Inference completes before any table is created, so a
document that cannot be decomposed leaves the catalog untouched.
"""

import json
import logging
from typing import Any, Optional, Union

from sqlalchemy import Table  # type: ignore
from sqlalchemy.engine import Engine  # type: ignore

from docrel.catalog.database import get_engine
from docrel.catalog.materializer import SqlAlchemyMaterializer
from docrel.common.logging_config import (
    PerformanceTracker,
    clear_inference_id,
    set_inference_id,
)
from docrel.common.metrics import tables_materialized_total, track_operation
from docrel.config.settings import get_settings
from docrel.inference.assembler import SchemaAssembler
from docrel.inference.policy import InferencePolicy
from docrel.inference.schema_graph import SchemaGraph
from docrel.inference.table_builder import TableName

logger = logging.getLogger(__name__)


def load_document(payload: Union[str, bytes]) -> Any:
    """
    Parse a JSON payload into a document.

    Raises:
        json.JSONDecodeError: If the payload is not valid JSON
    """
    return json.loads(payload)


class EntitySchemaProcessor:
    """
    Infers table schemas for documents and creates them in the catalog.

    ``parse`` is pure; ``create`` and ``parse_and_create`` write to the
    catalog through the materializer.
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        policy: Optional[InferencePolicy] = None,
        materializer: Optional[SqlAlchemyMaterializer] = None,
    ):
        self.settings = get_settings()
        self.policy = policy or InferencePolicy.from_settings(self.settings)
        self.assembler = SchemaAssembler(self.policy)
        self._engine = engine
        self._materializer = materializer

    @property
    def materializer(self) -> SqlAlchemyMaterializer:
        if self._materializer is None:
            self._materializer = SqlAlchemyMaterializer(self._engine or get_engine())
        return self._materializer

    def table_name(self, name: Union[TableName, str]) -> TableName:
        if isinstance(name, TableName):
            return name
        return TableName.parse(name, self.settings.default_schema)

    @track_operation("parse", count_runs=True)
    def parse(
        self,
        document: Any,
        table_name: Union[TableName, str],
        policy: Optional[InferencePolicy] = None,
    ) -> SchemaGraph:
        """
        Infer the schema graph for a document.

        Args:
            document: Parsed object or array document
            table_name: Root table name, ``"schema.table"`` or ``"table"``
            policy: Overrides the processor policy for this call

        Returns:
            Validated schema graph
        """
        name = self.table_name(table_name)
        assembler = SchemaAssembler(policy) if policy else self.assembler
        set_inference_id()
        try:
            with PerformanceTracker("parse", logger, table=str(name)):
                return assembler.infer(document, name)
        finally:
            clear_inference_id()

    @track_operation("create")
    def create(self, graph: SchemaGraph) -> Table:
        """
        Create every table of a graph in the catalog.

        Returns:
            The created root table
        """
        with PerformanceTracker("create", logger, table=str(graph.root_name),
                                tables=len(graph)):
            created = self.materializer.materialize_graph(graph)

        if self.settings.metrics_enabled:
            tables_materialized_total.inc(len(created))
        return created[graph.root_name]

    def parse_and_create(
        self,
        document: Any,
        table_name: Union[TableName, str],
        policy: Optional[InferencePolicy] = None,
    ) -> Table:
        """Infer a document's schema and create its tables."""
        return self.create(self.parse(document, table_name, policy=policy))
