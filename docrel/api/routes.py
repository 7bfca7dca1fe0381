# API routes

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError, InvalidRequestError, OperationalError, ProgrammingError

from docrel.catalog.materializer import render_ddl
from docrel.inference.decomposer import SchemaInferenceError
from docrel.inference.policy import InferencePolicy
from docrel.inference.processor import EntitySchemaProcessor
from docrel.inference.schema_graph import SchemaGraph, SchemaGraphError
from docrel.inference.table_builder import DuplicateColumnName

router = APIRouter()


class InferRequest(BaseModel):
    table_name: str = Field(..., min_length=1)
    document: Any = None
    always_with_primary_key: Optional[bool] = None
    default_string_width: Optional[int] = Field(None, ge=1)
    dialect: str = "sqlite"


class SchemaResponse(BaseModel):
    root: str
    tables: List[Dict[str, Any]]
    ddl: Optional[List[str]] = None
    created: bool = False


def get_processor() -> EntitySchemaProcessor:
    return EntitySchemaProcessor()


def _policy_for(request: InferRequest, processor: EntitySchemaProcessor) -> InferencePolicy:
    return InferencePolicy(
        always_with_primary_key=(
            processor.policy.always_with_primary_key
            if request.always_with_primary_key is None
            else request.always_with_primary_key
        ),
        default_string_width=(
            request.default_string_width or processor.policy.default_string_width
        ),
    )


def _infer(request: InferRequest, processor: EntitySchemaProcessor) -> SchemaGraph:
    policy = _policy_for(request, processor)
    try:
        return processor.parse(request.document, request.table_name, policy=policy)
    except ValueError as e:
        # Malformed table name
        raise HTTPException(status_code=400, detail=str(e))
    except SchemaInferenceError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": type(e).__name__, "message": str(e)},
        )
    except (DuplicateColumnName, SchemaGraphError) as e:
        raise HTTPException(
            status_code=500,
            detail={"error": type(e).__name__, "message": str(e)},
        )


@router.post("/schemas/infer", response_model=SchemaResponse)
def infer_schema(
    request: InferRequest,
    processor: EntitySchemaProcessor = Depends(get_processor),
):
    """
    Infer the relational schema of a document without touching the catalog.

    - **table_name**: Root table, ``schema.table`` or ``table``
    - **document**: JSON object or array
    - **dialect**: Dialect used to render the returned DDL

    Returns the table graph and its CREATE TABLE statements.
    """
    graph = _infer(request, processor)
    try:
        ddl = render_ddl(graph, request.dialect)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SchemaResponse(**graph.to_dict(), ddl=ddl)


@router.post("/schemas", response_model=SchemaResponse, status_code=status.HTTP_201_CREATED)
def create_schema(
    request: InferRequest,
    processor: EntitySchemaProcessor = Depends(get_processor),
):
    """Infer the relational schema of a document and create its tables."""
    graph = _infer(request, processor)
    try:
        processor.create(graph)
    except (IntegrityError, InvalidRequestError, OperationalError, ProgrammingError) as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": type(e).__name__, "message": str(e)},
        )
    return SchemaResponse(**graph.to_dict(), created=True)
