"""
Document shape classification.

A document is an already-parsed JSON tree: dicts for objects, lists for
arrays and str/int/float/Decimal/bool/None for scalars. Classification
is a closed three-way split (object, array, scalar) with a primitive
kind attached to scalars.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class Shape(str, Enum):
    """Top-level shape of a document node."""
    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"


class ScalarKind(str, Enum):
    """Primitive kind of a scalar document node."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one document node."""
    shape: Shape
    scalar_kind: Optional[ScalarKind] = None

    @property
    def is_container(self) -> bool:
        return self.shape is not Shape.SCALAR

    @property
    def is_object(self) -> bool:
        return self.shape is Shape.OBJECT

    @property
    def is_array(self) -> bool:
        return self.shape is Shape.ARRAY


OBJECT = Classification(Shape.OBJECT)
ARRAY = Classification(Shape.ARRAY)


def classify(value: Any) -> Classification:
    """
    Classify a document node.

    Args:
        value: A parsed document node

    Returns:
        Classification with the node's shape and, for scalars, its kind
    """
    if isinstance(value, dict):
        return OBJECT
    if isinstance(value, (list, tuple)):
        return ARRAY
    if value is None:
        kind = ScalarKind.NULL
    # bool is a subclass of int, so it has to be checked first
    elif isinstance(value, bool):
        kind = ScalarKind.BOOLEAN
    elif isinstance(value, int):
        kind = ScalarKind.INTEGER
    # Decimal only comes from parse_float, which json.loads calls for
    # literals with a fraction or an exponent
    elif isinstance(value, (float, Decimal)):
        kind = ScalarKind.FLOAT
    else:
        kind = ScalarKind.STRING  # Fallback
    return Classification(Shape.SCALAR, kind)


def scalar_text(value: Any) -> str:
    """Text form of a string-kind scalar."""
    return value if isinstance(value, str) else str(value)
