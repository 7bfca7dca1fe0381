"""
Logical column types and scalar type inference.

Maps a scalar document value to exactly one logical column type. String
values that look like dates are verified with a strict ISO-8601 parse and
fall back to a string column when the parse fails.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from dateutil.parser import isoparser

from docrel.inference.document import ScalarKind, classify, scalar_text

# Cheap "could be a date" filter, run on the trimmed text
DATE_SHAPE = re.compile(r"((\d+)-(\d+)-(\d+)).*")

# Date and time portions must be separated by "T"
_ISO_PARSER = isoparser(sep="T")

# Leading calendar date with one or two digit month and day
_SHORT_DATE = re.compile(r"(\d+)-(\d{1,2})-(\d{1,2})(?!\d)")


class TypeKind(str, Enum):
    """Logical column type kinds."""
    STRING = "string"
    BIG_INTEGER = "big_integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE_TIME = "date_time"
    AUTO_INCREMENT_INTEGER = "auto_increment_integer"


@dataclass(frozen=True)
class ColumnType:
    """A logical column type; width is set for strings only."""
    kind: TypeKind
    width: Optional[int] = None

    @classmethod
    def string(cls, width: int) -> "ColumnType":
        return cls(TypeKind.STRING, width)

    def __str__(self) -> str:
        if self.kind is TypeKind.STRING:
            return f"{self.kind.value}({self.width})"
        return self.kind.value


BIG_INTEGER = ColumnType(TypeKind.BIG_INTEGER)
DOUBLE = ColumnType(TypeKind.DOUBLE)
BOOLEAN = ColumnType(TypeKind.BOOLEAN)
DATE_TIME = ColumnType(TypeKind.DATE_TIME)
AUTO_INCREMENT_INTEGER = ColumnType(TypeKind.AUTO_INCREMENT_INTEGER)

_NON_STRING_TYPES = {
    ScalarKind.INTEGER: BIG_INTEGER,
    ScalarKind.FLOAT: DOUBLE,
    ScalarKind.BOOLEAN: BOOLEAN,
}


@dataclass(frozen=True)
class ColumnDefinition:
    """One column of a table definition."""
    name: str
    type: ColumnType
    nullable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.kind.value,
            "width": self.type.width,
            "nullable": self.nullable,
        }


def _pad_date(text: str) -> str:
    """Zero-pad a leading "2021-1-5" style date to "2021-01-05"."""
    match = _SHORT_DATE.match(text)
    if match is None:
        return text
    year, month, day = match.groups()
    return f"{year}-{month:0>2}-{day:0>2}{text[match.end():]}"


def is_date_time(text: str) -> bool:
    """
    Check whether text is a date or date-time.

    The shape check runs on the trimmed text; the strict parse runs on
    the text as given, so surrounding whitespace makes it a string.
    """
    if not DATE_SHAPE.fullmatch(text.strip()):
        return False
    try:
        _ISO_PARSER.isoparse(_pad_date(text))
    except (ValueError, OverflowError):
        return False
    return True


def infer_column(name: str, value: Any, default_width: int) -> ColumnDefinition:
    """
    Infer a nullable column definition from a scalar value.

    Args:
        name: Column name
        value: Scalar document value (never a dict or list)
        default_width: Minimum width for string columns

    Returns:
        ColumnDefinition for the value
    """
    classification = classify(value)
    if classification.is_container:
        raise ValueError(f"Column {name!r} cannot be inferred from a container value")

    kind = classification.scalar_kind
    if kind in _NON_STRING_TYPES:
        return ColumnDefinition(name, _NON_STRING_TYPES[kind])

    if kind is ScalarKind.NULL:
        return ColumnDefinition(name, ColumnType.string(default_width))

    text = scalar_text(value)
    if is_date_time(text):
        return ColumnDefinition(name, DATE_TIME)
    return ColumnDefinition(name, ColumnType.string(max(len(text), default_width)))
