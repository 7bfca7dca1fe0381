"""
Unit tests for document shape classification.
"""

import json
from decimal import Decimal

from docrel.inference.document import Shape, ScalarKind, classify


class TestClassify:
    """Tests for classify()."""

    def test_object(self):
        assert classify({"key": "value"}).shape == Shape.OBJECT
        assert classify({}).shape == Shape.OBJECT

    def test_array(self):
        assert classify([1, 2, 3]).shape == Shape.ARRAY
        assert classify([]).shape == Shape.ARRAY

    def test_containers_have_no_scalar_kind(self):
        assert classify({}).scalar_kind is None
        assert classify([]).scalar_kind is None
        assert classify({}).is_container
        assert classify([]).is_container

    def test_string(self):
        assert classify("hello").scalar_kind == ScalarKind.STRING
        assert classify("").scalar_kind == ScalarKind.STRING

    def test_integer(self):
        assert classify(42).scalar_kind == ScalarKind.INTEGER
        assert classify(-100).scalar_kind == ScalarKind.INTEGER
        assert classify(0).scalar_kind == ScalarKind.INTEGER

    def test_float(self):
        assert classify(3.14).scalar_kind == ScalarKind.FLOAT
        assert classify(1.0).scalar_kind == ScalarKind.FLOAT
        assert classify(1e5).scalar_kind == ScalarKind.FLOAT

    def test_boolean_is_not_integer(self):
        assert classify(True).scalar_kind == ScalarKind.BOOLEAN
        assert classify(False).scalar_kind == ScalarKind.BOOLEAN

    def test_null(self):
        classification = classify(None)
        assert classification.shape == Shape.SCALAR
        assert classification.scalar_kind == ScalarKind.NULL
        assert not classification.is_container

    def test_decimal_is_float(self):
        assert classify(Decimal("1.50")).scalar_kind == ScalarKind.FLOAT
        assert classify(Decimal("1E+5")).scalar_kind == ScalarKind.FLOAT

    def test_json_parsed_numbers(self):
        doc = json.loads('{"a": 1, "b": 1.0, "c": 2e3}', parse_float=Decimal)
        assert classify(doc["a"]).scalar_kind == ScalarKind.INTEGER
        assert classify(doc["b"]).scalar_kind == ScalarKind.FLOAT
        assert classify(doc["c"]).scalar_kind == ScalarKind.FLOAT

    def test_exponent_literals_with_integral_value_are_float(self):
        """1.5e1 parses to Decimal("15") but is still a float literal."""
        doc = json.loads('{"a": 1.5e1, "b": 1.0e1}', parse_float=Decimal)
        assert classify(doc["a"]).scalar_kind == ScalarKind.FLOAT
        assert classify(doc["b"]).scalar_kind == ScalarKind.FLOAT

    def test_unknown_values_fall_back_to_string(self):
        assert classify(object()).scalar_kind == ScalarKind.STRING
