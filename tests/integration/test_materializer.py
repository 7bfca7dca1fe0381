"""
Integration tests for materializing schema graphs into SQLite.
"""

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError, OperationalError

from docrel.catalog.materializer import SqlAlchemyMaterializer
from docrel.inference.assembler import infer_schema
from docrel.inference.table_builder import TableName


class TestSqlAlchemyMaterializer:
    """Tests for SqlAlchemyMaterializer against a real catalog."""

    def test_materialize_graph(self, catalog_engine, person_document):
        graph = infer_schema(person_document, "people")
        created = SqlAlchemyMaterializer(catalog_engine).materialize_graph(graph)

        assert list(created) == [TableName(None, "people"), TableName(None, "address")]

        inspector = inspect(catalog_engine)
        assert set(inspector.get_table_names()) == {"people", "address"}
        assert [c["name"] for c in inspector.get_columns("people")] == ["name", "_id"]
        assert inspector.get_pk_constraint("people")["constrained_columns"] == ["_id"]

        (fk,) = inspector.get_foreign_keys("address")
        assert fk["referred_table"] == "people"
        assert fk["referred_columns"] == ["_id"]
        assert fk["constrained_columns"] == ["_people_id"]

    def test_materialize_single_table(self, catalog_engine):
        graph = infer_schema({"a": 1}, "flat")
        table = SqlAlchemyMaterializer(catalog_engine).materialize(graph.root)

        assert table.name == "flat"
        assert inspect(catalog_engine).has_table("flat")

    def test_rows_can_be_linked(self, catalog_engine, person_document):
        graph = infer_schema(person_document, "people")
        created = SqlAlchemyMaterializer(catalog_engine).materialize_graph(graph)
        people = created[TableName(None, "people")]
        address = created[TableName(None, "address")]

        with catalog_engine.begin() as conn:
            person_id = conn.execute(
                people.insert().values(name="Ann")).inserted_primary_key[0]
            conn.execute(address.insert().values(city="X", _people_id=person_id))

        with catalog_engine.connect() as conn:
            rows = conn.execute(
                select(people.c["name"], address.c["city"]).join(
                    address, address.c["_people_id"] == people.c["_id"])
            ).all()

        assert person_id == 1
        assert [tuple(row) for row in rows] == [("Ann", "X")]

    def test_foreign_keys_are_enforced(self, catalog_engine, person_document):
        graph = infer_schema(person_document, "people")
        created = SqlAlchemyMaterializer(catalog_engine).materialize_graph(graph)
        address = created[TableName(None, "address")]

        with pytest.raises(IntegrityError):
            with catalog_engine.begin() as conn:
                conn.execute(address.insert().values(city="X", _people_id=999))

    def test_existing_table_error_propagates(self, catalog_engine, person_document):
        graph = infer_schema(person_document, "people")
        SqlAlchemyMaterializer(catalog_engine).materialize_graph(graph)

        with pytest.raises(OperationalError):
            SqlAlchemyMaterializer(catalog_engine).materialize_graph(graph)

    def test_failed_graph_can_be_retried(self, catalog_engine, person_document):
        graph = infer_schema(person_document, "people")
        with catalog_engine.begin() as conn:
            conn.exec_driver_sql("CREATE TABLE address (x INTEGER)")

        materializer = SqlAlchemyMaterializer(catalog_engine)
        with pytest.raises(OperationalError):
            materializer.materialize_graph(graph)

        assert "people" not in materializer.metadata.tables
        assert "address" not in materializer.metadata.tables

    def test_failed_single_table_is_forgotten(self, catalog_engine):
        graph = infer_schema({"a": 1}, "flat")
        with catalog_engine.begin() as conn:
            conn.exec_driver_sql("CREATE TABLE flat (x INTEGER)")

        materializer = SqlAlchemyMaterializer(catalog_engine)
        with pytest.raises(OperationalError):
            materializer.materialize(graph.root)

        assert "flat" not in materializer.metadata.tables
        # A retry reports the catalog error again, not a metadata conflict
        with pytest.raises(OperationalError):
            materializer.materialize(graph.root)
