# Test configuration

import pytest
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def test_settings():
    """Override settings for testing"""
    from docrel.config.settings import Settings
    return Settings(
        database_url="sqlite:///:memory:",
        default_schema=None,
        metrics_enabled=True,
    )


@pytest.fixture
def catalog_engine(tmp_path):
    """SQLite catalog backed by a temporary file."""
    from docrel.catalog.database import create_catalog_engine
    engine = create_catalog_engine(f"sqlite:///{tmp_path / 'catalog.db'}", echo=False)
    yield engine
    engine.dispose()


@pytest.fixture
def person_document():
    return {"name": "Ann", "address": {"city": "X"}}
