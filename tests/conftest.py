import pytest
from fastapi.testclient import TestClient

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from parking.routers import get_engine
from parking.services import FeeEngine

@pytest.fixture(scope="function")
def engine():
    """The standard engine: Progressive Hourly, Early Bird, Night Owl."""
    return FeeEngine.with_standard_rules()

@pytest.fixture(scope="function")
def client(engine):
    """
    TestClient whose fee engine dependency is replaced by the `engine` fixture.
    """
    app.dependency_overrides[get_engine] = lambda: engine

    yield TestClient(app)

    app.dependency_overrides.clear()
