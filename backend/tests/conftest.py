# backend/tests/conftest.py
import os
import sys
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Settings are read at import time: pin the gateway before importing the app
os.environ["GEOCODING_GATEWAY"] = "viacep"
os.environ["EMISSION_FACTORS_PRESET"] = "builtin"

from config import set_data_dir  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(autouse=True)
def data_dir(tmp_path):
    """Every test gets its own trip/event store."""
    old = os.environ.get("DATA_DIR")
    path = set_data_dir(tmp_path / "data")
    yield path
    if old is None:
        os.environ.pop("DATA_DIR", None)
    else:
        os.environ["DATA_DIR"] = old


@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c
