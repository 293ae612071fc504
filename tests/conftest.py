import sys
import os
import tempfile
import pytest

# Add the project root to the Python path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Keep test session logs out of the project tree
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "voicecraft-test-logs"))

# Initialize logging module before importing other modules
from utils.logging import SessionLogger
SessionLogger.start_session()

from fastapi.testclient import TestClient

from api.main import app

@pytest.fixture
def client():
    """Provides a TestClient for the API with dependency overrides reset afterwards"""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def sentences_of():
    """Builds text made of `count` sentences with `words` words each."""
    def build(count: int, words: int, terminator: str = ".") -> str:
        sentence = " ".join(["word"] * words) + terminator
        return " ".join([sentence] * count)
    return build
