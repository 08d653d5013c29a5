"""
pytest configuration – pin the environment before the app is imported and
reset rate limiter counters between tests.
"""
import os

os.environ["SECURE_API_ENVIRONMENT"] = "test"
os.environ["SECURE_API_TRUST_PROXY"] = "false"
os.environ.pop("SECURE_API_LOG_DIR", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from secure_api.main import app  # noqa: E402
from secure_api.rate_limit import limiter  # noqa: E402


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
