import shutil
from pathlib import Path

import pytest

from komnottra import storage

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-init data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR)
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


@pytest.fixture
def client():
    """TestClient bound to the freshly initialised data-tests/ directory."""
    from fastapi.testclient import TestClient

    from komnottra.app import create_app

    with TestClient(create_app(TEST_DATA_DIR)) as c:
        yield c
