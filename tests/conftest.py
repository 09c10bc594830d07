"""
pytest configuration and fixtures for Quote Service tests
"""

import json
import shutil
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.app import create_app
from store.quote_store import QuoteStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_config():
    """Sample configuration data split the way config/ splits it"""
    return {
        "api_config.json": {
            "api_config": {
                "host": "127.0.0.1",
                "port": 8001,
                "cors_origins": ["http://localhost:3000"],
                "welcome_message": "Hello from the test config",
                "wrap_root_value": False
            }
        },
        "store_config.json": {
            "store_config": {
                "seed_on_startup": False
            }
        }
    }


@pytest.fixture
def config_dir(temp_dir, sample_config):
    """Write the sample configuration files into a temporary directory"""
    for filename, data in sample_config.items():
        with open(temp_dir / filename, 'w', encoding='utf-8') as f:
            json.dump(data, f)
    return temp_dir


@pytest.fixture
def quote_store():
    """Fresh store holding the five seed quotes"""
    return QuoteStore()


@pytest.fixture
def empty_store():
    """Store without any quotes"""
    return QuoteStore(seed_quotes=())


@pytest.fixture
def app(quote_store):
    """Application bound to a fresh store"""
    return create_app(quote_store)


@pytest.fixture
def client(app):
    """Create test client"""
    return TestClient(app)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
