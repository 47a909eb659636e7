"""Shared fixtures for reconciler tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from reconciler.config.environment import EnvironmentConfig
from reconciler.config.models import AppConfig, ReferenceStoreConfig, ReportConfig
from reconciler.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the required credentials and clear optional overrides."""
    monkeypatch.setenv("RAPIDAPI_KEY", "test-rapidapi-key")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "test-service-key")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def app_config():
    """Basic app configuration for testing."""
    return AppConfig(
        search_queries=[
            "mechanical engineer Denver Colorado",
            "structural engineer EIT Denver Colorado",
        ],
        reference_store=ReferenceStoreConfig(url="https://example.supabase.co"),
        report=ReportConfig(unmatched_preview_limit=20),
    )


@pytest.fixture
def env_config():
    """Basic environment configuration for testing."""
    return EnvironmentConfig(
        rapidapi_key="test-rapidapi-key",
        supabase_service_key="test-service-key",
    )


@pytest.fixture
def fixed_now():
    return datetime(2025, 11, 4, 12, 0, 0, 123456, tzinfo=timezone.utc)
