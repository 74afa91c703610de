"""
Shared test fixtures for Music Catalog SDK tests.

Provides configuration and the service/device stubs from ``stubs``.
"""

import pytest

from music_catalog_sdk.config import CatalogConfig, TelemetryConfig
from music_catalog_sdk.telemetry import configure_telemetry

from .stubs import TOKEN_SERVER, RecordingExchange, ServiceStub


@pytest.fixture(autouse=True, scope="session")
def silent_telemetry() -> None:
    """Keep SDK logging quiet and tracing off during tests."""
    configure_telemetry(TelemetryConfig(enabled=False))


@pytest.fixture
def base_config() -> CatalogConfig:
    """Provide a complete SDK configuration for testing."""
    return CatalogConfig(
        key_id="KEY1234567",
        team_id="TEAM123456",
        token_server=TOKEN_SERVER,
        telemetry=TelemetryConfig(enabled=False),
    )


@pytest.fixture
def service_stub() -> ServiceStub:
    """Provide a service stub answering 200 with the US storefront."""
    return ServiceStub()


@pytest.fixture
def exchange() -> RecordingExchange:
    """Provide a user-token exchange granting USER_TOKEN."""
    return RecordingExchange()
