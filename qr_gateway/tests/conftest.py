"""
Pytest configuration for QR gateway tests.

This conftest.py adds the qr_gateway directory to sys.path
so that tests can import modules properly, and disables file logging.
"""

import os
import sys
from pathlib import Path

os.environ["LOG_FILE"] = ""
os.environ["LOKI_URL"] = ""

# Add the qr_gateway directory to sys.path for proper imports
qr_gateway_path = Path(__file__).parent.parent
if str(qr_gateway_path) not in sys.path:
    sys.path.insert(0, str(qr_gateway_path))

import pytest
from unittest.mock import AsyncMock

from core.interfaces import DeviceDatasource, PaymentDatasource
from core.value_objects import DeviceSummary
from infrastructure.memory_repository import InMemorySessionRepository
from infrastructure.settings import YappySettings


DEFAULT_DEVICE = {
    "idDevice": "CAJA-01",
    "nameDevice": "Caja principal",
    "userDevice": "cajero",
    "groupId": "GRP-001",
}


@pytest.fixture
def default_device():
    return dict(DEFAULT_DEVICE)


@pytest.fixture
def repository():
    return InMemorySessionRepository()


@pytest.fixture
def device_datasource():
    datasource = AsyncMock(spec=DeviceDatasource)
    datasource.open_device.return_value = "token-from-yappy"
    datasource.close_device.return_value = DeviceSummary(transactions=3, amount=45.5)
    return datasource


@pytest.fixture
def payment_datasource():
    return AsyncMock(spec=PaymentDatasource)


@pytest.fixture
def yappy_settings():
    return YappySettings(
        api_key="test-api-key",
        secret_key="test-secret-key",
        base_url="https://api.yappy.test/v1",
        sandbox_base_url="https://sandbox.yappy.test/v1",
        sandbox=True,
        timeout=5.0,
    )
