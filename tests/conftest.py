"""
Shared Test Fixtures for the GPay Client Test Suite

Key Components:
1. Client fixture with test credentials
2. Sample gateway payload fixtures
Response signing helpers live in tests/gpay_test_foundation.py
"""

import logging

import pytest

from models import BaseUrl
from services.gpay_service import GPayService
from tests.gpay_test_foundation import TEST_API_KEY, TEST_PASSWORD, TEST_SECRET_KEY

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@pytest.fixture
def gpay_service():
    """GPay client pointed at staging with test credentials"""
    return GPayService(
        api_key=TEST_API_KEY,
        secret_key=TEST_SECRET_KEY,
        password=TEST_PASSWORD,
        base_url=BaseUrl.STAGING,
        language="en",
        timeout=5,
    )


@pytest.fixture
def sample_transaction_row():
    """Transaction row as it appears in statement and outstanding listings"""
    return {
        "transaction_id": "TX-0001",
        "datetime": "2023-11-14 22:13:20",
        "timestamp": "1699999990000",
        "description": "Invoice 77",
        "amount": "25.50",
        "balance": 174.5,
        "reference_no": "INV-77",
        "op_type_id": 2,
        "status": 1,
        "created_at": "2023-11-14T22:13:10Z",
    }
