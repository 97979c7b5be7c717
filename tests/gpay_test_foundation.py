"""
GPay Test Foundation
Builds gateway responses signed exactly the way the real gateway signs them,
and wires them into a patched aiohttp.ClientSession.post.
"""

import json
from typing import Any, Dict, Optional, Tuple
from unittest.mock import AsyncMock

from services.gpay_parsers import signed_fields
from services.gpay_signature import sign

TEST_API_KEY = "test_gpay_api_key_12345"
TEST_SECRET_KEY = "test_gpay_secret_key"
TEST_PASSWORD = "test_wallet_password"
TEST_RESPONSE_TIMESTAMP = "1700000000000"


def gateway_headers(
    data: Dict[str, Any],
    whitelist: Tuple[str, ...],
    password: str = TEST_PASSWORD,
    secret_key: str = TEST_SECRET_KEY,
    salt: Optional[str] = None,
) -> Dict[str, str]:
    """Signature headers the gateway would attach to a response carrying data"""
    # Values pass through JSON first, as they do on the wire
    wire_data = json.loads(json.dumps(data))
    signed = sign(signed_fields(wire_data, whitelist), password, secret_key, salt=salt)
    return {
        "x-signature-salt": signed.salt,
        "x-signature-hash": signed.signature,
        "content-type": "application/json",
    }


def build_mock_response(payload: Any, headers: Optional[Dict[str, str]] = None, status: int = 200) -> AsyncMock:
    """aiohttp response stand-in; payload is JSON-encoded unless already text"""
    mock_response = AsyncMock()
    mock_response.status = status
    body = payload if isinstance(payload, str) else json.dumps(payload)
    mock_response.text = AsyncMock(return_value=body)
    mock_response.headers = headers or {}
    return mock_response


def attach_response(mock_post, mock_response) -> None:
    mock_post.return_value.__aenter__.return_value = mock_response
