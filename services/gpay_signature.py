"""
GPay request signing and response verification

Both directions use the same scheme:
    signature = base64(HMAC-SHA256(secret_key, salt + password + canonical_query))

The canonical query string sorts keys by codepoint and joins ``key=value``
pairs with ``&``. Values are inserted verbatim (no URL-encoding) and ``None``
renders as an empty value, matching what the gateway computes on its side.
"""

import base64
import hashlib
import hmac
import logging
import math
import secrets
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from services.gpay_exceptions import MissingSignatureError, SignatureMismatchError

logger = logging.getLogger(__name__)

SALT_BYTES = 32
SALT_HEADER = "X-Signature-Salt"
HASH_HEADER = "X-Signature-Hash"

# Floats below 10 ** 21 render in plain positional notation
_PLAIN_EXPONENT_LIMIT = 21


@dataclass(frozen=True)
class SignedPayload:
    salt: str
    hash_token: str
    signature: str

    def headers(self) -> Dict[str, str]:
        return {SALT_HEADER: self.salt, HASH_HEADER: self.signature}


def generate_salt() -> str:
    """Fresh base64 salt from the OS CSPRNG"""
    return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode()


def generate_hash_token(salt: str, password: str) -> str:
    return salt + password


def _render_float(value: float) -> str:
    """Shortest round-trip digits, laid out with JavaScript Number-to-String rules"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    # value == 0.digits * 10 ** point
    point = exponent + len(digits)

    if len(digits) <= point <= _PLAIN_EXPONENT_LIMIT:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= _PLAIN_EXPONENT_LIMIT:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{point - 1:+d}"


def stringify_value(value: Any) -> str:
    """Render a scalar the way the gateway does when building its query string"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, Decimal):
        # Decimal('100.00') -> '100', Decimal('49.90') -> '49.9'
        if value == value.to_integral_value():
            return str(value.quantize(Decimal(1)))
        return format(value.normalize(), "f")
    return str(value)


def canonicalize(parameters: Mapping[str, Any]) -> str:
    """Sorted, unescaped key=value query string used as HMAC input"""
    return "&".join(
        f"{key}={stringify_value(parameters[key])}" for key in sorted(parameters)
    )


def compute_signature(hash_token: str, parameters: Mapping[str, Any], secret_key: str) -> str:
    message = hash_token + canonicalize(parameters)
    mac = hmac.new(secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256)
    return base64.b64encode(mac.digest()).decode()


def sign(
    parameters: Mapping[str, Any],
    password: str,
    secret_key: str,
    salt: Optional[str] = None,
) -> SignedPayload:
    """
    Sign an outgoing parameter map.

    Args:
        parameters: Request fields covered by the signature
        password: Account password mixed into the hash token
        secret_key: HMAC key
        salt: Fixed salt; a fresh random one is generated when omitted

    Returns:
        SignedPayload with the salt and signature to send as headers
    """
    if salt is None:
        salt = generate_salt()
    hash_token = generate_hash_token(salt, password)
    signature = compute_signature(hash_token, parameters, secret_key)
    return SignedPayload(salt=salt, hash_token=hash_token, signature=signature)


def extract_signature_headers(headers: Mapping[str, str]) -> Tuple[str, str]:
    """Return (salt, hash) from response headers, matching names case-insensitively"""
    normalized = {str(name).lower(): value for name, value in headers.items()}
    salt = normalized.get(SALT_HEADER.lower())
    received_hash = normalized.get(HASH_HEADER.lower())
    if not salt or not received_hash:
        logger.error("❌ GPay response missing X-Signature-Hash or X-Signature-Salt header")
        raise MissingSignatureError(
            "Missing X-Signature-Hash or X-Signature-Salt in response headers"
        )
    return salt, received_hash


def verify(
    headers: Mapping[str, str],
    response_fields: Mapping[str, Any],
    password: str,
    secret_key: str,
) -> Mapping[str, Any]:
    """
    Check a response signature against the signed field subset.

    Raises:
        MissingSignatureError: salt or hash header absent
        SignatureMismatchError: recomputed signature differs from the received one
    """
    salt, received_hash = extract_signature_headers(headers)
    hash_token = generate_hash_token(salt, password)
    expected = compute_signature(hash_token, response_fields, secret_key)

    if not hmac.compare_digest(expected.encode(), received_hash.encode()):
        logger.error(f"❌ GPay response verification failed for fields: {sorted(response_fields)}")
        raise SignatureMismatchError("Response verification failed: hash mismatch")

    logger.debug("✅ GPay response signature verified")
    return response_fields
