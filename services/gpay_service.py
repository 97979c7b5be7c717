"""GPay online-wallet API client with signed requests and verified responses"""

import asyncio
import datetime
import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union

import aiohttp

from config import Config
from models import (
    Balance,
    BaseUrl,
    GPayCredentials,
    OutstandingTransactions,
    PaymentRequest,
    PaymentStatus,
    SendMoneyResult,
    Statement,
    WalletCheck,
)
from services import gpay_parsers
from services.gpay_exceptions import (
    AmbiguousParameterError,
    ConfigurationError,
    MalformedResponseError,
    RemoteError,
    TransportError,
)
from services.gpay_signature import SignedPayload, sign, stringify_value, verify
from utils.data_sanitizer import mask_api_key_safe, sanitize_headers_for_log
from utils.datetime_helpers import current_epoch_millis
from utils.decimal_precision import MonetaryDecimal

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
Amount = Union[str, int, float, Decimal]

# Characters that would split a value inside the canonical query string
_RESERVED_CHARS = ("&", "=")


@dataclass(frozen=True)
class GPayResponse:
    """Raw gateway answer after error-envelope screening"""
    body: Dict[str, Any]
    headers: Dict[str, str]
    status: int


class GPayService:
    """
    Client for the GPay online-wallet API.

    Every call signs its parameters, POSTs them, rejects error envelopes,
    verifies the gateway's response signature and only then builds the result
    record. Nothing is retried; all failures propagate as GPayError subclasses.
    """

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        password: str,
        base_url: Union[BaseUrl, str],
        language: str = "en",
        timeout: Optional[int] = None,
    ):
        resolved_url = BaseUrl.resolve(base_url)
        if resolved_url is None:
            raise ConfigurationError("Invalid base_url. Use BaseUrl.STAGING or BaseUrl.PRODUCTION.")

        self.credentials = GPayCredentials(
            api_key=api_key,
            secret_key=secret_key,
            password=password,
            base_url=resolved_url,
            language=language or "en",
        )
        self.timeout = timeout if timeout is not None else Config.GPAY_REQUEST_TIMEOUT

        logger.info(
            f"💳 GPay service initialized ({resolved_url.name}) with key: {mask_api_key_safe(api_key)}"
        )

    @classmethod
    def from_config(cls) -> "GPayService":
        """Build a client from GPAY_* environment configuration"""
        if not Config.GPAY_ENABLED:
            raise ConfigurationError(
                "GPay credentials not configured (GPAY_API_KEY, GPAY_SECRET_KEY, GPAY_PASSWORD)"
            )
        return cls(
            api_key=Config.GPAY_API_KEY,
            secret_key=Config.GPAY_SECRET_KEY,
            password=Config.GPAY_PASSWORD,
            base_url=Config.GPAY_BASE_URL,
            language=Config.GPAY_LANGUAGE,
            timeout=Config.GPAY_REQUEST_TIMEOUT,
        )

    @property
    def base_url(self) -> BaseUrl:
        return self.credentials.base_url

    def is_available(self) -> bool:
        """Check if GPay credentials are complete"""
        creds = self.credentials
        return bool(creds.api_key and creds.secret_key and creds.password)

    def _get_headers(self, signed: SignedPayload) -> Dict[str, str]:
        """Get request headers for the GPay API"""
        headers = {
            "Authorization": f"Bearer {self.credentials.api_key}",
            "Accept-Language": self.credentials.language,
            "Content-Type": "application/json",
        }
        headers.update(signed.headers())
        return headers

    @staticmethod
    def _check_signable(parameters: Mapping[str, Any]) -> None:
        """Reject values the canonical query string cannot represent unambiguously"""
        for key, value in parameters.items():
            rendered = stringify_value(value)
            if any(char in rendered for char in _RESERVED_CHARS):
                logger.error(f"❌ GPay parameter '{key}' contains a reserved character")
                raise AmbiguousParameterError(key, rendered)

    async def send_request(self, endpoint: str, parameters: Mapping[str, Any]) -> GPayResponse:
        """
        Sign and POST parameters to an endpoint.

        Args:
            endpoint: Path below the base URL, e.g. '/info/balance'
            parameters: Request fields; all of them are signed

        Returns:
            GPayResponse with parsed JSON body, response headers and status

        Raises:
            AmbiguousParameterError: a value contains '&' or '='
            TransportError: network failure, timeout or HTTP error without envelope
            RemoteError: gateway error envelope
            MalformedResponseError: empty or non-JSON body
        """
        self._check_signable(parameters)

        signed = sign(parameters, self.credentials.password, self.credentials.secret_key)
        headers = self._get_headers(signed)
        # None values are signed as 'key=' but left out of the JSON body
        body = {key: value for key, value in parameters.items() if value is not None}
        url = f"{self.base_url.value}{endpoint}"

        logger.debug(f"GPay request {endpoint} headers={sanitize_headers_for_log(headers)}")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    json=body,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    status = response.status
                    response_text = await response.text()
                    response_headers = dict(response.headers)
        except asyncio.TimeoutError as e:
            logger.error(f"❌ GPay request to {endpoint} timed out after {self.timeout}s")
            raise TransportError(f"GPay request timed out: {endpoint}") from e
        except aiohttp.ClientError as e:
            logger.error(f"❌ Network error connecting to GPay ({endpoint}): {e}")
            raise TransportError(f"Network error: {e}") from e

        payload = self._parse_body(endpoint, status, response_text)
        return GPayResponse(body=payload, headers=response_headers, status=status)

    @staticmethod
    def _parse_body(endpoint: str, status: int, response_text: str) -> Dict[str, Any]:
        is_http_error = status >= 400

        if not response_text or not response_text.strip():
            if is_http_error:
                logger.error(f"❌ GPay API HTTP error on {endpoint}: {status} (empty body)")
                raise TransportError(f"HTTP {status}: empty response", status=status)
            raise MalformedResponseError("Invalid response from GPay API: No JSON response")

        try:
            payload = json.loads(response_text)
        except json.JSONDecodeError as e:
            if is_http_error:
                logger.error(f"❌ GPay API HTTP error on {endpoint}: {status}")
                raise TransportError(f"HTTP {status}: {response_text[:200]}", status=status) from e
            logger.error(f"❌ Invalid JSON response from GPay ({endpoint}): {e}")
            raise MalformedResponseError(f"Invalid JSON response: {response_text[:200]}") from e

        if not payload:
            raise MalformedResponseError("Invalid response from GPay API: No JSON response")
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Invalid response from GPay API: expected object, got {type(payload).__name__}"
            )

        error = payload.get("error")
        # An empty object or list still marks an error envelope
        if isinstance(error, (dict, list)) or error:
            if isinstance(error, dict):
                code = error.get("code") or "UNKNOWN_CODE"
                message = error.get("message") or "Unknown error"
            else:
                code = "UNKNOWN_CODE"
                message = error if isinstance(error, str) else "Unknown error"
            logger.error(f"❌ GPay API error on {endpoint} ({code}): {message}")
            raise RemoteError(str(code), str(message), status=status)

        if is_http_error:
            logger.error(f"❌ GPay API HTTP error on {endpoint}: {status}")
            raise TransportError(f"HTTP {status}: {response_text[:200]}", status=status)

        return payload

    def verify_response(self, headers: Mapping[str, str], response_fields: Mapping[str, Any]) -> None:
        """
        Verify the gateway signature over the endpoint's signed response fields.

        Raises:
            MissingSignatureError: salt or hash header absent
            SignatureMismatchError: signature does not match
        """
        verify(headers, response_fields, self.credentials.password, self.credentials.secret_key)

    async def _call(
        self,
        endpoint: str,
        parameters: Dict[str, Any],
        signed_response_fields: Tuple[str, ...],
        parser: Callable[[Mapping[str, Any]], RecordT],
    ) -> RecordT:
        parameters["request_timestamp"] = current_epoch_millis()
        response = await self.send_request(endpoint, parameters)

        data = response.body.get("data")
        if not isinstance(data, dict):
            logger.error(f"❌ GPay response for {endpoint} has no data object")
            raise MalformedResponseError(f"Invalid response from GPay API: missing data for {endpoint}")

        self.verify_response(
            response.headers, gpay_parsers.signed_fields(data, signed_response_fields)
        )
        record = parser(data)
        logger.info(f"✅ GPay {endpoint} completed")
        return record

    async def get_balance(self) -> Balance:
        """Retrieve the current wallet balance"""
        return await self._call(
            "/info/balance",
            {},
            gpay_parsers.BALANCE_SIGNED_FIELDS,
            gpay_parsers.parse_balance,
        )

    async def create_payment_request(
        self,
        amount: Amount,
        reference_no: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PaymentRequest:
        """Create a payment request for the given amount"""
        parameters = {
            "amount": MonetaryDecimal.format_amount(amount),
            "reference_no": reference_no,
            "description": description,
        }
        return await self._call(
            "/payment/create-payment-request",
            parameters,
            gpay_parsers.PAYMENT_REQUEST_SIGNED_FIELDS,
            gpay_parsers.parse_payment_request,
        )

    async def check_payment_status(self, request_id: str) -> PaymentStatus:
        """Check whether a payment request has been paid"""
        return await self._call(
            "/payment/check-payment-status",
            {"request_id": request_id},
            gpay_parsers.PAYMENT_STATUS_SIGNED_FIELDS,
            gpay_parsers.parse_payment_status,
        )

    async def send_money(
        self,
        amount: Amount,
        wallet_gateway_id: str,
        reference_no: Optional[str] = None,
        description: Optional[str] = None,
    ) -> SendMoneyResult:
        """Send money to another wallet"""
        parameters = {
            "amount": MonetaryDecimal.format_amount(amount),
            "wallet_gateway_id": wallet_gateway_id,
            "reference_no": reference_no,
            "description": description,
        }
        logger.info(f"💸 GPay send_money to {wallet_gateway_id} (ref: {reference_no})")
        return await self._call(
            "/payment/send-money",
            parameters,
            gpay_parsers.SEND_MONEY_SIGNED_FIELDS,
            gpay_parsers.parse_send_money_result,
        )

    async def get_statement(self, date: Union[str, datetime.date]) -> Statement:
        """Retrieve the wallet statement for one day (YYYY-MM-DD)"""
        if isinstance(date, datetime.date):
            date = date.strftime("%Y-%m-%d")
        return await self._call(
            "/info/statement",
            {"date": date},
            gpay_parsers.STATEMENT_SIGNED_FIELDS,
            gpay_parsers.parse_statement,
        )

    async def check_wallet(self, wallet_gateway_id: str) -> WalletCheck:
        """Check whether a wallet exists and can receive money"""
        return await self._call(
            "/info/check-wallet",
            {"wallet_gateway_id": wallet_gateway_id},
            gpay_parsers.WALLET_CHECK_SIGNED_FIELDS,
            gpay_parsers.parse_wallet_check,
        )

    async def get_outstanding_transactions(self) -> OutstandingTransactions:
        """List transactions not yet applied to the balance"""
        return await self._call(
            "/info/outstanding-transactions",
            {},
            gpay_parsers.OUTSTANDING_SIGNED_FIELDS,
            gpay_parsers.parse_outstanding_transactions,
        )
