"""
GPay response mappers

Pure functions turning a verified ``data`` object into a result record, plus
the per-endpoint lists of fields the gateway covers with its response
signature. Records never see raw JSON.
"""

import logging
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar

from models import (
    Balance,
    OutstandingTransaction,
    OutstandingTransactions,
    PaymentRequest,
    PaymentStatus,
    SendMoneyResult,
    Statement,
    StatementTransaction,
    WalletCheck,
)
from services.gpay_exceptions import MalformedResponseError
from utils.datetime_helpers import epoch_millis_to_datetime
from utils.decimal_precision import MonetaryDecimal

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", StatementTransaction, OutstandingTransaction)

# Fields covered by the gateway's response signature, per endpoint
BALANCE_SIGNED_FIELDS = ("balance", "response_timestamp")
PAYMENT_REQUEST_SIGNED_FIELDS = (
    "requester_username",
    "request_id",
    "request_time",
    "amount",
    "reference_no",
    "response_timestamp",
)
PAYMENT_STATUS_SIGNED_FIELDS = (
    "request_id",
    "transaction_id",
    "amount",
    "payment_timestamp",
    "reference_no",
    "description",
    "is_paid",
    "response_timestamp",
)
SEND_MONEY_SIGNED_FIELDS = (
    "amount",
    "sender_fee",
    "transaction_id",
    "old_balance",
    "new_balance",
    "timestamp",
    "reference_no",
    "response_timestamp",
)
STATEMENT_SIGNED_FIELDS = (
    "available_balance",
    "outstanding_credit",
    "outstanding_debit",
    "day_balance",
    "day_total_in",
    "day_total_out",
    "response_timestamp",
)
WALLET_CHECK_SIGNED_FIELDS = (
    "exists",
    "wallet_gateway_id",
    "wallet_name",
    "user_account_name",
    "can_receive_money",
    "response_timestamp",
)
OUTSTANDING_SIGNED_FIELDS = (
    "outstanding_credit",
    "outstanding_debit",
    "response_timestamp",
)


def signed_fields(data: Mapping[str, Any], whitelist: Tuple[str, ...]) -> Dict[str, Any]:
    """Exact field subset the gateway signed; missing fields sign as empty values"""
    return {name: data.get(name) for name in whitelist}


def _decimal(data: Mapping[str, Any], name: str):
    try:
        return MonetaryDecimal.to_decimal(data.get(name), context=name)
    except ValueError as e:
        raise MalformedResponseError(str(e)) from e


def _response_time(data: Mapping[str, Any]):
    try:
        return epoch_millis_to_datetime(data.get("response_timestamp"))
    except ValueError as e:
        raise MalformedResponseError(f"Invalid response_timestamp: {e}") from e


def _rows(data: Mapping[str, Any], name: str, row_type: Type[RowT]) -> Tuple[RowT, ...]:
    raw_rows = data.get(name)
    if not isinstance(raw_rows, list):
        if raw_rows is not None:
            logger.warning(f"⚠️ GPay '{name}' is not a list ({type(raw_rows).__name__}), treating as empty")
        return ()
    return tuple(_parse_row(row, row_type) for row in raw_rows)


def _parse_row(row: Any, row_type: Type[RowT]) -> RowT:
    if not isinstance(row, Mapping):
        raise MalformedResponseError(f"Transaction row is not an object: {row!r}")
    return row_type(
        transaction_id=row.get("transaction_id"),
        datetime=row.get("datetime"),
        timestamp=row.get("timestamp"),
        description=row.get("description"),
        amount=_decimal(row, "amount"),
        balance=_decimal(row, "balance"),
        reference_no=row.get("reference_no"),
        op_type_id=row.get("op_type_id"),
        status=row.get("status"),
        created_at=row.get("created_at"),
    )


def parse_balance(data: Mapping[str, Any]) -> Balance:
    return Balance(
        balance=_decimal(data, "balance"),
        response_time=_response_time(data),
    )


def parse_payment_request(data: Mapping[str, Any]) -> PaymentRequest:
    return PaymentRequest(
        requester_username=data.get("requester_username"),
        request_id=data.get("request_id"),
        request_time=data.get("request_time"),
        amount=_decimal(data, "amount"),
        reference_no=data.get("reference_no"),
        response_time=_response_time(data),
    )


def parse_payment_status(data: Mapping[str, Any]) -> PaymentStatus:
    return PaymentStatus(
        request_id=data.get("request_id"),
        transaction_id=data.get("transaction_id"),
        amount=_decimal(data, "amount"),
        payment_timestamp=data.get("payment_timestamp"),
        reference_no=data.get("reference_no"),
        description=data.get("description"),
        is_paid=data.get("is_paid"),
        response_time=_response_time(data),
    )


def parse_send_money_result(data: Mapping[str, Any]) -> SendMoneyResult:
    return SendMoneyResult(
        amount=_decimal(data, "amount"),
        sender_fee=_decimal(data, "sender_fee"),
        transaction_id=data.get("transaction_id"),
        old_balance=_decimal(data, "old_balance"),
        new_balance=_decimal(data, "new_balance"),
        timestamp=data.get("timestamp"),
        reference_no=data.get("reference_no"),
        response_time=_response_time(data),
    )


def parse_statement(data: Mapping[str, Any]) -> Statement:
    return Statement(
        available_balance=_decimal(data, "available_balance"),
        outstanding_credit=_decimal(data, "outstanding_credit"),
        outstanding_debit=_decimal(data, "outstanding_debit"),
        day_balance=_decimal(data, "day_balance"),
        day_total_in=_decimal(data, "day_total_in"),
        day_total_out=_decimal(data, "day_total_out"),
        response_time=_response_time(data),
        day_statement=_rows(data, "day_statement", StatementTransaction),
    )


def parse_wallet_check(data: Mapping[str, Any]) -> WalletCheck:
    return WalletCheck(
        exists=data.get("exists"),
        wallet_gateway_id=data.get("wallet_gateway_id"),
        wallet_name=data.get("wallet_name"),
        user_account_name=data.get("user_account_name"),
        can_receive_money=data.get("can_receive_money"),
        response_time=_response_time(data),
    )


def parse_outstanding_transactions(data: Mapping[str, Any]) -> OutstandingTransactions:
    return OutstandingTransactions(
        outstanding_credit=_decimal(data, "outstanding_credit"),
        outstanding_debit=_decimal(data, "outstanding_debit"),
        response_time=_response_time(data),
        outstanding_transactions=_rows(data, "outstanding_transactions", OutstandingTransaction),
    )
