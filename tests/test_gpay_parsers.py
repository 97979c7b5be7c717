"""
GPay response mapper tests
Numeric coercion, timestamp conversion and nested transaction rows
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from models import OperationType, StatementTransaction, TransactionStatus
from services import gpay_parsers
from services.gpay_exceptions import MalformedResponseError

RESPONSE_TIME = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


class TestBalanceMapping:

    def test_balance_from_number(self):
        record = gpay_parsers.parse_balance({"balance": 100, "response_timestamp": 1700000000000})
        assert record.balance == Decimal("100")
        assert record.balance == 100.0
        assert record.response_time == RESPONSE_TIME

    def test_balance_from_string(self):
        record = gpay_parsers.parse_balance({"balance": "49.90", "response_timestamp": "1700000000000"})
        assert record.balance == Decimal("49.9")
        assert isinstance(record.balance, Decimal)

    def test_null_stays_null(self):
        record = gpay_parsers.parse_balance({"balance": None, "response_timestamp": None})
        assert record.balance is None
        assert record.response_time is None

    def test_non_numeric_rejected(self):
        with pytest.raises(MalformedResponseError):
            gpay_parsers.parse_balance({"balance": "lots", "response_timestamp": "1700000000000"})

    def test_bad_timestamp_rejected(self):
        with pytest.raises(MalformedResponseError):
            gpay_parsers.parse_balance({"balance": "1", "response_timestamp": "yesterday"})


class TestPaymentMapping:

    def test_payment_request(self):
        record = gpay_parsers.parse_payment_request({
            "requester_username": "merchant01",
            "request_id": "REQ-1",
            "request_time": "1699999999000",
            "amount": "49.90",
            "reference_no": None,
            "response_timestamp": "1700000000000",
        })
        assert record.requester_username == "merchant01"
        assert record.request_id == "REQ-1"
        assert record.request_time == "1699999999000"
        assert record.amount == Decimal("49.9")
        assert record.reference_no is None
        assert record.response_time == RESPONSE_TIME

    def test_payment_status_unpaid(self):
        record = gpay_parsers.parse_payment_status({
            "request_id": "REQ-1",
            "transaction_id": None,
            "amount": None,
            "payment_timestamp": None,
            "reference_no": "ORDER-9",
            "description": "Order 9",
            "is_paid": False,
            "response_timestamp": "1700000000000",
        })
        assert record.is_paid is False
        assert record.transaction_id is None
        assert record.amount is None

    def test_send_money_result(self):
        record = gpay_parsers.parse_send_money_result({
            "amount": "20",
            "sender_fee": "0.25",
            "transaction_id": "TX-9",
            "old_balance": 100,
            "new_balance": "79.75",
            "timestamp": "1700000000000",
            "reference_no": "PAYOUT-1",
            "response_timestamp": "1700000000000",
        })
        assert record.amount == Decimal("20")
        assert record.sender_fee == Decimal("0.25")
        assert record.old_balance - record.amount - record.sender_fee == record.new_balance


class TestListingMapping:

    def test_statement_rows(self, sample_transaction_row):
        record = gpay_parsers.parse_statement({
            "available_balance": "174.5",
            "outstanding_credit": "0",
            "outstanding_debit": "0",
            "day_balance": "174.5",
            "day_total_in": "25.5",
            "day_total_out": "0",
            "response_timestamp": "1700000000000",
            "day_statement": [sample_transaction_row],
        })
        assert record.available_balance == Decimal("174.5")
        assert len(record.day_statement) == 1

        row = record.day_statement[0]
        assert isinstance(row, StatementTransaction)
        assert row.amount == Decimal("25.5")
        assert row.balance == Decimal("174.5")
        assert row.operation_type is OperationType.PAYMENT_REQUEST
        assert row.transaction_status is TransactionStatus.COMPLETED

    def test_missing_row_list_is_empty(self):
        record = gpay_parsers.parse_statement({"response_timestamp": "1700000000000"})
        assert record.day_statement == ()
        assert record.available_balance is None

    def test_non_list_rows_are_empty(self):
        record = gpay_parsers.parse_outstanding_transactions({
            "outstanding_credit": "5",
            "outstanding_debit": "2",
            "response_timestamp": "1700000000000",
            "outstanding_transactions": {"unexpected": "object"},
        })
        assert record.outstanding_transactions == ()

    def test_row_with_null_amounts(self, sample_transaction_row):
        row = dict(sample_transaction_row, amount=None, balance=None, op_type_id=99, status=None)
        record = gpay_parsers.parse_outstanding_transactions({
            "outstanding_credit": "5",
            "outstanding_debit": "2",
            "response_timestamp": "1700000000000",
            "outstanding_transactions": [row],
        })
        parsed = record.outstanding_transactions[0]
        assert parsed.amount is None
        assert parsed.balance is None
        assert parsed.operation_type is None
        assert parsed.transaction_status is None

    def test_non_object_row_rejected(self):
        with pytest.raises(MalformedResponseError):
            gpay_parsers.parse_outstanding_transactions({
                "response_timestamp": "1700000000000",
                "outstanding_transactions": ["TX-1"],
            })


class TestWalletCheckMapping:

    def test_wallet_check(self):
        record = gpay_parsers.parse_wallet_check({
            "exists": True,
            "wallet_gateway_id": "W-100",
            "wallet_name": "Main",
            "user_account_name": "Ali",
            "can_receive_money": True,
            "response_timestamp": 1700000000000,
        })
        assert record.exists is True
        assert record.can_receive_money is True
        assert record.wallet_gateway_id == "W-100"


class TestSignedFields:

    def test_whitelist_subset_only(self):
        data = {"balance": "1", "response_timestamp": "2", "currency": "LYD"}
        assert gpay_parsers.signed_fields(data, gpay_parsers.BALANCE_SIGNED_FIELDS) == {
            "balance": "1",
            "response_timestamp": "2",
        }

    def test_missing_fields_become_none(self):
        assert gpay_parsers.signed_fields({}, gpay_parsers.OUTSTANDING_SIGNED_FIELDS) == {
            "outstanding_credit": None,
            "outstanding_debit": None,
            "response_timestamp": None,
        }
