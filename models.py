"""
GPay Wallet Client - Result Records and Constants
=================================================

Value types returned by the GPay client:
- Enumerations shared with the gateway (base URLs, operation types, statuses)
- One immutable record per API operation

Records carry no parsing logic. Wire decoding lives in services/gpay_parsers.py.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union


# ============================================================================
# ENUMS - Gateway Constants
# ============================================================================

class BaseUrl(str, Enum):
    """GPay online-wallet API roots"""
    STAGING = "https://gpay-staging.libyaguide.net/banking/api/onlinewallet/v1"
    PRODUCTION = "https://gpay.ly/banking/api/onlinewallet/v1"
    DEV = "http://localhost:8080/banking/api/onlinewallet/v1"

    @classmethod
    def resolve(cls, value: Union["BaseUrl", str, None]) -> Optional["BaseUrl"]:
        """Match a member, a member name or a raw URL; None when unknown"""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        text = str(value).strip()
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        try:
            return cls(text.rstrip("/"))
        except ValueError:
            return None


class _LookupEnum(IntEnum):
    """Integer enum with lenient value-to-name lookup"""

    @classmethod
    def describe(cls, value) -> Optional[str]:
        """Name for a raw gateway value, or None if the value is not a member"""
        try:
            return cls(int(value)).name
        except (TypeError, ValueError):
            return None


class OperationType(_LookupEnum):
    """Kind of wallet operation behind a transaction row"""
    DIRECT_TRANSFER = 1  # Direct money transfer
    PAYMENT_REQUEST = 2  # Paid through a payment request
    BANK_DEPOSIT = 3  # Cash-in bank deposit
    BANK_WITHDRAW = 4  # Cash-out bank withdraw
    TRANSACTION_FEE = 5  # Fee deduction
    LOCAL_TRANSFER = 6  # Between wallets of the same primary owner


class TransactionStatus(_LookupEnum):
    """Lifecycle of a transaction row"""
    PENDING = 0  # Initiated, pending completion
    COMPLETED = 1  # Completed, not yet applied to balance
    APPLIED = 2  # Applied to balance


# ============================================================================
# CREDENTIALS
# ============================================================================

@dataclass(frozen=True)
class GPayCredentials:
    """Per-client secrets and routing. Never logged unmasked."""

    api_key: str
    secret_key: str = field(repr=False)
    password: str = field(repr=False)
    base_url: BaseUrl
    language: str = "en"


# ============================================================================
# RESULT RECORDS
# ============================================================================

@dataclass(frozen=True)
class Balance:
    balance: Optional[Decimal]
    response_time: Optional[datetime]


@dataclass(frozen=True)
class PaymentRequest:
    """A payment request created on behalf of this wallet"""
    requester_username: Optional[str]
    request_id: Optional[str]
    request_time: Optional[str]
    amount: Optional[Decimal]
    reference_no: Optional[str]
    response_time: Optional[datetime]


@dataclass(frozen=True)
class PaymentStatus:
    """State of a payment request; transaction fields are set once paid"""
    request_id: Optional[str]
    transaction_id: Optional[str]
    amount: Optional[Decimal]
    payment_timestamp: Optional[str]
    reference_no: Optional[str]
    description: Optional[str]
    is_paid: Optional[bool]
    response_time: Optional[datetime]


@dataclass(frozen=True)
class SendMoneyResult:
    amount: Optional[Decimal]
    sender_fee: Optional[Decimal]
    transaction_id: Optional[str]
    old_balance: Optional[Decimal]
    new_balance: Optional[Decimal]
    timestamp: Optional[str]
    reference_no: Optional[str]
    response_time: Optional[datetime]


@dataclass(frozen=True)
class _TransactionRow:
    """Shared shape of statement and outstanding transaction rows"""
    transaction_id: Optional[str]
    datetime: Optional[str]
    timestamp: Optional[str]
    description: Optional[str]
    amount: Optional[Decimal]
    balance: Optional[Decimal]
    reference_no: Optional[str]
    op_type_id: Optional[int]
    status: Optional[int]
    created_at: Optional[str]

    @property
    def operation_type(self) -> Optional[OperationType]:
        if OperationType.describe(self.op_type_id) is None:
            return None
        return OperationType(int(self.op_type_id))

    @property
    def transaction_status(self) -> Optional[TransactionStatus]:
        if TransactionStatus.describe(self.status) is None:
            return None
        return TransactionStatus(int(self.status))


@dataclass(frozen=True)
class StatementTransaction(_TransactionRow):
    pass


@dataclass(frozen=True)
class OutstandingTransaction(_TransactionRow):
    pass


@dataclass(frozen=True)
class Statement:
    """Wallet statement for one day"""
    available_balance: Optional[Decimal]
    outstanding_credit: Optional[Decimal]
    outstanding_debit: Optional[Decimal]
    day_balance: Optional[Decimal]
    day_total_in: Optional[Decimal]
    day_total_out: Optional[Decimal]
    response_time: Optional[datetime]
    day_statement: Tuple[StatementTransaction, ...] = ()


@dataclass(frozen=True)
class WalletCheck:
    exists: Optional[bool]
    wallet_gateway_id: Optional[str]
    wallet_name: Optional[str]
    user_account_name: Optional[str]
    can_receive_money: Optional[bool]
    response_time: Optional[datetime]


@dataclass(frozen=True)
class OutstandingTransactions:
    outstanding_credit: Optional[Decimal]
    outstanding_debit: Optional[Decimal]
    response_time: Optional[datetime]
    outstanding_transactions: Tuple[OutstandingTransaction, ...] = ()
