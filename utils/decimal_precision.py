#!/usr/bin/env python3
"""
Decimal Precision Utilities for Wallet Amounts
Converts gateway amounts (JSON numbers or numeric strings) to Decimal
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

logger = logging.getLogger(__name__)

NumericInput = Union[str, int, float, Decimal, None]


class MonetaryDecimal:
    """Decimal-only handling of monetary values exchanged with the gateway"""

    @classmethod
    def to_decimal(cls, value: NumericInput, context: str = "monetary") -> Optional[Decimal]:
        """
        Convert a gateway value to Decimal, keeping None as None.

        Args:
            value: JSON number, numeric string, Decimal or None
            context: Field name used in log and error messages

        Returns:
            Decimal value, or None when the gateway sent null

        Raises:
            ValueError: value is not numeric
        """
        if value is None:
            return None

        if isinstance(value, Decimal):
            return value

        if isinstance(value, bool):
            raise ValueError(f"Boolean is not a monetary value for {context}: {value!r}")

        try:
            # Convert through str to avoid binary float artifacts
            decimal_value = Decimal(str(value).strip())
        except InvalidOperation:
            logger.error(f"Failed to convert {value!r} to Decimal in context {context}")
            raise ValueError(f"Invalid numeric value for {context}: {value!r}")

        if not decimal_value.is_finite():
            raise ValueError(f"Non-finite numeric value for {context}: {value!r}")

        return decimal_value

    @classmethod
    def format_amount(cls, amount: Union[str, int, float, Decimal]) -> str:
        """Plain string form of an outgoing amount, without exponent notation"""
        if amount is None:
            raise ValueError("amount is required")
        if isinstance(amount, str):
            cls.to_decimal(amount, "amount")
            return amount.strip()
        decimal_amount = cls.to_decimal(amount, "amount")
        if decimal_amount == decimal_amount.to_integral_value():
            return str(decimal_amount.quantize(Decimal(1)))
        return format(decimal_amount.normalize(), "f")
