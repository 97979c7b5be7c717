"""
Datetime helper utilities for gateway timestamps.

The gateway exchanges timestamps as epoch milliseconds, either as JSON
numbers or as numeric strings. Converted values are timezone-aware UTC.
"""

from datetime import datetime, timezone
from typing import Optional, Union
import logging
import time

logger = logging.getLogger(__name__)


def current_epoch_millis() -> str:
    """
    Current time in epoch milliseconds, as the string sent in request_timestamp.

    Example:
        >>> len(current_epoch_millis())
        13
    """
    return str(int(time.time() * 1000))


def epoch_millis_to_datetime(value: Union[str, int, float, None]) -> Optional[datetime]:
    """
    Convert an epoch-millisecond value to an aware UTC datetime.

    Args:
        value: Milliseconds since the epoch, as number or numeric string

    Returns:
        Aware UTC datetime, or None if input is None

    Raises:
        ValueError: value is not a number or is out of range

    Example:
        >>> epoch_millis_to_datetime("1700000000000").isoformat()
        '2023-11-14T22:13:20+00:00'
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValueError(f"Invalid epoch milliseconds: {value!r}")

    try:
        millis = float(str(value).strip())
    except ValueError:
        logger.error(f"Invalid epoch milliseconds value: {value!r}")
        raise ValueError(f"Invalid epoch milliseconds: {value!r}")

    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.error(f"Epoch milliseconds out of range: {value!r}")
        raise ValueError(f"Epoch milliseconds out of range: {value!r}")
