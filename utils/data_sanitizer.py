"""
Data Sanitization Module
Masks credentials before they reach logs or error messages
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class DataSanitizer:
    """Masking helpers for credentials handled by the GPay client"""

    # Field names masked in dictionaries
    SENSITIVE_FIELDS = {
        "api_key",
        "secret_key",
        "password",
        "authorization",
        "x-signature-salt",
        "x-signature-hash",
    }

    @classmethod
    def sanitize_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Copy of data with sensitive keys masked (case-insensitive)

        Args:
            data: Dictionary such as request headers

        Returns:
            New dictionary safe for logging
        """
        return {
            key: "[REDACTED]" if str(key).lower() in cls.SENSITIVE_FIELDS else value
            for key, value in data.items()
        }

    @classmethod
    def mask_api_key(cls, api_key: Optional[str], show_chars: int = 2) -> str:
        """
        Safely mask API key for logging

        Args:
            api_key: API key to mask
            show_chars: Number of characters to show at start/end (default: 2 for security)

        Returns:
            Masked API key safe for logging
        """
        if not api_key:
            return "[NO_API_KEY]"

        if len(api_key) <= show_chars * 2:
            return "[REDACTED]"

        return f"[API_KEY:{api_key[:show_chars]}***{api_key[-show_chars:]}]"


# Global instance
data_sanitizer = DataSanitizer()


def mask_api_key_safe(api_key: Optional[str]) -> str:
    """Safely mask API key for any logging"""
    return data_sanitizer.mask_api_key(api_key)


def sanitize_headers_for_log(headers: Dict[str, Any]) -> Dict[str, Any]:
    """Request/response headers with credentials and signatures masked"""
    return data_sanitizer.sanitize_dict(headers)
