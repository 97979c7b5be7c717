"""GPay client error taxonomy"""

from typing import Optional


class GPayError(Exception):
    """Base exception for GPay client errors"""
    pass


class ConfigurationError(GPayError):
    """Client cannot be built from the given settings"""
    pass


class TransportError(GPayError):
    """Network failure or HTTP error without a gateway error envelope"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RemoteError(GPayError):
    """Gateway answered with an error envelope"""

    def __init__(self, code: str, message: str, status: Optional[int] = None):
        super().__init__(f"GPay API Error ({code}): {message}")
        self.code = code
        self.message = message
        self.status = status


class MalformedResponseError(GPayError):
    """Response body is not the JSON document the gateway contract describes"""
    pass


class SignatureVerificationError(GPayError):
    """Response authenticity could not be established"""
    pass


class MissingSignatureError(SignatureVerificationError):
    pass


class SignatureMismatchError(SignatureVerificationError):
    pass


class AmbiguousParameterError(GPayError, ValueError):
    """Signed value contains a character that breaks the canonical query string"""

    def __init__(self, key: str, value: str):
        super().__init__(f"Parameter '{key}' must not contain '&' or '=': {value!r}")
        self.key = key
        self.value = value
