"""
Exception classes for Wallet Python SDK
"""

from typing import Optional, Dict, Any

from .error_codes import ErrorCodes, category_for


class WalletSDKError(Exception):
    """Base exception for all Wallet SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(WalletSDKError):
    """Exception raised for validation failures"""
    pass


class CredentialsError(WalletSDKError):
    """Exception raised when no usable credentials are available"""
    pass


class SigningError(WalletSDKError):
    """Exception raised when a request token cannot be signed"""
    pass


class KeyFormatError(SigningError):
    """Exception raised for malformed or unsupported private keys"""
    pass


class TransportError(WalletSDKError):
    """Exception raised for network failures before a response is received"""

    def __init__(self, message: str, error_code: str = "TRANSPORT_ERROR",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status


class RequestCancelledError(WalletSDKError):
    """Exception raised when the caller's request context is cancelled or expires"""

    def __init__(self, message: str = "request was cancelled before completion",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.CANCELLED_REQUEST, details)


class ResponseDecodeError(WalletSDKError):
    """Exception raised when a successful response carries an undecodable body"""
    pass


class APIError(WalletSDKError):
    """
    Structured error returned by the Wallet API for non-2xx responses.

    Attributes:
        status_code: HTTP status of the response
        code: Machine-readable code from the error taxonomy
        message: Human-readable detail
    """

    def __init__(self, status_code: int, code: str, message: str,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)
        self.status_code = status_code
        self.code = code

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500 and not self.is_rate_limited

    @property
    def category(self) -> Optional[str]:
        """Taxonomy section the error code belongs to, if known"""
        return category_for(self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'statusCode': self.status_code,
            'code': self.code,
            'message': self.message,
        }

    def __repr__(self) -> str:
        return f"APIError(status_code={self.status_code}, code='{self.code}', message='{self.message}')"
