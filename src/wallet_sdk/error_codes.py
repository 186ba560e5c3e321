"""
Error codes returned by the Wallet API

Every non-2xx response body carries one of these codes in its ``code`` field.
Codes are grouped in sections so callers can branch on a whole family of
failures (for example any authentication problem) without listing each code.
"""

from typing import Dict, Optional


class ErrorCodes:
    """Machine-readable error codes of the Wallet API"""

    # Authentication & authorization
    EXPIRED_API_KEY = "ErrExpiredApiKey"
    EXPIRED_AUTH_TOKEN = "ErrExpiredAuthToken"
    INSUFFICIENT_ACCESS = "ErrInsufficientAccess"
    INVALID_AUTH_SIGNATURE = "ErrInvalidAuthSignature"
    INVALID_AUTH_TOKEN = "ErrInvalidAuthToken"
    INVALID_PUBLIC_KEY = "ErrInvalidPublicKey"
    UNAUTHORIZED_IP_ADDRESS = "ErrUnauthorizedIPAddress"

    # Request validation
    INVALID_API_NAME = "ErrInvalidApiName"
    INVALID_BODY_FORMAT = "ErrInvalidBodyFormat"
    INVALID_DATE_RANGE = "ErrInvalidDateRange"
    INVALID_HEADER = "ErrInvalidHeader"
    INVALID_METHOD = "ErrInvalidMethod"
    INVALID_PARAMETER = "ErrInvalidParameter"
    INVALID_PAYLOAD = "ErrInvalidPayload"
    MISSING_HEADER = "ErrMissingHeader"
    MISSING_PARAMETER = "ErrMissingParameter"

    # Certificate signing requests
    INVALID_CSR = "ErrInvalidCSR"
    INVALID_CSR_FORMAT = "ErrInvalidCSRFormat"
    INVALID_CSR_ELLIPTIC_CURVE = "ErrInvalidCSREllipticCurve"
    INVALID_CSR_KEY_LENGTH = "ErrInvalidCSRKeyLength"
    INVALID_CSR_KEY_TYPE = "ErrInvalidCSRKeyType"
    INVALID_CSR_SIGNATURE = "ErrInvalidCSRSignature"

    # Resource & routing
    ALREADY_EXISTS = "ErrAlreadyExists"
    INVALID_ROUTE = "ErrInvalidRoute"
    MISSING_RESOURCE = "ErrMissingResource"

    # Business & domain rules
    ACTION_NOT_ALLOWED_FOR_ACCOUNT_TYPE = "ErrActionNotAllowedForAccountType"
    ACTION_OUTSIDE_FUND_HOURS = "ErrActionOutsideFundHours"
    DUITNOW = "ErrDuitNow"
    INSUFFICIENT_BALANCE = "ErrInsufficientBalance"
    INVALID_ACCOUNT_EXPERIENCE = "ErrInvalidAccountExperience"
    INVALID_REQUEST_POLICY = "ErrInvalidRequestPolicy"
    REQUEST_CANNOT_BE_CANCELLED = "ErrRequestCannotBeCancelled"
    SUITABILITY_ASSESSMENT_MISSING_FOR_ACCOUNT_CREATION = "ErrSuitabilityAssessmentMissingForAccountCreation"
    SUITABILITY_ASSESSMENT_REQUIRED = "ErrSuitabilityAssessmentRequired"

    # Rate limiting & cancellations
    CANCELLED_REQUEST = "ErrCancelledRequest"
    RATE_LIMIT_EXCEEDED = "ErrRateLimitExceeded"

    # Server & infrastructure
    INTERNAL = "ErrInternal"
    SERVICE_UNAVAILABLE = "ErrServiceUnavailable"

    # Used only for responses whose body carried no recognizable code
    UNKNOWN = "ErrUnknown"


CATEGORY_AUTH = "authentication"
CATEGORY_VALIDATION = "validation"
CATEGORY_CSR = "csr"
CATEGORY_RESOURCE = "resource"
CATEGORY_BUSINESS = "business"
CATEGORY_RATE_LIMIT = "rate_limit"
CATEGORY_INFRASTRUCTURE = "infrastructure"

ERROR_CATEGORIES: Dict[str, str] = {
    ErrorCodes.EXPIRED_API_KEY: CATEGORY_AUTH,
    ErrorCodes.EXPIRED_AUTH_TOKEN: CATEGORY_AUTH,
    ErrorCodes.INSUFFICIENT_ACCESS: CATEGORY_AUTH,
    ErrorCodes.INVALID_AUTH_SIGNATURE: CATEGORY_AUTH,
    ErrorCodes.INVALID_AUTH_TOKEN: CATEGORY_AUTH,
    ErrorCodes.INVALID_PUBLIC_KEY: CATEGORY_AUTH,
    ErrorCodes.UNAUTHORIZED_IP_ADDRESS: CATEGORY_AUTH,
    ErrorCodes.INVALID_API_NAME: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_BODY_FORMAT: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_DATE_RANGE: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_HEADER: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_METHOD: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_PARAMETER: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_PAYLOAD: CATEGORY_VALIDATION,
    ErrorCodes.MISSING_HEADER: CATEGORY_VALIDATION,
    ErrorCodes.MISSING_PARAMETER: CATEGORY_VALIDATION,
    ErrorCodes.INVALID_CSR: CATEGORY_CSR,
    ErrorCodes.INVALID_CSR_FORMAT: CATEGORY_CSR,
    ErrorCodes.INVALID_CSR_ELLIPTIC_CURVE: CATEGORY_CSR,
    ErrorCodes.INVALID_CSR_KEY_LENGTH: CATEGORY_CSR,
    ErrorCodes.INVALID_CSR_KEY_TYPE: CATEGORY_CSR,
    ErrorCodes.INVALID_CSR_SIGNATURE: CATEGORY_CSR,
    ErrorCodes.ALREADY_EXISTS: CATEGORY_RESOURCE,
    ErrorCodes.INVALID_ROUTE: CATEGORY_RESOURCE,
    ErrorCodes.MISSING_RESOURCE: CATEGORY_RESOURCE,
    ErrorCodes.ACTION_NOT_ALLOWED_FOR_ACCOUNT_TYPE: CATEGORY_BUSINESS,
    ErrorCodes.ACTION_OUTSIDE_FUND_HOURS: CATEGORY_BUSINESS,
    ErrorCodes.DUITNOW: CATEGORY_BUSINESS,
    ErrorCodes.INSUFFICIENT_BALANCE: CATEGORY_BUSINESS,
    ErrorCodes.INVALID_ACCOUNT_EXPERIENCE: CATEGORY_BUSINESS,
    ErrorCodes.INVALID_REQUEST_POLICY: CATEGORY_BUSINESS,
    ErrorCodes.REQUEST_CANNOT_BE_CANCELLED: CATEGORY_BUSINESS,
    ErrorCodes.SUITABILITY_ASSESSMENT_MISSING_FOR_ACCOUNT_CREATION: CATEGORY_BUSINESS,
    ErrorCodes.SUITABILITY_ASSESSMENT_REQUIRED: CATEGORY_BUSINESS,
    ErrorCodes.CANCELLED_REQUEST: CATEGORY_RATE_LIMIT,
    ErrorCodes.RATE_LIMIT_EXCEEDED: CATEGORY_RATE_LIMIT,
    ErrorCodes.INTERNAL: CATEGORY_INFRASTRUCTURE,
    ErrorCodes.SERVICE_UNAVAILABLE: CATEGORY_INFRASTRUCTURE,
}

# Codes synthesized when an error response body cannot be decoded
STATUS_FALLBACK_CODES: Dict[int, str] = {
    401: ErrorCodes.INVALID_AUTH_TOKEN,
    403: ErrorCodes.INSUFFICIENT_ACCESS,
    404: ErrorCodes.INVALID_ROUTE,
    405: ErrorCodes.INVALID_METHOD,
    429: ErrorCodes.RATE_LIMIT_EXCEEDED,
    503: ErrorCodes.SERVICE_UNAVAILABLE,
}


def category_for(code: str) -> Optional[str]:
    """Return the taxonomy section of ``code``, or None for unknown codes."""
    return ERROR_CATEGORIES.get(code)


def code_for_status(status_code: int) -> str:
    """Best-guess error code for a response that carried no decodable body."""
    if status_code in STATUS_FALLBACK_CODES:
        return STATUS_FALLBACK_CODES[status_code]
    if status_code >= 500:
        return ErrorCodes.INTERNAL
    return ErrorCodes.UNKNOWN
