"""
App Store status codes.

Status values returned in the ``status`` field of a verifyReceipt response,
and the human-readable messages reported back to callers.

Reference: https://developer.apple.com/documentation/appstorereceipts/status
"""

STATUS_OK = 0
STATUS_NO_PURCHASE = 2
STATUS_INVALID_JSON = 21000
STATUS_MALFORMED_RECEIPT = 21002
STATUS_AUTHENTICATION_FAILED = 21003
STATUS_SECRET_MISMATCH = 21004
STATUS_SERVER_UNAVAILABLE = 21005
STATUS_SUBSCRIPTION_EXPIRED = 21006
STATUS_SANDBOX_RECEIPT = 21007
STATUS_PRODUCTION_RECEIPT = 21008

# Used when the response carries no status at all
STATUS_MISSING = 404

UNKNOWN_ERROR_MESSAGE = "Unknown"

ERROR_MESSAGES = {
    STATUS_INVALID_JSON: "The App Store could not read the JSON object you provided.",
    STATUS_MALFORMED_RECEIPT: "The data in the receipt-data property was malformed.",
    STATUS_AUTHENTICATION_FAILED: "The receipt could not be authenticated.",
    STATUS_SECRET_MISMATCH: (
        "The shared secret you provided does not match the shared secret on file for your account."
    ),
    STATUS_SERVER_UNAVAILABLE: "The receipt server is not currently available.",
    STATUS_SUBSCRIPTION_EXPIRED: (
        "This receipt is valid but the subscription has expired. When this status code is "
        "returned to your server, the receipt data is also decoded and returned as part of "
        "the response."
    ),
    STATUS_SANDBOX_RECEIPT: (
        "This receipt is a sandbox receipt, but it was sent to the production service for verification."
    ),
    STATUS_PRODUCTION_RECEIPT: (
        "This receipt is a production receipt, but it was sent to the sandbox service for verification."
    ),
    STATUS_NO_PURCHASE: "The receipt is valid, but purchased nothing.",
}

# Receipt was sent to the wrong environment; callers may retry elsewhere
ENVIRONMENT_ERRORS = {STATUS_SANDBOX_RECEIPT, STATUS_PRODUCTION_RECEIPT}


def status_code(value) -> int:
    """Read a status field as an int; digit strings count, anything else is STATUS_MISSING."""
    if isinstance(value, bool):
        return STATUS_MISSING
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return STATUS_MISSING


def get_error_message(status) -> str:
    """Look up the message for an App Store status code."""
    return ERROR_MESSAGES.get(status_code(status), UNKNOWN_ERROR_MESSAGE)


def is_environment_error(status) -> bool:
    return status_code(status) in ENVIRONMENT_ERRORS
