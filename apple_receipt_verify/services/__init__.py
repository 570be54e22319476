"""
Services package initialization.

Re-exports public APIs from all service modules for convenience.
"""

from .verifier import (
    init,
    validate_purchase,
    is_subscription_current,
    ReceiptVerifier,
)

from .normalizer import (
    get_purchase_data,
    get_subscription_expire_date,
    parse_receipt,
    parse_response,
    to_camel_case,
)

from .error_codes import (
    ERROR_MESSAGES,
    STATUS_OK,
    get_error_message,
    is_environment_error,
)
