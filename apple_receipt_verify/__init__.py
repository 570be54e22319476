"""
App package initialization
"""

from .config import (
    APPLE_SHARED_SECRET,
    APPLE_VERIFY_URL,
    APPLE_VERIFY_TIMEOUT,
    PRODUCTION_VERIFY_URL,
    SANDBOX_VERIFY_URL,
    ALLOWED_ORIGINS,
    LOG_LEVEL,
    SERVICE_NAME,
    VERSION,
    setup_logging,
    validate_startup,
)
