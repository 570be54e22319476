"""
App Configuration Module

Centralized configuration for environment variables and constants.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============ Apple Endpoints ============

PRODUCTION_VERIFY_URL = "https://buy.itunes.apple.com/verifyReceipt"
SANDBOX_VERIFY_URL = "https://sandbox.itunes.apple.com/verifyReceipt"

# ============ Environment Variables ============

# App-specific shared secret (auto-renewable subscriptions)
APPLE_SHARED_SECRET = os.getenv("APPLE_SHARED_SECRET")

# Verification endpoint and timeout
APPLE_VERIFY_URL = os.getenv("APPLE_VERIFY_URL", PRODUCTION_VERIFY_URL)
APPLE_VERIFY_TIMEOUT = float(os.getenv("APPLE_VERIFY_TIMEOUT", "30"))

# CORS
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ============ Constants ============

SERVICE_NAME = "Apple Receipt Verify API"
VERSION = "1.0.0"


# ============ Logging Setup ============

def setup_logging():
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ============ Startup Validation ============

def validate_startup():
    """Validate critical configuration at startup."""
    warnings = []

    if not APPLE_SHARED_SECRET:
        warnings.append("APPLE_SHARED_SECRET not set - subscription receipts need a per-call secret")
    else:
        print("✓ Apple shared secret configured")

    if APPLE_VERIFY_URL != PRODUCTION_VERIFY_URL:
        warnings.append(f"APPLE_VERIFY_URL overridden: {APPLE_VERIFY_URL}")

    for warning in warnings:
        print(f"⚠ WARNING: {warning}")

    return len(warnings) == 0
