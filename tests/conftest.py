"""
Shared pytest fixtures and configuration.
"""

import time
import pytest

DAY_MS = 24 * 60 * 60 * 1000


def ms_from_now(days: float) -> int:
    """Epoch milliseconds `days` away from now (negative for the past)."""
    return int(time.time() * 1000 + days * DAY_MS)


@pytest.fixture
def in_app_item():
    """A realistic auto-renewable subscription entry from receipt.in_app."""
    purchased = ms_from_now(-3)
    return {
        "quantity": "1",
        "product_id": "com.example.app.pro.monthly",
        "transaction_id": "1000000512345678",
        "original_transaction_id": "1000000500000001",
        "purchase_date": "2026-10-15 10:00:00 Etc/GMT",
        "purchase_date_ms": str(purchased),
        "purchase_date_pst": "2026-10-15 03:00:00 America/Los_Angeles",
        "original_purchase_date_ms": str(ms_from_now(-60)),
        "expires_date_ms": str(ms_from_now(27)),
        "web_order_line_item_id": "1000000040000001",
        "is_trial_period": "false",
        "is_in_intro_offer_period": "false",
        "in_app_ownership_type": "PURCHASED",
    }


@pytest.fixture
def verified_receipt(in_app_item):
    """A status-0 verifyReceipt body with an iOS 7 style receipt."""
    return {
        "status": 0,
        "sandbox": False,
        "environment": "Production",
        "receipt": {
            "receipt_type": "Production",
            "bundle_id": "com.example.app",
            "application_version": "42",
            "in_app": [in_app_item],
        },
        "latest_receipt_info": [],
    }


@pytest.fixture
def legacy_receipt():
    """A pre-iOS 6 style verifyReceipt body (no in_app list)."""
    return {
        "status": 0,
        "receipt": {
            "bid": "com.example.legacy",
            "item_id": "521129812",
            "product_id": "com.example.legacy.coins",
            "transaction_id": "170000029449420",
            "original_transaction_id": "170000029449420",
            "purchase_date_ms": "1374000000000",
            "original_purchase_date_ms": "1374000000000",
            "quantity": "3",
            "is_trial_period": "false",
        },
    }
