"""
Field names used in verifyReceipt response bodies.
"""

RECEIPT = "receipt"
IN_APP = "in_app"
LATEST_RECEIPT_INFO = "latest_receipt_info"

BUNDLE_ID = "bundle_id"
BID = "bid"
TRANSACTION_ID = "transaction_id"
ORIGINAL_TRANSACTION_ID = "original_transaction_id"
PRODUCT_ID = "product_id"
ITEM_ID = "item_id"
QUANTITY = "quantity"
PURCHASE_DATE_MS = "purchase_date_ms"
ORIGINAL_PURCHASE_DATE_MS = "original_purchase_date_ms"
CANCELLATION_DATE = "cancellation_date"
IS_TRIAL_PERIOD = "is_trial_period"

# Expiration candidates, highest priority first
EXPIRES_DATE_MS = "expires_date_ms"
EXPIRES_DATE = "expires_date"
EXPIRATION_DATE = "expiration_date"
EXPIRATION_INTENT = "expiration_intent"
