"""
Receipt normalization.

Turns a verified verifyReceipt payload into a list of purchase records
with camelCase field names, string transaction ids and a single computed
expirationDate, whichever of Apple's receipt formats was returned.

Modern (iOS 6+) receipts merge ``receipt.in_app`` with
``latest_receipt_info``, newest purchase first, and keep only the latest
purchase of each original transaction. Legacy receipts describe a single
transaction and map to exactly one record.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from ..models import (
    GetPurchaseDataOptions,
    LegacyReceipt,
    ModernReceipt,
    PurchaseDataResponse,
)
from ..utils import id_to_string, is_numeric, now_ms, parse_int, to_epoch_ms
from . import receipt_keys as keys

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes"}
_FALSE_STRINGS = {"false", "no", ""}


# ============ Field Helpers ============

def to_camel_case(name: str) -> str:
    """snake_case -> camelCase. The first segment is kept as-is."""
    parts = [part for part in name.split("_") if part]
    if not parts:
        return name
    return parts[0] + "".join(part[0].upper() + part[1:] for part in parts[1:])


def parse_response(item: Mapping[str, Any]) -> Dict[str, Any]:
    """camelCase every key and read numeric-looking values as floats."""
    parsed = {}
    for key, value in item.items():
        name = to_camel_case(key)
        if is_numeric(value):
            parsed[name] = float(value)
        else:
            parsed[name] = value
    return parsed


def _to_bool(value) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        if is_numeric(text):
            return float(text) != 0
    return bool(value)


def get_subscription_expire_date(data: Optional[Mapping[str, Any]]) -> Union[int, str]:
    """Pick the expiration of a receipt record.

    First truthy field wins: expires_date_ms (int), expires_date,
    expiration_date, expiration_intent (int). 0 when none is set.
    """
    if not data:
        return 0
    if data.get(keys.EXPIRES_DATE_MS):
        expires_ms = parse_int(data[keys.EXPIRES_DATE_MS])
        return expires_ms if expires_ms is not None else 0
    if data.get(keys.EXPIRES_DATE):
        return data[keys.EXPIRES_DATE]
    if data.get(keys.EXPIRATION_DATE):
        return data[keys.EXPIRATION_DATE]
    if data.get(keys.EXPIRATION_INTENT):
        intent = parse_int(data[keys.EXPIRATION_INTENT])
        return intent if intent is not None else 0
    return 0


def is_expired(exp, now: Optional[int] = None) -> bool:
    """True when an expiration value is set and not later than now.

    Values that can't be read as a date never count as expired.
    """
    if not exp:
        return False
    exp_ms = to_epoch_ms(exp)
    if exp_ms is None:
        return False
    if now is None:
        now = now_ms()
    return now - exp_ms >= 0


# ============ Receipt Parsing ============

def parse_receipt(purchase: Optional[Mapping[str, Any]]) -> Optional[Union[ModernReceipt, LegacyReceipt]]:
    """Classify a verified payload as a modern or legacy receipt.

    Returns None when there is no receipt to read.
    """
    if not purchase or not purchase.get(keys.RECEIPT):
        return None

    receipt = purchase[keys.RECEIPT]
    if not isinstance(receipt, Mapping):
        return None
    latest = purchase.get(keys.LATEST_RECEIPT_INFO) or receipt.get(keys.LATEST_RECEIPT_INFO)

    if receipt.get(keys.IN_APP) is not None:
        items = list(receipt[keys.IN_APP])
        if isinstance(latest, list):
            items.extend(latest)
        return ModernReceipt(
            items=items,
            bundle_id=receipt.get(keys.BUNDLE_ID) or receipt.get(keys.BID),
        )

    # Legacy receipts carry a single latest_receipt_info record, if any
    top_level = purchase.get(keys.LATEST_RECEIPT_INFO)
    record = top_level if isinstance(top_level, Mapping) and top_level else receipt
    return LegacyReceipt(record=dict(record))


def _normalize_item(item: Mapping[str, Any], bundle_id, expiration) -> PurchaseDataResponse:
    parsed = parse_response(item)

    # Identifiers are strings; take them from the raw value so long ids keep every digit
    parsed["transactionId"] = id_to_string(item.get(keys.TRANSACTION_ID))
    original_id = item.get(keys.ORIGINAL_TRANSACTION_ID)
    if original_id and is_numeric(original_id):
        parsed["originalTransactionId"] = id_to_string(original_id)

    if parsed.get("isTrialPeriod") is not None:
        parsed["isTrial"] = _to_bool(item.get(keys.IS_TRIAL_PERIOD))
    else:
        parsed["isTrial"] = False

    parsed["bundleId"] = bundle_id
    parsed["expirationDate"] = expiration
    return parsed


def _purchase_date_key(item: Mapping[str, Any]) -> int:
    purchased = parse_int(item.get(keys.PURCHASE_DATE_MS))
    return purchased if purchased is not None else 0


def _modern_purchases(receipt: ModernReceipt, options: GetPurchaseDataOptions) -> List[PurchaseDataResponse]:
    now = now_ms()
    seen_ids = set()
    data = []

    # Newest first, so the first item seen per original transaction is the latest one
    items = sorted(receipt.items, key=_purchase_date_key, reverse=True)

    for item in items:
        original_id = item.get(keys.ORIGINAL_TRANSACTION_ID)
        exp = get_subscription_expire_date(item)

        # Canceled non-subscriptions are dropped outright; canceled subscriptions once expired
        if options.ignore_canceled and item.get(keys.CANCELLATION_DATE) and (not exp or is_expired(exp, now)):
            continue

        if options.ignore_expired and is_expired(exp, now):
            continue

        lineage = id_to_string(original_id) if original_id is not None else None
        if lineage in seen_ids:
            continue
        seen_ids.add(lineage)

        data.append(_normalize_item(item, receipt.bundle_id, exp))

    return data


def _legacy_purchase(receipt: LegacyReceipt) -> PurchaseDataResponse:
    record = receipt.record
    return {
        "bundleId": record.get(keys.BUNDLE_ID) or record.get(keys.BID),
        "appItemId": record.get(keys.ITEM_ID),
        "originalTransactionId": record.get(keys.ORIGINAL_TRANSACTION_ID),
        "transactionId": record.get(keys.TRANSACTION_ID),
        "productId": record.get(keys.PRODUCT_ID),
        "originalPurchaseDate": record.get(keys.ORIGINAL_PURCHASE_DATE_MS),
        "purchaseDate": record.get(keys.PURCHASE_DATE_MS),
        "quantity": parse_int(record.get(keys.QUANTITY)),
        "expirationDate": get_subscription_expire_date(record),
        "isTrial": _to_bool(record.get(keys.IS_TRIAL_PERIOD)),
        "cancellationDate": record.get(keys.CANCELLATION_DATE) or 0,
    }


def get_purchase_data(purchase, options=None) -> List[PurchaseDataResponse]:
    """
    Normalize the purchases of a verified receipt.

    Args:
        purchase: Result of validate_purchase (or any verifyReceipt body)
        options: GetPurchaseDataOptions, a mapping with ignoreCanceled /
            ignoreExpired, or None for no filtering. Ignored for legacy receipts.

    Returns:
        Purchase records, most recent purchase first. Empty when the
        payload has no receipt.
    """
    receipt = parse_receipt(purchase)
    if receipt is None:
        return []

    if isinstance(receipt, ModernReceipt):
        data = _modern_purchases(receipt, GetPurchaseDataOptions.from_value(options))
        logger.debug(f"Normalized {len(data)} of {len(receipt.items)} receipt items")
        return data

    return [_legacy_purchase(receipt)]
