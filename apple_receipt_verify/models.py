"""
Pydantic models and dataclasses for the Apple Receipt Verify API.
"""

from typing import Any, Dict, List, Mapping, Optional, TypedDict, Union
from dataclasses import dataclass, field
from pydantic import BaseModel


# ============ Normalized Output ============

class PurchaseDataResponse(TypedDict, total=False):
    """A normalized purchase record.

    Modern receipts also carry every other field of the source item,
    camelCased, with numeric strings read as numbers.
    """
    quantity: int
    productId: str
    transactionId: str
    originalTransactionId: str
    purchaseDate: Any
    isTrial: bool
    bundleId: str
    expirationDate: Union[int, str]
    purchaseDateMs: float
    purchaseDatePst: str
    originalPurchaseDate: Any
    originalPurchaseDateMs: float
    originalPurchaseDatePst: str
    isTrialPeriod: Any
    inAppOwnershipType: str
    appItemId: Any
    cancellationDate: Any


@dataclass
class GetPurchaseDataOptions:
    """Filter policy for get_purchase_data."""
    ignore_canceled: bool = False
    ignore_expired: bool = False

    @classmethod
    def from_value(cls, options) -> "GetPurchaseDataOptions":
        """Accept an options object, a camelCase/snake_case mapping, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(
                ignore_canceled=bool(options.get("ignoreCanceled", options.get("ignore_canceled", False))),
                ignore_expired=bool(options.get("ignoreExpired", options.get("ignore_expired", False))),
            )
        raise TypeError(f"Unsupported options type: {type(options).__name__}")


# ============ Receipt Formats ============

@dataclass
class ModernReceipt:
    """iOS 6+ receipt: purchases listed in in_app (plus latest_receipt_info)."""
    items: List[Dict[str, Any]]
    bundle_id: Optional[str] = None


@dataclass
class LegacyReceipt:
    """Pre-iOS 6 receipt: a single transaction record."""
    record: Dict[str, Any] = field(default_factory=dict)


# ============ API Request/Response Models ============

class VerifyReceiptRequest(BaseModel):
    receipt: str
    secret: Optional[str] = None  # Overrides the configured shared secret for this call
    ignoreCanceled: bool = False
    ignoreExpired: bool = False


class VerifyReceiptResponse(BaseModel):
    status: int
    sandbox: bool
    message: Optional[str] = None
    purchases: List[Dict[str, Any]] = []
