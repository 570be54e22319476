"""
Receipt verification router.

Verifies an App Store receipt and returns its normalized purchases,
so clients and internal services get one consistent shape back.
"""

import logging

import httpx
from fastapi import APIRouter, HTTPException

from ..models import VerifyReceiptRequest, VerifyReceiptResponse, GetPurchaseDataOptions
from ..services.error_codes import STATUS_OK
from ..services.normalizer import get_purchase_data
from ..services.verifier import validate_purchase

logger = logging.getLogger(__name__)

router = APIRouter(tags=["receipts"])


@router.post("/receipts/verify", response_model=VerifyReceiptResponse)
async def verify_receipt(body: VerifyReceiptRequest):
    """Verify a receipt with Apple and normalize its purchases.

    Apple's verdict is reported in ``status`` (0 means valid); the
    purchases list is empty unless the receipt is valid.
    """
    try:
        result = await validate_purchase(body.receipt, body.secret)
    except httpx.RequestError as e:
        logger.error(f"verifyReceipt network error: {e}")
        raise HTTPException(status_code=502, detail="App Store verification unavailable")

    status = result.get("status", STATUS_OK)
    purchases = []
    if status == STATUS_OK:
        options = GetPurchaseDataOptions(
            ignore_canceled=body.ignoreCanceled,
            ignore_expired=body.ignoreExpired,
        )
        purchases = get_purchase_data(result, options)

    return VerifyReceiptResponse(
        status=status,
        sandbox=result.get("sandbox", False),
        message=result.get("message"),
        purchases=purchases,
    )
