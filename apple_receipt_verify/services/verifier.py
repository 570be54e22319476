"""
App Store receipt verification service.

Posts a base64 receipt to Apple's verifyReceipt endpoint and reports the
outcome as data:
1. Non-200 HTTP responses -> {sandbox, status: <http status>, message}
2. status 0 -> the decoded receipt body, plus ``sandbox``
3. status 21006 with a latest_receipt_info expiry still in the future
   -> treated as valid (status forced to 0)
4. Any other status -> {sandbox, status, message}

Sandbox receipts (21007) are not retried against the sandbox host;
callers that want that build a ReceiptVerifier for SANDBOX_VERIFY_URL.
Connection failures (httpx.RequestError) propagate to the caller.

Reference: https://developer.apple.com/documentation/appstorereceipts/verifyreceipt
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from ..config import (
    APPLE_SHARED_SECRET,
    APPLE_VERIFY_TIMEOUT,
    APPLE_VERIFY_URL,
    PRODUCTION_VERIFY_URL,
    SANDBOX_VERIFY_URL,
)
from ..utils import now_ms, to_epoch_ms
from . import receipt_keys as keys
from .error_codes import (
    STATUS_MISSING,
    STATUS_OK,
    STATUS_SUBSCRIPTION_EXPIRED,
    get_error_message,
    status_code,
)
from .normalizer import get_subscription_expire_date

logger = logging.getLogger(__name__)

# Process-wide default shared secret, see init()
_shared_secret: Optional[str] = APPLE_SHARED_SECRET


def _latest_expiry_ms(body: Mapping[str, Any]) -> Optional[int]:
    """Expiration (epoch ms) of latest_receipt_info, or None if it has none."""
    latest = body.get(keys.LATEST_RECEIPT_INFO)
    if isinstance(latest, Mapping):
        return to_epoch_ms(latest.get(keys.EXPIRES_DATE))
    if isinstance(latest, list):
        expiries = [to_epoch_ms(get_subscription_expire_date(item)) for item in latest if isinstance(item, Mapping)]
        expiries = [exp for exp in expiries if exp]
        return max(expiries) if expiries else None
    return None


def is_subscription_current(body: Mapping[str, Any]) -> bool:
    """True when latest_receipt_info expires strictly after now.

    Apple returns 21006 both for expired and for canceled-but-still-running
    subscriptions; only the latter has an expiry in the future.
    """
    expiry = _latest_expiry_ms(body)
    return expiry is not None and expiry > now_ms()


class ReceiptVerifier:
    """Client for the verifyReceipt endpoint.

    Args:
        password: Shared secret sent when no per-call secret is given
        verify_url: PRODUCTION_VERIFY_URL or SANDBOX_VERIFY_URL
        timeout: Request timeout in seconds
        client: Optional shared httpx.AsyncClient; a client is opened per call otherwise
    """

    def __init__(
        self,
        password: Optional[str] = None,
        verify_url: str = PRODUCTION_VERIFY_URL,
        timeout: float = APPLE_VERIFY_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.password = password
        self.verify_url = verify_url
        self.timeout = timeout
        self._client = client

    @property
    def sandbox(self) -> bool:
        return self.verify_url == SANDBOX_VERIFY_URL

    def build_request_body(self, receipt: str, secret: Optional[str] = None) -> Dict[str, str]:
        """The explicit secret wins over the configured password; neither means no password."""
        body = {"receipt-data": receipt}
        password = secret or self.password
        if password:
            body["password"] = password
        return body

    async def _post(self, body: Dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.verify_url, json=body, timeout=self.timeout)
        async with httpx.AsyncClient() as client:
            return await client.post(self.verify_url, json=body, timeout=self.timeout)

    def _error(self, status: int, message: str) -> Dict[str, Any]:
        return {"sandbox": self.sandbox, "status": status, "message": message}

    async def validate_purchase(self, receipt: str, secret: Optional[str] = None) -> Dict[str, Any]:
        """
        Verify a receipt with the App Store.

        Args:
            receipt: Base64 receipt data from the device
            secret: Shared secret for this call only

        Returns:
            The decoded receipt body with ``sandbox`` added when valid,
            otherwise {sandbox, status, message}. Check ``status == 0``.

        Raises:
            httpx.RequestError: If Apple could not be reached
        """
        response = await self._post(self.build_request_body(receipt, secret))

        if response.status_code != 200:
            try:
                error_body = response.json()
            except ValueError:
                error_body = {}
            # Only the message comes from the body; any shape of body is tolerated
            apple_status = status_code(error_body.get("status")) if isinstance(error_body, dict) else STATUS_MISSING
            logger.warning(f"verifyReceipt HTTP error: {response.status_code}")
            return self._error(response.status_code, get_error_message(apple_status))

        body = response.json()
        status = body.get("status", STATUS_MISSING)

        if status == STATUS_OK:
            result = dict(body)
            result["sandbox"] = self.sandbox
            logger.info("Receipt verified")
            return result

        if status == STATUS_SUBSCRIPTION_EXPIRED and is_subscription_current(body):
            result = dict(body)
            result["sandbox"] = self.sandbox
            result["status"] = STATUS_OK
            logger.info("Receipt verified (21006 with unexpired subscription)")
            return result

        logger.warning(f"Receipt rejected by App Store: status={status}")
        return self._error(status, get_error_message(status))


def init(password: Optional[str]) -> None:
    """Set the process-wide shared secret used by validate_purchase()."""
    global _shared_secret
    _shared_secret = password
    logger.info("Apple shared secret configured" if password else "Apple shared secret cleared")


def get_default_verifier() -> ReceiptVerifier:
    return ReceiptVerifier(password=_shared_secret, verify_url=APPLE_VERIFY_URL)


async def validate_purchase(receipt: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Verify a receipt using the process-wide configuration. See ReceiptVerifier.validate_purchase."""
    return await get_default_verifier().validate_purchase(receipt, secret)
