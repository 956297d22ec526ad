"""
Razorpay payment-link service.

Creates hosted checkout links for bookings and reads their status back.
Amounts are passed in rupees and sent to Razorpay in paise.

Configuration (in .env):
    RAZORPAY_KEY_ID          API key id
    RAZORPAY_KEY_SECRET      API key secret
    RAZORPAY_WEBHOOK_SECRET  secret used to sign webhook bodies (optional)
"""

import hashlib
import hmac
import logging
from typing import Any, Optional

import httpx

from travloger.config import get_settings

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """Raised when Razorpay rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def to_paise(amount: float) -> int:
    return int(round(float(amount) * 100))


class RazorpayService:
    """Razorpay REST client for payment links."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.key_id = settings.razorpay_key_id
        self.key_secret = settings.razorpay_key_secret
        self.webhook_secret = settings.razorpay_webhook_secret
        self.base_url = settings.razorpay_api_url.rstrip("/")
        self.currency = settings.payment_currency
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if Razorpay credentials are set."""
        return bool(self.key_id and self.key_secret)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.key_id, self.key_secret),
            timeout=15.0,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        if not self.is_configured:
            raise PaymentProviderError("Razorpay credentials not configured")

        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Razorpay %s %s failed: %s", method, path, exc)
            raise PaymentProviderError(f"Payment provider unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            description = (data.get("error") or {}).get("description") or response.text
            logger.error(
                "Razorpay %s %s returned %s: %s",
                method,
                path,
                response.status_code,
                description,
            )
            raise PaymentProviderError(description, status_code=response.status_code)

        return data

    # ------------------------------------------------------------------
    # Payment links
    # ------------------------------------------------------------------

    async def create_payment_link(
        self,
        amount: float,
        customer_email: str,
        customer_name: Optional[str] = None,
        customer_phone: Optional[str] = None,
        description: Optional[str] = None,
        reference_id: Optional[Any] = None,
        callback_url: Optional[str] = None,
    ) -> dict:
        """
        Create a payment link.

        Args:
            amount: Amount in rupees.
            customer_email: Customer email (Razorpay notifies this address).
            reference_id: Our reference (lead or booking id), stored in notes.
            callback_url: Where Razorpay redirects the customer after payment.

        Returns:
            dict with id, short_url, status and the raw provider payload.
        """
        payload: dict[str, Any] = {
            "amount": to_paise(amount),
            "currency": self.currency,
            "description": description or "Travel Package Payment",
            "customer": {
                "name": customer_name or "",
                "email": customer_email,
                "contact": customer_phone or "",
            },
            "notify": {"sms": True, "email": True},
            "reminder_enable": True,
            "notes": {"booking_id": str(reference_id or "")},
        }
        if callback_url:
            payload["callback_url"] = callback_url
            payload["callback_method"] = "get"

        data = await self._request("POST", "/payment_links", json=payload)
        logger.info(
            "Payment link created. id=%s amount=%s email=%s",
            data.get("id"),
            payload["amount"],
            customer_email,
        )
        return {
            "id": data.get("id"),
            "short_url": data.get("short_url"),
            "status": data.get("status"),
            "order_id": data.get("order_id"),
            "raw": data,
        }

    async def fetch_payment_link(self, link_id: str) -> dict:
        """Fetch a payment link with its status and payments."""
        return await self._request("GET", f"/payment_links/{link_id}")

    async def list_payment_links(self, from_ts: int, to_ts: int) -> list[dict]:
        """List payment links created between two unix timestamps."""
        data = await self._request(
            "GET",
            "/payment_links",
            params={"from": from_ts, "to": to_ts},
        )
        return data.get("payment_links") or data.get("items") or []

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    def verify_webhook_signature(self, body: bytes, signature: str) -> bool:
        """
        Verify the X-Razorpay-Signature header (HMAC-SHA256 of the raw body).
        Accepts every payload when no webhook secret is configured.
        """
        if not self.webhook_secret:
            return True

        expected = hmac.new(
            self.webhook_secret.encode("utf-8"),
            body,
            hashlib.sha256,
        ).hexdigest()
        return hmac.compare_digest(expected, signature or "")


razorpay_service = RazorpayService()


def get_payment_service() -> RazorpayService:
    """FastAPI dependency returning the payment-link service."""
    return razorpay_service
