"""Razorpay Orders API gateway.

The razorpay SDK is synchronous (requests); calls run in a worker thread so
they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import razorpay
import requests

from app.domain.exceptions import PaymentGatewayException

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """IPaymentGateway backed by razorpay.Client."""

    def __init__(self, key_id: str, key_secret: str, client: Any = None) -> None:
        self.key_id = key_id
        self._client = client or razorpay.Client(auth=(key_id, key_secret))

    async def create_order(
        self, amount: int, currency: str, receipt: str
    ) -> dict[str, Any]:
        """Create an order; amount is in minor units (paise)."""
        order_data = {"amount": amount, "currency": currency, "receipt": receipt}
        try:
            return await asyncio.to_thread(self._client.order.create, data=order_data)
        except (
            razorpay.errors.BadRequestError,
            razorpay.errors.GatewayError,
            razorpay.errors.ServerError,
            requests.RequestException,
        ) as e:
            logger.error("Razorpay order creation failed (receipt=%s): %s", receipt, e)
            raise PaymentGatewayException(str(e)) from e
