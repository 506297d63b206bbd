# app/shared/services/payment_intent_client.py
import httpx
import logging
from typing import Dict, Any, Optional

from app.config.settings import settings
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)


class PaymentIntentClient:
    """Client for the payment provider's payment-intent API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        secret_key: Optional[str] = None,
        currency: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.payment_api_base).rstrip("/")
        self.secret_key = secret_key if secret_key is not None else settings.payment_secret_key
        self.currency = currency or settings.payment_currency
        self.timeout = timeout or settings.payment_timeout_seconds
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.secret_key}"}

    async def create_payment_intent(self, amount_in_cents: int) -> Dict[str, Any]:
        """
        Create a card payment intent for the given amount in minor units.

        Returns the provider payload; the caller hands `client_secret` to the
        client, which completes the charge and then records the payment.
        """
        if not self.secret_key:
            raise InternalError("Payment provider is not configured")

        data = {
            "amount": amount_in_cents,
            "currency": self.currency,
            "payment_method_types[]": "card",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/v1/payment_intents",
                    data=data,
                    headers=self._get_headers()
                )
        except httpx.TimeoutException:
            logger.error(f"Timeout creating payment intent for {amount_in_cents} {self.currency}")
            raise InternalError("Payment provider timed out")
        except httpx.HTTPError as e:
            logger.error(f"Error contacting payment provider: {e}")
            raise InternalError("Payment provider unavailable")

        if response.status_code != 200:
            logger.error(f"Payment provider error: {response.status_code} - {response.text}")
            raise InternalError("Payment provider rejected the request")

        result = response.json()
        logger.info(f"Payment intent {result.get('id')} created for {amount_in_cents} {self.currency}")
        return result


def get_payment_intent_client() -> PaymentIntentClient:
    return PaymentIntentClient()
