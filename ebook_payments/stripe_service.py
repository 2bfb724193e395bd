import logging
from typing import Dict, Protocol

import stripe

from ebook_payments.errors import UpstreamError
from ebook_payments.models import Intent

logger = logging.getLogger(__name__)


class PaymentProcessor(Protocol):
    def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> Intent:
        ...

    def retrieve_intent(self, intent_id: str) -> Intent:
        ...


class StripeProcessor:
    """PaymentIntent calls against Stripe with an explicit API key.

    Failures are logged with Stripe's own message and re-raised as
    UpstreamError, whose detail is safe to show the caller.
    """

    def __init__(self, api_key: str):
        self.api_key = api_key

    def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> Intent:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error("Error creating PaymentIntent: %s", e, extra={"stripe_code": e.code})
            raise UpstreamError() from e

        return Intent(
            id=intent.id,
            status=intent.status,
            client_secret=intent.client_secret,
            amount=amount,
            currency=currency,
            metadata=dict(metadata),
        )

    def retrieve_intent(self, intent_id: str) -> Intent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.StripeError as e:
            logger.error("Error verifying payment %s: %s", intent_id, e, extra={"stripe_code": e.code})
            raise UpstreamError("Error verifying payment") from e

        return Intent(id=intent.id, status=intent.status)
