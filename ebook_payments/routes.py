import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ebook_payments.config import Settings
from ebook_payments.errors import InvalidRequest, PaymentIncomplete, PaymentNotCompleted, ResourceNotFound
from ebook_payments.log import payment_intent_ctx
from ebook_payments.models import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
)
from ebook_payments.responses import EbookFileResponse
from ebook_payments.stripe_service import PaymentProcessor

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_processor(request: Request) -> PaymentProcessor:
    return request.app.state.processor


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    payload: PaymentIntentRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    processor: PaymentProcessor = Depends(get_processor),
):
    metadata = {
        "product": settings.product,
        "success_url": str(request.url_for("download_ebook")),
    }
    intent = processor.create_intent(payload.amount, settings.currency, metadata)
    payment_intent_ctx.set(intent.id)
    logger.info("Created PaymentIntent for %s %s", payload.amount, settings.currency)

    return PaymentIntentResponse(clientSecret=intent.client_secret, paymentIntentId=intent.id)


@router.post("/confirm-payment", response_model=ConfirmPaymentResponse)
def confirm_payment(
    payload: ConfirmPaymentRequest,
    request: Request,
    processor: PaymentProcessor = Depends(get_processor),
):
    payment_intent_ctx.set(payload.payment_intent_id)

    intent = processor.retrieve_intent(payload.payment_intent_id)
    if not intent.succeeded:
        # expected while the customer is still paying
        logger.info("Payment not successful yet (status=%s)", intent.status)
        raise PaymentIncomplete()

    download_url = request.url_for("download_ebook").include_query_params(payment_intent=intent.id)
    return ConfirmPaymentResponse(success=True, downloadUrl=str(download_url))


@router.get("/download-ebook", name="download_ebook")
def download_ebook(
    payment_intent: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    processor: PaymentProcessor = Depends(get_processor),
):
    """Release the e-book only if Stripe reports the intent as succeeded.

    Status is fetched again on every call; nothing about a previous
    confirmation is remembered, so the intent id alone is never enough.
    """
    if payment_intent is None or not payment_intent.strip():
        raise InvalidRequest("Payment Intent ID is required")
    payment_intent = payment_intent.strip()
    payment_intent_ctx.set(payment_intent)

    intent = processor.retrieve_intent(payment_intent)
    if not intent.succeeded:
        logger.info("Download refused, payment status=%s", intent.status)
        raise PaymentNotCompleted()

    if not settings.ebook_path.is_file():
        logger.error("eBook missing at %s, check EBOOK_PATH", settings.ebook_path)
        raise ResourceNotFound()

    logger.info("Serving eBook download")
    return EbookFileResponse(
        path=settings.ebook_path,
        filename=settings.download_filename,
        media_type="application/pdf",
    )


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Ebook payment API is running"


@router.get("/health")
def health():
    return {"status": "ok"}
