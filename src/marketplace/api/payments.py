"""FastAPI routes for payment intents."""

import structlog
from fastapi import APIRouter

from marketplace.api.schemas import PaymentIntentResponse, PaymentProcessRequest
from marketplace.errors import UpstreamFailure
from marketplace.payments import get_gateway

logger = structlog.get_logger(__name__)

payment_router = APIRouter(prefix="/payment", tags=["payments"])


@payment_router.post("/process", response_model=PaymentIntentResponse)
async def process_payment(body: PaymentProcessRequest) -> PaymentIntentResponse:
    intent = get_gateway().create_intent(amount=body.amount, currency=body.currency)
    if not intent.success:
        logger.error("Payment intent failed", amount=body.amount, reason=intent.failure_reason)
        raise UpstreamFailure(intent.failure_reason or "Payment gateway error")

    return PaymentIntentResponse(
        intent_id=intent.intent_id,
        client_secret=intent.client_secret,
        amount=intent.amount,
        currency=intent.currency,
    )
