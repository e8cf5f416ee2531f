from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.schemas import CreatePaymentIntentRequestSchema, CreatePaymentIntentResponseSchema
from app.application.exceptions import PaymentIntentError
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.wiring.dependencies import get_payment_gateway

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.post("/create-payment-intent", response_model=CreatePaymentIntentResponseSchema)
def create_payment_intent(
    req: CreatePaymentIntentRequestSchema,
    gateway: PaymentGatewayPort = Depends(get_payment_gateway),
):
    if req.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be a positive number of minor units.")
    try:
        intent = gateway.create_intent(req.amount)
    except PaymentIntentError as e:
        logger.error("Failed to create payment intent", extra={"reason": str(e)})
        raise HTTPException(status_code=502, detail="Failed to create payment intent")
    return CreatePaymentIntentResponseSchema(clientSecret=intent.client_secret)
