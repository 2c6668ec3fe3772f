"""
API роутер предоплаты
"""
from typing import Optional

from fastapi import APIRouter, Depends

from ..errors import ProviderError
from ..schemas import (
    ConfirmPaymentRequest,
    PaymentIntentRequest,
    PaymentIntentResponse,
    SuccessResponse,
)
from ..services.notifications import notify_payment_error, notify_payment_received
from ..services.payments import PaymentService, StripeGateway, get_payment_gateway
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api", tags=["payments"])


def get_payment_service(
    storage: Storage = Depends(get_storage),
    gateway: Optional[StripeGateway] = Depends(get_payment_gateway)
) -> PaymentService:
    return PaymentService(storage, gateway)


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    data: PaymentIntentRequest,
    payments: PaymentService = Depends(get_payment_service)
):
    """Создать платёж на сумму предоплаты"""
    try:
        client_secret = payments.create_payment_intent(data.appointment_id)
    except ProviderError as e:
        await notify_payment_error(f"Запись #{data.appointment_id}: {e.message}", e)
        raise
    return PaymentIntentResponse(client_secret=client_secret)


@router.post("/confirm-payment", response_model=SuccessResponse)
async def confirm_payment(
    data: ConfirmPaymentRequest,
    payments: PaymentService = Depends(get_payment_service)
):
    """Подтвердить предоплату и перевести запись в confirmed"""
    try:
        recorded = payments.confirm_payment(data.appointment_id, data.payment_intent_id)
    except ProviderError as e:
        await notify_payment_error(f"Запись #{data.appointment_id}: {e.message}", e)
        raise

    if recorded:
        await notify_payment_received(payments.storage.get_appointment_by_id(data.appointment_id))
    return SuccessResponse()
