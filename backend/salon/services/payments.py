"""
Предоплата через Stripe: платёжные намерения и подтверждение оплаты
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from typing import Dict, Optional

import stripe
from pydantic import BaseModel, Field

from ..config import get_settings
from ..errors import NotFoundError, PaymentError, ProviderError, ValidationError
from ..schemas import AppointmentWithDetails
from ..storage import Storage

logger = logging.getLogger(__name__)


class PaymentIntentInfo(BaseModel):
    """То, что нам нужно знать о платёжном намерении"""
    id: str
    client_secret: Optional[str] = None
    status: str
    amount: int  # в минимальных единицах валюты (центах)
    metadata: Dict[str, str] = Field(default_factory=dict)


def to_minor_units(amount: Decimal) -> int:
    """Перевести сумму в центы (округление половины вверх)"""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def intent_id_from_secret(client_secret: str) -> str:
    """pi_123_secret_abc -> pi_123"""
    return client_secret.split("_secret_", 1)[0]


class StripeGateway:
    """
    Тонкая обёртка над stripe.PaymentIntent

    Все исключения Stripe переводятся в ошибки приложения:
    отказ карты -> PaymentError, остальное -> ProviderError.
    """

    def __init__(self, api_key: str, currency: str = "usd"):
        stripe.api_key = api_key
        self.currency = currency

    @staticmethod
    def _to_info(intent) -> PaymentIntentInfo:
        metadata = getattr(intent, "metadata", None) or {}
        return PaymentIntentInfo(
            id=intent.id,
            client_secret=getattr(intent, "client_secret", None),
            status=intent.status,
            amount=intent.amount,
            metadata={str(k): str(v) for k, v in metadata.items()}
        )

    def create_intent(self, amount_cents: int, appointment_id: int) -> PaymentIntentInfo:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_cents,
                currency=self.currency,
                metadata={"appointment_id": str(appointment_id)},
                # Подтверждение без редиректов
                automatic_payment_methods={"enabled": True, "allow_redirects": "never"},
            )
        except stripe.StripeError as e:
            logger.exception("Stripe API error while creating payment intent")
            raise ProviderError(f"Error creating payment intent: {e.user_message or e}")
        return self._to_info(intent)

    def retrieve_intent(self, payment_intent_id: str) -> PaymentIntentInfo:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id)
        except stripe.StripeError as e:
            logger.exception("Stripe API error while retrieving payment intent")
            raise ProviderError(f"Failed to retrieve payment intent: {e.user_message or e}")
        return self._to_info(intent)

    def confirm_intent(self, payment_intent_id: str, payment_method: str) -> PaymentIntentInfo:
        try:
            intent = stripe.PaymentIntent.confirm(payment_intent_id, payment_method=payment_method)
        except stripe.CardError as e:
            logger.info(f"Карта отклонена для {payment_intent_id}: {e.code}")
            raise PaymentError(e.user_message or "Your card was declined.")
        except stripe.StripeError as e:
            logger.exception("Stripe API error while confirming payment intent")
            raise ProviderError(f"Error confirming payment: {e.user_message or e}")
        return self._to_info(intent)


@lru_cache()
def get_payment_gateway() -> Optional[StripeGateway]:
    """Dependency: шлюз Stripe или None, если ключ не задан"""
    settings = get_settings()
    if not settings.STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY не задан, онлайн-оплата недоступна")
        return None
    return StripeGateway(settings.STRIPE_SECRET_KEY, settings.STRIPE_CURRENCY)


class PaymentService:
    """Серверная часть сверки предоплаты с записью"""

    def __init__(self, storage: Storage, gateway: Optional[StripeGateway]):
        self.storage = storage
        self.gateway = gateway

    def _require_gateway(self):
        if self.gateway is None:
            raise ProviderError("Payments are not currently available. Please contact the salon.")
        return self.gateway

    def _appointment_with_down_payment(self, appointment_id: int) -> AppointmentWithDetails:
        appointment = self.storage.get_appointment_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")

        if not appointment.down_payment_amount or appointment.down_payment_amount <= 0:
            raise ValidationError("No down payment required for this service")
        return appointment

    def create_payment_intent(self, appointment_id: int) -> str:
        """Создать платёжное намерение на сумму предоплаты, вернуть client secret"""
        appointment = self._appointment_with_down_payment(appointment_id)
        if appointment.down_payment_paid:
            raise ValidationError("Down payment has already been paid")

        gateway = self._require_gateway()
        amount_cents = to_minor_units(appointment.down_payment_amount)
        intent = gateway.create_intent(amount_cents, appointment.id)

        logger.info(f"Запись #{appointment.id}: создан платёж {intent.id} на {amount_cents} центов")
        return intent.client_secret

    def confirm_payment(self, appointment_id: int, payment_intent_id: str) -> bool:
        """
        Отметить предоплату как внесённую

        Платёж перепроверяется в Stripe: он должен принадлежать этой записи
        и быть в статусе succeeded. Повторный вызов ничего не меняет.

        Returns:
            bool: True если платёж учтён этим вызовом, False если уже был учтён
        """
        appointment = self._appointment_with_down_payment(appointment_id)

        if appointment.down_payment_paid and appointment.payment_reference == payment_intent_id:
            logger.info(f"Запись #{appointment.id}: платёж {payment_intent_id} уже учтён")
            return False

        gateway = self._require_gateway()
        intent = gateway.retrieve_intent(payment_intent_id)

        if intent.metadata.get("appointment_id") != str(appointment.id):
            raise ValidationError("Payment does not belong to this appointment")

        if intent.status != "succeeded":
            raise PaymentError(f"Payment has not been completed (status: {intent.status})")

        updated = self.storage.update_appointment_payment(appointment.id, intent.id, True)
        if not updated:
            raise NotFoundError("Appointment not found")

        logger.info(f"Запись #{appointment.id}: предоплата получена ({intent.id})")
        return True
