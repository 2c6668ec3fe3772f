"""
Страница оплаты: получение платежа, ввод карты, подтверждение записи
"""
import logging
from enum import Enum
from typing import Optional

from ..errors import PaymentError, SalonError, ValidationError
from ..services.payments import intent_id_from_secret

logger = logging.getLogger(__name__)


class PaymentState(str, Enum):
    AWAITING_INTENT = "awaiting_intent"
    AWAITING_PAYMENT = "awaiting_payment"
    CONFIRMING = "confirming"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class PaymentFlow:
    """
    Оплата предоплаты для одной записи

    api - SalonApiClient (create_payment_intent, confirm_payment),
    processor - шлюз с методом confirm_intent(payment_intent_id, payment_method).

    AWAITING_INTENT -> AWAITING_PAYMENT -> CONFIRMING -> CONFIRMED.
    Отказ карты переводит в FAILED, из которого можно повторить оплату.
    Ошибка при получении платежа фатальна. Запись меняется только после
    того, как платёжная система подтвердила оплату.
    """

    def __init__(self, api, processor, appointment_id: int):
        self.api = api
        self.processor = processor
        self.appointment_id = appointment_id
        self.state = PaymentState.AWAITING_INTENT
        self.client_secret: Optional[str] = None
        self.payment_intent_id: Optional[str] = None
        self.error: Optional[str] = None
        self.retryable = False
        self._charged = False

    def load(self) -> str:
        """Запросить платёж у API и перейти к вводу карты"""
        if self.state != PaymentState.AWAITING_INTENT:
            raise ValidationError("Payment has already been initialized")

        try:
            self.client_secret = self.api.create_payment_intent(self.appointment_id)
        except SalonError as e:
            self._fail(e, retryable=False)
            raise

        self.payment_intent_id = intent_id_from_secret(self.client_secret)
        self.state = PaymentState.AWAITING_PAYMENT
        return self.client_secret

    def submit_payment(self, payment_method: str) -> PaymentState:
        """Оплатить картой; при успехе подтвердить запись"""
        if self.state == PaymentState.FAILED and not self.retryable:
            raise ValidationError(self.error or "Payment cannot be completed")
        if self.state not in (PaymentState.AWAITING_PAYMENT, PaymentState.FAILED):
            raise ValidationError(f"Payment cannot be submitted in state '{self.state.value}'")

        self.state = PaymentState.AWAITING_PAYMENT
        self.error = None

        if not self._charged:
            try:
                intent = self.processor.confirm_intent(self.payment_intent_id, payment_method)
            except SalonError as e:
                self._fail(e, retryable=True)
                raise

            if intent.status != "succeeded":
                error = PaymentError("Payment requires additional authentication and could not be completed")
                self._fail(error, retryable=True)
                raise error
            self._charged = True

        self.state = PaymentState.CONFIRMING
        try:
            self.api.confirm_payment(self.appointment_id, self.payment_intent_id)
        except SalonError as e:
            # Деньги списаны, повтор только переподтверждает запись
            self._fail(e, retryable=True)
            raise

        self.state = PaymentState.CONFIRMED
        logger.info(f"Запись #{self.appointment_id}: предоплата подтверждена")
        return self.state

    def _fail(self, error: SalonError, retryable: bool):
        self.state = PaymentState.FAILED
        self.error = error.message
        self.retryable = retryable
        logger.warning(f"Запись #{self.appointment_id}: оплата не прошла: {error.message}")
