"""
HTTP-клиент к API салона (используется мастером записи и страницей оплаты)
"""
import logging
from typing import List, Optional

import httpx

from ..errors import ProviderError, error_for_status
from ..schemas import (
    Appointment,
    AppointmentWithDetails,
    BookingRequest,
    Service,
    Staff,
)

logger = logging.getLogger(__name__)


class SalonApiClient:
    """
    Обёртка над httpx.Client

    Ответы с ошибкой превращаются обратно в ValidationError / NotFoundError /
    PaymentError / ProviderError по HTTP-коду, сетевые ошибки - в ProviderError.
    """

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None):
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.http.request(method, f"/api{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"API недоступен: {method} {path}: {e}")
            raise ProviderError("Salon service is unavailable, please try again later")

        if response.is_error:
            try:
                message = response.json().get("message") or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            raise error_for_status(response.status_code, message)
        return response.json()

    def list_services(self) -> List[Service]:
        return [Service.model_validate(s) for s in self._request("GET", "/services")]

    def list_staff(self) -> List[Staff]:
        return [Staff.model_validate(s) for s in self._request("GET", "/staff")]

    def list_appointments(self, status: Optional[str] = None) -> List[AppointmentWithDetails]:
        params = {"status": status} if status else None
        return [
            AppointmentWithDetails.model_validate(a)
            for a in self._request("GET", "/appointments", params=params)
        ]

    def get_appointment(self, appointment_id: int) -> AppointmentWithDetails:
        return AppointmentWithDetails.model_validate(self._request("GET", f"/appointments/{appointment_id}"))

    def create_appointment(self, booking: BookingRequest) -> Appointment:
        payload = booking.model_dump(by_alias=True, mode="json")
        return Appointment.model_validate(self._request("POST", "/appointments", json=payload))

    def update_appointment_status(self, appointment_id: int, status: str) -> None:
        self._request("PATCH", f"/appointments/{appointment_id}/status", json={"status": status})

    def create_payment_intent(self, appointment_id: int) -> str:
        data = self._request("POST", "/create-payment-intent", json={"appointmentId": appointment_id})
        return data["clientSecret"]

    def confirm_payment(self, appointment_id: int, payment_intent_id: str) -> None:
        self._request(
            "POST",
            "/confirm-payment",
            json={"appointmentId": appointment_id, "paymentIntentId": payment_intent_id}
        )

    def close(self):
        self.http.close()
