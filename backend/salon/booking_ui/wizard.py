"""
Мастер записи: услуга -> мастер, дата и время -> контактные данные
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import IntEnum
from typing import Callable, List, Optional

import pydantic

from ..catalog import TIME_SLOTS
from ..errors import NotFoundError, ValidationError
from ..schemas import (
    Appointment,
    BookingRequest,
    ContactForm,
    Service,
    Staff,
    describe_validation_errors,
)

logger = logging.getLogger(__name__)


class WizardStep(IntEnum):
    SERVICE = 1
    SCHEDULE = 2
    DETAILS = 3


@dataclass
class BookingSummary:
    """Итог по стоимости для выбранной услуги"""
    service: Service
    total: Decimal
    down_payment: Decimal
    remaining: Decimal


@dataclass
class BookingOutcome:
    appointment: Appointment
    payment_required: bool


class BookingWizard:
    """
    Пошаговая запись клиента

    Вперёд можно перейти только при заполненном текущем шаге, назад - всегда,
    выбор при этом сохраняется. create_appointment - любой вызываемый объект,
    принимающий BookingRequest (SalonApiClient.create_appointment или
    BookingService.create_appointment).
    """

    def __init__(
        self,
        services: List[Service],
        staff: List[Staff],
        create_appointment: Callable[[BookingRequest], Appointment],
        today: Optional[Callable[[], date]] = None
    ):
        self.services = {s.id: s for s in services}
        self.staff = {s.id: s for s in staff}
        self.create_appointment = create_appointment
        self.today = today or date.today
        self.time_slots = list(TIME_SLOTS)
        self.reset()

    def reset(self):
        self.step = WizardStep.SERVICE
        self.selected_service: Optional[Service] = None
        self.selected_staff: Optional[Staff] = None
        self.selected_date = ""
        self.selected_time = ""

    # ==================== Выбор ====================

    def services_by_category(self, category: str) -> List[Service]:
        return [s for s in self.services.values() if s.category == category]

    def select_service(self, service_id: int) -> Service:
        service = self.services.get(service_id)
        if not service:
            raise NotFoundError("Service not found")
        self.selected_service = service
        return service

    def select_staff(self, staff_id: int) -> Staff:
        member = self.staff.get(staff_id)
        if not member:
            raise NotFoundError("Staff member not found")
        self.selected_staff = member
        return member

    def select_date(self, date_str: str):
        try:
            selected = datetime.strptime(date_str, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError("Please select a valid date")
        if selected < self.today():
            raise ValidationError("Appointments cannot be booked in the past")
        self.selected_date = date_str

    def select_time(self, time_str: str):
        """Одно из предложенных окон или время в формате HH:MM"""
        if time_str not in self.time_slots:
            try:
                datetime.strptime(time_str, "%H:%M")
            except (TypeError, ValueError):
                raise ValidationError("Please select a time")
        self.selected_time = time_str

    # ==================== Навигация ====================

    def next_step(self) -> WizardStep:
        if self.step == WizardStep.SERVICE and self.selected_service is None:
            raise ValidationError("Please select a service to continue")
        if self.step == WizardStep.SCHEDULE and (
            self.selected_staff is None or not self.selected_date or not self.selected_time
        ):
            raise ValidationError("Please select a staff member, date, and time")
        if self.step == WizardStep.DETAILS:
            raise ValidationError("Submit your details to complete the booking")

        self.step = WizardStep(self.step + 1)
        return self.step

    def previous_step(self) -> WizardStep:
        if self.step > WizardStep.SERVICE:
            self.step = WizardStep(self.step - 1)
        return self.step

    def summary(self) -> Optional[BookingSummary]:
        service = self.selected_service
        if service is None:
            return None

        down_payment = Decimal("0")
        if service.requires_down_payment and service.down_payment_amount:
            down_payment = service.down_payment_amount
        return BookingSummary(
            service=service,
            total=service.price,
            down_payment=down_payment,
            remaining=service.price - down_payment
        )

    # ==================== Отправка ====================

    def submit(self, first_name: str, last_name: str, email: str, phone: str, notes: Optional[str] = None) -> BookingOutcome:
        """Проверить контакты, создать запись и вернуть результат"""
        if self.step != WizardStep.DETAILS:
            raise ValidationError("Complete the previous steps first")

        try:
            contact = ContactForm(first_name=first_name, last_name=last_name, email=email, phone=phone)
        except pydantic.ValidationError as e:
            raise ValidationError(describe_validation_errors(e.errors()))

        service = self.selected_service
        booking = BookingRequest(
            service_id=service.id,
            staff_id=self.selected_staff.id,
            appointment_date=self.selected_date,
            appointment_time=self.selected_time,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
            notes=notes
        )

        appointment = self.create_appointment(booking)
        logger.info(f"Мастер записи: создана запись #{appointment.id}")

        if service.requires_down_payment:
            # Дальше работает PaymentFlow, выбор остаётся для сводки
            return BookingOutcome(appointment=appointment, payment_required=True)

        self.reset()
        return BookingOutcome(appointment=appointment, payment_required=False)
