"""
Сервис записи: создание записей, клиенты, смена статуса
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..errors import NotFoundError, ValidationError
from ..schemas import (
    APPOINTMENT_STATUSES,
    Appointment,
    AppointmentCreate,
    AppointmentWithDetails,
    BookingRequest,
    Client,
    ClientCreate,
)
from ..storage import Storage

logger = logging.getLogger(__name__)

TIME_FORMATS = ("%H:%M", "%I:%M %p")


def check_status_change(status: str, down_payment_paid: bool):
    """
    Проверить новый статус записи

    Таблицы переходов нет: любой статус можно заменить любым.
    Единственный запрет: оплаченная запись не может вернуться в pending.
    """
    if status not in APPOINTMENT_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}', expected one of: {', '.join(APPOINTMENT_STATUSES)}"
        )
    if status == "pending" and down_payment_paid:
        raise ValidationError("Appointment with a paid down payment cannot be set back to pending")


def compose_appointment_datetime(date_str: str, time_str: str) -> datetime:
    """
    Собрать дату и время записи в один datetime

    Время принимается как "14:30" или как "2:30 PM".
    """
    try:
        apt_date = datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid appointment date, use YYYY-MM-DD")

    for fmt in TIME_FORMATS:
        try:
            apt_time = datetime.strptime(time_str.strip().upper(), fmt).time()
        except ValueError:
            continue
        return datetime.combine(apt_date, apt_time)

    raise ValidationError("Invalid appointment time, use HH:MM or H:MM AM/PM")


class BookingService:
    """Операции над записями поверх хранилища"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def get_or_create_client(self, data: BookingRequest) -> Client:
        """Найти клиента по email или создать нового"""
        client = self.storage.get_client_by_email(data.email)
        if client:
            return client

        client = self.storage.create_client(ClientCreate(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone=data.phone
        ))
        logger.info(f"Новый клиент #{client.id}: {client.email}")
        return client

    def create_appointment(self, data: BookingRequest) -> Appointment:
        """Создать запись по заявке из мастера записи"""
        service = self.storage.get_service_by_id(data.service_id)
        if not service:
            raise NotFoundError("Service not found")

        staff = self.storage.get_staff_by_id(data.staff_id)
        if not staff:
            raise NotFoundError("Staff member not found")

        appointment_date = compose_appointment_datetime(data.appointment_date, data.appointment_time)

        client = self.get_or_create_client(data)

        if service.requires_down_payment:
            down_payment = service.down_payment_amount or Decimal("0")
            down_payment_amount = service.down_payment_amount
        else:
            down_payment = Decimal("0")
            down_payment_amount = None

        appointment = self.storage.create_appointment(AppointmentCreate(
            client_id=client.id,
            service_id=service.id,
            staff_id=staff.id,
            appointment_date=appointment_date,
            status="pending" if service.requires_down_payment else "confirmed",
            total_amount=service.price,
            down_payment_amount=down_payment_amount,
            down_payment_paid=not service.requires_down_payment,
            remaining_amount=service.price - down_payment,
            notes=data.notes
        ))

        logger.info(
            f"Запись #{appointment.id}: {service.name} у {staff.name} "
            f"на {appointment_date:%Y-%m-%d %H:%M} ({appointment.status})"
        )
        return appointment

    def list_appointments(self, status: Optional[str] = None) -> List[AppointmentWithDetails]:
        if status is not None and status not in APPOINTMENT_STATUSES:
            raise ValidationError(f"Unknown status: {status}")
        return self.storage.get_all_appointments(status)

    def get_appointment(self, appointment_id: int) -> AppointmentWithDetails:
        appointment = self.storage.get_appointment_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def update_status(self, appointment_id: int, status: str) -> Appointment:
        """Ручная смена статуса"""
        current = self.get_appointment(appointment_id)
        check_status_change(status, current.down_payment_paid)

        appointment = self.storage.update_appointment_status(appointment_id, status)
        if not appointment:
            raise NotFoundError("Appointment not found")

        logger.info(f"Запись #{appointment_id}: статус {current.status} -> {status}")
        return appointment
