"""
Pydantic-схемы: доменные записи и тела запросов/ответов API

Наружу поля отдаются в camelCase (serviceId, downPaymentAmount),
на вход принимаются и camelCase, и snake_case.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel, to_snake

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]
ServiceCategory = Literal["hair", "nails"]

APPOINTMENT_STATUSES = ("pending", "confirmed", "completed", "cancelled")


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ==================== Catalog ====================

class ServiceCreate(CamelModel):
    name: str
    description: str
    price: Decimal
    duration: int  # минуты
    category: ServiceCategory
    requires_down_payment: bool = False
    down_payment_amount: Optional[Decimal] = None
    image_url: Optional[str] = None


class Service(ServiceCreate):
    id: int


class StaffCreate(CamelModel):
    name: str
    title: str
    experience: str
    image_url: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)


class Staff(StaffCreate):
    id: int


# ==================== Clients ====================

class ClientCreate(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str


class Client(ClientCreate):
    id: int


# ==================== Appointments ====================

class AppointmentCreate(CamelModel):
    client_id: int
    service_id: int
    staff_id: int
    appointment_date: datetime
    status: AppointmentStatus = "pending"
    total_amount: Decimal
    down_payment_amount: Optional[Decimal] = None
    down_payment_paid: bool = False
    remaining_amount: Decimal
    payment_reference: Optional[str] = None
    notes: Optional[str] = None


class Appointment(AppointmentCreate):
    id: int
    created_at: datetime


class AppointmentWithDetails(Appointment):
    client: Client
    service: Service
    staff: Staff


# ==================== Requests / Responses ====================

class ContactForm(CamelModel):
    """Контактные данные клиента (шаг 3 мастера записи)"""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=10)


class BookingRequest(ContactForm):
    service_id: int
    staff_id: int
    appointment_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")  # YYYY-MM-DD
    appointment_time: str = Field(..., min_length=1)  # "HH:MM" или "9:00 AM"
    notes: Optional[str] = None


class PaymentIntentRequest(CamelModel):
    appointment_id: int


class PaymentIntentResponse(CamelModel):
    client_secret: str


class ConfirmPaymentRequest(CamelModel):
    appointment_id: int
    payment_intent_id: str = Field(..., min_length=1)


class StatusUpdate(CamelModel):
    status: str


class SuccessResponse(BaseModel):
    success: bool = True


# Человекочитаемые сообщения для ошибок формы записи
FIELD_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Valid email is required",
    "phone": "Valid phone number is required",
    "service_id": "Please select a service",
    "staff_id": "Please select a staff member",
    "appointment_date": "Please select a valid date",
    "appointment_time": "Please select a time",
}


def describe_validation_errors(errors) -> str:
    """Собрать одно сообщение из списка ошибок pydantic"""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = to_snake(loc[-1]) if loc else ""
        message = FIELD_MESSAGES.get(field)
        if message is None:
            message = f"{loc[-1]}: {error.get('msg')}" if loc else error.get("msg", "Invalid request")
        if message not in messages:
            messages.append(message)
    return "; ".join(messages) or "Invalid request"
