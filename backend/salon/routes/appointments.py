"""
API роутер для записей на прием
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas import (
    Appointment,
    AppointmentWithDetails,
    BookingRequest,
    StatusUpdate,
    SuccessResponse,
)
from ..services.booking import BookingService
from ..services.notifications import notify_cancelled_booking, notify_new_booking
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api", tags=["appointments"])


def get_booking_service(storage: Storage = Depends(get_storage)) -> BookingService:
    return BookingService(storage)


@router.get("/appointments", response_model=List[AppointmentWithDetails])
async def get_appointments(
    status: Optional[str] = Query(None, description="Фильтр по статусу"),
    booking: BookingService = Depends(get_booking_service)
):
    """Все записи вместе с клиентом, услугой и мастером"""
    return booking.list_appointments(status)


@router.get("/appointments/{appointment_id}", response_model=AppointmentWithDetails)
async def get_appointment(appointment_id: int, booking: BookingService = Depends(get_booking_service)):
    """Одна запись (для страницы оплаты)"""
    return booking.get_appointment(appointment_id)


@router.post("/appointments", response_model=Appointment)
async def create_appointment(data: BookingRequest, booking: BookingService = Depends(get_booking_service)):
    """Создать новую запись на прием"""
    appointment = booking.create_appointment(data)

    await notify_new_booking(booking.get_appointment(appointment.id))
    return appointment


@router.patch("/appointments/{appointment_id}/status", response_model=SuccessResponse)
async def update_appointment_status(
    appointment_id: int,
    data: StatusUpdate,
    booking: BookingService = Depends(get_booking_service)
):
    """Изменить статус записи (например, отменить)"""
    booking.update_status(appointment_id, data.status)

    if data.status == "cancelled":
        await notify_cancelled_booking(booking.get_appointment(appointment_id))
    return SuccessResponse()
