"""
Хранилище в памяти процесса (для разработки и тестов)
"""
import itertools
from datetime import datetime
from typing import Dict, List, Optional

from ..catalog import validate_service
from ..schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentWithDetails,
    Client,
    ClientCreate,
    Service,
    ServiceCreate,
    Staff,
    StaffCreate,
)
from .base import Storage


class MemStorage(Storage):
    """Словари по id и отдельный счётчик для каждой сущности"""

    def __init__(self):
        self.services: Dict[int, Service] = {}
        self.staff: Dict[int, Staff] = {}
        self.clients: Dict[int, Client] = {}
        self.appointments: Dict[int, Appointment] = {}
        self._service_ids = itertools.count(1)
        self._staff_ids = itertools.count(1)
        self._client_ids = itertools.count(1)
        self._appointment_ids = itertools.count(1)

    # ==================== Services ====================

    def get_all_services(self) -> List[Service]:
        return [s.model_copy() for s in self.services.values()]

    def get_service_by_id(self, service_id: int) -> Optional[Service]:
        service = self.services.get(service_id)
        return service.model_copy() if service else None

    def create_service(self, data: ServiceCreate) -> Service:
        validate_service(data)
        service = Service(id=next(self._service_ids), **data.model_dump())
        self.services[service.id] = service
        return service.model_copy()

    # ==================== Staff ====================

    def get_all_staff(self) -> List[Staff]:
        return [s.model_copy(deep=True) for s in self.staff.values()]

    def get_staff_by_id(self, staff_id: int) -> Optional[Staff]:
        member = self.staff.get(staff_id)
        return member.model_copy(deep=True) if member else None

    def create_staff(self, data: StaffCreate) -> Staff:
        member = Staff(id=next(self._staff_ids), **data.model_dump())
        self.staff[member.id] = member
        return member.model_copy(deep=True)

    # ==================== Clients ====================

    def get_client_by_id(self, client_id: int) -> Optional[Client]:
        client = self.clients.get(client_id)
        return client.model_copy() if client else None

    def get_client_by_email(self, email: str) -> Optional[Client]:
        for client in self.clients.values():
            if client.email == email:
                return client.model_copy()
        return None

    def create_client(self, data: ClientCreate) -> Client:
        client = Client(id=next(self._client_ids), **data.model_dump())
        self.clients[client.id] = client
        return client.model_copy()

    # ==================== Appointments ====================

    def _with_details(self, appointment: Appointment) -> AppointmentWithDetails:
        return AppointmentWithDetails(
            **appointment.model_dump(),
            client=self.clients[appointment.client_id].model_copy(deep=True),
            service=self.services[appointment.service_id].model_copy(deep=True),
            staff=self.staff[appointment.staff_id].model_copy(deep=True),
        )

    def get_all_appointments(self, status: Optional[str] = None) -> List[AppointmentWithDetails]:
        appointments = [
            a for a in self.appointments.values()
            if status is None or a.status == status
        ]
        appointments.sort(key=lambda a: (a.appointment_date, a.id), reverse=True)
        return [self._with_details(a) for a in appointments]

    def get_appointment_by_id(self, appointment_id: int) -> Optional[AppointmentWithDetails]:
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            return None
        return self._with_details(appointment)

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        appointment = Appointment(
            id=next(self._appointment_ids),
            created_at=datetime.now(),
            **data.model_dump()
        )
        self.appointments[appointment.id] = appointment
        return appointment.model_copy()

    def update_appointment_payment(
        self,
        appointment_id: int,
        payment_reference: str,
        paid: bool
    ) -> Optional[Appointment]:
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            return None

        appointment.payment_reference = payment_reference
        appointment.down_payment_paid = paid
        if paid:
            appointment.status = "confirmed"
        return appointment.model_copy()

    def update_appointment_status(self, appointment_id: int, status: str) -> Optional[Appointment]:
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            return None

        appointment.status = status
        return appointment.model_copy()
