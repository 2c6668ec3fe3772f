"""
Интерфейс хранилища: услуги, мастера, клиенты и записи
"""
from abc import ABC, abstractmethod
from typing import List, Optional

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


class Storage(ABC):
    """
    Общий контракт для хранилища в памяти и хранилища в БД.

    Методы чтения возвращают None для неизвестного id,
    методы обновления записи возвращают обновлённую запись или None.
    """

    # Services
    @abstractmethod
    def get_all_services(self) -> List[Service]: ...

    @abstractmethod
    def get_service_by_id(self, service_id: int) -> Optional[Service]: ...

    @abstractmethod
    def create_service(self, data: ServiceCreate) -> Service: ...

    # Staff
    @abstractmethod
    def get_all_staff(self) -> List[Staff]: ...

    @abstractmethod
    def get_staff_by_id(self, staff_id: int) -> Optional[Staff]: ...

    @abstractmethod
    def create_staff(self, data: StaffCreate) -> Staff: ...

    # Clients
    @abstractmethod
    def get_client_by_id(self, client_id: int) -> Optional[Client]: ...

    @abstractmethod
    def get_client_by_email(self, email: str) -> Optional[Client]: ...

    @abstractmethod
    def create_client(self, data: ClientCreate) -> Client: ...

    # Appointments
    @abstractmethod
    def get_all_appointments(self, status: Optional[str] = None) -> List[AppointmentWithDetails]: ...

    @abstractmethod
    def get_appointment_by_id(self, appointment_id: int) -> Optional[AppointmentWithDetails]: ...

    @abstractmethod
    def create_appointment(self, data: AppointmentCreate) -> Appointment: ...

    @abstractmethod
    def update_appointment_payment(
        self,
        appointment_id: int,
        payment_reference: str,
        paid: bool
    ) -> Optional[Appointment]: ...

    @abstractmethod
    def update_appointment_status(self, appointment_id: int, status: str) -> Optional[Appointment]: ...
