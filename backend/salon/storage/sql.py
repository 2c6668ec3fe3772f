"""
Хранилище в реляционной БД (SQLAlchemy)
"""
from typing import List, Optional

from sqlalchemy.orm import Session, sessionmaker

from .. import models
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


def _row_to_dict(row) -> dict:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


class DatabaseStorage(Storage):
    """Каждая операция открывает собственную сессию и коммитит её"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    # ==================== Services ====================

    def get_all_services(self) -> List[Service]:
        db = self._session()
        try:
            rows = db.query(models.Service).order_by(models.Service.id).all()
            return [Service.model_validate(_row_to_dict(r)) for r in rows]
        finally:
            db.close()

    def get_service_by_id(self, service_id: int) -> Optional[Service]:
        db = self._session()
        try:
            row = db.get(models.Service, service_id)
            return Service.model_validate(_row_to_dict(row)) if row else None
        finally:
            db.close()

    def create_service(self, data: ServiceCreate) -> Service:
        validate_service(data)
        db = self._session()
        try:
            row = models.Service(**data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return Service.model_validate(_row_to_dict(row))
        finally:
            db.close()

    # ==================== Staff ====================

    def get_all_staff(self) -> List[Staff]:
        db = self._session()
        try:
            rows = db.query(models.Staff).order_by(models.Staff.id).all()
            return [Staff.model_validate(_row_to_dict(r)) for r in rows]
        finally:
            db.close()

    def get_staff_by_id(self, staff_id: int) -> Optional[Staff]:
        db = self._session()
        try:
            row = db.get(models.Staff, staff_id)
            return Staff.model_validate(_row_to_dict(row)) if row else None
        finally:
            db.close()

    def create_staff(self, data: StaffCreate) -> Staff:
        db = self._session()
        try:
            row = models.Staff(**data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return Staff.model_validate(_row_to_dict(row))
        finally:
            db.close()

    # ==================== Clients ====================

    def get_client_by_id(self, client_id: int) -> Optional[Client]:
        db = self._session()
        try:
            row = db.get(models.Client, client_id)
            return Client.model_validate(_row_to_dict(row)) if row else None
        finally:
            db.close()

    def get_client_by_email(self, email: str) -> Optional[Client]:
        db = self._session()
        try:
            row = db.query(models.Client).filter(
                models.Client.email == email
            ).order_by(models.Client.id).first()
            return Client.model_validate(_row_to_dict(row)) if row else None
        finally:
            db.close()

    def create_client(self, data: ClientCreate) -> Client:
        db = self._session()
        try:
            row = models.Client(**data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return Client.model_validate(_row_to_dict(row))
        finally:
            db.close()

    # ==================== Appointments ====================

    def _with_details(self, db: Session, row: models.Appointment) -> AppointmentWithDetails:
        client = db.get(models.Client, row.client_id)
        service = db.get(models.Service, row.service_id)
        staff = db.get(models.Staff, row.staff_id)
        return AppointmentWithDetails.model_validate({
            **_row_to_dict(row),
            "client": _row_to_dict(client),
            "service": _row_to_dict(service),
            "staff": _row_to_dict(staff),
        })

    def get_all_appointments(self, status: Optional[str] = None) -> List[AppointmentWithDetails]:
        db = self._session()
        try:
            query = db.query(models.Appointment)
            if status is not None:
                query = query.filter(models.Appointment.status == status)
            rows = query.order_by(
                models.Appointment.appointment_date.desc(),
                models.Appointment.id.desc()
            ).all()
            return [self._with_details(db, r) for r in rows]
        finally:
            db.close()

    def get_appointment_by_id(self, appointment_id: int) -> Optional[AppointmentWithDetails]:
        db = self._session()
        try:
            row = db.get(models.Appointment, appointment_id)
            return self._with_details(db, row) if row else None
        finally:
            db.close()

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        db = self._session()
        try:
            row = models.Appointment(**data.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return Appointment.model_validate(_row_to_dict(row))
        finally:
            db.close()

    def update_appointment_payment(
        self,
        appointment_id: int,
        payment_reference: str,
        paid: bool
    ) -> Optional[Appointment]:
        db = self._session()
        try:
            row = db.get(models.Appointment, appointment_id)
            if not row:
                return None

            row.payment_reference = payment_reference
            row.down_payment_paid = paid
            if paid:
                row.status = "confirmed"
            db.commit()
            db.refresh(row)
            return Appointment.model_validate(_row_to_dict(row))
        finally:
            db.close()

    def update_appointment_status(self, appointment_id: int, status: str) -> Optional[Appointment]:
        db = self._session()
        try:
            row = db.get(models.Appointment, appointment_id)
            if not row:
                return None

            row.status = status
            db.commit()
            db.refresh(row)
            return Appointment.model_validate(_row_to_dict(row))
        finally:
            db.close()
