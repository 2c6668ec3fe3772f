"""
Модель записи на прием
"""
from sqlalchemy import Column, Integer, ForeignKey, DateTime, String, Numeric, Text, Boolean
from sqlalchemy.sql import func
from ..database import Base


class Appointment(Base):
    """Запись на прием"""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    appointment_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, completed, cancelled
    total_amount = Column(Numeric(10, 2), nullable=False)
    down_payment_amount = Column(Numeric(10, 2), nullable=True)
    down_payment_paid = Column(Boolean, nullable=False, default=False)
    remaining_amount = Column(Numeric(10, 2), nullable=False)
    payment_reference = Column(String(255), nullable=True)  # id платежа в Stripe
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Appointment {self.appointment_date} (Status: {self.status})>"
