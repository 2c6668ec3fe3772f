"""
Модель услуги
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric
from ..database import Base


class Service(Base):
    """Услуга салона"""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    duration = Column(Integer, nullable=False)  # в минутах
    category = Column(String(20), nullable=False)  # hair, nails
    requires_down_payment = Column(Boolean, nullable=False, default=False)
    down_payment_amount = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<Service {self.name} (${self.price})>"
