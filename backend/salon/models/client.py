"""
Модель клиента
"""
from sqlalchemy import Column, Integer, String
from ..database import Base


class Client(Base):
    """Клиент салона (уникален по email)"""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(30), nullable=False)

    def __repr__(self):
        return f"<Client {self.first_name} {self.last_name} ({self.email})>"
