"""
Модель мастера
"""
from sqlalchemy import Column, Integer, String, JSON
from ..database import Base


class Staff(Base):
    """Мастер салона"""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    title = Column(String(100), nullable=False)
    experience = Column(String(100), nullable=False)
    image_url = Column(String(500), nullable=True)
    specialties = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Staff {self.name} ({self.title})>"
