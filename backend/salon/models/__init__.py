"""
SQLAlchemy модели для базы данных
"""
from .client import Client
from .service import Service
from .staff import Staff
from .appointment import Appointment

__all__ = [
    "Client",
    "Service",
    "Staff",
    "Appointment"
]
