"""
Хранилище данных: выбор реализации при старте приложения
"""
import logging
from functools import lru_cache

from ..catalog import seed_catalog
from ..config import Settings, get_settings
from .base import Storage
from .memory import MemStorage
from .sql import DatabaseStorage

logger = logging.getLogger(__name__)

__all__ = ["Storage", "MemStorage", "DatabaseStorage", "create_storage", "get_storage"]


def create_storage(settings: Settings) -> Storage:
    """Создать хранилище по STORAGE_BACKEND и заполнить каталог"""
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        storage = MemStorage()
    elif backend == "database":
        from ..database import SessionLocal, init_db

        init_db()
        storage = DatabaseStorage(SessionLocal)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")

    if seed_catalog(storage):
        logger.info("Каталог заполнен услугами и мастерами по умолчанию")
    logger.info(f"Хранилище: {backend}")
    return storage


@lru_cache()
def get_storage() -> Storage:
    """Dependency: единственный экземпляр хранилища на процесс"""
    return create_storage(get_settings())
