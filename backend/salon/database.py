"""
Подключение к базе данных (PostgreSQL или SQLite)
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import get_settings

settings = get_settings()


def make_engine(database_url: str, echo: bool = False):
    """Создать движок под конкретную СУБД"""
    if database_url.startswith("sqlite"):
        # SQLite - для локальной разработки
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo
        )
    # PostgreSQL - для продакшена
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo
    )


engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Создание фабрики сессий
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Базовый класс для моделей
Base = declarative_base()


def init_db(bind=None):
    """
    Инициализация базы данных
    Создание всех таблиц, определенных в моделях
    """
    from . import models  # noqa: F401  регистрация моделей в Base.metadata

    Base.metadata.create_all(bind=bind or engine)
