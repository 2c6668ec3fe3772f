"""
Конфигурация приложения
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
from typing import Optional


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database
    DATABASE_URL: str = "sqlite:///./salon.db"
    STORAGE_BACKEND: str = "memory"  # memory, database

    # Security
    SECRET_KEY: str = "local-development-secret-key-change-in-production"

    # Stripe (предоплата)
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_CURRENCY: str = "usd"

    # Telegram для салона (записи и оплаты)
    TELEGRAM_SALON_BOT_TOKEN: Optional[str] = None
    TELEGRAM_SALON_CHAT_ID: Optional[str] = None
    # Telegram для разработчика (ошибки платежей)
    TELEGRAM_DEV_CHAT_ID: Optional[str] = None

    # Application
    SITE_URL: str = "http://localhost:8000"

    # Admin Panel
    ADMIN_PASSWORD: str = "salon2024"

    # Development
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    class Config:
        # Путь к .env относительно корня проекта
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки приложения (с кешированием)"""
    return Settings()
