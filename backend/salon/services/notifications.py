"""
Сервис для отправки уведомлений в Telegram
Бизнес-уведомления уходят в чат салона, технические - разработчику
"""
import html
import logging
import traceback
from datetime import datetime
from enum import Enum
from typing import Optional

import httpx

from ..config import get_settings
from ..schemas import AppointmentWithDetails

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    """Типы уведомлений"""
    # Бизнес-уведомления (для салона)
    NEW_BOOKING = "new_booking"
    CANCELLED_BOOKING = "cancelled_booking"
    PAYMENT_RECEIVED = "payment_received"

    # Технические уведомления (только для разработчика)
    PAYMENT_ERROR = "payment_error"


class NotificationService:
    """Сервис для отправки уведомлений в Telegram"""

    def __init__(self, bot_token: Optional[str], salon_chat_id: Optional[str], dev_chat_id: Optional[str]):
        self.bot_token = bot_token
        self.salon_chat_id = salon_chat_id
        self.dev_chat_id = dev_chat_id
        self.api_url = f"https://api.telegram.org/bot{bot_token}"

    async def send_telegram_message(self, chat_id: Optional[str], text: str) -> bool:
        """
        Отправить сообщение в Telegram

        Args:
            chat_id: ID чата получателя
            text: Текст сообщения (HTML)

        Returns:
            bool: True если отправлено успешно
        """
        if not chat_id or not self.bot_token:
            logger.warning("Telegram не настроен, пропускаем отправку")
            return False

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.api_url}/sendMessage",
                    json={
                        "chat_id": chat_id,
                        "text": text,
                        "parse_mode": "HTML"
                    },
                    timeout=10.0
                )
        except httpx.HTTPError as e:
            logger.error(f"Исключение при отправке в Telegram: {e}")
            return False

        if response.status_code == 200:
            logger.info(f"Уведомление отправлено в чат {chat_id}")
            return True

        logger.error(f"Ошибка отправки в Telegram: {response.text}")
        return False

    async def send_business_notification(self, notification_type: NotificationType, message: str) -> bool:
        """Отправить бизнес-уведомление в чат салона"""
        icons = {
            NotificationType.NEW_BOOKING: "📅",
            NotificationType.CANCELLED_BOOKING: "❌",
            NotificationType.PAYMENT_RECEIVED: "💰",
        }
        icon = icons.get(notification_type, "📢")
        full_message = f"{icon} <b>{notification_type.value.upper()}</b>\n\n{message}"
        return await self.send_telegram_message(self.salon_chat_id, full_message)

    async def send_technical_notification(
        self,
        notification_type: NotificationType,
        message: str,
        error: Optional[Exception] = None
    ) -> bool:
        """Отправить техническое уведомление разработчику"""
        logger.error(f"Technical notification: {notification_type.value} - {message}")

        if not self.dev_chat_id:
            logger.warning("Dev chat ID не настроен, пропускаем техническое уведомление")
            return False

        full_message = "🚨 <b>ТЕХНИЧЕСКОЕ УВЕДОМЛЕНИЕ</b>\n\n"
        full_message += f"<b>Тип:</b> {notification_type.value}\n"
        full_message += f"<b>Сообщение:</b> {html.escape(message)}\n"
        full_message += f"<b>Время:</b> {datetime.now():%Y-%m-%d %H:%M:%S}\n"

        if error:
            tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            if len(tb) < 3000:  # Telegram лимит ~4096 символов
                full_message += f"\n<pre>{html.escape(tb)}</pre>"

        return await self.send_telegram_message(self.dev_chat_id, full_message)


def get_notification_service() -> NotificationService:
    settings = get_settings()
    return NotificationService(
        settings.TELEGRAM_SALON_BOT_TOKEN,
        settings.TELEGRAM_SALON_CHAT_ID,
        settings.TELEGRAM_DEV_CHAT_ID
    )


def format_appointment(appointment: AppointmentWithDetails) -> str:
    """Карточка записи для сообщения"""
    client = appointment.client
    lines = [
        f"👤 <b>Клиент:</b> {html.escape(client.first_name)} {html.escape(client.last_name)}",
        f"📞 <b>Телефон:</b> {html.escape(client.phone)}",
        f"📧 <b>Email:</b> {html.escape(client.email)}",
        "",
        f"💇 <b>Услуга:</b> {html.escape(appointment.service.name)}",
        f"✂️ <b>Мастер:</b> {html.escape(appointment.staff.name)}",
        f"📆 <b>Дата:</b> {appointment.appointment_date:%d.%m.%Y %H:%M}",
        f"💰 <b>Стоимость:</b> ${appointment.total_amount}",
    ]
    if appointment.down_payment_amount:
        paid = "внесена" if appointment.down_payment_paid else "ожидается"
        lines.append(f"💳 <b>Предоплата:</b> ${appointment.down_payment_amount} ({paid})")
    if appointment.notes:
        lines.append(f"📝 <b>Комментарий:</b> {html.escape(appointment.notes)}")
    lines.append(f"\nID #{appointment.id}")
    return "\n".join(lines)


# Удобные функции для использования в роутерах

async def notify_new_booking(appointment: AppointmentWithDetails) -> bool:
    """Уведомление о новой записи"""
    return await get_notification_service().send_business_notification(
        NotificationType.NEW_BOOKING,
        format_appointment(appointment)
    )


async def notify_cancelled_booking(appointment: AppointmentWithDetails) -> bool:
    """Уведомление об отмене записи"""
    return await get_notification_service().send_business_notification(
        NotificationType.CANCELLED_BOOKING,
        format_appointment(appointment)
    )


async def notify_payment_received(appointment: AppointmentWithDetails) -> bool:
    """Уведомление о получении предоплаты"""
    return await get_notification_service().send_business_notification(
        NotificationType.PAYMENT_RECEIVED,
        format_appointment(appointment)
    )


async def notify_payment_error(message: str, error: Optional[Exception] = None) -> bool:
    """Уведомление об ошибке оплаты (только разработчику)"""
    return await get_notification_service().send_technical_notification(
        NotificationType.PAYMENT_ERROR,
        message,
        error
    )
