import asyncio

import httpx

from salon.services import notifications
from salon.services.booking import BookingService
from salon.services.notifications import NotificationService, NotificationType, format_appointment
from salon.schemas import BookingRequest


def capture_telegram(monkeypatch, status_code=200):
    sent = []
    real_client = httpx.AsyncClient

    def handler(request):
        sent.append((str(request.url), request.read().decode()))
        return httpx.Response(status_code, json={"ok": status_code == 200})

    monkeypatch.setattr(
        notifications.httpx,
        "AsyncClient",
        lambda: real_client(transport=httpx.MockTransport(handler))
    )
    return sent


def test_skips_when_not_configured():
    service = NotificationService(None, None, None)

    assert asyncio.run(service.send_business_notification(NotificationType.NEW_BOOKING, "hi")) is False


def test_business_notification_goes_to_salon_chat(monkeypatch):
    sent = capture_telegram(monkeypatch)
    service = NotificationService("123:abc", "-100500", None)

    assert asyncio.run(service.send_business_notification(NotificationType.PAYMENT_RECEIVED, "paid")) is True

    url, body = sent[0]
    assert url == "https://api.telegram.org/bot123:abc/sendMessage"
    assert "-100500" in body
    assert "PAYMENT_RECEIVED" in body


def test_telegram_error_is_reported_as_false(monkeypatch):
    capture_telegram(monkeypatch, status_code=400)
    service = NotificationService("123:abc", "-100500", "-100600")

    assert asyncio.run(service.send_technical_notification(NotificationType.PAYMENT_ERROR, "boom")) is False


def test_format_appointment(storage):
    booking = BookingService(storage)
    appointment = booking.create_appointment(BookingRequest(
        service_id=1,
        staff_id=2,
        appointment_date="2030-03-14",
        appointment_time="11:00 AM",
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        phone="5551234567",
    ))

    text = format_appointment(booking.get_appointment(appointment.id))

    assert "Jane Doe" in text
    assert "Full Color &amp; Style" in text
    assert "Mike Chen" in text
    assert "14.03.2030 11:00" in text
    assert "$30.00 (ожидается)" in text


def test_format_appointment_escapes_html(storage):
    booking = BookingService(storage)
    appointment = booking.create_appointment(BookingRequest(
        service_id=4,
        staff_id=3,
        appointment_date="2030-03-14",
        appointment_time="11:00 AM",
        first_name="Tom <3",
        last_name="B&B",
        email="tom@example.com",
        phone="5551234567",
        notes="<b>no gel</b>",
    ))

    text = format_appointment(booking.get_appointment(appointment.id))

    assert "Tom &lt;3 B&amp;B" in text
    assert "Nail Art &amp; Design" in text
    assert "&lt;b&gt;no gel&lt;/b&gt;" in text
    assert "<b>no gel</b>" not in text


def test_technical_message_is_escaped(telegram):
    service = notifications.get_notification_service()

    asyncio.run(service.send_technical_notification(NotificationType.PAYMENT_ERROR, "amount < 0 & failed"))

    assert "amount &lt; 0 &amp; failed" in telegram[0]["text"]
