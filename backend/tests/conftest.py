import json
from datetime import date, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon.booking_ui import SalonApiClient
from salon.catalog import seed_catalog
from salon.database import init_db
from salon.errors import PaymentError, ProviderError
from salon.main import app
from salon.services import notifications
from salon.services.payments import PaymentIntentInfo, get_payment_gateway
from salon.storage import DatabaseStorage, MemStorage, get_storage

# Идентификаторы из каталога по умолчанию
FULL_COLOR_ID = 1      # 120.00, предоплата 30.00
HIGHLIGHTS_ID = 2      # 90.00, предоплата 25.00
GEL_MANICURE_ID = 3    # 45.00, без предоплаты
SARAH_ID = 1
LISA_ID = 3

SALON_CHAT_ID = "-100500"
DEV_CHAT_ID = "-100600"


class FakeGateway:
    """Платёжный шлюз в памяти с поведением тестовых карт Stripe"""

    DECLINED = "pm_card_chargeDeclined"
    AUTH_REQUIRED = "pm_card_authenticationRequired"

    def __init__(self):
        self.intents = {}
        self.fail_create = False
        self.confirm_calls = 0

    def create_intent(self, amount_cents, appointment_id):
        if self.fail_create:
            raise ProviderError("Error creating payment intent: Stripe is unavailable")

        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = PaymentIntentInfo(
            id=intent_id,
            client_secret=f"{intent_id}_secret_abc123",
            status="requires_payment_method",
            amount=amount_cents,
            metadata={"appointment_id": str(appointment_id)}
        )
        self.intents[intent_id] = intent
        return intent.model_copy()

    def retrieve_intent(self, payment_intent_id):
        if payment_intent_id not in self.intents:
            raise ProviderError("Failed to retrieve payment intent: No such payment_intent")
        return self.intents[payment_intent_id].model_copy()

    def confirm_intent(self, payment_intent_id, payment_method):
        self.confirm_calls += 1
        intent = self.intents[payment_intent_id]
        if payment_method == self.DECLINED:
            raise PaymentError("Your card was declined.")
        if payment_method == self.AUTH_REQUIRED:
            intent.status = "requires_action"
        else:
            intent.status = "succeeded"
        return intent.model_copy()

    def succeed(self, payment_intent_id):
        self.intents[payment_intent_id].status = "succeeded"


def make_sql_storage():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    storage = DatabaseStorage(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    seed_catalog(storage)
    return storage


@pytest.fixture
def storage():
    storage = MemStorage()
    seed_catalog(storage)
    return storage


@pytest.fixture(params=["memory", "database"])
def any_storage(request):
    if request.param == "memory":
        storage = MemStorage()
        seed_catalog(storage)
        return storage
    return make_sql_storage()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(storage, gateway):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client):
    return SalonApiClient(http=client)


@pytest.fixture
def booking_date():
    return (date.today() + timedelta(days=7)).isoformat()


@pytest.fixture
def booking_payload(booking_date):
    def make(service_id=FULL_COLOR_ID, staff_id=SARAH_ID, email="jane@example.com", **overrides):
        payload = {
            "serviceId": service_id,
            "staffId": staff_id,
            "appointmentDate": booking_date,
            "appointmentTime": "10:00 AM",
            "firstName": "Jane",
            "lastName": "Doe",
            "email": email,
            "phone": "5551234567",
        }
        payload.update(overrides)
        return payload
    return make


@pytest.fixture
def telegram(monkeypatch):
    """Перехват сообщений в Telegram: список тел запросов sendMessage"""
    sent = []
    real_client = httpx.AsyncClient

    def handler(request):
        sent.append(json.loads(request.content))
        return httpx.Response(200, json={"ok": True})

    monkeypatch.setattr(
        notifications,
        "get_notification_service",
        lambda: notifications.NotificationService("123:abc", SALON_CHAT_ID, DEV_CHAT_ID)
    )
    monkeypatch.setattr(
        notifications.httpx,
        "AsyncClient",
        lambda: real_client(transport=httpx.MockTransport(handler))
    )
    return sent


def sent_kinds(sent):
    """Типы отправленных уведомлений по порядку"""
    kinds = []
    for message in sent:
        for kind in notifications.NotificationType:
            if f"<b>{kind.value.upper()}</b>" in message["text"] or f"<b>Тип:</b> {kind.value}" in message["text"]:
                kinds.append(kind)
    return kinds
