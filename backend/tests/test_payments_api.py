from decimal import Decimal

import pytest

from salon.main import app
from salon.services.notifications import NotificationType
from salon.services.payments import get_payment_gateway, intent_id_from_secret, to_minor_units

from conftest import DEV_CHAT_ID, GEL_MANICURE_ID, HIGHLIGHTS_ID, LISA_ID, SALON_CHAT_ID, sent_kinds


@pytest.fixture
def pending_appointment(client, booking_payload):
    return client.post("/api/appointments", json=booking_payload()).json()


def create_intent(client, appointment_id):
    return client.post("/api/create-payment-intent", json={"appointmentId": appointment_id})


def test_create_payment_intent(client, gateway, pending_appointment):
    response = create_intent(client, pending_appointment["id"])

    assert response.status_code == 200
    secret = response.json()["clientSecret"]
    intent = gateway.intents[intent_id_from_secret(secret)]
    assert intent.amount == 3000
    assert intent.metadata == {"appointment_id": str(pending_appointment["id"])}


def test_create_payment_intent_uses_down_payment_amount(client, gateway, booking_payload):
    appointment = client.post("/api/appointments", json=booking_payload(HIGHLIGHTS_ID)).json()

    secret = create_intent(client, appointment["id"]).json()["clientSecret"]

    assert gateway.intents[intent_id_from_secret(secret)].amount == 2500


def test_create_payment_intent_unknown_appointment(client):
    response = create_intent(client, 999)

    assert response.status_code == 404
    assert response.json() == {"message": "Appointment not found"}


def test_create_payment_intent_without_down_payment(client, booking_payload):
    appointment = client.post("/api/appointments", json=booking_payload(GEL_MANICURE_ID, LISA_ID)).json()

    response = create_intent(client, appointment["id"])

    assert response.status_code == 400
    assert response.json() == {"message": "No down payment required for this service"}


def test_create_payment_intent_provider_failure(client, gateway, pending_appointment):
    gateway.fail_create = True

    response = create_intent(client, pending_appointment["id"])

    assert response.status_code == 502
    assert "Stripe is unavailable" in response.json()["message"]


def test_payments_not_configured(client, pending_appointment):
    app.dependency_overrides[get_payment_gateway] = lambda: None

    response = create_intent(client, pending_appointment["id"])

    assert response.status_code == 502
    assert "not currently available" in response.json()["message"]


def test_confirm_payment_marks_appointment_paid(client, gateway, pending_appointment):
    secret = create_intent(client, pending_appointment["id"]).json()["clientSecret"]
    intent_id = intent_id_from_secret(secret)
    gateway.succeed(intent_id)

    response = client.post("/api/confirm-payment", json={
        "appointmentId": pending_appointment["id"],
        "paymentIntentId": intent_id,
    })

    assert response.status_code == 200
    assert response.json() == {"success": True}
    appointment = client.get(f"/api/appointments/{pending_appointment['id']}").json()
    assert appointment["status"] == "confirmed"
    assert appointment["downPaymentPaid"] is True
    assert appointment["paymentReference"] == intent_id
    assert appointment["remainingAmount"] == "90.00"


def test_confirm_payment_is_idempotent(client, gateway, pending_appointment):
    intent_id = intent_id_from_secret(create_intent(client, pending_appointment["id"]).json()["clientSecret"])
    gateway.succeed(intent_id)
    body = {"appointmentId": pending_appointment["id"], "paymentIntentId": intent_id}

    first = client.post("/api/confirm-payment", json=body)
    after_first = client.get(f"/api/appointments/{pending_appointment['id']}").json()
    second = client.post("/api/confirm-payment", json=body)
    after_second = client.get(f"/api/appointments/{pending_appointment['id']}").json()

    assert first.status_code == second.status_code == 200
    assert after_first == after_second


def test_confirm_payment_requires_succeeded_intent(client, pending_appointment):
    intent_id = intent_id_from_secret(create_intent(client, pending_appointment["id"]).json()["clientSecret"])

    response = client.post("/api/confirm-payment", json={
        "appointmentId": pending_appointment["id"],
        "paymentIntentId": intent_id,
    })

    assert response.status_code == 402
    assert "requires_payment_method" in response.json()["message"]
    appointment = client.get(f"/api/appointments/{pending_appointment['id']}").json()
    assert appointment["status"] == "pending"
    assert appointment["downPaymentPaid"] is False


def test_confirm_payment_rejects_foreign_intent(client, gateway, booking_payload):
    first = client.post("/api/appointments", json=booking_payload()).json()
    second = client.post("/api/appointments", json=booking_payload(email="other@example.com")).json()
    intent_id = intent_id_from_secret(create_intent(client, first["id"]).json()["clientSecret"])
    gateway.succeed(intent_id)

    response = client.post("/api/confirm-payment", json={
        "appointmentId": second["id"],
        "paymentIntentId": intent_id,
    })

    assert response.status_code == 400
    assert response.json() == {"message": "Payment does not belong to this appointment"}


def test_confirm_payment_without_down_payment(client, booking_payload):
    appointment = client.post("/api/appointments", json=booking_payload(GEL_MANICURE_ID, LISA_ID)).json()

    response = client.post("/api/confirm-payment", json={
        "appointmentId": appointment["id"],
        "paymentIntentId": "pi_whatever",
    })

    assert response.status_code == 400
    assert "No down payment required" in response.json()["message"]


def test_confirm_payment_missing_fields(client):
    response = client.post("/api/confirm-payment", json={"appointmentId": 1})
    assert response.status_code == 400


def test_intent_not_created_twice_after_payment(client, gateway, pending_appointment):
    intent_id = intent_id_from_secret(create_intent(client, pending_appointment["id"]).json()["clientSecret"])
    gateway.succeed(intent_id)
    client.post("/api/confirm-payment", json={
        "appointmentId": pending_appointment["id"],
        "paymentIntentId": intent_id,
    })

    response = create_intent(client, pending_appointment["id"])

    assert response.status_code == 400
    assert response.json() == {"message": "Down payment has already been paid"}


@pytest.mark.parametrize("amount,cents", [
    ("30.00", 3000),
    ("25.50", 2550),
    ("0.015", 2),
    ("19.994", 1999),
])
def test_to_minor_units(amount, cents):
    assert to_minor_units(Decimal(amount)) == cents


def test_intent_id_from_secret():
    assert intent_id_from_secret("pi_3Nabc_secret_XyZ") == "pi_3Nabc"


def test_payment_received_notified_once(client, gateway, pending_appointment, telegram):
    intent_id = intent_id_from_secret(create_intent(client, pending_appointment["id"]).json()["clientSecret"])
    gateway.succeed(intent_id)
    body = {"appointmentId": pending_appointment["id"], "paymentIntentId": intent_id}
    telegram.clear()

    client.post("/api/confirm-payment", json=body)
    client.post("/api/confirm-payment", json=body)

    assert sent_kinds(telegram) == [NotificationType.PAYMENT_RECEIVED]
    assert telegram[0]["chat_id"] == SALON_CHAT_ID
    assert "(внесена)" in telegram[0]["text"]


def test_unpaid_confirmation_is_not_notified(client, pending_appointment, telegram):
    intent_id = intent_id_from_secret(create_intent(client, pending_appointment["id"]).json()["clientSecret"])
    telegram.clear()

    client.post("/api/confirm-payment", json={
        "appointmentId": pending_appointment["id"],
        "paymentIntentId": intent_id,
    })

    assert telegram == []


def test_provider_failure_on_intent_alerts_developer(client, gateway, pending_appointment, telegram):
    gateway.fail_create = True
    telegram.clear()

    create_intent(client, pending_appointment["id"])

    assert sent_kinds(telegram) == [NotificationType.PAYMENT_ERROR]
    assert telegram[0]["chat_id"] == DEV_CHAT_ID
    assert "Stripe is unavailable" in telegram[0]["text"]


def test_provider_failure_on_confirm_alerts_developer(client, pending_appointment, telegram):
    telegram.clear()

    response = client.post("/api/confirm-payment", json={
        "appointmentId": pending_appointment["id"],
        "paymentIntentId": "pi_unknown",
    })

    assert response.status_code == 502
    assert sent_kinds(telegram) == [NotificationType.PAYMENT_ERROR]
    assert telegram[0]["chat_id"] == DEV_CHAT_ID
