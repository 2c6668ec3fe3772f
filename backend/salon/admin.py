"""
Админ-панель для сотрудников салона
Доступ: http://localhost:8000/admin
Логин: admin / Пароль: из .env (ADMIN_PASSWORD)

Работает только с хранилищем в БД (STORAGE_BACKEND=database).
"""
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from wtforms import SelectField

from .config import get_settings
from .models.appointment import Appointment
from .models.client import Client
from .models.service import Service
from .models.staff import Staff
from .schemas import APPOINTMENT_STATUSES
from .services.booking import check_status_change
from .services.notifications import notify_cancelled_booking
from .storage.sql import DatabaseStorage

settings = get_settings()

ADMIN_USERNAME = "admin"


class AdminAuth(AuthenticationBackend):
    """Простая авторизация для админки"""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")

        if username == ADMIN_USERNAME and password == settings.ADMIN_PASSWORD:
            request.session.update({"authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)


# ==================== МОДЕЛИ ДЛЯ АДМИНКИ ====================

class AppointmentAdmin(ModelView, model=Appointment):
    """Записи клиентов: просмотр и ручная смена статуса"""
    name = "Appointment"
    name_plural = "Appointments"
    icon = "fa-solid fa-calendar-check"

    # Записи не создаются и не удаляются из админки
    can_create = False
    can_delete = False

    column_list = [
        Appointment.id,
        Appointment.appointment_date,
        Appointment.status,
        Appointment.client_id,
        Appointment.service_id,
        Appointment.staff_id,
        Appointment.total_amount,
        Appointment.down_payment_paid,
        Appointment.remaining_amount,
        Appointment.created_at
    ]
    column_searchable_list = [Appointment.status]
    column_sortable_list = [Appointment.appointment_date, Appointment.created_at, Appointment.status]
    column_default_sort = [(Appointment.appointment_date, True)]

    form_columns = [Appointment.status, Appointment.notes]
    form_overrides = {"status": SelectField}
    form_args = {"status": {"choices": [(s, s.capitalize()) for s in APPOINTMENT_STATUSES]}}

    column_labels = {
        "appointment_date": "Date & Time",
        "client_id": "Client",
        "service_id": "Service",
        "staff_id": "Stylist",
        "total_amount": "Total",
        "down_payment_paid": "Down payment paid",
        "remaining_amount": "Remaining",
        "created_at": "Created"
    }

    async def on_model_change(self, data, model, is_created, request):
        """Те же правила смены статуса, что и в API"""
        status = data.get("status", model.status)
        check_status_change(status, model.down_payment_paid)
        request.state.cancelled = status == "cancelled" and model.status != "cancelled"

    async def after_model_change(self, data, model, is_created, request):
        if getattr(request.state, "cancelled", False):
            storage = DatabaseStorage(self.session_maker)
            await notify_cancelled_booking(storage.get_appointment_by_id(model.id))


class ClientAdmin(ModelView, model=Client):
    """Клиенты"""
    name = "Client"
    name_plural = "Clients"
    icon = "fa-solid fa-users"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = [Client.id, Client.first_name, Client.last_name, Client.email, Client.phone]
    column_searchable_list = [Client.first_name, Client.last_name, Client.email, Client.phone]
    column_sortable_list = [Client.last_name, Client.email]


class ServiceAdmin(ModelView, model=Service):
    """Услуги (только просмотр)"""
    name = "Service"
    name_plural = "Services"
    icon = "fa-solid fa-scissors"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = [
        Service.id,
        Service.name,
        Service.category,
        Service.price,
        Service.duration,
        Service.requires_down_payment,
        Service.down_payment_amount
    ]
    column_sortable_list = [Service.name, Service.price, Service.category]


class StaffAdmin(ModelView, model=Staff):
    """Мастера (только просмотр)"""
    name = "Stylist"
    name_plural = "Staff"
    icon = "fa-solid fa-user-tie"

    can_create = False
    can_edit = False
    can_delete = False

    column_list = [Staff.id, Staff.name, Staff.title, Staff.experience, Staff.specialties]


def setup_admin(app, engine):
    """Настройка админ-панели"""
    authentication_backend = AdminAuth(secret_key=settings.SECRET_KEY)

    admin = Admin(
        app,
        engine,
        authentication_backend=authentication_backend,
        title="Salon Admin",
        base_url="/admin"
    )

    # Регистрация моделей
    admin.add_view(AppointmentAdmin)
    admin.add_view(ClientAdmin)
    admin.add_view(ServiceAdmin)
    admin.add_view(StaffAdmin)

    return admin
