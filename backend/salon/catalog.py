"""
Каталог салона: услуги и мастера по умолчанию
"""
from decimal import Decimal

from .errors import ValidationError
from .schemas import ServiceCreate, StaffCreate

# Слоты времени, которые предлагает мастер записи
TIME_SLOTS = [
    "9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
    "1:00 PM", "2:00 PM", "3:00 PM", "4:00 PM", "5:00 PM",
]

DEFAULT_SERVICES = [
    ServiceCreate(
        name="Full Color & Style",
        description="Complete hair transformation with professional coloring and styling",
        price=Decimal("120.00"),
        duration=150,
        category="hair",
        requires_down_payment=True,
        down_payment_amount=Decimal("30.00"),
        image_url="https://images.unsplash.com/photo-1562322140-8baeececf3df?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
    ),
    ServiceCreate(
        name="Highlights & Lowlights",
        description="Add dimension with professional highlighting techniques",
        price=Decimal("90.00"),
        duration=120,
        category="hair",
        requires_down_payment=True,
        down_payment_amount=Decimal("25.00"),
        image_url="https://images.unsplash.com/photo-1580618672591-eb180b1a973f?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
    ),
    ServiceCreate(
        name="Gel Manicure",
        description="Long-lasting gel polish with cuticle care and nail shaping",
        price=Decimal("45.00"),
        duration=60,
        category="nails",
        requires_down_payment=False,
        image_url="https://images.unsplash.com/photo-1604654894610-df63bc536371?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
    ),
    ServiceCreate(
        name="Nail Art & Design",
        description="Custom nail art with intricate designs and premium finishes",
        price=Decimal("65.00"),
        duration=90,
        category="nails",
        requires_down_payment=False,
        image_url="https://images.unsplash.com/photo-1610992015732-2449b76344bc?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=200",
    ),
]

DEFAULT_STAFF = [
    StaffCreate(
        name="Sarah Johnson",
        title="Senior Stylist",
        experience="8 years experience",
        image_url="https://images.unsplash.com/photo-1595475207225-428b62bda831?ixlib=rb-4.0.3&auto=format&fit=crop&w=300&h=300",
        specialties=["Color", "Highlights", "Styling"],
    ),
    StaffCreate(
        name="Mike Chen",
        title="Color Specialist",
        experience="6 years experience",
        image_url="https://images.unsplash.com/photo-1582750433449-648ed127bb54?ixlib=rb-4.0.3&auto=format&fit=crop&w=300&h=300",
        specialties=["Color", "Balayage", "Hair Treatment"],
    ),
    StaffCreate(
        name="Lisa Rodriguez",
        title="Nail Artist",
        experience="5 years experience",
        image_url="https://images.unsplash.com/photo-1438761681033-6461ffad8d80?ixlib=rb-4.0.3&auto=format&fit=crop&w=300&h=300",
        specialties=["Nail Art", "Gel Manicure", "Nail Design"],
    ),
]


def validate_service(service: ServiceCreate) -> None:
    """Предоплата задаётся только для услуг с предоплатой и не больше цены"""
    if service.requires_down_payment:
        if service.down_payment_amount is None:
            raise ValidationError(f"Service '{service.name}' requires a down payment amount")
        if service.down_payment_amount > service.price:
            raise ValidationError(f"Down payment for '{service.name}' exceeds its price")
    elif service.down_payment_amount is not None:
        raise ValidationError(f"Service '{service.name}' has a down payment amount but does not require one")


def seed_catalog(storage) -> bool:
    """Добавить услуги и мастеров, если каталог пуст"""
    if storage.get_all_services() or storage.get_all_staff():
        return False

    for service in DEFAULT_SERVICES:
        storage.create_service(service)
    for member in DEFAULT_STAFF:
        storage.create_staff(member)
    return True
