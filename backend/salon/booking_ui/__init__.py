"""
Клиентская часть записи: мастер записи и страница оплаты поверх API
"""
from .api_client import SalonApiClient
from .payment_flow import PaymentFlow, PaymentState
from .wizard import BookingOutcome, BookingSummary, BookingWizard, WizardStep

__all__ = [
    "SalonApiClient",
    "PaymentFlow",
    "PaymentState",
    "BookingOutcome",
    "BookingSummary",
    "BookingWizard",
    "WizardStep",
]
