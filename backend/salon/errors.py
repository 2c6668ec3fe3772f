"""
Ошибки предметной области и их HTTP-коды
"""


class SalonError(Exception):
    """Базовая ошибка приложения"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SalonError):
    """Некорректные данные записи или контактов"""

    status_code = 400


class NotFoundError(SalonError):
    """Неизвестная услуга, мастер или запись"""

    status_code = 404


class PaymentError(SalonError):
    """Отказ платёжной системы (клиент может повторить)"""

    status_code = 402


class ProviderError(SalonError):
    """Платёжная система или хранилище недоступны"""

    status_code = 502


ERRORS_BY_STATUS = {
    cls.status_code: cls
    for cls in (ValidationError, NotFoundError, PaymentError, ProviderError)
}


def error_for_status(status_code: int, message: str) -> SalonError:
    """Восстановить ошибку по HTTP-коду ответа API"""
    error_cls = ERRORS_BY_STATUS.get(status_code)
    if error_cls is None:
        error_cls = ValidationError if 400 <= status_code < 500 else ProviderError
    return error_cls(message)
