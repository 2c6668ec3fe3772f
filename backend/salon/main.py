"""
Главный файл FastAPI приложения
Salon Booking System: запись на услуги и онлайн-предоплата
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .errors import SalonError
from .routes.appointments import router as appointments_router
from .routes.catalog import router as catalog_router
from .routes.payments import router as payments_router
from .schemas import describe_validation_errors

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Salon Booking API",
    description="Запись на услуги салона с онлайн-предоплатой",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [settings.SITE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== ОБРАБОТКА ОШИБОК ====================
# Все ошибки отдаются одним форматом: {"message": "..."}

@app.exception_handler(SalonError)
async def salon_error_handler(request: Request, exc: SalonError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": describe_validation_errors(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Необработанная ошибка: {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "An unexpected error occurred"})


# Подключение роутеров
app.include_router(catalog_router)
app.include_router(appointments_router)
app.include_router(payments_router)

# Админ-панель (только для хранилища в БД)
if settings.STORAGE_BACKEND.lower() == "database":
    from .admin import setup_admin
    from .database import engine

    setup_admin(app, engine)
    logger.info("Админ-панель доступна: /admin")


@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("salon.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)
