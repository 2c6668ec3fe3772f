"""
API роутер каталога: услуги и мастера
"""
from typing import List

from fastapi import APIRouter, Depends

from ..schemas import Service, Staff
from ..storage import Storage, get_storage

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/services", response_model=List[Service])
async def get_services(storage: Storage = Depends(get_storage)):
    """Получить список услуг"""
    return storage.get_all_services()


@router.get("/staff", response_model=List[Staff])
async def get_staff(storage: Storage = Depends(get_storage)):
    """Получить список мастеров"""
    return storage.get_all_staff()
