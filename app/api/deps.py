# app/api/deps.py

from typing import AsyncGenerator

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.client import CampusMapClient, LocalStorage
from app.core.config import settings
from app.db.session import AsyncSessionLocal
from app.schemas.building import Coordinates
from app.services.navigation import NavigationBackend


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI, возвращающая асинхронную сессию SQLAlchemy.
    Сессия автоматически открывается при входе в контекст и закрывается по выходу.
    """
    async with AsyncSessionLocal() as session:
        yield session


async def get_navigation_backend() -> AsyncGenerator[NavigationBackend, None]:
    """
    Шлюз к навигационному бэкенду на время одного запроса.
    """
    async with httpx.AsyncClient(
        base_url=settings.NAVIGATION_API_URL,
        timeout=settings.REQUEST_TIMEOUT,
    ) as client:
        yield NavigationBackend(client)


def get_default_position() -> Coordinates:
    return Coordinates(lat=settings.DEFAULT_LAT, lng=settings.DEFAULT_LNG)


def get_map_zoom() -> int:
    return settings.MAP_ZOOM


def get_app_title() -> str:
    return settings.APP_NAME


def build_campus_map_client(http: httpx.AsyncClient) -> CampusMapClient:
    """
    Собирает CampusMapClient из настроек: адрес бэкенда, файл локального
    хранилища и ключ кэша границ.
    http — клиент с base_url самого приложения карты.
    """
    return CampusMapClient(
        http,
        settings.NAVIGATION_API_URL,
        storage=LocalStorage(settings.LOCAL_STORAGE_PATH),
        storage_key=settings.BOUNDARY_STORAGE_KEY,
    )
