"""
Клиент кампусной карты.

Повторяет браузерные хелперы фронтенда: загрузка/сохранение границ кампуса
через /api/boundaries (с резервной копией в LocalStorage), работа со зданиями
через /api/buildings и напрямую через навигационный бэкенд.

Политика ошибок:
- load_* никогда не бросают исключений и возвращают Success | Failure;
- save_boundaries возвращает строку "Error: ..." вместо исключения;
- create/update/upload/save_buildings логируют и пробрасывают UpstreamError.
"""
import json
import logging
from typing import Any, Optional, Sequence

import httpx

from app.client.result import Failure, Result, Success
from app.client.storage import LocalStorage
from app.exceptions import UpstreamError
from app.services.navigation import building_image_url
from app.services.normalizer import extract_buildings

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "yabatech-campus-boundaries"
MIN_BOUNDARY_POINTS = 3

_JSON_NO_CACHE = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
}


def _as_points(boundaries: Sequence[Sequence[float]]) -> list[list[float]]:
    return [[float(lat), float(lng)] for lat, lng in boundaries]


class CampusMapClient:
    """
    http — httpx.AsyncClient с base_url самого приложения карты (маршруты /api/...);
    backend_url — адрес навигационного бэкенда для create/update и ссылок на изображения.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        backend_url: str,
        storage: Optional[LocalStorage] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self.http = http
        self.backend_url = backend_url.rstrip("/")
        self.storage = storage
        self.storage_key = storage_key

    # ——— Границы кампуса ———

    async def load_boundaries(self) -> Result[list[list[float]]]:
        try:
            data = await self._send("GET", "/api/boundaries", "load boundaries", headers=_JSON_NO_CACHE)
            boundaries = data.get("boundaries") if isinstance(data, dict) else None
            if not isinstance(boundaries, list):
                raise UpstreamError("Failed to load boundaries: malformed response")
            points = _as_points(boundaries)
        except Exception as e:
            logger.error(f"Error loading boundaries: {e}")
            cached = self._load_from_local_storage()
            if cached is not None:
                return Success(cached)
            return Failure(str(e))

        if len(points) >= MIN_BOUNDARY_POINTS:
            self._save_to_local_storage(points)
        return Success(points)

    async def save_boundaries(self, boundaries: Sequence[Sequence[float]]) -> str:
        try:
            points = _as_points(boundaries)
            # Оптимистично кладём копию локально, но только валидный контур
            if len(points) >= MIN_BOUNDARY_POINTS:
                self._save_to_local_storage(points)
            data = await self._send("POST", "/api/boundaries", "save boundaries", json={"boundaries": points})
            message = data.get("message") if isinstance(data, dict) else None
            return message or "Boundaries saved successfully"
        except Exception as e:
            logger.error(f"Error saving boundaries: {e}")
            return f"Error: {str(e) or 'Unknown error'}"

    def _save_to_local_storage(self, boundaries: list[list[float]]) -> None:
        if self.storage is None:
            return
        try:
            self.storage.set_item(self.storage_key, json.dumps(boundaries))
            logger.info("Successfully saved boundaries to local storage")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to save boundaries to local storage: {e}")

    def _load_from_local_storage(self) -> Optional[list[list[float]]]:
        if self.storage is None:
            return None
        try:
            stored = self.storage.get_item(self.storage_key)
            if not stored:
                return None
            parsed = json.loads(stored)
            if isinstance(parsed, list) and len(parsed) >= MIN_BOUNDARY_POINTS:
                logger.info("Successfully loaded boundaries from local storage")
                return _as_points(parsed)
            return None
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load boundaries from local storage: {e}")
            return None

    # ——— Здания ———

    async def load_buildings(self) -> Result[list]:
        try:
            logger.info("Fetching buildings from local API proxy")
            resp = await self.http.get("/api/buildings", headers=_JSON_NO_CACHE)
            logger.debug(f"Response status: {resp.status_code}")
            if resp.is_error:
                raise UpstreamError(f"Failed to load buildings: {resp.reason_phrase}", status_code=resp.status_code)
            return Success(extract_buildings(resp.json()))
        except Exception as e:
            logger.error(f"Error loading buildings: {e}")
            return Failure(str(e))

    async def load_building_by_slug(self, slug: str) -> Result[Any]:
        try:
            logger.info(f"Fetching building with slug '{slug}' from local API proxy")
            resp = await self.http.get(f"/api/buildings/{slug}", headers=_JSON_NO_CACHE)
            if resp.is_error:
                raise UpstreamError(f"Failed to load building: {resp.reason_phrase}", status_code=resp.status_code)
            return Success(resp.json())
        except Exception as e:
            logger.error(f"Error loading building with slug {slug}: {e}")
            return Failure(str(e))

    async def create_building(self, building_data: dict) -> Any:
        return await self._send(
            "POST", f"{self.backend_url}/buildings/create", "create building", json=building_data
        )

    async def update_building(self, slug: str, building_data: dict) -> Any:
        return await self._send(
            "PUT", f"{self.backend_url}/buildings/{slug}", "update building", json=building_data
        )

    async def upload_building_image(
        self,
        slug: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Any:
        files = {"file": (filename, content, content_type)}
        return await self._send("POST", f"/api/buildings/{slug}/upload", "upload image", files=files)

    async def save_buildings(self, buildings: list[dict]) -> str:
        data = await self._send("POST", "/api/buildings", "save buildings", json=buildings)
        message = data.get("message") if isinstance(data, dict) else None
        return message or "Buildings saved successfully"

    def get_building_image_url(self, slug: str) -> str:
        return building_image_url(self.backend_url, slug)

    async def _send(self, method: str, url: str, action: str, **kwargs) -> Any:
        try:
            resp = await self.http.request(method, url, **kwargs)
            if resp.is_error:
                raise UpstreamError(f"Failed to {action}: {resp.reason_phrase}", status_code=resp.status_code)
            return resp.json()
        except UpstreamError as e:
            logger.error(f"Error during '{action}': {e}")
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error during '{action}': {e}")
            raise UpstreamError(f"Failed to {action}: {e}") from e
