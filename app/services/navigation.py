import logging
from typing import Any

import httpx

from app.exceptions import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

__all__ = [
    "NavigationBackend",
    "building_image_url",
]


def building_image_url(backend_url: str, slug: str) -> str:
    """
    URL изображения здания. Если вместо slug уже передан полный URL, возвращаем его как есть.
    """
    if slug.startswith("http"):
        return slug
    return f"{backend_url.rstrip('/')}/buildings/{slug}/image"


class NavigationBackend:
    """
    Шлюз к удалённому навигационному бэкенду (здания, изображения).
    http — httpx.AsyncClient с base_url бэкенда.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self.base_url = str(http.base_url).rstrip("/")

    async def list_buildings(self) -> Any:
        """Сырой JSON списка зданий. Форма ответа не гарантирована, см. normalizer."""
        return await self._request("GET", "/buildings", action="load buildings")

    async def get_building(self, slug: str) -> Any:
        return await self._request("GET", f"/buildings/{slug}", action="load building", not_found=slug)

    async def create_building(self, data: dict) -> Any:
        return await self._request("POST", "/buildings/create", action="create building", json=data)

    async def update_building(self, slug: str, data: dict) -> Any:
        return await self._request("PUT", f"/buildings/{slug}", action="update building", json=data, not_found=slug)

    async def upload_building_image(
        self,
        slug: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> Any:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        return await self._request("POST", f"/buildings/{slug}/upload", action="upload image", files=files)

    def image_url(self, slug: str) -> str:
        return building_image_url(self.base_url, slug)

    async def _request(self, method: str, url: str, action: str, not_found: str | None = None, **kwargs) -> Any:
        try:
            resp = await self.http.request(method, url, headers={"Accept": "application/json"}, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Бэкенд недоступен ({method} {url}): {e}")
            raise UpstreamError(f"Failed to {action}: {e}") from e

        if resp.status_code == 404 and not_found is not None:
            raise NotFoundError(f"Building '{not_found}' not found")
        if resp.is_error:
            logger.error(f"Бэкенд ответил {resp.status_code} на {method} {url}")
            raise UpstreamError(f"Failed to {action}: {resp.reason_phrase}", status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(f"Failed to {action}: invalid JSON in response") from e
