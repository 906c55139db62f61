import os
import tempfile

# Настройки должны быть заданы до импорта app.*
_TMP_DIR = tempfile.mkdtemp(prefix="campus_map_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'campus_map.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["NAVIGATION_API_URL"] = "http://backend.test"

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_navigation_backend
from app.main import app
from app.services.navigation import NavigationBackend

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """
    Фейковый навигационный бэкенд на httpx.MockTransport.
    Неизвестный маршрут отвечает 404.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, json=None):
        self.routes[(method, path)] = (status_code, json)

    def fail_with(self, exc: Exception):
        self.routes = None
        self._exc = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.routes is None:
            raise self._exc
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not Found"})
        status_code, payload = self.routes[key]
        return httpx.Response(status_code, json=payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_backend():
    backend = FakeBackend()

    async def override():
        async with httpx.AsyncClient(base_url=BACKEND_URL, transport=backend.transport()) as http:
            yield NavigationBackend(http)

    app.dependency_overrides[get_navigation_backend] = override
    yield backend
    app.dependency_overrides.pop(get_navigation_backend, None)
