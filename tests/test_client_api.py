import json

import httpx
import pytest

from app.client import CampusMapClient, Failure, LocalStorage, Success
from app.client.api import DEFAULT_STORAGE_KEY
from app.exceptions import UpstreamError

pytestmark = pytest.mark.asyncio

APP_URL = "http://campus.test"
BACKEND_URL = "https://navigationbackend.example"
TRIANGLE = [[6.5, 3.3], [6.5, 3.4], [6.6, 3.3]]


class FakeCampusServer:
    """Минимальный сервер /api/boundaries с хранением в памяти."""

    def __init__(self):
        self.boundaries = []
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/boundaries":
            if request.method == "POST":
                self.boundaries = json.loads(request.content)["boundaries"]
                return httpx.Response(200, json={"message": "Boundaries saved successfully", "boundaries": self.boundaries})
            return httpx.Response(200, json={"boundaries": self.boundaries})
        return httpx.Response(404, json={"detail": "Not Found"})


def failing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "storage.json"))


def make_client(handler, storage=None) -> CampusMapClient:
    http = httpx.AsyncClient(base_url=APP_URL, transport=httpx.MockTransport(handler))
    return CampusMapClient(http, BACKEND_URL, storage=storage)


async def test_save_boundaries_failing_transport_returns_error_string(storage):
    client = make_client(failing_handler, storage)
    message = await client.save_boundaries(TRIANGLE)
    assert message.startswith("Error:")
    assert "Connection refused" in message

async def test_save_boundaries_http_error_returns_error_string():
    client = make_client(lambda request: httpx.Response(500, json={}))
    message = await client.save_boundaries(TRIANGLE)
    assert message == "Error: Failed to save boundaries: Internal Server Error"

async def test_boundary_round_trip():
    server = FakeCampusServer()
    client = make_client(server.handler)
    assert await client.save_boundaries(TRIANGLE) == "Boundaries saved successfully"
    result = await client.load_boundaries()
    assert result == Success(TRIANGLE)

async def test_load_boundaries_failure_without_cache():
    client = make_client(failing_handler)
    result = await client.load_boundaries()
    assert isinstance(result, Failure)
    assert result.ok is False
    assert "Connection refused" in result.reason

async def test_load_boundaries_falls_back_to_local_storage(storage):
    # Сохранение не удалось, но копия осталась локально
    client = make_client(failing_handler, storage)
    await client.save_boundaries(TRIANGLE)
    assert json.loads(storage.get_item(DEFAULT_STORAGE_KEY)) == TRIANGLE
    result = await client.load_boundaries()
    assert result == Success(TRIANGLE)

async def test_local_storage_needs_three_points(storage):
    storage.set_item(DEFAULT_STORAGE_KEY, json.dumps([[6.5, 3.3], [6.5, 3.4]]))
    client = make_client(failing_handler, storage)
    assert isinstance(await client.load_boundaries(), Failure)

async def test_corrupt_local_storage_is_ignored(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    client = make_client(failing_handler, LocalStorage(str(path)))
    assert isinstance(await client.load_boundaries(), Failure)
    assert (await client.save_boundaries(TRIANGLE)).startswith("Error:")

async def test_load_boundaries_malformed_payload():
    client = make_client(lambda request: httpx.Response(200, json={"message": "ok"}))
    result = await client.load_boundaries()
    assert isinstance(result, Failure)

async def test_load_buildings_normalizes_envelope():
    buildings = [{"slug": "library", "name": "Library"}]
    seen = {}

    def handler(request):
        seen["headers"] = request.headers
        return httpx.Response(200, json={"data": buildings})

    client = make_client(handler)
    result = await client.load_buildings()
    assert result == Success(buildings)
    assert seen["headers"]["accept"] == "application/json"
    assert seen["headers"]["cache-control"] == "no-cache"

async def test_load_buildings_failure_degrades():
    client = make_client(lambda request: httpx.Response(503))
    result = await client.load_buildings()
    assert result == Failure("Failed to load buildings: Service Unavailable")

async def test_load_building_by_slug():
    def handler(request):
        assert request.url.path == "/api/buildings/library"
        return httpx.Response(200, json={"slug": "library"})

    client = make_client(handler)
    assert await client.load_building_by_slug("library") == Success({"slug": "library"})
    failing = make_client(failing_handler)
    assert isinstance(await failing.load_building_by_slug("library"), Failure)

async def test_create_and_update_go_to_backend():
    calls = []

    def handler(request):
        calls.append((request.method, str(request.url), json.loads(request.content)))
        return httpx.Response(200, json={"slug": "library"})

    client = make_client(handler)
    await client.create_building({"name": "Library"})
    await client.update_building("library", {"name": "Main Library"})
    assert calls == [
        ("POST", f"{BACKEND_URL}/buildings/create", {"name": "Library"}),
        ("PUT", f"{BACKEND_URL}/buildings/library", {"name": "Main Library"}),
    ]

async def test_create_building_reraises():
    client = make_client(lambda request: httpx.Response(400, json={}))
    with pytest.raises(UpstreamError) as exc_info:
        await client.create_building({"name": "Library"})
    assert str(exc_info.value) == "Failed to create building: Bad Request"
    assert exc_info.value.status_code == 400

async def test_update_building_transport_error_reraises():
    client = make_client(failing_handler)
    with pytest.raises(UpstreamError):
        await client.update_building("library", {})

async def test_upload_building_image_multipart():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content
        return httpx.Response(200, json={"image": "library.png"})

    client = make_client(handler)
    result = await client.upload_building_image("library", "library.png", b"PNGDATA", "image/png")
    assert result == {"image": "library.png"}
    assert seen["path"] == "/api/buildings/library/upload"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="file"' in seen["body"] and b"PNGDATA" in seen["body"]

async def test_upload_building_image_reraises():
    client = make_client(lambda request: httpx.Response(413))
    with pytest.raises(UpstreamError):
        await client.upload_building_image("library", "big.png", b"x")

async def test_save_buildings():
    client = make_client(lambda request: httpx.Response(200, json={}))
    assert await client.save_buildings([{"name": "Library"}]) == "Buildings saved successfully"
    failing = make_client(lambda request: httpx.Response(502))
    with pytest.raises(UpstreamError):
        await failing.save_buildings([])

async def test_building_image_url():
    client = make_client(failing_handler)
    assert client.get_building_image_url("library") == f"{BACKEND_URL}/buildings/library/image"
    assert client.get_building_image_url("https://cdn.example/lib.png") == "https://cdn.example/lib.png"

async def test_local_storage_set_get_remove(tmp_path):
    storage = LocalStorage(str(tmp_path / "nested" / "storage.json"))
    assert storage.get_item("missing") is None
    storage.set_item(DEFAULT_STORAGE_KEY, "[]")
    assert storage.get_item(DEFAULT_STORAGE_KEY) == "[]"
    storage.remove_item(DEFAULT_STORAGE_KEY)
    assert storage.get_item(DEFAULT_STORAGE_KEY) is None

async def test_save_invalid_polygon_keeps_last_good_cache(storage):
    client = make_client(failing_handler, storage)
    await client.save_boundaries(TRIANGLE)
    message = await client.save_boundaries(TRIANGLE[:2])
    assert message.startswith("Error:")
    assert json.loads(storage.get_item(DEFAULT_STORAGE_KEY)) == TRIANGLE
    assert await client.load_boundaries() == Success(TRIANGLE)

async def test_boundary_transport_errors_name_the_action():
    client = make_client(failing_handler)
    assert (await client.save_boundaries(TRIANGLE)) == "Error: Failed to save boundaries: Connection refused"
    result = await client.load_boundaries()
    assert result == Failure("Failed to load boundaries: Connection refused")

async def test_client_built_from_settings(tmp_path, monkeypatch):
    from app.api.deps import build_campus_map_client
    from app.core.config import settings

    path = tmp_path / "cache.json"
    monkeypatch.setattr(settings, "LOCAL_STORAGE_PATH", str(path))
    monkeypatch.setattr(settings, "BOUNDARY_STORAGE_KEY", "test-boundaries")
    http = httpx.AsyncClient(base_url=APP_URL, transport=httpx.MockTransport(failing_handler))
    client = build_campus_map_client(http)
    assert client.backend_url == settings.NAVIGATION_API_URL.rstrip("/")
    assert client.storage_key == "test-boundaries"

    await client.save_boundaries(TRIANGLE)
    assert json.loads(LocalStorage(str(path)).get_item("test-boundaries")) == TRIANGLE
