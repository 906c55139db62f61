import logging
from typing import Any

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import (
    get_app_title,
    get_db_session,
    get_default_position,
    get_map_zoom,
    get_navigation_backend,
)
from app.exceptions import NotFoundError, UpstreamError
from app.schemas.building import Building, BuildingUpdate, Coordinates
from app.schemas.map import CampusMapView
from app.services import boundary as boundary_service
from app.services.location_picker import LocationPicker, building_markers
from app.services.navigation import NavigationBackend
from app.services.normalizer import extract_buildings, parse_buildings
from app.web.templates import render_campus_map, render_location_picker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Map"])


async def _load_marker_buildings(backend: NavigationBackend) -> list[Building]:
    """Здания для маркеров; недоступный бэкенд означает просто карту без зданий."""
    try:
        payload = await backend.list_buildings()
    except UpstreamError as e:
        logger.warning(f"Не удалось загрузить здания для карты: {e}")
        return []
    return parse_buildings(extract_buildings(payload))


async def _get_building_or_404(backend: NavigationBackend, slug: str) -> Any:
    try:
        return await backend.get_building(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


def _coordinates_of(building: Any) -> Coordinates | None:
    if not isinstance(building, dict):
        return None
    try:
        return Coordinates.model_validate(building.get("coordinates"))
    except ValidationError:
        return None


@router.get("/", response_class=HTMLResponse, summary="Карта кампуса")
async def campus_map_page(
    db: AsyncSession = Depends(get_db_session),
    backend: NavigationBackend = Depends(get_navigation_backend),
    default_position: Coordinates = Depends(get_default_position),
    zoom: int = Depends(get_map_zoom),
    title: str = Depends(get_app_title),
):
    points = await boundary_service.load_boundary_points(db)
    buildings = await _load_marker_buildings(backend)
    view = CampusMapView(
        center=default_position,
        zoom=zoom,
        boundaries=points,
        markers=building_markers(buildings),
    )
    return render_campus_map(title, view.model_dump())


@router.get(
    "/admin/buildings/{slug}/location",
    response_class=HTMLResponse,
    summary="Выбор местоположения здания",
    description="Страница выбора точки на карте. Необязательные lat/lng в query переопределяют начальную позицию."
)
async def location_picker_page(
    slug: str,
    lat: float | None = None,
    lng: float | None = None,
    saved: bool = False,
    backend: NavigationBackend = Depends(get_navigation_backend),
    default_position: Coordinates = Depends(get_default_position),
    zoom: int = Depends(get_map_zoom),
):
    building = await _get_building_or_404(backend, slug)
    picker = LocationPicker(
        lambda position: None,
        initial_position=_coordinates_of(building),
        buildings=await _load_marker_buildings(backend),
        default_position=default_position,
        zoom=zoom,
    )
    if lat is not None and lng is not None:
        picker.set_initial_position(Coordinates(lat=lat, lng=lng))

    name = building.get("name", slug) if isinstance(building, dict) else slug
    return render_location_picker(
        f"{name}: location",
        picker.view().model_dump(),
        action=f"/admin/buildings/{slug}/location",
        saved=saved,
    )


@router.post(
    "/admin/buildings/{slug}/location",
    summary="Сохранить местоположение здания",
    description="Применяет значения полей lat/lng (нечисловые игнорируются) и обновляет здание на бэкенде."
)
async def set_building_location(
    slug: str,
    lat: str = Form(""),
    lng: str = Form(""),
    backend: NavigationBackend = Depends(get_navigation_backend),
    default_position: Coordinates = Depends(get_default_position),
):
    building = await _get_building_or_404(backend, slug)
    initial = _coordinates_of(building)
    selections: list[Coordinates] = []
    picker = LocationPicker(
        selections.append,
        initial_position=initial,
        default_position=default_position,
    )
    picker.edit_latitude(lat)
    picker.edit_longitude(lng)

    changed = bool(selections) and picker.position != initial
    if changed:
        try:
            update = BuildingUpdate(coordinates=picker.position)
            await backend.update_building(slug, update.model_dump(exclude_none=True))
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except UpstreamError as e:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
        logger.info(f"Здание '{slug}' перемещено в ({picker.position.lat}, {picker.position.lng})")
    else:
        logger.info(f"Местоположение здания '{slug}' не изменилось")

    suffix = "?saved=true" if changed else ""
    return RedirectResponse(
        url=f"/admin/buildings/{slug}/location{suffix}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
