from typing import List
from pydantic import BaseModel, Field

from app.schemas.building import Coordinates


class BuildingMarker(BaseModel):
    key: str = Field(..., description="Ключ маркера: имя здания или map-building-{index}")
    lat: float
    lng: float
    opacity: float = Field(0.7, description="Прозрачность маркера")
    interactive: bool = Field(False, description="Маркеры зданий только для ориентира")


class MapView(BaseModel):
    center: Coordinates = Field(..., description="Центр карты")
    zoom: int = Field(..., description="Масштаб карты")
    selected: Coordinates = Field(..., description="Выбранная точка")
    markers: List[BuildingMarker] = Field(default_factory=list, description="Существующие здания")


class CampusMapView(BaseModel):
    center: Coordinates
    zoom: int
    boundaries: List[List[float]] = Field(default_factory=list, description="Контур кампуса [[lat, lng], …]")
    markers: List[BuildingMarker] = Field(default_factory=list)
