import logging
from typing import Callable, Iterable, Optional

from app.schemas.building import Building, Coordinates
from app.schemas.map import BuildingMarker, MapView
from app.utils.math_utils import parse_float

logger = logging.getLogger(__name__)

# Главный корпус YabaTech
DEFAULT_CAMPUS_POSITION = Coordinates(lat=6.51771, lng=3.37534)
DEFAULT_ZOOM = 17
BUILDING_MARKER_OPACITY = 0.7

__all__ = [
    "DEFAULT_CAMPUS_POSITION",
    "DEFAULT_ZOOM",
    "LocationPicker",
    "building_markers",
]


def building_markers(buildings: Iterable[Building]) -> list[BuildingMarker]:
    """Неинтерактивные маркеры существующих зданий (только для ориентира)."""
    return [
        BuildingMarker(
            key=building.name or f"map-building-{index}",
            lat=building.coordinates.lat,
            lng=building.coordinates.lng,
            opacity=BUILDING_MARKER_OPACITY,
            interactive=False,
        )
        for index, building in enumerate(buildings)
    ]


class LocationPicker:
    """
    Состояние выбора точки на карте.

    Одна выбранная позиция синхронизируется между тремя представлениями:
    - клик по карте (click);
    - два числовых поля — широта и долгота (edit_latitude / edit_longitude);
    - внешняя начальная позиция (set_initial_position).
    Каждое изменение, сделанное пользователем, сразу уходит в on_location_select.
    """

    def __init__(
        self,
        on_location_select: Callable[[Coordinates], None],
        initial_position: Optional[Coordinates] = None,
        buildings: Iterable[Building] = (),
        default_position: Coordinates = DEFAULT_CAMPUS_POSITION,
        zoom: int = DEFAULT_ZOOM,
    ):
        self._on_location_select = on_location_select
        self._initial_position = initial_position
        self.position: Coordinates = initial_position or default_position
        self.center: Coordinates = self.position
        self.zoom = zoom
        self.markers = building_markers(buildings)

    def click(self, lat: float, lng: float) -> Coordinates:
        """Клик по карте: точка становится выбранной, колбэк вызывается сразу."""
        self._select(Coordinates(lat=lat, lng=lng))
        return self.position

    def edit_latitude(self, raw) -> bool:
        return self._edit_axis("lat", raw)

    def edit_longitude(self, raw) -> bool:
        return self._edit_axis("lng", raw)

    def set_initial_position(self, position: Optional[Coordinates]) -> None:
        """
        Внешняя начальная позиция изменилась: сбрасываем выбор и центрируем карту
        на новой точке, масштаб не трогаем. Колбэк не вызывается.
        """
        if position is None or position == self._initial_position:
            return
        self._initial_position = position
        self.position = position
        self.center = position
        logger.debug(f"Начальная позиция сброшена на ({position.lat}, {position.lng}), zoom={self.zoom}")

    def view(self) -> MapView:
        return MapView(
            center=self.center,
            zoom=self.zoom,
            selected=self.position,
            markers=self.markers,
        )

    def _edit_axis(self, axis: str, raw) -> bool:
        value = parse_float(raw)
        if value is None:
            # Не число: правку игнорируем, состояние не меняется
            return False
        self._select(self.position.model_copy(update={axis: value}))
        return True

    def _select(self, position: Coordinates) -> None:
        self.position = position
        self._on_location_select(position)
