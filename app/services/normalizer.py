import logging
from typing import Any, Iterable

from pydantic import ValidationError

from app.schemas.building import Building

logger = logging.getLogger(__name__)

# Ключи, под которыми бэкенд может завернуть список зданий (в порядке приоритета)
ENVELOPE_KEYS = ("buildings", "data", "results")


def extract_buildings(payload: Any) -> list:
    """
    Достаёт список зданий из ответа бэкенда неизвестной формы.

    - список возвращается как есть;
    - у словаря ищется список под ключом buildings, затем data, затем results;
    - всё остальное (None, строка, число, словарь без подходящих ключей) -> [].

    Ошибок не бросает: непонятный ответ означает «зданий нет».
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def parse_buildings(records: Iterable[Any]) -> list[Building]:
    """Валидирует записи в Building, пропуская те, у которых нет пригодных координат."""
    buildings: list[Building] = []
    for index, record in enumerate(records):
        try:
            buildings.append(Building.model_validate(record))
        except ValidationError as e:
            logger.debug(f"Пропускаем запись здания #{index}: {e.error_count()} ошибок валидации")
    return buildings
