# Клиентская библиотека кампусной карты (аналог браузерных API-хелперов)
from .api import CampusMapClient
from .result import Failure, Result, Success
from .storage import LocalStorage

__all__ = [
    "CampusMapClient",
    "Failure",
    "LocalStorage",
    "Result",
    "Success",
]
