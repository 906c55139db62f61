from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Окружение: production, development, testing
    ENV: str = Field(
        "production",
        description="Application environment",
    )
    DEBUG: bool = Field(
        False,
        description="Turn on debug mode (reload, detailed errors)",
    )
    APP_NAME: str = Field(
        "YabaTech Campus Map",
        description="Application name for docs/title",
    )

    # Локальная БД для границ кампуса
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./campus_map.db",
        description="SQLAlchemy async URL for boundary storage",
    )

    # Удалённый навигационный бэкенд
    NAVIGATION_API_URL: str = Field(
        "https://navigationbackend.onrender.com",
        description="Base URL of the navigation backend",
    )
    REQUEST_TIMEOUT: float = Field(
        10.0,
        description="Timeout (seconds) for backend HTTP calls",
    )

    # Локальное хранилище (аналог localStorage браузера)
    BOUNDARY_STORAGE_KEY: str = Field(
        "yabatech-campus-boundaries",
        description="Key under which boundaries are cached locally",
    )
    LOCAL_STORAGE_PATH: str = Field(
        ".campus_map_storage.json",
        description="JSON file backing the local key/value storage",
    )

    # Карта
    DEFAULT_LAT: float = Field(6.51771, description="Default campus latitude")
    DEFAULT_LNG: float = Field(3.37534, description="Default campus longitude")
    MAP_ZOOM: int = Field(17, description="Initial map zoom")

    # Логи
    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level",
    )
    LOG_DIR: str = Field(
        "logs",
        description="Directory for log files",
    )
    LOG_FILENAME: str = Field(
        "campus_map.log",
        description="Log file name",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


settings = Settings()
