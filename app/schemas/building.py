from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    lat: float = Field(..., description="Широта")
    lng: float = Field(..., description="Долгота")


class BuildingBase(BaseModel):
    name: str = Field(..., description="Название здания")
    coordinates: Coordinates = Field(..., description="Координаты здания")
    image: Optional[str] = Field(None, description="Ссылка на изображение или slug")
    description: Optional[str] = Field(None, description="Описание здания")


class BuildingUpdate(BaseModel):
    name: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    image: Optional[str] = None
    description: Optional[str] = None


class Building(BuildingBase):
    """Здание в том виде, в каком его отдаёт навигационный бэкенд (лишние поля сохраняются)."""
    slug: str = Field(..., description="Уникальный slug здания")

    model_config = ConfigDict(extra="allow")
