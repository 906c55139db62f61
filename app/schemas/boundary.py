from typing import Annotated, List
from pydantic import BaseModel, Field

# [lat, lng]
BoundaryPoint = Annotated[List[float], Field(min_length=2, max_length=2)]


class BoundaryPayload(BaseModel):
    boundaries: List[BoundaryPoint] = Field(
        ...,
        min_length=3,
        description="Упорядоченный список точек [[lat, lng], …]; минимум 3 точки",
        examples=[[[6.5, 3.3], [6.5, 3.4], [6.6, 3.3]]],
    )


class BoundaryResponse(BaseModel):
    boundaries: List[List[float]] = Field(..., description="Текущая граница кампуса (пустая, если не задана)")


class BoundarySaveResponse(BoundaryResponse):
    message: str = Field(..., examples=["Boundaries saved successfully"])
