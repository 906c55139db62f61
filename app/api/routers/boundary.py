import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.schemas.boundary import BoundaryPayload, BoundaryResponse, BoundarySaveResponse
from app.services import boundary as boundary_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/boundaries", tags=["Boundary"])

@router.get(
    "",
    response_model=BoundaryResponse,
    summary="Получить границу кампуса",
    description="Возвращает сохранённый контур кампуса [[lat, lng], …]. Если контур не задан, пустой список."
)
async def get_boundaries(db: AsyncSession = Depends(get_db_session)):
    points = await boundary_service.load_boundary_points(db)
    return BoundaryResponse(boundaries=points)

@router.post(
    "",
    response_model=BoundarySaveResponse,
    summary="Сохранить границу кампуса",
    description="Полностью заменяет контур кампуса. Требуется минимум 3 точки, иначе 422."
)
async def save_boundaries(
    data: BoundaryPayload,
    db: AsyncSession = Depends(get_db_session)
):
    boundary = await boundary_service.save_boundary_points(db, data.boundaries)
    logger.info(f"Граница кампуса сохранена: {len(boundary.points)} точек")
    return BoundarySaveResponse(message="Boundaries saved successfully", boundaries=boundary.points)
