from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.db.models.boundary import CampusBoundary

DEFAULT_BOUNDARY_NAME = "campus"
# Граница по умолчанию, если ничего не сохранено
DEFAULT_BOUNDARIES: list[list[float]] = []


async def get_boundary(db: AsyncSession, name: str = DEFAULT_BOUNDARY_NAME) -> CampusBoundary | None:
    result = await db.execute(select(CampusBoundary).where(CampusBoundary.name == name))
    return result.scalars().first()


async def load_boundary_points(db: AsyncSession, name: str = DEFAULT_BOUNDARY_NAME) -> list[list[float]]:
    boundary = await get_boundary(db, name)
    if not boundary:
        return list(DEFAULT_BOUNDARIES)
    return [list(point) for point in boundary.points]


async def save_boundary_points(
    db: AsyncSession,
    points: list[list[float]],
    name: str = DEFAULT_BOUNDARY_NAME,
) -> CampusBoundary:
    """Полностью заменяет сохранённый контур (порядок точек сохраняется)."""
    boundary = await get_boundary(db, name)
    if boundary is None:
        boundary = CampusBoundary(name=name, points=points)
        db.add(boundary)
    else:
        boundary.points = points
    await db.commit()
    await db.refresh(boundary)
    return boundary
