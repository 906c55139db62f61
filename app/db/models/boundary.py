from sqlalchemy import Column, Integer, String, JSON, DateTime, func

from app.db.base import Base


class CampusBoundary(Base):
    __tablename__ = "campus_boundaries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, nullable=False, comment="Имя контура (по умолчанию 'campus')")

    points = Column(
        JSON,
        nullable=False,
        comment="Упорядоченный список точек [[lat, lng], …] границы кампуса"
    )

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
