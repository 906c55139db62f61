from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.session import async_engine

from app.api.routers.health import router as health_router
from app.api.routers.boundary import router as boundary_router
from app.api.routers.building import router as building_router
from app.api.routers.map import router as map_router

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    setup_logging()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# Подключаем роутеры
app.include_router(health_router, tags=["health"])
app.include_router(boundary_router, tags=["boundaries"])
app.include_router(building_router, tags=["buildings"])
app.include_router(map_router, tags=["map"])
