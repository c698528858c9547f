import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from filmcraft.core.config import settings
from filmcraft.db import Base, engine
from filmcraft import models  # noqa: F401  registers tables on Base
from filmcraft.api.routes import (
    auth,
    chat,
    collaborators,
    health,
    planning,
    projects,
    realtime,
    scenes,
    scripts,
    shots,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)


app.include_router(health.router, prefix=settings.API_V1_PREFIX)
app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(projects.router, prefix=settings.API_V1_PREFIX)
app.include_router(planning.router, prefix=settings.API_V1_PREFIX)
app.include_router(scripts.router, prefix=settings.API_V1_PREFIX)
app.include_router(scenes.router, prefix=settings.API_V1_PREFIX)
app.include_router(shots.router, prefix=settings.API_V1_PREFIX)
app.include_router(chat.router, prefix=settings.API_V1_PREFIX)
app.include_router(collaborators.router, prefix=settings.API_V1_PREFIX)
app.include_router(realtime.router, prefix=settings.API_V1_PREFIX)

# Public object storage (shot reference images)
os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
app.mount(settings.STORAGE_PUBLIC_URL, StaticFiles(directory=settings.MEDIA_ROOT), name="storage")
