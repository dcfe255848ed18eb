"""Backend API application, mounted under /api by the root server.
Run standalone with:  uvicorn backend.app:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.core.logging import add_logging_middleware
from backend.core.settings import settings
from backend.services.workspace_storage import WorkspaceStorageService

# Routers
from backend.api.root import router as root_router
from backend.api.workspaces import router as workspaces_router

logger = logging.getLogger("backend")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Best-effort storage bootstrap; the API still starts when storage is unavailable."""
    storage = WorkspaceStorageService.get_instance()
    if storage.configured and not await storage.initialize_main_container():
        logger.warning("Workspace storage is not ready; folder operations will fail")
    yield
    await storage.close()


app = FastAPI(lifespan=lifespan)

# middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
add_logging_middleware(app)

for r in (
    root_router,
    workspaces_router,
):
    app.include_router(r)
