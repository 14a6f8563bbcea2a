"""ClipRoom Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cliproom import __version__
from cliproom.config import settings
from cliproom.database import init_db
from cliproom.errors import setup_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database on startup."""
    init_db()
    logger.info("Database ready at %s (environment=%s)", settings.db_path, settings.environment)
    for name in settings.insecure_defaults():
        logger.warning("%s is not set; using the insecure built-in default", name)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Shared clipboard rooms with encrypted storage",
    version=__version__,
    lifespan=lifespan,
)

setup_exception_handlers(app)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# --- Register API routers ---
from cliproom.api.auth import router as auth_router  # noqa: E402
from cliproom.api.rooms import router as rooms_router  # noqa: E402
from cliproom.api.clipboard import router as clipboard_router  # noqa: E402
from cliproom.api.uploads import router as uploads_router, files_router  # noqa: E402
from cliproom.api.external import router as external_router  # noqa: E402

API_PREFIX = "/api"

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(rooms_router, prefix=API_PREFIX)
app.include_router(clipboard_router, prefix=API_PREFIX)
app.include_router(uploads_router, prefix=API_PREFIX)
app.include_router(external_router, prefix=API_PREFIX)
app.include_router(files_router)


@app.get("/")
def root():
    """Server info."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "status": "running",
    }


@app.get("/api/health")
def health():
    return {"status": "ok"}
