import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from fairscore.config import get_settings
from fairscore.core.dependencies import get_sync_coordinator
from fairscore.logging_config import configure_logging

# IMPORT ROUTERS
from fairscore.routers.admin import router as admin_router
from fairscore.routers.errors import register_exception_handlers
from fairscore.routers.evaluator_portal import router as evaluator_portal_router
from fairscore.routers.evaluators import router as evaluators_router
from fairscore.routers.exports import router as exports_router
from fairscore.routers.health import router as health_router
from fairscore.routers.panels import router as panels_router
from fairscore.routers.projects import router as projects_router
from fairscore.routers.scores import router as scores_router
from fairscore.routers.settings import router as settings_router
from fairscore.routers.sync import router as sync_router

logger = logging.getLogger(__name__)

settings = get_settings()


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Settings"},
    {"name": "Projects"},
    {"name": "Evaluators"},
    {"name": "Panels"},
    {"name": "Evaluator"},
    {"name": "Scores"},
    {"name": "Exports"},
    {"name": "Sync"},
    {"name": "Admin"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
register_exception_handlers(app)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)            # Health
app.include_router(settings_router)          # Settings
app.include_router(projects_router)          # Projects
app.include_router(evaluators_router)        # Evaluators
app.include_router(panels_router)            # Panels
app.include_router(evaluator_portal_router)  # Evaluator
app.include_router(scores_router)            # Scores
app.include_router(exports_router)           # Exports
app.include_router(sync_router)              # Sync
app.include_router(admin_router)             # Admin


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")

    if settings.LOAD_REMOTE_ON_STARTUP:
        loaded = await get_sync_coordinator().load_from_remote()
        logger.info("Event data loaded from remote store" if loaded else "Starting with local defaults")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    sync = get_sync_coordinator()
    await sync.wait_for_pushes()
    if sync.backlog:
        logger.warning(f"Shutting down with {len(sync.backlog)} results not pushed to the remote store")
    logger.info(f"Shutting down {settings.APP_NAME}")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fairscore.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
