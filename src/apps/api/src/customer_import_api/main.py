"""FastAPI application entrypoint."""
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_import_api.logging import configure_logging
from customer_import_api.routers import health, imports
from customer_import_api.services import build_coordinator
from customer_import_api.settings import get_settings

configure_logging(get_settings().log_level)
logger = structlog.get_logger()

app = FastAPI(title="Customer Import API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(imports.router, prefix="/api")


@app.on_event("startup")
def startup():
    """Build the import pipeline."""
    settings = get_settings()
    logger.info("initializing_import_pipeline", sink_backend=settings.sink_backend)
    app.state.coordinator = build_coordinator(settings)
    app.state.background_tasks = set()


@app.on_event("shutdown")
async def shutdown():
    """Stop running imports."""
    logger.info("stopping_imports", running=len(app.state.coordinator.list_active()))
    await app.state.coordinator.shutdown()
