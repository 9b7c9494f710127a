import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dealtracker.config import configure_logging, get_settings
from dealtracker.services.ai_generator import AISettings, DealNarrativeGenerator

# Import routers
from dealtracker.api import (
    business_units,
    comments,
    custom_fields,
    dashboard,
    deals,
    resources,
    tags,
    users,
)

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build process-wide collaborators on startup.
    The narrative generator lives on app.state for the life of the process.
    """
    app.state.narrative_generator = DealNarrativeGenerator(AISettings())

    if settings.create_tables_on_startup:
        # In production, use Alembic migrations instead
        from dealtracker.db.base import Base
        from dealtracker.db.database import engine
        import dealtracker.models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    yield


app = FastAPI(
    title="Deal Tracker",
    description="API for tracking business development deals",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": str(exc) or "Internal Server Error"})


# Include routers
app.include_router(users.router, prefix="/api")
app.include_router(business_units.router, prefix="/api")
app.include_router(tags.router, prefix="/api")
app.include_router(custom_fields.router, prefix="/api")
app.include_router(deals.router, prefix="/api")
app.include_router(resources.router, prefix="/api")
app.include_router(comments.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": "Deal Tracker API",
        "status": "running",
        "version": "0.1.0",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
