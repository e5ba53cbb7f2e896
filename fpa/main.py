"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fpa.config import settings
from fpa.database import AsyncSessionLocal, init_db
from fpa.errors import NotFoundError, StoreError, ValidationError
from fpa.lookups import routes as lookup_routes
from fpa.records import routes as record_routes
from fpa.reports import routes as report_routes
from fpa.scenarios import routes as scenario_routes
from fpa.seed import routes as seed_routes
from fpa.seed.demo import seed_demo_data
from fpa.store.sql import SqlRecordStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and optionally seed demo data on startup."""
    await init_db()
    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as db:
            await seed_demo_data(SqlRecordStore(db))
    yield


# Create FastAPI app
app = FastAPI(
    title="Mini FP&A API",
    description="Versioned planning scenarios, cloning with adjustments and scenario comparison",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal storage error"})


# Include routers
app.include_router(record_routes.router, prefix=f"{settings.API_V1_PREFIX}/finance", tags=["Financial Records"])
app.include_router(record_routes.audit_router, prefix=f"{settings.API_V1_PREFIX}/records", tags=["Audit"])
app.include_router(scenario_routes.router, prefix=f"{settings.API_V1_PREFIX}/scenarios", tags=["Scenarios"])
app.include_router(report_routes.router, prefix=f"{settings.API_V1_PREFIX}/reports", tags=["Reports"])
app.include_router(lookup_routes.router, prefix=f"{settings.API_V1_PREFIX}/lookup", tags=["Lookup"])
app.include_router(seed_routes.router, prefix=settings.API_V1_PREFIX, tags=["Seed"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Mini FP&A API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fpa.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
