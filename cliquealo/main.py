"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cliquealo.api import router as api_router
from cliquealo.calculations.errors import InvalidArgument, NumericInstability
from cliquealo.config import get_settings
from cliquealo.db.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Simulador de crédito automotriz y tablas de amortización",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
def on_startup():
    """Create tables that do not exist yet."""
    init_db()


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    """Reject invalid credit parameters with 400."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NumericInstability)
async def numeric_instability_handler(request: Request, exc: NumericInstability):
    """Credit parameters that cannot be computed."""
    logger.warning(f"Numeric instability on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}
