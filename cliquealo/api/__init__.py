"""
API routes for the credit simulator.
"""

from fastapi import APIRouter

from cliquealo.api import banks, calculations, credits

router = APIRouter()

# Include sub-routers
router.include_router(banks.router, prefix="/banks", tags=["banks"])
router.include_router(credits.router, prefix="/credits", tags=["credits"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
