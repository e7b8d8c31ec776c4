"""
API routes for the loan appraisal service.
"""

from fastapi import APIRouter

from loan_appraisal.api import calculations

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
