"""
Financial Calculation Engine

Loan amortization and investment appraisal. Every function here is pure:
results depend only on the inputs passed in.
"""

from loan_appraisal.calculations import (
    advice,
    amortization,
    analysis,
    appraisal,
    irr,
    models,
    presets,
)
from loan_appraisal.calculations.amortization import compute_schedule
from loan_appraisal.calculations.appraisal import compute_appraisal

__all__ = [
    "advice",
    "amortization",
    "analysis",
    "appraisal",
    "irr",
    "models",
    "presets",
    "compute_schedule",
    "compute_appraisal",
]
