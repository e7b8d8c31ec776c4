"""
Application services module.
"""

from loan_appraisal.services.calculator import (
    Analysis,
    CalculatorService,
    get_calculator_service,
)

__all__ = ["Analysis", "CalculatorService", "get_calculator_service"]
