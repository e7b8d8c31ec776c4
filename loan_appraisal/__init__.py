"""
Loan amortization and investment appraisal.
"""

__version__ = "0.1.0"
