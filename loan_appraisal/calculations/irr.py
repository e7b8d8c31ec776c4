"""
IRR and NPV Calculations

Implements IRR using Newton-Raphson method, matching Excel's IRR function
for periodic (yearly) cash flows.
"""

import logging
from typing import Dict, List, Sequence

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 50
TOLERANCE = 1e-5
DEFAULT_GUESS = 0.1


def _discount_factors(rate: float, periods: int, offset: int = 0) -> np.ndarray:
    return np.power(1.0 + rate, np.arange(periods, dtype=float) + offset)


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Annual discount rate (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    with np.errstate(all="ignore"):
        return float(np.sum(flows / _discount_factors(discount_rate, len(flows))))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows), dtype=float)
    with np.errstate(all="ignore"):
        return float(np.sum(-periods * flows / _discount_factors(rate, len(flows), 1)))


def calculate_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> float:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    There is no bracketing fallback. When the derivative vanishes or the
    iteration budget runs out the current estimate is returned as is, which
    may be far from a root (or not finite) for cash flows with several sign
    changes.

    Args:
        cash_flows: Array of periodic cash flows
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        IRR as decimal (e.g., 0.15 for 15%)
    """
    rate = guess

    for _ in range(MAX_ITERATIONS):
        npv = calculate_npv(cash_flows, rate)
        dnpv = _npv_derivative(cash_flows, rate)

        if abs(dnpv) < TOLERANCE:
            logger.debug("IRR stopped at %s: derivative too small", rate)
            return rate

        new_rate = rate - npv / dnpv

        if abs(new_rate - rate) < TOLERANCE:
            return new_rate

        rate = new_rate

    logger.debug("IRR did not converge after %d iterations", MAX_ITERATIONS)
    return rate


def profile_max_rate(irr_percent: float, wacc: float) -> float:
    """Upper bound (in percent) of the discount-rate axis for an NPV profile."""
    if 0 < irr_percent < 1000:
        max_rate = max(irr_percent * 1.5, wacc * 1.5, 30)
    else:
        max_rate = max(wacc * 2, 40)
    return min(max_rate, 100)


def npv_profile(
    cash_flows: Sequence[float], max_rate: float, steps: int = 40
) -> List[Dict[str, float]]:
    """
    Sample NPV across discount rates from 0% to ``max_rate`` percent.

    Returns:
        ``steps + 1`` points of ``{"rate": percent, "npv": value}``
    """
    step = max_rate / steps
    return [
        {"rate": i * step, "npv": calculate_npv(cash_flows, i * step / 100)}
        for i in range(steps + 1)
    ]
