"""
Advice Message Catalog

Appraisal advice is assembled from independent fragments. Each fragment
pairs a guard with a template; the engine keeps the fragments whose guards
hold and joins them. Thresholds live here so the verdicts and the prose
read from the same numbers.
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, List

from loan_appraisal.calculations.models import LoanPurpose

# Personal affordability (DTI, percent)
DTI_SAFE_LIMIT = 30.0
DTI_CAUTION_LIMIT = 45.0
CAR_UPKEEP_DTI = 30.0
HOME_TERM_DTI = 40.0

# Business viability
DSCR_SAFE = 1.2
DSCR_COMFORTABLE = 1.5


@dataclass(frozen=True)
class AdviceContext:
    """Figures the advice templates may quote."""

    purpose: LoanPurpose
    grace_period_months: int = 0
    balloon_amount: float = 0.0
    dti: float = 0.0
    npv: float = 0.0
    min_dscr: float = 0.0
    irr_percent: float = 0.0
    wacc: float = 0.0

    @property
    def balloon_millions(self) -> float:
        return self.balloon_amount / 1e6

    @property
    def npv_millions(self) -> float:
        return self.npv / 1e6

    @property
    def dscr_text(self) -> str:
        if math.isinf(self.min_dscr):
            return "n/a (no debt service)"
        return f"{self.min_dscr:.2f}x"

    @property
    def irr_vs_wacc(self) -> str:
        return "above" if self.irr_percent > self.wacc else "below"


@dataclass(frozen=True)
class AdviceFragment:
    guard: Callable[[AdviceContext], bool]
    template: str

    def render(self, context: AdviceContext) -> str:
        return self.template.format(ctx=context)


def compose(
    fragments: Iterable[AdviceFragment], context: AdviceContext, separator: str = "\n"
) -> str:
    """Render every fragment whose guard holds, in catalog order."""
    parts: List[str] = [
        fragment.render(context) for fragment in fragments if fragment.guard(context)
    ]
    return separator.join(parts)


PERSONAL_ADVICE = (
    AdviceFragment(
        guard=lambda ctx: ctx.dti <= DTI_SAFE_LIMIT,
        template=(
            "Your debt-to-income ratio (DTI) is {ctx.dti:.1f}%, inside the safe "
            "range (<30%). Your cash flow leaves ample room for living costs and "
            "other investments. This loan is very affordable."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: DTI_SAFE_LIMIT < ctx.dti <= DTI_CAUTION_LIMIT,
        template=(
            "Your debt-to-income ratio (DTI) is {ctx.dti:.1f}%, a moderate level. "
            "Keep a tight rein on household spending. If a floating rate goes up, "
            "repayments will become a real strain."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.dti > DTI_CAUTION_LIMIT,
        template=(
            "WARNING: DTI is {ctx.dti:.1f}% (>45%). The debt burden is too heavy "
            "for your income! The risk of default is very high if income falls or "
            "rates rise. Consider: 1) borrowing less, or 2) putting in more of "
            "your own capital."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.purpose == LoanPurpose.CAR_BUYING
        and ctx.dti > CAR_UPKEEP_DTI,
        template=(
            "Note: a car is a depreciating asset with running costs (fuel, "
            "servicing) on top of the loan. Add them to your monthly burden."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.purpose == LoanPurpose.HOME_BUYING
        and ctx.dti > HOME_TERM_DTI,
        template=(
            "TIP: with DTI above 40%, consider stretching the loan to 20 - 30 "
            "years (240 - 360 months). A longer term lowers the monthly "
            "installment considerably."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.grace_period_months > 0,
        template=(
            "You are using a {ctx.grace_period_months}-month principal grace "
            "period. Once it ends, installments jump because principal "
            "repayment starts. Set cash aside for that point."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.balloon_amount > 0,
        template=(
            "The final balloon payment of {ctx.balloon_millions:,.0f}M is a large "
            "obligation. Make sure you have a savings plan or an asset sale lined "
            "up to settle it on time."
        ),
    ),
)


MISSING_EQUITY_ADVICE = "Please enter a valid equity contribution."


BUSINESS_ADVICE = (
    AdviceFragment(
        guard=lambda ctx: ctx.npv > 0 and ctx.min_dscr >= DSCR_SAFE,
        template=(
            "The project is HIGHLY VIABLE. A positive NPV ({ctx.npv_millions:,.0f}M) "
            "shows it creates real value. A minimum DSCR of {ctx.dscr_text} "
            "keeps debt service covered even if cash flow dips. IRR is "
            "{ctx.irr_vs_wacc} WACC."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.npv <= 0 and ctx.min_dscr < DSCR_SAFE,
        template=(
            "DO NOT INVEST. The project destroys value (NPV {ctx.npv_millions:,.0f}M). "
            "Operating cash flow does not cover debt service (DSCR "
            "{ctx.dscr_text} < 1.2). IRR is {ctx.irr_vs_wacc} WACC. The risk "
            "of insolvency is high."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.npv > 0 and ctx.min_dscr < DSCR_SAFE,
        template=(
            "PROCEED WITH CARE. The project is profitable (NPV "
            "{ctx.npv_millions:,.0f}M, IRR {ctx.irr_vs_wacc} WACC) but debt service "
            "is very heavy in the early years (DSCR {ctx.dscr_text}). "
            "Restructure the debt (longer term) or hold a working-capital reserve "
            "to avoid a liquidity squeeze."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.npv <= 0 and ctx.min_dscr >= DSCR_SAFE,
        template=(
            "CONSIDER CAREFULLY. Debt service is safely covered (DSCR "
            "{ctx.dscr_text}) but returns are weak (NPV {ctx.npv_millions:,.0f}M, "
            "IRR {ctx.irr_vs_wacc} WACC). Only invest for non-financial strategic "
            "gains such as market share or brand."
        ),
    ),
    AdviceFragment(
        guard=lambda ctx: ctx.balloon_amount > 0
        and DSCR_SAFE < ctx.min_dscr < DSCR_COMFORTABLE,
        template=(
            "Note: with a large balloon payment at maturity, make sure you have a "
            "refinancing plan or accumulate cash ahead of it."
        ),
    ),
)
