"""
Internal rate of return.
"""

from datetime import date
from typing import Optional

from ficcalm.errors import EvaluationError
from ficcalm.instruments.instrument import Instrument
from ficcalm.math.rootfinding import RootFindingError, brent, find_bracket
from ficcalm.rates.interestrate import Compounding, InterestRate, RateDefinition


class IrrVisitor:
    """
    Flat yield, quoted under ``rate_definition``, that discounts the
    instrument's cash-flows from ``reference_date`` to ``target_npv``.

    Cash-flows paid on the reference date are included, so a loan that starts
    today has its disbursement in the balance. Floating coupons must be fixed.
    """

    def __init__(
        self,
        reference_date: date,
        target_npv: float = 0.0,
        rate_definition: Optional[RateDefinition] = None,
        tolerance: float = 1e-10,
        max_abs: float = 1.0,
    ):
        self.reference_date = reference_date
        self.target_npv = target_npv
        self.rate_definition = rate_definition or RateDefinition(compounding=Compounding.COMPOUNDED)
        self.tolerance = tolerance
        self.max_abs = max_abs

    def visit(self, instrument: Instrument) -> float:
        flows = [
            (cf.payment_date, cf.side.sign * cf.amount())
            for cf in instrument.cashflows
            if cf.payment_date >= self.reference_date
        ]

        def npv_minus_target(y: float) -> float:
            rate = InterestRate.from_rate_definition(y, self.rate_definition)
            total = sum(amount * rate.discount_factor(self.reference_date, dt) for dt, amount in flows)
            return total - self.target_npv

        try:
            a, b, f_a, f_b = find_bracket(npv_minus_target, -0.1, 0.1, max_abs=self.max_abs)
        except RootFindingError as exc:
            raise EvaluationError(f"IRR of instrument {instrument.id} could not be bracketed: {exc}") from exc
        return brent(npv_minus_target, a, b, tol=self.tolerance, f_lower=f_a, f_upper=f_b).root
