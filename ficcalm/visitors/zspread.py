"""
Zero-volatility spread over the discount curve.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ficcalm.cashflows.cashflow import Disbursement
from ficcalm.currencies.currency import Currency
from ficcalm.errors import EvaluationError
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import MarketData
from ficcalm.math.rootfinding import RootFindingError, brent, find_bracket
from ficcalm.rates.interestrate import Compounding, InterestRate, RateDefinition

from .base import fx_value, market_data_for

logger = logging.getLogger(__name__)


class ZSpreadConstVisitor:
    """
    Constant spread added to every cash-flow's zero rate that discounts the
    instrument to ``target_npv``.

    Zero rates are implied from the curve discount factors and quoted under
    ``rate_definition``; the spread is in the same quote. Disbursements and
    cash-flows paid on or before the reference date are left out.
    """

    def __init__(
        self,
        market_data: Sequence[MarketData],
        rate_definition: Optional[RateDefinition] = None,
        target_npv: float = 0.0,
        tolerance: float = 1e-10,
        max_abs: float = 1.0,
        local_currency: Optional[Currency] = None,
    ):
        self.market_data = market_data
        self.rate_definition = rate_definition or RateDefinition(compounding=Compounding.COMPOUNDED)
        self.target_npv = target_npv
        self.tolerance = tolerance
        self.max_abs = max_abs
        self.local_currency = local_currency

    def _flows(self, instrument: Instrument) -> List[Tuple[float, float, float]]:
        """(value before discounting, zero rate, year fraction) per live cash-flow."""
        rd = self.rate_definition
        flows = []
        for cashflow in instrument.cashflows:
            if isinstance(cashflow, Disbursement):
                continue
            data = market_data_for(cashflow, self.market_data)
            if cashflow.payment_date <= data.reference_date:
                continue
            t = rd.day_counter.year_fraction(data.reference_date, cashflow.payment_date)
            zero = 0.0
            if t > 0.0:
                zero = InterestRate.implied_rate(1.0 / data.df, rd.day_counter, rd.compounding, rd.frequency, t).rate
            value = cashflow.side.sign * cashflow.amount() / fx_value(cashflow, data, self.local_currency)
            flows.append((value, zero, t))
        return flows

    def visit(self, instrument: Instrument) -> float:
        rd = self.rate_definition
        flows = self._flows(instrument)
        if not flows:
            raise EvaluationError(f"Instrument {instrument.id} has no cash-flows to spread over")

        def npv_minus_target(spread: float) -> float:
            total = sum(
                value * InterestRate.from_rate_definition(zero + spread, rd).discount_factor_from_yf(t)
                for value, zero, t in flows
            )
            return total - self.target_npv

        try:
            a, b, f_a, f_b = find_bracket(npv_minus_target, -0.1, 0.1, max_abs=self.max_abs)
        except RootFindingError as exc:
            raise EvaluationError(f"Z-spread of instrument {instrument.id} could not be bracketed: {exc}") from exc
        result = brent(npv_minus_target, a, b, tol=self.tolerance, f_lower=f_a, f_upper=f_b)
        logger.debug("Z-spread %s found in %s iterations", result.root, result.iterations)
        return result.root
