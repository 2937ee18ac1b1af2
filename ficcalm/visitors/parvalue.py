"""
Par rate / par spread solver.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ficcalm.currencies.currency import Currency
from ficcalm.errors import EvaluationError, UnsupportedFeatureError
from ficcalm.instruments.instrument import (
    FixedRateInstrument,
    FloatingRateInstrument,
    Instrument,
)
from ficcalm.instruments.swap import FixFloatSwap
from ficcalm.market.requests import MarketData
from ficcalm.math.rootfinding import RootFindingError, brent, find_bracket

from .fixing import FixingVisitor
from .npv import NPVConstVisitor

logger = logging.getLogger(__name__)


@dataclass
class ParValueConfig:
    """Bracket and tolerance settings for the par value solver."""

    lower: float = -0.1
    upper: float = 0.1
    max_abs: float = 1.0
    tolerance: float = 1e-10
    max_iterations: int = 100
    expansion: float = 1.6


class ParValueConstVisitor:
    """
    Solves for the coupon rate (fixed instruments and the fixed leg of a
    swap) or spread (floating instruments) that sets the NPV to zero.

    The NPV includes cash-flows paid on the reference date so that a
    disbursement made today is part of the balance. Ids assigned by the
    indexing pass are kept by the repriced copies, so the same market data is
    reused for every trial value.
    """

    def __init__(
        self,
        market_data: Sequence[MarketData],
        config: Optional[ParValueConfig] = None,
        local_currency: Optional[Currency] = None,
    ):
        self.market_data = market_data
        self.config = config or ParValueConfig()
        self._npv = NPVConstVisitor(market_data, include_today_cashflows=True, local_currency=local_currency)
        self._fixing = FixingVisitor(market_data)

    def _objective(self, instrument: Instrument) -> Callable[[float], float]:
        if isinstance(instrument, FixFloatSwap):
            def npv_at_swap_rate(rate: float) -> float:
                repriced = instrument.with_rate(rate)
                self._fixing.visit(repriced)
                return self._npv.visit(repriced)
            return npv_at_swap_rate
        if isinstance(instrument, FixedRateInstrument):
            return lambda rate: self._npv.visit(instrument.with_rate(rate))
        if isinstance(instrument, FloatingRateInstrument):
            def npv_at_spread(spread: float) -> float:
                repriced = instrument.with_spread(spread)
                self._fixing.visit(repriced)
                return self._npv.visit(repriced)
            return npv_at_spread
        raise UnsupportedFeatureError(f"Par value is not supported for {type(instrument).__name__}")

    def visit(self, instrument: Instrument) -> float:
        cfg = self.config
        objective = self._objective(instrument)
        try:
            a, b, f_a, f_b = find_bracket(
                objective,
                cfg.lower,
                cfg.upper,
                guess=0.5 * (cfg.lower + cfg.upper),
                expansion=cfg.expansion,
                max_abs=cfg.max_abs,
            )
        except RootFindingError as exc:
            raise EvaluationError(f"Par value of instrument {instrument.id} could not be bracketed: {exc}") from exc
        result = brent(
            objective, a, b, tol=cfg.tolerance, max_iter=cfg.max_iterations, f_lower=f_a, f_upper=f_b
        )
        logger.debug("Par value %s found in %s iterations", result.root, result.iterations)
        return result.root
