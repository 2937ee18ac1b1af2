"""
Rollover simulation: reinvest maturing principal day by day.
"""

import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from ficcalm.conventions.daycount import ACT_360
from ficcalm.conventions.period import Period
from ficcalm.currencies.currency import Currency
from ficcalm.errors import EvaluationError, FiccAlmError
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.store import MarketStore
from ficcalm.models.simple import SimpleModel
from ficcalm.schedule.generator import evaluation_schedule
from ficcalm.visitors.aggregation import CashflowsAggregatorConstVisitor
from ficcalm.visitors.base import merge_by_date
from ficcalm.visitors.fixing import FixingVisitor
from ficcalm.visitors.indexing import IndexingVisitor

from .position_generator import PositionGenerator
from .types import GrowthMode, RolloverConfig, RolloverStrategy

logger = logging.getLogger(__name__)


class RolloverSimulationEngine:
    """
    Walks every calendar day from the store's reference date to the end of the
    horizon and places new instruments whenever principal matures.

    In ``PAID_AMOUNT`` mode the placement is the maturing amount grown by
    ``growth_rate``. In ``ANNUAL`` mode the placement tops the book up to
    ``outstanding_0 * (1 + g * tau)`` with ``tau`` the ACT/360 year fraction
    since the first evaluation date. Redemptions of the placed instruments
    are fed back into the maturity ladder, so they roll over in turn.
    """

    def __init__(
        self,
        market_store: MarketStore,
        base_redemptions: Mapping[date, float],
        redemption_currency: Currency,
        horizon: Period,
        config: Optional[RolloverConfig] = None,
    ):
        self.market_store = market_store
        self.base_redemptions = dict(sorted(base_redemptions.items()))
        self.redemption_currency = redemption_currency
        self.config = config or RolloverConfig()
        self.eval_dates = evaluation_schedule(market_store.reference_date, horizon)

    def _placement(self, eval_date: date, redemption: float, state: Dict[str, float]) -> float:
        growth = self.config.growth_rate
        if self.config.growth_mode == GrowthMode.PAID_AMOUNT:
            return redemption * (1.0 + growth)
        tau = ACT_360.year_fraction(self.eval_dates[0], eval_date)
        state["outstanding"] -= redemption
        placement = state["outstanding_0"] * (1.0 + growth * tau) - state["outstanding"]
        state["outstanding"] += placement
        return placement

    def _place(self, generator: PositionGenerator, eval_date: date, placement: float) -> List[Instrument]:
        anchor = self.market_store
        store = anchor if eval_date == anchor.reference_date else anchor.advance_to_date(eval_date)
        positions = generator.with_market_store(store).with_amount(abs(placement)).generate()

        indexer = IndexingVisitor(store.reference_date, store.local_currency)
        for position in positions:
            indexer.visit(position)
        data = SimpleModel(store).gen_market_data(indexer.request())
        fixer = FixingVisitor(data)
        for position in positions:
            fixer.visit(position)
        return positions

    def run(self, strategies: Sequence[RolloverStrategy]) -> List[Instrument]:
        """Simulated instruments in placement order.

        Raises:
            EvaluationError: if any placement fails; no partial result is returned.
        """
        redemptions = dict(self.base_redemptions)
        outstanding_0 = sum(redemptions.values())
        state = {"outstanding_0": outstanding_0, "outstanding": outstanding_0}
        generator = PositionGenerator(self.redemption_currency, strategies)
        simulated: List[Instrument] = []

        for eval_date in self.eval_dates:
            placement = self._placement(eval_date, redemptions.get(eval_date, 0.0), state)
            if placement == 0.0:
                continue
            logger.debug("Placing %s on %s", placement, eval_date)
            try:
                positions = self._place(generator, eval_date, placement)
                aggregator = CashflowsAggregatorConstVisitor(validate_currency=self.redemption_currency)
                for position in positions:
                    aggregator.visit(position)
            except FiccAlmError as exc:
                raise EvaluationError(f"Rollover failed on {eval_date}: {exc}") from exc
            simulated.extend(positions)
            merge_by_date(redemptions, aggregator.redemptions())

        logger.debug("Rollover generated %s instruments", len(simulated))
        return simulated


def outstanding_by_date(
    instruments: Sequence[Instrument],
    dates: Sequence[date],
    base_redemptions: Optional[Mapping[date, float]] = None,
) -> Dict[date, float]:
    """
    Signed outstanding principal on each of ``dates``.

    Adds every disbursement and redemption of ``instruments`` paid on or before
    the date and subtracts the base redemptions still to come after it.
    """
    aggregator = CashflowsAggregatorConstVisitor()
    for instrument in instruments:
        aggregator.visit(instrument)
    flows = merge_by_date(aggregator.disbursements(), aggregator.redemptions())
    base = base_redemptions or {}

    result = {}
    for dt in dates:
        paid = sum(value for d, value in flows.items() if d <= dt)
        pending = sum(value for d, value in base.items() if d > dt)
        result[dt] = paid - pending
    return result
