"""
Generates par-priced positions for a rollover strategy mix.
"""

import logging
from typing import List, Optional, Sequence

from ficcalm.currencies.currency import Currency
from ficcalm.errors import UnsupportedFeatureError, ValueNotSetError
from ficcalm.instruments.builders import make_fixed_rate_instrument, make_floating_rate_instrument
from ficcalm.instruments.instrument import Instrument
from ficcalm.instruments.types import PositionType, RateType
from ficcalm.market.store import MarketStore
from ficcalm.models.simple import SimpleModel
from ficcalm.visitors.fixing import FixingVisitor
from ficcalm.visitors.indexing import IndexingVisitor
from ficcalm.visitors.parvalue import ParValueConfig, ParValueConstVisitor

from .types import RolloverStrategy

logger = logging.getLogger(__name__)

DRAFT_RATE = 0.03
DRAFT_SPREAD = 0.01


class PositionGenerator:
    """
    Builds one instrument per strategy, starting on the market store's reference
    date, with notional ``amount * weight`` and a coupon rate (or spread) that
    prices the instrument at par.
    """

    def __init__(
        self,
        currency: Currency,
        strategies: Sequence[RolloverStrategy],
        market_store: Optional[MarketStore] = None,
        amount: Optional[float] = None,
        par_value_config: Optional[ParValueConfig] = None,
    ):
        self.currency = currency
        self.strategies = list(strategies)
        self.market_store = market_store
        self.amount = amount
        self.par_value_config = par_value_config or ParValueConfig()

    def with_market_store(self, market_store: MarketStore) -> "PositionGenerator":
        return PositionGenerator(self.currency, self.strategies, market_store, self.amount, self.par_value_config)

    def with_amount(self, amount: float) -> "PositionGenerator":
        return PositionGenerator(self.currency, self.strategies, self.market_store, amount, self.par_value_config)

    def _terms(self, strategy: RolloverStrategy) -> dict:
        store = self.market_store
        return dict(
            start_date=store.reference_date,
            tenor=strategy.tenor,
            notional=self.amount * strategy.weight,
            rate_definition=strategy.rate_definition,
            payment_frequency=strategy.payment_frequency,
            structure=strategy.structure,
            side=strategy.side,
            currency=self.currency,
            discount_curve_id=strategy.discount_curve_id,
            position_type=PositionType.SIMULATED,
        )

    def _par_value(self, draft: Instrument) -> float:
        store = self.market_store
        indexer = IndexingVisitor(store.reference_date, store.local_currency)
        indexer.visit(draft)
        data = SimpleModel(store).gen_market_data(indexer.request())
        FixingVisitor(data).visit(draft)
        return ParValueConstVisitor(data, self.par_value_config, store.local_currency).visit(draft)

    def generate_position(self, strategy: RolloverStrategy) -> Instrument:
        terms = self._terms(strategy)
        if strategy.rate_type == RateType.FIXED:
            draft = make_fixed_rate_instrument(rate=DRAFT_RATE, **terms)
            rate = self._par_value(draft)
            logger.debug("Par rate %s for %s %s", rate, strategy.structure.name, strategy.tenor)
            return make_fixed_rate_instrument(rate=rate, **terms)
        if strategy.rate_type == RateType.FLOATING:
            terms["forecast_curve_id"] = strategy.forecast_curve_id
            draft = make_floating_rate_instrument(spread=DRAFT_SPREAD, **terms)
            spread = self._par_value(draft)
            logger.debug("Par spread %s for %s %s", spread, strategy.structure.name, strategy.tenor)
            return make_floating_rate_instrument(spread=spread, **terms)
        raise UnsupportedFeatureError(f"Rate type {strategy.rate_type.name} is not supported")

    def generate(self) -> List[Instrument]:
        if self.market_store is None:
            raise ValueNotSetError("Market store not set on position generator")
        if self.amount is None:
            raise ValueNotSetError("Amount not set on position generator")
        return [self.generate_position(strategy) for strategy in self.strategies]
