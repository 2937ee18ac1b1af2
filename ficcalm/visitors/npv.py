"""
Net present value visitors.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ficcalm.conventions.period import Period
from ficcalm.currencies.currency import Currency
from ficcalm.instruments.instrument import Instrument
from ficcalm.market.requests import MarketData

from .base import fx_value, market_data_for, sorted_by_date


class NPVConstVisitor:
    """
    Sum of ``sign * amount * DF / FX`` over the live cash-flows of an instrument.

    Cash-flows paid before the reference date are skipped. Cash-flows paid on
    the reference date only count when ``include_today_cashflows`` is set.
    """

    def __init__(
        self,
        market_data: Sequence[MarketData],
        include_today_cashflows: bool = False,
        local_currency: Optional[Currency] = None,
    ):
        self.market_data = market_data
        self.include_today_cashflows = include_today_cashflows
        self.local_currency = local_currency

    def _is_live(self, payment_date: date, reference_date: date) -> bool:
        if payment_date > reference_date:
            return True
        return payment_date == reference_date and self.include_today_cashflows

    def _contributions(self, instrument: Instrument):
        for cashflow in instrument.cashflows:
            data = market_data_for(cashflow, self.market_data)
            if not self._is_live(cashflow.payment_date, data.reference_date):
                continue
            fx = fx_value(cashflow, data, self.local_currency)
            value = cashflow.side.sign * cashflow.amount() * data.df / fx
            yield data.reference_date, cashflow.payment_date, value

    def visit(self, instrument: Instrument) -> float:
        return sum(value for _, _, value in self._contributions(instrument))


class NPVByDateConstVisitor(NPVConstVisitor):
    """Same summands as :class:`NPVConstVisitor`, grouped by payment date."""

    def visit(self, instrument: Instrument) -> Dict[date, float]:
        by_date: Dict[date, float] = {}
        for _, payment_date, value in self._contributions(instrument):
            by_date[payment_date] = by_date.get(payment_date, 0.0) + value
        return sorted_by_date(by_date)


class NPVByTenorConstVisitor(NPVConstVisitor):
    """
    NPV split into tenor buckets. Each bucket ``(start, end)`` collects the
    cash-flows paid in ``[reference + start, reference + end)``; cash-flows
    outside every bucket are dropped.
    """

    def __init__(
        self,
        market_data: Sequence[MarketData],
        tenors: List[Tuple[Period, Period]],
        include_today_cashflows: bool = False,
        local_currency: Optional[Currency] = None,
    ):
        super().__init__(market_data, include_today_cashflows, local_currency)
        self.tenors = list(tenors)

    def visit(self, instrument: Instrument) -> Dict[Tuple[Period, Period], float]:
        by_tenor = {bucket: 0.0 for bucket in self.tenors}
        for ref, payment_date, value in self._contributions(instrument):
            for start, end in self.tenors:
                if ref + start <= payment_date < ref + end:
                    by_tenor[(start, end)] += value
        return by_tenor
