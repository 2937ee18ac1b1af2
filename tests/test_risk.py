"""Duration, z-spread and NPV by tenor."""

from datetime import date

import pytest

from conftest import DISCOUNT_ID, REF_DATE
from ficcalm.cashflows import Side
from ficcalm.conventions import ACT_365F, THIRTY_360, Frequency, Period, TimeUnit
from ficcalm.currencies import Currency
from ficcalm.curves import FlatForwardTermStructure
from ficcalm.errors import EvaluationError
from ficcalm.indices import IborIndex
from ficcalm.instruments import Structure, make_fixed_rate_instrument
from ficcalm.market import MarketStore
from ficcalm.models import SimpleModel
from ficcalm.rates import Compounding, RateDefinition
from ficcalm.visitors import (
    DurationConstVisitor,
    IndexingVisitor,
    NPVByTenorConstVisitor,
    NPVConstVisitor,
    ZSpreadConstVisitor,
)

RATE_DEF = RateDefinition(THIRTY_360, Compounding.COMPOUNDED, Frequency.ANNUAL)


def flat_store(rate):
    store = MarketStore(REF_DATE, Currency.USD)
    curve = FlatForwardTermStructure(REF_DATE, rate, RATE_DEF)
    store.add_index(DISCOUNT_ID, IborIndex(curve, rate_definition=RATE_DEF))
    store.add_currency_curve(Currency.USD, DISCOUNT_ID)
    return store


def loan(structure=Structure.BULLET, tenor_years=5):
    return make_fixed_rate_instrument(
        start_date=REF_DATE,
        tenor=Period(tenor_years, TimeUnit.YEARS),
        notional=100000.0,
        rate=0.05,
        rate_definition=RATE_DEF,
        payment_frequency=Frequency.SEMIANNUAL,
        structure=structure,
        side=Side.RECEIVE,
        discount_curve_id=DISCOUNT_ID,
    )


def market_data(store, instrument):
    indexer = IndexingVisitor(store.reference_date, store.local_currency)
    indexer.visit(instrument)
    return SimpleModel(store).gen_market_data(indexer.request())


def test_zero_coupon_duration_is_time_to_maturity():
    zero = loan(Structure.ZERO)
    data = market_data(flat_store(0.05), zero)
    expected = ACT_365F.year_fraction(REF_DATE, date(2026, 9, 1))
    assert DurationConstVisitor(data).visit(zero) == pytest.approx(expected, rel=1e-12)


def test_bullet_duration_below_maturity():
    bullet = loan()
    data = market_data(flat_store(0.05), bullet)
    duration = DurationConstVisitor(data).visit(bullet)
    assert 0.0 < duration < ACT_365F.year_fraction(REF_DATE, bullet.end_date)
    amortizing = loan(Structure.EQUAL_REDEMPTIONS)
    assert DurationConstVisitor(market_data(flat_store(0.05), amortizing)).visit(amortizing) < duration


def test_duration_of_matured_instrument_fails():
    old = make_fixed_rate_instrument(
        start_date=date(2015, 1, 1),
        tenor=Period(2, TimeUnit.YEARS),
        notional=100.0,
        rate=0.05,
        payment_frequency=Frequency.ANNUAL,
        discount_curve_id=DISCOUNT_ID,
    )
    data = market_data(flat_store(0.05), old)
    with pytest.raises(EvaluationError, match="zero present value"):
        DurationConstVisitor(data).visit(old)


def test_z_spread_against_own_curve_is_zero():
    bullet = loan()
    data = market_data(flat_store(0.05), bullet)
    target = NPVConstVisitor(data).visit(bullet)
    spread = ZSpreadConstVisitor(data, RATE_DEF, target_npv=target).visit(bullet)
    assert spread == pytest.approx(0.0, abs=1e-8)


def test_z_spread_matches_shifted_flat_curve():
    bullet = loan(tenor_years=10)
    target = NPVConstVisitor(market_data(flat_store(0.06), bullet)).visit(bullet)
    data = market_data(flat_store(0.05), bullet)
    spread = ZSpreadConstVisitor(data, RATE_DEF, target_npv=target).visit(bullet)
    assert spread == pytest.approx(0.01, abs=1e-8)


def test_z_spread_unreachable_target():
    bullet = loan()
    data = market_data(flat_store(0.05), bullet)
    with pytest.raises(EvaluationError, match="bracketed"):
        ZSpreadConstVisitor(data, RATE_DEF, target_npv=-1e9).visit(bullet)


def test_npv_by_tenor_buckets():
    bullet = loan(tenor_years=10)
    data = market_data(flat_store(0.05), bullet)
    year = lambda n: Period(n, TimeUnit.YEARS)
    tenors = [(Period(0, TimeUnit.DAYS), year(1)), (year(1), year(5)), (year(5), year(30))]
    by_tenor = NPVByTenorConstVisitor(data, tenors).visit(bullet)
    assert list(by_tenor) == tenors
    assert sum(by_tenor.values()) == pytest.approx(NPVConstVisitor(data).visit(bullet), rel=1e-12)
    # the redemption sits in the last bucket
    assert by_tenor[tenors[2]] > by_tenor[tenors[1]] > by_tenor[tenors[0]] > 0.0


def test_npv_by_tenor_today_flag():
    bullet = loan()
    data = market_data(flat_store(0.05), bullet)
    tenors = [(Period(0, TimeUnit.DAYS), Period(1, TimeUnit.MONTHS))]
    assert NPVByTenorConstVisitor(data, tenors).visit(bullet)[tenors[0]] == 0.0
    with_today = NPVByTenorConstVisitor(data, tenors, include_today_cashflows=True).visit(bullet)
    assert with_today[tenors[0]] == pytest.approx(-100000.0)
