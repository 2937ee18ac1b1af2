"""Shared market fixtures."""

from datetime import date, timedelta

import pytest

from ficcalm.alm import RolloverStrategy
from ficcalm.cashflows import Side
from ficcalm.conventions import ACT_360, THIRTY_360, Frequency, Period, TimeUnit
from ficcalm.currencies import Currency
from ficcalm.curves import FlatForwardTermStructure
from ficcalm.indices import IborIndex, OvernightIndex
from ficcalm.instruments import RateType, Structure
from ficcalm.market import MarketStore
from ficcalm.rates import Compounding, RateDefinition

REF_DATE = date(2021, 9, 1)

FORECAST_ID = 0
OVERNIGHT_ID = 1
DISCOUNT_ID = 2


def make_overnight_levels(start, end, rate, base=100.0):
    """Daily index levels accruing ``rate`` on ACT/360."""
    levels = {}
    level = base
    day = start
    while day <= end:
        levels[day] = level
        day += timedelta(days=1)
        level *= 1.0 + rate / 360.0
    return levels


@pytest.fixture
def ref_date():
    return REF_DATE


@pytest.fixture
def thirty_360_annual():
    return RateDefinition(THIRTY_360, Compounding.COMPOUNDED, Frequency.ANNUAL)


@pytest.fixture
def market_store(thirty_360_annual):
    """Forecast 2%, overnight 3% and discount 5% flat curves, 30/360 compounded annually."""
    store = MarketStore(REF_DATE, Currency.USD)

    forecast = FlatForwardTermStructure(REF_DATE, 0.02, thirty_360_annual)
    ibor = IborIndex(
        forecast,
        fixings={REF_DATE: 0.02, REF_DATE - timedelta(days=1): 0.02},
        rate_definition=thirty_360_annual,
        name="IBOR",
    )
    store.add_index(FORECAST_ID, ibor, name="IBOR")

    overnight_curve = FlatForwardTermStructure(REF_DATE, 0.03, thirty_360_annual)
    levels = make_overnight_levels(REF_DATE - Period(1, TimeUnit.YEARS), REF_DATE, 0.06)
    overnight = OvernightIndex(
        overnight_curve,
        fixings=levels,
        rate_definition=RateDefinition(ACT_360, Compounding.SIMPLE, Frequency.ANNUAL),
        name="ON",
    )
    store.add_index(OVERNIGHT_ID, overnight, name="ON")

    discount = FlatForwardTermStructure(REF_DATE, 0.05, thirty_360_annual)
    store.add_index(DISCOUNT_ID, IborIndex(discount, rate_definition=thirty_360_annual))
    store.add_currency_curve(Currency.USD, DISCOUNT_ID)
    return store


@pytest.fixture
def simple_store():
    """Single flat 5% curve, simple ACT/360, registered as id 2."""
    store = MarketStore(REF_DATE, Currency.USD)
    curve = FlatForwardTermStructure(REF_DATE, 0.05)
    store.add_index(DISCOUNT_ID, IborIndex(curve))
    return store


@pytest.fixture
def base_redemptions():
    """Twelve monthly redemptions of 100/150/200, 1800 in total."""
    amounts = [100.0, 150.0, 200.0] * 4
    return {REF_DATE + Period(i + 1, TimeUnit.MONTHS): amount for i, amount in enumerate(amounts)}


@pytest.fixture
def rollover_store(thirty_360_annual):
    store = MarketStore(REF_DATE, Currency.USD)
    curve = FlatForwardTermStructure(REF_DATE, 0.02, thirty_360_annual)
    store.add_index(0, IborIndex(curve, rate_definition=thirty_360_annual))
    return store


def bullet_strategy(tenor_years, rate_definition, weight=0.5):
    return RolloverStrategy(
        weight=weight,
        structure=Structure.BULLET,
        payment_frequency=Frequency.ANNUAL,
        tenor=Period(tenor_years, TimeUnit.YEARS),
        side=Side.RECEIVE,
        rate_type=RateType.FIXED,
        rate_definition=rate_definition,
        discount_curve_id=0,
    )
