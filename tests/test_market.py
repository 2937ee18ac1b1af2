"""Tests for FX quotes, the market store and the simple model."""

from datetime import date, timedelta

import pytest

from conftest import DISCOUNT_ID, FORECAST_ID, REF_DATE
from ficcalm.conventions import Frequency
from ficcalm.currencies import Currency, ExchangeRateStore
from ficcalm.curves import FlatForwardTermStructure
from ficcalm.errors import EvaluationError, InvalidValueError, NotFoundError
from ficcalm.indices import IborIndex
from ficcalm.market import (
    DiscountFactorRequest,
    ExchangeRateRequest,
    ForwardRateRequest,
    MarketData,
    MarketRequest,
    MarketStore,
)
from ficcalm.models import SimpleModel
from ficcalm.rates import Compounding


def test_currency_metadata():
    assert Currency.USD.code == "USD"
    assert Currency.CLP.precision == 0
    assert Currency.from_code("eur") is Currency.EUR
    assert str(Currency.BRL) == "BRL"


def test_exchange_rate_lookup():
    store = ExchangeRateStore(REF_DATE)
    store.add_exchange_rate(Currency.USD, Currency.CLP, 800.0)
    store.add_exchange_rate(Currency.EUR, Currency.USD, 1.1)

    assert store.get_exchange_rate(Currency.USD, Currency.USD) == 1.0
    assert store.get_exchange_rate(Currency.USD, Currency.CLP) == 800.0
    assert store.get_exchange_rate(Currency.CLP, Currency.USD) == pytest.approx(1.0 / 800.0)
    # EUR -> USD -> CLP
    assert store.get_exchange_rate(Currency.EUR, Currency.CLP) == pytest.approx(880.0)
    assert store.get_exchange_rate(Currency.CLP, Currency.EUR) == pytest.approx(1.0 / 880.0)


def test_exchange_rate_errors():
    store = ExchangeRateStore(REF_DATE, {(Currency.USD, Currency.CLP): 800.0})
    with pytest.raises(NotFoundError):
        store.get_exchange_rate(Currency.USD, Currency.JPY)
    with pytest.raises(InvalidValueError):
        store.add_exchange_rate(Currency.USD, Currency.EUR, 0.0)


def test_market_data_accessors():
    data = MarketData(3, REF_DATE, df_value=0.97)
    assert data.df == 0.97
    with pytest.raises(EvaluationError):
        data.fwd
    with pytest.raises(EvaluationError):
        data.fx


def test_market_store_advance(market_store):
    target = REF_DATE + timedelta(days=31)
    advanced = market_store.advance_to_date(target)
    assert advanced.reference_date == target
    assert advanced.local_currency == Currency.USD
    assert advanced.get_index(DISCOUNT_ID).reference_date == target
    assert advanced.get_currency_curve(Currency.USD) == DISCOUNT_ID
    assert market_store.reference_date == REF_DATE
    assert market_store.get_index(DISCOUNT_ID).reference_date == REF_DATE
    with pytest.raises(InvalidValueError):
        market_store.advance_to_date(REF_DATE - timedelta(days=1))


def test_model_discount_factor_branch(market_store):
    model = SimpleModel(market_store)
    curve = market_store.get_index(DISCOUNT_ID).term_structure()
    future = date(2024, 3, 1)
    requests = [
        MarketRequest(0, df=DiscountFactorRequest(DISCOUNT_ID, REF_DATE - timedelta(days=1))),
        MarketRequest(1, df=DiscountFactorRequest(DISCOUNT_ID, REF_DATE)),
        MarketRequest(2, df=DiscountFactorRequest(DISCOUNT_ID, future)),
    ]
    data = model.gen_market_data(requests)
    assert [d.id for d in data] == [0, 1, 2]
    assert data[0].df == 0.0
    assert data[1].df == 1.0
    assert data[2].df == curve.discount_factor(future)


def test_model_forward_branch(market_store):
    model = SimpleModel(market_store)
    start, end = date(2022, 3, 1), date(2022, 9, 1)
    node = model.gen_node(
        MarketRequest(0, fwd=ForwardRateRequest(FORECAST_ID, start, end, Compounding.COMPOUNDED, Frequency.ANNUAL))
    )
    assert node.fwd == pytest.approx(0.02, abs=1e-12)
    assert node.df_value is None


def test_model_fx_branch():
    store = MarketStore(REF_DATE, Currency.USD)
    store.add_index(0, IborIndex(FlatForwardTermStructure(REF_DATE, 0.01)))
    store.add_index(1, IborIndex(FlatForwardTermStructure(REF_DATE, 0.05)))
    store.add_currency_curve(Currency.USD, 0)
    store.add_currency_curve(Currency.CLP, 1)
    store.add_exchange_rate(Currency.USD, Currency.CLP, 800.0)
    model = SimpleModel(store)

    spot = model.gen_fx_data(ExchangeRateRequest(Currency.USD, Currency.CLP))
    assert spot == 800.0
    # second currency defaults to the local one
    assert model.gen_fx_data(ExchangeRateRequest(Currency.CLP)) == pytest.approx(1.0 / 800.0)

    t = date(2022, 9, 1)
    forward = model.gen_fx_data(ExchangeRateRequest(Currency.USD, Currency.CLP, t))
    usd_df = store.get_index(0).discount_factor(t)
    clp_df = store.get_index(1).discount_factor(t)
    assert forward == pytest.approx(800.0 * usd_df / clp_df)
    assert forward > spot


def test_model_missing_index(market_store):
    model = SimpleModel(market_store)
    with pytest.raises(NotFoundError):
        model.gen_node(MarketRequest(0, df=DiscountFactorRequest(42, date(2023, 1, 1))))
