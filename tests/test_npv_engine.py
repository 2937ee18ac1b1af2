from datetime import date

import pytest

from conftest import DISCOUNT_ID, FORECAST_ID, REF_DATE
from ficcalm.alm import NPVEngine, NPVEngineConfig
from ficcalm.cashflows import FloatingRateCoupon, Side
from ficcalm.conventions import ACT_360, Frequency, Period, TimeUnit
from ficcalm.errors import EvaluationError, InvalidValueError
from ficcalm.instruments import Structure, make_fixed_rate_instrument, make_floating_rate_instrument
from ficcalm.models import SimpleModel
from ficcalm.rates import Compounding, RateDefinition
from ficcalm.visitors import FixingVisitor, IndexingVisitor, NPVByDateConstVisitor


def _book(thirty_360_annual, size=25):
    book = []
    structures = [Structure.BULLET, Structure.EQUAL_REDEMPTIONS, Structure.EQUAL_PAYMENTS]
    for i in range(size):
        start = date(2020 + i % 3, 1 + i % 12, 1)
        common = dict(
            start_date=start,
            tenor=Period(2 + i % 5, TimeUnit.YEARS),
            notional=1000.0 * (i + 1),
            rate_definition=thirty_360_annual,
            payment_frequency=Frequency.QUARTERLY,
            side=Side.RECEIVE if i % 2 else Side.PAY,
            discount_curve_id=DISCOUNT_ID,
            id=f"deal-{i}",
        )
        if i % 4 == 3:
            book.append(make_floating_rate_instrument(spread=0.005, forecast_curve_id=FORECAST_ID, **common))
        else:
            book.append(make_fixed_rate_instrument(rate=0.01 * (i % 7), structure=structures[i % 3], **common))
    return book


def _add_fixings(market_store, book):
    index = market_store.get_index(FORECAST_ID)
    for instrument in book:
        for coupon in instrument.coupons():
            if isinstance(coupon, FloatingRateCoupon) and coupon.accrual_start < REF_DATE:
                index.add_fixing(coupon.accrual_start, 0.01)


def _direct(book, store):
    total = {}
    model = SimpleModel(store)
    for instrument in book:
        indexer = IndexingVisitor(store.reference_date, store.local_currency)
        indexer.visit(instrument)
        data = model.gen_market_data(indexer.request())
        FixingVisitor(data, store).visit(instrument)
        for dt, value in NPVByDateConstVisitor(data).visit(instrument).items():
            total[dt] = total.get(dt, 0.0) + value
    return total


def test_chunking_does_not_change_result(market_store, thirty_360_annual):
    book = _book(thirty_360_annual)
    _add_fixings(market_store, book)
    default = NPVEngine(book, market_store).run()
    chunked = NPVEngine(book, market_store, NPVEngineConfig(chunk_size=7, max_workers=3)).run()

    assert list(default) == sorted(default)
    assert list(chunked) == list(default)
    for dt, value in default.items():
        assert chunked[dt] == pytest.approx(value, rel=1e-9, abs=1e-9)


def test_engine_matches_visitor_sum(market_store, thirty_360_annual):
    book = _book(thirty_360_annual, size=9)
    _add_fixings(market_store, book)
    result = NPVEngine(book, market_store, NPVEngineConfig(chunk_size=2)).run()
    expected = _direct(book, market_store)
    assert set(result) == set(expected)
    for dt, value in expected.items():
        assert result[dt] == pytest.approx(value, rel=1e-12, abs=1e-9)
    assert min(result) > REF_DATE


def test_include_today_cashflows(market_store, thirty_360_annual):
    loan = make_fixed_rate_instrument(
        start_date=REF_DATE,
        tenor=Period(1, TimeUnit.YEARS),
        notional=500.0,
        rate=0.05,
        rate_definition=thirty_360_annual,
        payment_frequency=Frequency.ANNUAL,
        discount_curve_id=DISCOUNT_ID,
    )
    result = NPVEngine([loan], market_store, NPVEngineConfig(include_today_cashflows=True)).run()
    assert result[REF_DATE] == -500.0
    assert sum(result.values()) == pytest.approx(0.0, abs=1e-9)


def test_errors_name_the_instrument(market_store, thirty_360_annual):
    book = _book(thirty_360_annual, size=4)
    _add_fixings(market_store, book)
    book[2].set_discount_curve_id(42)
    with pytest.raises(EvaluationError, match="deal-2"):
        NPVEngine(book, market_store, NPVEngineConfig(chunk_size=1)).run()


def test_errors_fall_back_to_position(market_store, thirty_360_annual):
    book = _book(thirty_360_annual, size=2)
    book[1].id = None
    book[1].set_discount_curve_id(None)
    with pytest.raises(EvaluationError, match="#1"):
        NPVEngine(book, market_store).run()


def test_convention_errors_are_wrapped(market_store):
    # compounding needs a frequency with periods per year
    loan = make_fixed_rate_instrument(
        start_date=date(2021, 1, 1),
        tenor=Period(2, TimeUnit.YEARS),
        rate=0.03,
        rate_definition=RateDefinition(ACT_360, Compounding.COMPOUNDED, Frequency.ONCE),
        payment_frequency=Frequency.QUARTERLY,
        structure=Structure.OTHER,
        disbursements={date(2021, 1, 1): 1000.0},
        redemptions={date(2023, 1, 1): 1000.0},
        discount_curve_id=DISCOUNT_ID,
        id="LOAN-7",
    )
    with pytest.raises(EvaluationError, match="LOAN-7"):
        NPVEngine([loan], market_store).run()


def test_invalid_chunk_size(market_store):
    with pytest.raises(InvalidValueError):
        NPVEngine([], market_store, NPVEngineConfig(chunk_size=0))


def test_empty_book(market_store):
    assert NPVEngine([], market_store).run() == {}
