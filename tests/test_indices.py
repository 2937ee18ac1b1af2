"""Tests for rate indices and the index store."""

import threading
from datetime import date, timedelta

import pytest

from conftest import REF_DATE, make_overnight_levels
from ficcalm.conventions import ACT_360, Frequency, Period, TimeUnit
from ficcalm.curves import FlatForwardTermStructure
from ficcalm.errors import EvaluationError, InvalidValueError, NotFoundError
from ficcalm.indices import IborIndex, IndexStore, OvernightIndex, ReadWriteLock
from ficcalm.rates import Compounding, InterestRate, RateDefinition

COMPOUNDED = RateDefinition(ACT_360, Compounding.COMPOUNDED, Frequency.ANNUAL)
SIMPLE = RateDefinition(ACT_360, Compounding.SIMPLE, Frequency.ANNUAL)


def ibor(fixings=None):
    curve = FlatForwardTermStructure(REF_DATE, 0.02, COMPOUNDED)
    return IborIndex(curve, fixings=fixings, rate_definition=COMPOUNDED, tenor=Period(3, TimeUnit.MONTHS))


def overnight():
    curve = FlatForwardTermStructure(REF_DATE, 0.03, COMPOUNDED)
    levels = make_overnight_levels(REF_DATE - Period(1, TimeUnit.YEARS), REF_DATE, 0.06)
    return OvernightIndex(curve, fixings=levels, rate_definition=SIMPLE)


def test_ibor_uses_fixing_for_started_periods():
    past = REF_DATE - timedelta(days=10)
    index = ibor({past: 0.0123})
    end = past + Period(3, TimeUnit.MONTHS)
    assert index.forward_rate(past, end, Compounding.SIMPLE, Frequency.ANNUAL) == 0.0123
    with pytest.raises(EvaluationError):
        index.forward_rate(past - timedelta(days=1), end, Compounding.SIMPLE, Frequency.ANNUAL)


def test_ibor_uses_curve_for_future_periods():
    index = ibor()
    start, end = date(2022, 1, 3), date(2022, 4, 3)
    expected = index.term_structure().forward_rate(start, end, Compounding.SIMPLE, Frequency.ANNUAL)
    assert index.forward_rate(start, end, Compounding.SIMPLE, Frequency.ANNUAL) == expected
    assert index.reference_date == REF_DATE


def test_ibor_tenor_defaults_to_frequency():
    index = IborIndex(FlatForwardTermStructure(REF_DATE, 0.02), rate_definition=SIMPLE)
    assert index.tenor == Period(1, TimeUnit.YEARS)


def test_index_without_curve_or_fixings_is_rejected():
    with pytest.raises(InvalidValueError):
        IborIndex()


def test_add_fixing_after_reference_date_fails():
    index = ibor()
    index.add_fixing(REF_DATE, 0.02)
    assert index.past_fixing(REF_DATE) == 0.02
    with pytest.raises(InvalidValueError):
        index.add_fixing(REF_DATE + timedelta(days=1), 0.02)


def test_ibor_advance_projects_fixings_from_old_curve():
    index = ibor()
    target = REF_DATE + timedelta(days=20)
    advanced = index.advance_to_date(target)
    assert advanced.reference_date == target
    assert index.reference_date == REF_DATE

    day = REF_DATE + timedelta(days=7)
    expected = index.term_structure().forward_rate(
        day, day + Period(3, TimeUnit.MONTHS), Compounding.COMPOUNDED, Frequency.ANNUAL
    )
    assert advanced.past_fixing(day) == pytest.approx(expected, abs=1e-15)
    assert advanced.past_fixing(target + timedelta(days=1)) is None
    assert len(advanced.projected_fixing_days()) == 21
    # started periods now read the projected fixing
    assert advanced.forward_rate(day, date(2022, 1, 1), Compounding.SIMPLE, Frequency.ANNUAL) == advanced.past_fixing(day)


def test_overnight_average_rate_from_levels():
    index = overnight()
    start = REF_DATE - timedelta(days=90)
    ratio = (1.0 + 0.06 / 360.0) ** 90
    assert index.average_rate(start, REF_DATE) == pytest.approx((ratio - 1.0) / (90 / 360.0), rel=1e-12)
    assert index.forward_rate(start, REF_DATE, Compounding.SIMPLE, Frequency.ANNUAL) == pytest.approx(
        index.average_rate(start, REF_DATE), rel=1e-12
    )


def test_overnight_forward_spanning_reference_date():
    index = overnight()
    start = REF_DATE - timedelta(days=30)
    end = REF_DATE + timedelta(days=60)
    level_start = index.past_fixing(start)
    projected = index.past_fixing(REF_DATE) / index.term_structure().discount_factor(end)
    compound = projected / level_start
    expected = InterestRate.implied_rate(
        compound, ACT_360, Compounding.SIMPLE, Frequency.ANNUAL, ACT_360.year_fraction(start, end)
    ).rate
    assert index.forward_rate(start, end, Compounding.SIMPLE, Frequency.ANNUAL) == pytest.approx(expected, rel=1e-12)


def test_overnight_future_forward_uses_curve():
    index = overnight()
    start, end = date(2022, 1, 1), date(2022, 7, 1)
    expected = index.term_structure().forward_rate(start, end, Compounding.SIMPLE, Frequency.ANNUAL)
    assert index.forward_rate(start, end, Compounding.SIMPLE, Frequency.ANNUAL) == expected


def test_overnight_advance_extends_levels():
    index = overnight()
    target = REF_DATE + timedelta(days=15)
    advanced = index.advance_to_date(target)
    curve = index.term_structure()

    level = index.past_fixing(REF_DATE)
    for i in range(1, 16):
        day = REF_DATE + timedelta(days=i)
        prev = REF_DATE + timedelta(days=i - 1)
        level = level * curve.discount_factor(prev) / curve.discount_factor(day)
        assert advanced.past_fixing(day) == pytest.approx(level, rel=1e-12)
    assert index.past_fixing(target) is None


def test_overnight_missing_level():
    index = overnight()
    with pytest.raises(EvaluationError):
        index.average_rate(REF_DATE - timedelta(days=400), REF_DATE)


def test_index_store_registry():
    store = IndexStore(REF_DATE)
    store.add_index(0, ibor(), name="IBOR3M")
    assert store.get_index(0).tenor == Period(3, TimeUnit.MONTHS)
    assert store.get_index_by_name("IBOR3M") is store.get_index(0)
    assert 0 in store and len(store) == 1
    with pytest.raises(InvalidValueError):
        store.add_index(0, ibor())
    with pytest.raises(NotFoundError):
        store.get_index(7)
    with pytest.raises(NotFoundError):
        store.replace_index(7, ibor())


def test_index_store_advance_returns_new_store():
    store = IndexStore(REF_DATE)
    store.add_index(0, ibor())
    store.add_index(1, overnight())
    target = REF_DATE + timedelta(days=5)
    advanced = store.advance_to_date(target)
    assert advanced.reference_date == target
    assert advanced.get_index(0).reference_date == target
    assert advanced.get_index(1).reference_date == target
    assert store.get_index(0).reference_date == REF_DATE
    with pytest.raises(InvalidValueError):
        advanced.advance_to_date(REF_DATE)


def test_read_write_lock_allows_concurrent_readers():
    lock = ReadWriteLock()
    inside = []
    barrier = threading.Barrier(3)

    def reader():
        with lock.read():
            inside.append(1)
            barrier.wait(timeout=5)

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert len(inside) == 3
    with lock.write():
        inside.clear()
    assert inside == []
