"""Fixed/floating swaps: construction, pricing and par rate."""

import pytest

from conftest import DISCOUNT_ID, FORECAST_ID, REF_DATE
from ficcalm.cashflows import FixedRateCoupon, FloatingRateCoupon, Side
from ficcalm.conventions import Frequency, Period, TimeUnit
from ficcalm.errors import ValueNotSetError
from ficcalm.instruments import FixFloatSwap, make_fix_float_swap
from ficcalm.models import SimpleModel
from ficcalm.visitors import FixingVisitor, IndexingVisitor, NPVConstVisitor, ParValueConstVisitor

NOTIONAL = 1_000_000.0


def swap(rate_definition, fixed_rate=0.03, spread=0.005, side=Side.RECEIVE, **kwargs):
    params = dict(
        start_date=REF_DATE,
        tenor=Period(5, TimeUnit.YEARS),
        notional=NOTIONAL,
        fixed_rate=fixed_rate,
        spread=spread,
        fixed_rate_definition=rate_definition,
        floating_rate_definition=rate_definition,
        fixed_payment_frequency=Frequency.SEMIANNUAL,
        side=side,
        discount_curve_id=DISCOUNT_ID,
        forecast_curve_id=FORECAST_ID,
        id="SWAP-1",
    )
    params.update(kwargs)
    return make_fix_float_swap(**params)


def priced(store, instrument):
    indexer = IndexingVisitor(store.reference_date, store.local_currency)
    indexer.visit(instrument)
    data = SimpleModel(store).gen_market_data(indexer.request())
    FixingVisitor(data, store).visit(instrument)
    return data


def test_swap_legs(thirty_360_annual):
    deal = swap(thirty_360_annual)
    assert isinstance(deal, FixFloatSwap)
    fixed, floating = deal.fixed_leg_cashflows(), deal.floating_leg_cashflows()
    assert len(fixed) == len(floating) == 10
    assert all(isinstance(cf, FixedRateCoupon) and cf.side == Side.RECEIVE for cf in fixed)
    assert all(isinstance(cf, FloatingRateCoupon) and cf.side == Side.PAY for cf in floating)
    # only coupons are exchanged
    assert deal.cashflows == fixed + floating
    assert deal.cashflows[0] is deal.fixed_leg.cashflows[1]
    assert deal.rate.rate == 0.03 and deal.spread == 0.005
    assert deal.fixed_leg.id == "SWAP-1/fixed"


def test_swap_floating_frequency_defaults_to_fixed(thirty_360_annual):
    deal = swap(thirty_360_annual, floating_payment_frequency=Frequency.QUARTERLY)
    assert len(deal.floating_leg_cashflows()) == 20
    assert swap(thirty_360_annual).floating_leg.payment_frequency == Frequency.SEMIANNUAL


def test_swap_requires_fields(thirty_360_annual):
    with pytest.raises(ValueNotSetError, match="forecast_curve_id"):
        swap(thirty_360_annual, forecast_curve_id=None)
    with pytest.raises(ValueNotSetError, match="fixed_rate"):
        swap(thirty_360_annual, fixed_rate=None)


def test_swap_with_rate_copies_both_legs(market_store, thirty_360_annual):
    deal = swap(thirty_360_annual)
    priced(market_store, deal)
    repriced = deal.with_rate(0.04)
    assert deal.rate.rate == 0.03
    assert repriced.rate.rate == 0.04
    assert [cf.id for cf in repriced.cashflows] == [cf.id for cf in deal.cashflows]
    assert repriced.floating_leg_cashflows()[0] is not deal.floating_leg_cashflows()[0]
    assert repriced.floating_leg_cashflows()[0].fixing_rate == deal.floating_leg_cashflows()[0].fixing_rate
    assert deal.with_spread(0.01).floating_leg_cashflows()[-1].spread == 0.01


def test_receiver_and_payer_npv(market_store, thirty_360_annual):
    receiver = swap(thirty_360_annual, fixed_rate=0.04)
    payer = swap(thirty_360_annual, fixed_rate=0.04, side=Side.PAY)
    npv_receiver = NPVConstVisitor(priced(market_store, receiver)).visit(receiver)
    npv_payer = NPVConstVisitor(priced(market_store, payer)).visit(payer)
    assert npv_receiver > 0.0
    assert npv_payer == pytest.approx(-npv_receiver, rel=1e-12)


def test_swap_par_rate_is_forward_plus_spread(market_store, thirty_360_annual):
    # forecast curve is flat 2% in the coupons' own convention
    deal = swap(thirty_360_annual)
    data = priced(market_store, deal)
    assert ParValueConstVisitor(data).visit(deal) == pytest.approx(0.025, abs=1e-8)


def test_swap_par_rate_prices_to_zero(market_store, thirty_360_annual):
    deal = swap(thirty_360_annual, spread=0.0, floating_payment_frequency=Frequency.QUARTERLY)
    data = priced(market_store, deal)
    par = ParValueConstVisitor(data).visit(deal)
    repriced = deal.with_rate(par)
    assert NPVConstVisitor(data, include_today_cashflows=True).visit(repriced) == pytest.approx(0.0, abs=1e-2)
    assert par == pytest.approx(0.02, abs=5e-4)
