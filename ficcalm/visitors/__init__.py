"""Pricing passes over instruments."""

from .accrual import AccruedAmountConstVisitor
from .aggregation import CashflowsAggregatorConstVisitor
from .duration import DurationConstVisitor
from .fixing import FixingVisitor
from .indexing import IndexingVisitor
from .irr import IrrVisitor
from .npv import NPVByDateConstVisitor, NPVByTenorConstVisitor, NPVConstVisitor
from .parvalue import ParValueConfig, ParValueConstVisitor
from .zspread import ZSpreadConstVisitor

__all__ = [
    "AccruedAmountConstVisitor",
    "CashflowsAggregatorConstVisitor",
    "DurationConstVisitor",
    "FixingVisitor",
    "IndexingVisitor",
    "IrrVisitor",
    "NPVByDateConstVisitor",
    "NPVByTenorConstVisitor",
    "NPVConstVisitor",
    "ParValueConfig",
    "ParValueConstVisitor",
    "ZSpreadConstVisitor",
]
