"""Fixed income pricing and ALM rollover simulation.

This package prices loans and deposits against a set of yield curves through a
request/resolve pipeline and simulates how a book rolls over in time.

Key modules:
- curves: Flat, discount, zero rate, tenor based and composite term structures
- indices: IBOR and overnight indices with fixing histories
- market: Market store and the per cash-flow request protocol
- instruments: Fixed and floating rate instruments and their builders
- visitors: Indexing, fixing, NPV, par value, aggregation, accrual and IRR
- alm: Position generation, rollover simulation and the parallel NPV engine
- math: Root finders and a reverse-mode AD tape
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "alm",
    "cashflows",
    "conventions",
    "currencies",
    "curves",
    "indices",
    "instruments",
    "interpolation",
    "market",
    "math",
    "models",
    "rates",
    "schedule",
    "visitors",
]
