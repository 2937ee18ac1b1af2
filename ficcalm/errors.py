"""Exception hierarchy shared by the pricing pipeline."""


class FiccAlmError(Exception):
    """Base class for every error raised by the library."""


class NotFoundError(FiccAlmError, LookupError):
    """A curve, index, market datum or FX quote is missing."""


class InvalidValueError(FiccAlmError, ValueError):
    """An input violates a documented precondition."""


class ValueNotSetError(FiccAlmError, ValueError):
    """A required field was not provided."""


class EvaluationError(FiccAlmError, RuntimeError):
    """Pricing could not be completed for an instrument or cash-flow."""


class UnsupportedFeatureError(FiccAlmError, NotImplementedError):
    """The requested structure or rate type is declared but not implemented."""


class SolverError(FiccAlmError, RuntimeError):
    """A numerical solver failed."""
