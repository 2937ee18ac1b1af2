"""
Currency definitions.
"""

from enum import Enum

from ficcalm.errors import InvalidValueError


class Currency(Enum):
    """ISO currencies as (code, name, symbol, precision, numeric code)."""

    USD = ("USD", "US Dollar", "$", 2, 840)
    EUR = ("EUR", "Euro", "€", 2, 978)
    GBP = ("GBP", "Pound Sterling", "£", 2, 826)
    CHF = ("CHF", "Swiss Franc", "Fr", 2, 756)
    JPY = ("JPY", "Japanese Yen", "¥", 0, 392)
    CAD = ("CAD", "Canadian Dollar", "$", 2, 124)
    AUD = ("AUD", "Australian Dollar", "$", 2, 36)
    CLP = ("CLP", "Chilean Peso", "$", 0, 152)
    CLF = ("CLF", "Unidad de Fomento", "UF", 4, 990)
    BRL = ("BRL", "Brazilian Real", "R$", 2, 986)
    COP = ("COP", "Colombian Peso", "$", 2, 170)
    MXN = ("MXN", "Mexican Peso", "$", 2, 484)
    PEN = ("PEN", "Peruvian Sol", "S/", 2, 604)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def currency_name(self) -> str:
        return self.value[1]

    @property
    def symbol(self) -> str:
        return self.value[2]

    @property
    def precision(self) -> int:
        return self.value[3]

    @property
    def numeric_code(self) -> int:
        return self.value[4]

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        try:
            return cls[code.upper()]
        except KeyError as exc:
            raise InvalidValueError(f"Unknown currency code: {code}") from exc

    def __str__(self) -> str:
        return self.code
