"""Currency helpers - every monetary value leaving the domain is rounded to cents"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """
    Normalise a numeric input to Decimal.

    Floats go through str() so binary artefacts (1.005 -> 1.00499...) never
    reach the cent boundary.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    """Round to the nearest cent, half away from zero"""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
