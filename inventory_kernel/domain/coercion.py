"""
Numeric coercion for raw catalog input (``inventory_kernel.domain.coercion``).

Responsibility
--------------
Turns whatever a form or API layer collected into the numbers the catalog
stores.  The policy is lenient: a value that cannot be read as a finite
number becomes 0 instead of raising.  Callers that need strict parsing
validate before calling the catalog.

Rules
-----
- ``None``, empty strings, booleans, NaN and infinities -> 0.
- Strings are stripped and parsed as ``Decimal``.
- ``coerce_int``: integral values (``8``, ``"8"``, ``"8.0"``, ``8.0``) parse
  to ``int``; fractional values are not integers and become 0.
- ``coerce_decimal``: floats go through ``str()`` so ``0.1`` stays
  ``Decimal("0.1")``.
- Integers of ``MAX_MAGNITUDE`` or more in absolute value are treated as
  unreadable; they cannot round-trip through the JSON record format.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

MAX_MAGNITUDE = Decimal(10) ** 15


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def coerce_decimal(value: Any) -> Decimal:
    """Read ``value`` as a finite ``Decimal``, or ``Decimal("0")``."""
    number = _to_decimal(value)
    return Decimal("0") if number is None else number


def _to_int(value: Any) -> int | None:
    number = _to_decimal(value)
    if number is None or abs(number) >= MAX_MAGNITUDE:
        return None
    if number != number.to_integral_value():
        return None
    return int(number)


def coerce_int(value: Any) -> int:
    """Read ``value`` as an integer, or 0 if it is not an integral number."""
    result = _to_int(value)
    return 0 if result is None else result


def parse_positive_int(value: Any) -> int | None:
    """
    Strict variant used for movement quantities.

    Returns the integer when ``value`` is an integral number greater than
    zero, otherwise ``None``.
    """
    result = _to_int(value)
    if result is None or result <= 0:
        return None
    return result
