"""Currency normalization.

Every movement carries its ARS amount and, optionally, a USD amount that was
recorded independently. Reporting in a currency means reading the matching
field; nothing here converts one amount into the other.
"""

from collections.abc import Iterable
from decimal import Decimal

from cashe.core.models import Currency, Movement


def amount_in(movement: Movement, currency: Currency | str) -> Decimal:
    """Return the movement's amount in the reporting currency.

    ARS reads amount_primary, falling back to the legacy amount field.
    USD reads amount_secondary and is zero when it was never recorded.

    Args:
        movement: Movement to read.
        currency: Reporting currency.

    Returns:
        Amount in the requested currency (never None).
    """
    if Currency(currency) == Currency.USD:
        return movement.amount_secondary if movement.amount_secondary is not None else Decimal(0)

    if movement.amount_primary is not None:
        return movement.amount_primary
    if movement.amount is not None:
        return movement.amount
    return Decimal(0)


def total_in(movements: Iterable[Movement], currency: Currency | str) -> Decimal:
    """Sum the amounts of movements in the reporting currency."""
    return sum((amount_in(m, currency) for m in movements), Decimal(0))
