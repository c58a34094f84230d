"""Number formatting shared by the markdown report and the CLI."""

from decimal import Decimal

from cashe.core.models import Currency

_SYMBOLS = {Currency.ARS: "$", Currency.USD: "US$"}


def format_currency(amount: Decimal, currency: Currency | str) -> str:
    """Format an amount with its currency symbol and thousands separators."""
    symbol = _SYMBOLS.get(Currency(currency), f"{currency} ")
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_percentage(value: Decimal | None, signed: bool = False) -> str:
    """Format a percentage with one decimal; "N/A" when undefined."""
    if value is None:
        return "N/A"
    if signed:
        return f"{value:+.1f}%"
    return f"{value:.1f}%"


def format_points(value: Decimal) -> str:
    """Format a percentage-point difference."""
    return f"{value:+.1f} pp"
