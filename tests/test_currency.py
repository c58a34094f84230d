"""Tests for currency normalization."""

from datetime import date
from decimal import Decimal

from cashe.core.models import Currency, Movement, MovementKind
from cashe.engine.currency import amount_in, total_in


def _expense(**kwargs) -> Movement:
    return Movement(kind=MovementKind.EXPENSE, date=date(2024, 1, 10), **kwargs)


class TestAmountIn:
    """Tests for amount_in function."""

    def test_primary(self) -> None:
        """Test ARS reads amount_primary."""
        m = _expense(amount_primary=Decimal("1500"), amount_secondary=Decimal("1.5"))
        assert amount_in(m, Currency.ARS) == Decimal("1500")

    def test_secondary(self) -> None:
        """Test USD reads amount_secondary."""
        m = _expense(amount_primary=Decimal("1500"), amount_secondary=Decimal("1.5"))
        assert amount_in(m, Currency.USD) == Decimal("1.5")

    def test_missing_secondary_is_zero(self) -> None:
        """Test a missing USD amount is zero and never converted from ARS."""
        m = _expense(amount_primary=Decimal("1500"))
        assert amount_in(m, Currency.USD) == Decimal(0)

    def test_legacy_amount_fallback(self) -> None:
        """Test records from the older schema fall back to amount."""
        m = _expense(amount=Decimal("800"))
        assert amount_in(m, Currency.ARS) == Decimal("800")

    def test_primary_wins_over_legacy(self) -> None:
        """Test amount_primary takes precedence over the legacy field."""
        m = _expense(amount_primary=Decimal("900"), amount=Decimal("800"))
        assert amount_in(m, "ARS") == Decimal("900")

    def test_no_amounts(self) -> None:
        """Test a movement with no amounts at all."""
        assert amount_in(_expense(), Currency.ARS) == Decimal(0)

    def test_total_in(self) -> None:
        """Test summing mixed records in USD."""
        movements = [
            _expense(amount_primary=Decimal("100"), amount_secondary=Decimal("2")),
            _expense(amount_primary=Decimal("100")),
            _expense(amount_primary=Decimal("100"), amount_secondary=Decimal("3")),
        ]
        assert total_in(movements, Currency.USD) == Decimal("5")
        assert total_in(movements, Currency.ARS) == Decimal("300")
