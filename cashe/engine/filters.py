"""Multi-select movement filters.

A FilterSet is an immutable set of selected keys. An empty set selects
everything, matching how the account/category/kind pickers behave when
nothing is ticked. MovementFilters combines one FilterSet per dimension.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from cashe.core.models import Movement, MovementKind
from cashe.engine.categories import category_key


class FilterSet(BaseModel):
    """Immutable selection of keys with toggle/clear operations."""

    model_config = ConfigDict(frozen=True)

    selected: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def of(cls, *keys: str) -> "FilterSet":
        """Build a filter set with the given keys selected."""
        return cls(selected=frozenset(keys))

    @property
    def is_empty(self) -> bool:
        """True when nothing is selected (everything matches)."""
        return not self.selected

    def toggle(self, key: str) -> "FilterSet":
        """Return a copy with `key` added if absent or removed if present."""
        return FilterSet(selected=self.selected ^ {key})

    def select(self, *keys: str) -> "FilterSet":
        """Return a copy with the keys added."""
        return FilterSet(selected=self.selected | set(keys))

    def clear(self) -> "FilterSet":
        """Return an empty filter set."""
        return FilterSet()

    def matches(self, key: str | None) -> bool:
        """Check a key against the selection."""
        if self.is_empty:
            return True
        return key in self.selected

    def matches_any(self, keys: Iterable[str | None]) -> bool:
        """Check whether any of several keys is selected."""
        if self.is_empty:
            return True
        return any(key in self.selected for key in keys)


class MovementFilters(BaseModel):
    """Account, category and kind filters applied together.

    Category selections hold canonical keys (emoji stripped). A transfer
    matches the account filter when either of its accounts is selected.
    """

    model_config = ConfigDict(frozen=True)

    accounts: FilterSet = Field(default_factory=FilterSet)
    categories: FilterSet = Field(default_factory=FilterSet)
    kinds: FilterSet = Field(default_factory=FilterSet)

    @property
    def is_empty(self) -> bool:
        """True when no dimension restricts anything."""
        return self.accounts.is_empty and self.categories.is_empty and self.kinds.is_empty

    def clear(self) -> "MovementFilters":
        """Return filters with every dimension cleared."""
        return MovementFilters()

    def matches(self, movement: Movement) -> bool:
        """Check a single movement against all dimensions."""
        if not self.kinds.matches(movement.kind.value):
            return False

        if movement.kind == MovementKind.TRANSFER:
            if not self.accounts.matches_any(
                (movement.source_account, movement.destination_account)
            ):
                return False
            # Transfers carry no category
            return self.categories.is_empty

        if not self.accounts.matches(movement.account):
            return False
        return self.categories.matches(category_key(movement.category))

    def apply(self, movements: Iterable[Movement]) -> list[Movement]:
        """Keep matching movements in their original order."""
        return [m for m in movements if self.matches(m)]
