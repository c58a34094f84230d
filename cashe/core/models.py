"""Domain models for Cashé.

All financial data structures are defined here using Pydantic v2 for validation.
Input records and derived structures are frozen: the engine never mutates them.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class MovementKind(str, Enum):
    """Kind of financial movement.

    INCOME:   Money entering an account (salary, gifts, reimbursements).
    EXPENSE:  Money leaving an account. Stored as a positive magnitude.
    TRANSFER: Money moved between two accounts. Never part of income or
              expense totals.
    """

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Currency(str, Enum):
    """Reporting currencies.

    ARS is the native currency of every account. USD amounts are recorded
    independently on each movement, never converted from ARS.
    """

    ARS = "ARS"
    USD = "USD"


# -----------------------------------------------------------------------------
# Movement Model
# -----------------------------------------------------------------------------


class Movement(BaseModel):
    """A single financial movement.

    Attributes:
        id: Unique identifier (auto-generated UUID).
        kind: Income, expense or transfer.
        date: Movement date (day granularity).
        category: User-defined category label, possibly prefixed by an emoji.
        amount_primary: Amount in ARS.
        amount: Legacy single-amount field (ARS) from the older schema.
        amount_secondary: Independently recorded USD amount (optional).
        account: Account the movement is posted against.
        source_account: Outgoing account (transfers only).
        destination_account: Incoming account (transfers only).
        installment_id: Purchase identifier shared by all installments of
            one financed purchase.
        installment_label: Human label for the installment, e.g. "3/12".
        note: Optional description.

    Currency Handling:
        - amount_primary and amount_secondary are tracked independently.
        - A missing amount_secondary means "no USD value", never "convert".
        - Records written before amount_primary existed only carry amount.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    kind: MovementKind
    date: date
    category: str | None = None
    amount_primary: Decimal | None = None
    amount: Decimal | None = None  # Legacy ARS amount
    amount_secondary: Decimal | None = None  # USD, never derived
    account: str | None = None
    source_account: str | None = None
    destination_account: str | None = None
    installment_id: str | None = None
    installment_label: str | None = None
    note: str | None = None

    @model_validator(mode="after")
    def validate_transfer_accounts(self) -> "Movement":
        """Ensure transfers name both sides of the move."""
        if self.kind == MovementKind.TRANSFER and (
            not self.source_account or not self.destination_account
        ):
            raise ValueError("transfers require source_account and destination_account")
        return self

    @property
    def is_installment(self) -> bool:
        """True if this movement is one installment of a financed purchase."""
        return self.installment_id is not None


# -----------------------------------------------------------------------------
# Date Range
# -----------------------------------------------------------------------------


class DateRange(BaseModel):
    """Inclusive calendar window.

    Both bounds are optional: a range with a missing bound is "unset" and
    selects no data. ``end >= start`` is the caller's responsibility.
    Serialized as ``{"from": ..., "to": ...}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: date | None = Field(default=None, alias="from")
    end: date | None = Field(default=None, alias="to")

    @property
    def is_set(self) -> bool:
        """True when both bounds are present."""
        return self.start is not None and self.end is not None

    @property
    def length_days(self) -> int:
        """Number of calendar days covered, both bounds included (0 if unset)."""
        if not self.is_set:
            return 0
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """Check whether a day falls inside the window."""
        if not self.is_set:
            return False
        return self.start <= day <= self.end


# -----------------------------------------------------------------------------
# Category Aggregation
# -----------------------------------------------------------------------------


class CategoryAggregate(BaseModel):
    """Totals for one category of one kind within a range.

    ``total`` is expressed in the currency the aggregation was requested in;
    ``total_primary`` and ``total_secondary`` are both always filled.
    """

    model_config = ConfigDict(frozen=True)

    name: str  # First encountered label, emoji included
    key: str  # Canonical grouping key (emoji stripped)
    total_primary: Decimal = Decimal(0)
    total_secondary: Decimal = Decimal(0)
    total: Decimal = Decimal(0)
    percentage_of_type_total: Decimal = Decimal(0)
    movement_count: int = 0
    is_other: bool = False  # Synthetic bucket for truncated categories


class CategoryBreakdown(BaseModel):
    """All category aggregates of one kind, with the full type total."""

    model_config = ConfigDict(frozen=True)

    kind: MovementKind
    currency: Currency
    total: Decimal = Decimal(0)
    categories: list[CategoryAggregate] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Period Comparison
# -----------------------------------------------------------------------------


class PeriodComparison(BaseModel):
    """Current vs prior value with relative variance.

    variance_percent is None when the prior value is zero, so that "no
    baseline" stays distinguishable from "0% change".
    """

    model_config = ConfigDict(frozen=True)

    current_total: Decimal = Decimal(0)
    prior_total: Decimal = Decimal(0)
    variance_percent: Decimal | None = None

    @computed_field  # type: ignore[misc]
    @property
    def direction(self) -> str:
        """Trend of the variance: up, down or flat."""
        if self.variance_percent is None or self.variance_percent == 0:
            return "flat"
        return "up" if self.variance_percent > 0 else "down"


class RateComparison(BaseModel):
    """Current vs prior rate, compared as a percentage-point difference."""

    model_config = ConfigDict(frozen=True)

    current_rate: Decimal = Decimal(0)
    prior_rate: Decimal = Decimal(0)
    point_difference: Decimal = Decimal(0)


class PriorPeriodComparison(BaseModel):
    """Comparison of a range against the equally long range before it."""

    model_config = ConfigDict(frozen=True)

    current_range: DateRange
    prior_range: DateRange | None = None
    income: PeriodComparison
    expense: PeriodComparison
    balance: PeriodComparison
    savings_rate: RateComparison


# -----------------------------------------------------------------------------
# Projection
# -----------------------------------------------------------------------------


class ProjectionEstimate(BaseModel):
    """Estimated margin for the period after the current one.

    Flow:
        Recurring income (categories repeating from the prior period)
        - Installments already scheduled in the next period
        - Baseline expense (current expenses without installments)
        = Available margin (may be negative)
    """

    model_config = ConfigDict(frozen=True)

    recurring_income: Decimal = Decimal(0)
    committed_installments: Decimal = Decimal(0)
    baseline_recurring_expense: Decimal = Decimal(0)
    available_margin: Decimal = Decimal(0)
    margin_percent_of_income: Decimal | None = None

    next_range: DateRange | None = None
    committed_movements: list[Movement] = Field(default_factory=list)
    used_bootstrap: bool = False  # Recurring income fell back to largest category


# -----------------------------------------------------------------------------
# Period Statistics
# -----------------------------------------------------------------------------


class PeriodSummary(BaseModel):
    """Aggregated income/expense figures for a set of movements."""

    model_config = ConfigDict(frozen=True)

    currency: Currency
    total_income: Decimal = Decimal(0)
    total_expenses: Decimal = Decimal(0)
    balance: Decimal = Decimal(0)  # income - expenses
    savings_rate: Decimal = Decimal(0)  # percent of income
    movement_count: int = 0
    transfer_count: int = 0


class DailySpendingStats(BaseModel):
    """Day-level spending figures for a range."""

    model_config = ConfigDict(frozen=True)

    days_in_range: int = 0
    daily_average: Decimal = Decimal(0)
    days_with_expenses: int = 0
    days_without_expenses: int = 0
    most_expensive_day: date | None = None
    most_expensive_day_total: Decimal = Decimal(0)


class PeriodDataPoint(BaseModel):
    """A single point on the monthly timeline.

    Contains period flows and the running balance up to the end of the
    period (counting only movements inside the timeline window).
    """

    model_config = ConfigDict(frozen=True)

    period_label: str  # "2024-01"
    period_start: date
    period_end: date  # inclusive

    income: Decimal = Decimal(0)
    expenses: Decimal = Decimal(0)
    net_flow: Decimal = Decimal(0)  # income - expenses
    cumulative_balance: Decimal = Decimal(0)


# -----------------------------------------------------------------------------
# Workspace Configuration
# -----------------------------------------------------------------------------


class WorkspaceConfig(BaseModel):
    """Configuration for a Cashé workspace.

    A workspace is a directory holding a cashe.toml file, the movements
    export it points to and the generated reports.
    """

    name: str = Field(min_length=1)
    description: str | None = None

    reporting_currency: Currency = Currency.ARS
    movements_file: str = "movements.json"
    reports_dir: str = "reports"

    top_categories: int = Field(default=8, ge=1)  # Others bucket beyond this
    top_expenses: int = Field(default=5, ge=1)
    other_label: str = Field(default="Others", min_length=1)


# -----------------------------------------------------------------------------
# Report Data
# -----------------------------------------------------------------------------


class ReportData(BaseModel):
    """Complete data container for report generation.

    Everything the markdown report (or any other presentation layer) needs
    for one range, computed in a single pass.
    """

    # Metadata
    workspace_name: str
    currency: Currency
    generated_at: datetime
    period_label: str
    date_range: DateRange

    # ===== Summary & comparison =====
    summary: PeriodSummary
    comparison: PriorPeriodComparison

    # ===== Categories =====
    expenses_by_category: list[CategoryAggregate] = Field(default_factory=list)
    income_by_category: list[CategoryAggregate] = Field(default_factory=list)

    # ===== Statistics =====
    daily_stats: DailySpendingStats = Field(default_factory=DailySpendingStats)
    top_expenses: list[Movement] = Field(default_factory=list)
    installments: list[Movement] = Field(default_factory=list)
    timeline: list[PeriodDataPoint] = Field(default_factory=list)

    # ===== Projection =====
    projection: ProjectionEstimate | None = None
    projection_label: str | None = None

    # ===== Movements =====
    transfers: list[Movement] = Field(default_factory=list)
    movements: list[Movement] = Field(default_factory=list)
