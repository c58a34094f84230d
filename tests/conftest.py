"""Shared fixtures: a small workspace on disk."""

import json
from pathlib import Path

import pytest

MOVEMENTS = [
    # December 2023
    {"kind": "income", "date": "2023-12-01", "category": "💼 Salary", "amount_primary": "1000", "amount_secondary": "1", "account": "Bank"},
    {"kind": "expense", "date": "2023-12-10", "category": "Food", "amount_primary": "600", "account": "Bank"},
    # January 2024
    {"kind": "income", "date": "2024-01-01", "category": "Salary", "amount_primary": "1200", "amount_secondary": "1.2", "account": "Bank"},
    {"kind": "income", "date": "2024-01-14", "category": "Gift", "amount_primary": "300", "account": "Bank"},
    {"kind": "expense", "date": "2024-01-05", "category": "🍔 Food", "amount_primary": "400", "account": "Card", "note": "Groceries"},
    {"kind": "expense", "date": "2024-01-20", "category": "Food", "amount_primary": "100", "account": "Bank"},
    {"kind": "expense", "date": "2024-01-25", "category": "Tech", "amount_primary": "150", "account": "Card", "installment_id": "laptop", "installment_label": "1/3", "note": "Laptop"},
    {"kind": "transfer", "date": "2024-01-07", "amount_primary": "250", "source_account": "Bank", "destination_account": "Wallet"},
    # February 2024
    {"kind": "expense", "date": "2024-02-25", "category": "Tech", "amount_primary": "150", "account": "Card", "installment_id": "laptop", "installment_label": "2/3", "note": "Laptop"},
]


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Workspace with three months of movements."""
    (tmp_path / "cashe.toml").write_text(
        'name = "personal"\n'
        'reporting_currency = "ARS"\n'
        'movements_file = "movements.json"\n'
        "top_categories = 2\n",
        encoding="utf-8",
    )
    (tmp_path / "movements.json").write_text(json.dumps(MOVEMENTS), encoding="utf-8")
    return tmp_path
