"""Domain models for investments, companies and report rows."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Investment:
    """A single investment record from the investments service."""

    id: str
    user_id: str
    first_name: str
    last_name: str
    financial_company_id: str
    date: str
    investment_total: Decimal
    investment_percentage: Decimal  # fraction between 0 and 1


@dataclass(frozen=True, slots=True)
class Company:
    """A financial company from the financial companies service."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class ReportRow:
    """One line of the exported CSV report."""

    user: str
    first_name: str
    last_name: str
    date: str
    holding: str
    value: Decimal


__all__ = ["Company", "Investment", "ReportRow"]
