from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .models import Expense, Purchase


@dataclass(frozen=True)
class BookkeepingSummary:
    total_expenses: Decimal
    total_purchases: Decimal

    @property
    def total_outflow(self) -> Decimal:
        return self.total_expenses + self.total_purchases


def summarize(expenses: Iterable[Expense], purchases: Iterable[Purchase]) -> BookkeepingSummary:
    return BookkeepingSummary(
        total_expenses=sum((e.amount for e in expenses), Decimal("0.00")),
        total_purchases=sum((p.total_amount for p in purchases), Decimal("0.00")),
    )
