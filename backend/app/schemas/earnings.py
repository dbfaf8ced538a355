"""Owner earnings dashboard schemas."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class TransactionCountsRead(BaseModel):
    total: int
    completed: int
    pending: int


class EarningsSummaryRead(BaseModel):
    """Windowed earnings totals; the windows overlap and are not a partition."""

    total: Decimal
    pending: Decimal
    today: Decimal
    this_week: Decimal
    this_month: Decimal
    currency: str
    as_of: datetime
    transactions: TransactionCountsRead
