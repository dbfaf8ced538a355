"""Tests for owner earnings aggregation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.services.earnings_service import (
    EarningsSummary,
    PaymentRecord,
    aggregate,
    count_transactions,
    filter_transactions,
)

# Wednesday 2024-06-12; week is Sunday 06-09 .. Saturday 06-15.
NOW = datetime(2024, 6, 12, 15, 30, tzinfo=UTC)


def _payment(
    amount: object,
    status: str = "paid",
    created_at: object = NOW,
    method: str = "jazzcash",
    **extra: object,
) -> PaymentRecord:
    return PaymentRecord(
        owner_id="owner-1",
        venue_id="venue-1",
        amount=amount,
        status=status,
        payment_method=method,
        created_at=created_at,
        **extra,
    )


def test_paid_and_pending_today() -> None:
    summary = aggregate(
        [_payment(1000), _payment(500, status="pending", method="cash")], NOW
    )
    assert summary == EarningsSummary(
        total=Decimal("1000"),
        pending=Decimal("500"),
        today=Decimal("1000"),
        this_week=Decimal("1000"),
        this_month=Decimal("1000"),
    )


def test_payment_from_previous_week_same_month() -> None:
    summary = aggregate([_payment(700, created_at=NOW - timedelta(days=8))], NOW)
    assert summary.total == Decimal("700")
    assert summary.this_month == Decimal("700")
    assert summary.today == 0
    assert summary.this_week == 0


def test_each_paid_payment_counted_once() -> None:
    payments = [_payment(100), _payment(250), _payment(400, status="pending")]
    summary = aggregate(payments, NOW)
    assert summary.total == Decimal("350")
    assert summary.pending == Decimal("400")


def test_windows_overlap() -> None:
    summary = aggregate([_payment(300)], NOW)
    assert summary.today <= summary.this_week <= summary.total
    assert summary.this_month <= summary.total


def test_week_window_edges() -> None:
    payments = [
        _payment(1, created_at=datetime(2024, 6, 9, 0, 0, tzinfo=UTC)),
        _payment(10, created_at=datetime(2024, 6, 15, 23, 59, 59, 999999, tzinfo=UTC)),
        _payment(100, created_at=datetime(2024, 6, 16, 0, 0, tzinfo=UTC)),
        _payment(1000, created_at=datetime(2024, 6, 8, 23, 59, 59, tzinfo=UTC)),
    ]
    summary = aggregate(payments, NOW)
    assert summary.this_week == Decimal("11")
    assert summary.total == Decimal("1111")


def test_same_month_previous_year_is_excluded() -> None:
    summary = aggregate([_payment(50, created_at=NOW.replace(year=2023))], NOW)
    assert summary.this_month == 0
    assert summary.total == Decimal("50")


def test_decimal_amounts_sum_exactly() -> None:
    summary = aggregate([_payment("0.10"), _payment(Decimal("0.20")), _payment(0.1)], NOW)
    assert summary.total == Decimal("0.4")


def test_malformed_amount_counts_as_zero(caplog: pytest.LogCaptureFixture) -> None:
    payments = [
        _payment("abc", id="p-bad"),
        _payment(None),
        _payment(-5),
        _payment(200),
    ]
    with caplog.at_level(logging.WARNING):
        summary = aggregate(payments, NOW)
    assert summary.total == Decimal("200")
    assert "p-bad" in caplog.text


def test_unparsable_created_at_only_leaves_the_windows(
    caplog: pytest.LogCaptureFixture,
) -> None:
    payments = [
        _payment(80, created_at="someday", id="p-when"),
        _payment(20, status="pending", created_at=None),
    ]
    with caplog.at_level(logging.WARNING):
        summary = aggregate(payments, NOW)
    assert summary.total == Decimal("80")
    assert summary.pending == Decimal("20")
    assert summary.today == summary.this_week == summary.this_month == 0
    assert "p-when" in caplog.text


def test_iso_string_and_naive_timestamps() -> None:
    payments = [
        _payment(5, created_at="2024-06-12T09:00:00+00:00"),
        _payment(7, created_at=datetime(2024, 6, 12, 9, 0)),
    ]
    summary = aggregate(payments, NOW)
    assert summary.today == Decimal("12")


def test_timestamps_are_read_on_the_local_calendar() -> None:
    karachi = timezone(timedelta(hours=5))
    now = datetime(2024, 6, 12, 10, 0, tzinfo=karachi)
    # 21:00 UTC on the 11th is 02:00 on the 12th in Karachi.
    summary = aggregate(
        [_payment(40, created_at=datetime(2024, 6, 11, 21, 0, tzinfo=UTC))], now
    )
    assert summary.today == Decimal("40")


def test_unknown_status_is_ignored() -> None:
    summary = aggregate([_payment(999, status="refunded")], NOW)
    assert summary == EarningsSummary()


def test_aggregate_is_deterministic() -> None:
    payments = [_payment(10), _payment(20, status="pending")]
    assert aggregate(payments, NOW) == aggregate(list(payments), NOW)


def test_empty_and_missing_input() -> None:
    assert aggregate([], NOW) == EarningsSummary()
    with pytest.raises(ValueError):
        aggregate(None, NOW)  # type: ignore[arg-type]


def test_transaction_counts() -> None:
    counts = count_transactions(
        [_payment(1), _payment(2, status="pending"), _payment(3, status="PAID")]
    )
    assert (counts.total, counts.completed, counts.pending) == (3, 2, 1)


def test_filter_transactions() -> None:
    paid = _payment(1)
    pending_cash = _payment(2, status="pending", method="cash")
    paid_cash = _payment(3, method="cash")
    pending_wallet = _payment(4, status="pending", method="easypaisa")
    payments = [paid, pending_cash, paid_cash, pending_wallet]

    assert filter_transactions(payments) == payments
    assert filter_transactions(payments, "paid") == [paid, paid_cash]
    assert filter_transactions(payments, "pending") == [pending_cash, pending_wallet]
    assert filter_transactions(payments, "cash") == [pending_cash]
    with pytest.raises(ValueError):
        filter_transactions(payments, "refunded")
