"""Company income tax, VAT and levy analysis over recorded sales."""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from nairatax.backend.app.models import (
    BusinessTaxResult,
    ExpenseRecord,
    MonthlyTaxBreakdown,
    SalesTransaction,
)
from nairatax.backend.config.schema import BusinessTaxConfig

from .utils import round_half_up

PERIODS = (
    "this-year",
    "last-year",
    "this-quarter",
    "last-quarter",
    "this-month",
    "last-month",
)

LAST_MONTH_DAYS = 30


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months, clamping the day of month."""

    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_period_window(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Return the inclusive ``(start, end)`` window for a reporting period.

    Unknown period names fall back to the trailing thirty days.
    """

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    midnight = {"hour": 0, "minute": 0, "second": 0, "microsecond": 0}

    if period == "this-year":
        return now.replace(month=1, day=1, **midnight), now
    if period == "last-year":
        start = now.replace(year=now.year - 1, month=1, day=1, **midnight)
        end = now.replace(
            year=now.year - 1,
            month=12,
            day=31,
            hour=23,
            minute=59,
            second=59,
            microsecond=999_999,
        )
        return start, end
    if period == "this-quarter":
        quarter_month = ((now.month - 1) // 3) * 3 + 1
        return now.replace(month=quarter_month, day=1, **midnight), now
    if period == "last-quarter":
        return _shift_months(now, -3), now
    if period == "this-month":
        return now.replace(day=1, **midnight), now
    return now - timedelta(days=LAST_MONTH_DAYS), now


def _within(moment: datetime | None, start: datetime, end: datetime) -> bool:
    return moment is not None and start <= moment <= end


def taxable_business_income(
    revenue: float, expenses: float, config: BusinessTaxConfig
) -> float:
    """Revenue less expenses, or less the standard deduction when none were recorded."""

    if expenses:
        return revenue - expenses
    return revenue * (1 - config.standard_deduction_rate)


def _monthly_breakdown(
    transactions: Iterable[SalesTransaction],
    expenses: Iterable[ExpenseRecord],
    config: BusinessTaxConfig,
) -> tuple[MonthlyTaxBreakdown, ...]:
    months: dict[tuple[int, int], list[float]] = {}

    for transaction in transactions:
        moment = transaction.created_at
        if moment is None:
            continue
        months.setdefault((moment.year, moment.month), [0.0, 0.0])[0] += transaction.total

    for expense in expenses:
        moment = expense.booked_at
        if moment is None:
            continue
        months.setdefault((moment.year, moment.month), [0.0, 0.0])[1] += expense.amount

    breakdown: list[MonthlyTaxBreakdown] = []
    for (year, month), (income, spent) in sorted(months.items()):
        band = config.band_for_revenue(income)
        taxable = taxable_business_income(income, spent, config)
        breakdown.append(
            MonthlyTaxBreakdown(
                month=f"{calendar.month_name[month]} {year}",
                income=income,
                expenses=spent,
                vat=round_half_up(income * config.vat_rate / 100),
                cit=round_half_up(taxable * band.rate / 100),
                nhl=round_half_up(income * config.nhl_rate / 100),
            )
        )
    return tuple(breakdown)


def calculate_business_tax(
    transactions: Iterable[SalesTransaction],
    expenses: Iterable[ExpenseRecord],
    period: str,
    now: datetime,
    config: BusinessTaxConfig | None = None,
) -> BusinessTaxResult:
    """Summarise the tax liability of the records that fall inside ``period``."""

    settings = config or BusinessTaxConfig()
    start, end = resolve_period_window(period, now)

    in_window_sales = [item for item in transactions if _within(item.created_at, start, end)]
    in_window_expenses = [item for item in expenses if _within(item.created_at, start, end)]

    total_revenue = sum(item.total for item in in_window_sales)
    total_expenses = sum(item.amount for item in in_window_expenses)

    band = settings.band_for_revenue(total_revenue)
    taxable_income = taxable_business_income(total_revenue, total_expenses, settings)
    company_income_tax = taxable_income * band.rate / 100
    vat_on_sales = total_revenue * settings.vat_rate / 100
    nhl_amount = total_revenue * settings.nhl_rate / 100

    return BusinessTaxResult(
        period=period,
        window_start=start,
        window_end=end,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        band=band.label,
        cit_rate=band.rate,
        taxable_income=taxable_income,
        company_income_tax=company_income_tax,
        vat_on_sales=vat_on_sales,
        vat_rate=settings.vat_rate,
        nhl_amount=nhl_amount,
        nhl_rate=settings.nhl_rate,
        total_tax_liability=company_income_tax + vat_on_sales + nhl_amount,
        breakdown=_monthly_breakdown(in_window_sales, in_window_expenses, settings),
    )


__all__ = [
    "PERIODS",
    "calculate_business_tax",
    "resolve_period_window",
    "taxable_business_income",
]
