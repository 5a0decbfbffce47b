# dashboard/utils.py

import math
from datetime import date
from decimal import Decimal
from typing import List, Sequence, Tuple, Union

from dashboard.models.invoices import Revenue

PageItem = Union[int, str]


def format_currency(amount_in_cents: int) -> str:
    """1234567 -> '$12,345.67'"""
    dollars = Decimal(amount_in_cents) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(value: date) -> str:
    """date(2022, 12, 6) -> 'Dec 6, 2022'"""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def generate_pagination(current_page: int, total_pages: int) -> List[PageItem]:
    """
    Page links for the invoices table, with '...' standing in for skipped runs.
    """
    # Few enough pages to show them all
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    # Near the start: first 3, ellipsis, last 2
    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    # Near the end: first 2, ellipsis, last 3
    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    # Somewhere in the middle
    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]


def generate_y_axis(revenue: Sequence[Revenue]) -> Tuple[List[str], int]:
    """
    Labels for the revenue chart, top label rounded up to the next $1K.
    """
    highest_record = max((r.revenue for r in revenue), default=0)
    top_label = math.ceil(highest_record / 1000) * 1000

    y_axis_labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return y_axis_labels, top_label
