"""Tests for dashboard/utils.py"""

from datetime import date

import pytest

from dashboard.models.invoices import Revenue
from dashboard.utils import (
    format_currency,
    format_date_to_local,
    generate_pagination,
    generate_y_axis,
)


@pytest.mark.parametrize(
    "cents, expected",
    [
        (0, "$0.00"),
        (666, "$6.66"),
        (15795, "$157.95"),
        (123456789, "$1,234,567.89"),
        (-500, "-$5.00"),
    ],
)
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_date_to_local():
    assert format_date_to_local(date(2022, 12, 6)) == "Dec 6, 2022"
    assert format_date_to_local(date(2023, 6, 17)) == "Jun 17, 2023"


class TestGeneratePagination:
    def test_few_pages_are_all_listed(self):
        assert generate_pagination(1, 0) == []
        assert generate_pagination(4, 7) == [1, 2, 3, 4, 5, 6, 7]

    def test_near_start(self):
        assert generate_pagination(2, 10) == [1, 2, 3, "...", 9, 10]

    def test_near_end(self):
        assert generate_pagination(9, 10) == [1, 2, "...", 8, 9, 10]

    def test_middle(self):
        assert generate_pagination(5, 10) == [1, "...", 4, 5, 6, "...", 10]


class TestGenerateYAxis:
    def test_rounds_top_label_up_to_next_thousand(self):
        revenue = [Revenue(month="Jan", revenue=2000), Revenue(month="Dec", revenue=4800)]

        labels, top_label = generate_y_axis(revenue)

        assert top_label == 5000
        assert labels == ["$5K", "$4K", "$3K", "$2K", "$1K", "$0K"]

    def test_empty_revenue(self):
        assert generate_y_axis([]) == (["$0K"], 0)
