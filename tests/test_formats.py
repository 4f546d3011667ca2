"""
Tests of wastewater.formats
"""

import datetime

import pandas
import pytest

from wastewater.formats import format_date
from wastewater.formats import format_date_us
from wastewater.formats import format_number_thousand


@pytest.mark.parametrize(
    "value, exp",
    (
        pytest.param(2693000, "2.693.000", id="millions"),
        pytest.param(999.6, "1.000", id="rounds"),
        pytest.param(12, "12", id="small"),
        pytest.param(0, "0", id="zero"),
    ),
)
def test_format_number_thousand(value, exp):
    assert format_number_thousand(value) == exp


@pytest.mark.parametrize(
    "date",
    (
        pytest.param(pandas.Timestamp(2024, 6, 9), id="timestamp"),
        pytest.param(datetime.date(2024, 6, 9), id="date"),
    ),
)
def test_format_date(date):
    assert format_date(date) == "09.06.2024"


def test_format_date_us():
    assert format_date_us(pandas.Timestamp(2025, 7, 16)) == "July 16, 2025"
