from datetime import datetime

from utils.time import format_fixed, format_number, format_year, month_name, to_seconds, year_month_instant


def test_year_month_instant_is_first_of_month():
    assert year_month_instant(1900, 1) == datetime(1900, 1, 1)
    assert year_month_instant(2015, 9) == datetime(2015, 9, 1)


def test_year_month_instant_rolls_over_out_of_range_months():
    assert year_month_instant(1900, 13) == datetime(1901, 1, 1)
    assert year_month_instant(1900, 0) == datetime(1899, 12, 1)


def test_month_name_and_year_format():
    instant = datetime(1753, 3, 1)
    assert month_name(instant) == "March"
    assert format_year(instant) == "1753"
    assert format_year(datetime(950, 1, 1)) == "0950"


def test_to_seconds_relative_to_epoch():
    assert to_seconds(datetime(1970, 1, 1)) == 0
    assert to_seconds(datetime(1970, 1, 2)) == 86400
    assert to_seconds(datetime(1969, 12, 31)) == -86400


def test_format_number_matches_json_rendering():
    assert format_number(8.66) == "8.66"
    assert format_number(8.0) == "8"
    assert format_number(None) == ""


def test_format_fixed_rounds_ties_away_from_zero():
    assert format_fixed(0.625) == "0.63"
    assert format_fixed(-0.125) == "-0.13"
    assert format_fixed(8.625) == "8.63"
    assert format_fixed(-0.5) == "-0.50"
    assert format_fixed(-0.0) == "0.00"
    assert format_fixed(7.5) == "7.50"
