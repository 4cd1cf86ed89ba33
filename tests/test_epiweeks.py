"""
Tests for epiweek parsing and MMWR week dates
"""
from datetime import date
import pandas as pd
import pytest
from epidata_etl.core.errors import ResponseFormatError
from epidata_etl.transforms.epiweeks import (
    add_epiweek_columns, epiweek_range, epiweek_start, parse_epiweek, weeks_in_year,
)

@pytest.mark.parametrize("year, weeks", [(2012, 52), (2014, 53), (2019, 52), (2020, 53), (2021, 52)])
def test_weeks_in_year(year, weeks):
    assert weeks_in_year(year) == weeks

@pytest.mark.parametrize("year, week, expected", [
    (2012, 1, date(2012, 1, 1)),
    (2019, 1, date(2018, 12, 30)),
    (2020, 53, date(2020, 12, 27)),
    (2021, 1, date(2021, 1, 3)),
    (2021, 52, date(2021, 12, 26)),
])
def test_epiweek_start_is_sunday(year, week, expected):
    start = epiweek_start(year, week)
    assert start == expected
    assert start.weekday() == 6

def test_epiweek_range_uses_real_week_count():
    assert epiweek_range(2019) == "201901-201952"
    assert epiweek_range(2020) == "202001-202053"

@pytest.mark.parametrize("code, expected", [
    ("201940", (2019, 40)),
    (201901, (2019, 1)),
    (" 202053 ", (2020, 53)),
    (202001.0, (2020, 1)),
])
def test_parse_epiweek(code, expected):
    assert parse_epiweek(code) == expected

@pytest.mark.parametrize("code", ["20191", "2019-01", "201900", "201953", "abcdef", None, True, 2019011])
def test_parse_epiweek_rejects_malformed(code):
    with pytest.raises(ResponseFormatError):
        parse_epiweek(code)

def test_add_epiweek_columns():
    df = pd.DataFrame({"region": ["wa", "wa"], "epiweek": [201952, 202001]})
    out = add_epiweek_columns(df)
    assert out["year"].tolist() == [2019, 2020]
    assert out["week"].tolist() == [52, 1]
    assert out["date"].tolist() == [pd.Timestamp("2019-12-22"), pd.Timestamp("2019-12-29")]
    assert "year" not in df.columns

def test_add_epiweek_columns_empty():
    out = add_epiweek_columns(pd.DataFrame(columns=["region", "epiweek"]))
    assert out.empty
    assert list(out.columns) == ["region", "epiweek", "year", "week", "date"]
