"""
Epidemiological (MMWR) week helpers.

Weeks run Sunday to Saturday. Week 1 of a year is the first week holding at
least four days of that year, i.e. the week containing January 4th. A year
therefore has 52 or 53 epiweeks.
"""

from __future__ import annotations
import re
from datetime import date, timedelta
import pandas as pd
from epidata_etl.core.errors import ResponseFormatError
from epidata_etl.models.columns import EPIWEEK_COLUMN

EPIWEEK_RX = re.compile(r"^(\d{4})(\d{2})$")

def _year_start(year: int) -> date:
    jan4 = date(year, 1, 4)
    # date.weekday(): Monday=0 .. Sunday=6
    return jan4 - timedelta(days=(jan4.weekday() + 1) % 7)

def weeks_in_year(year: int) -> int:
    return (_year_start(year + 1) - _year_start(year)).days // 7

def epiweek_start(year: int, week: int) -> date:
    """Sunday that opens epiweek ``week`` of ``year``."""
    if not 1 <= week <= weeks_in_year(year):
        raise ResponseFormatError(f"Week {week} out of range for epi year {year}")
    return _year_start(year) + timedelta(weeks=week - 1)

def parse_epiweek(code) -> tuple[int, int]:
    """Split a YYYYWW code (str or int) into (year, week), validating both parts."""
    if code is None or (isinstance(code, float) and pd.isna(code)):
        raise ResponseFormatError("Missing epiweek code")
    if isinstance(code, bool):
        raise ResponseFormatError(f"Malformed epiweek code: {code!r}")
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    m = EPIWEEK_RX.match(str(code).strip())
    if not m:
        raise ResponseFormatError(f"Malformed epiweek code: {code!r}")
    year, week = int(m.group(1)), int(m.group(2))
    if not 1 <= week <= weeks_in_year(year):
        raise ResponseFormatError(f"Malformed epiweek code: {code!r} (week {week} not in {year})")
    return year, week

def epiweek_range(year: int) -> str:
    """Full-year range token, e.g. 201901-201952."""
    return f"{year}01-{year}{weeks_in_year(year):02d}"

def add_epiweek_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Add integer year/week and the week's start date derived from the epiweek column."""
    df = df.copy()
    parsed = [parse_epiweek(code) for code in df[EPIWEEK_COLUMN]]
    df["year"] = pd.Series([y for y, _ in parsed], index=df.index, dtype="int64")
    df["week"] = pd.Series([w for _, w in parsed], index=df.index, dtype="int64")
    df["date"] = pd.to_datetime(
        pd.Series([epiweek_start(y, w) for y, w in parsed], index=df.index, dtype="object")
    )
    return df
