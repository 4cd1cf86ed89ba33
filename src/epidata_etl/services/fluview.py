"""
Fluview service - fetch, derive epiweek dates, and optionally persist per (location, year).
"""

from __future__ import annotations
import logging
from collections.abc import Iterable
from pathlib import Path
import pandas as pd
from epidata_etl.core.config import FetchSettings
from epidata_etl.core.errors import PersistenceConflict
from epidata_etl.extract.extract_fluview import build_params, request_fluview, parse_fluview, empty_frame
from epidata_etl.load.save_csv import write_csv_exclusive
from epidata_etl.transforms.epiweeks import add_epiweek_columns

log = logging.getLogger(__name__)

def output_path(location: str, year: int, output_dir: str | Path = ".") -> Path:
    return Path(output_dir) / f"{location}{year}.csv"

def persist_observations(df: pd.DataFrame, location: str, year: int, output_dir: str | Path = ".") -> Path | None:
    """Write ``{location}{year}.csv``; returns the path, or None when the file already existed."""
    path = output_path(location, year, output_dir)
    try:
        return write_csv_exclusive(df, path)
    except PersistenceConflict:
        log.warning("File %s already exists; skipping write", path)
        return None

def fetch_observations(
    location: str,
    year: int,
    persist: bool = False,
    settings: FetchSettings | None = None,
    session=None,
) -> pd.DataFrame:
    """
    Weekly observations for one location and epi year.

    Columns: region, epiweek, <metric>, year, week, date (Sunday starting the week).
    An empty result set is returned as a zero-row table.
    """
    settings = settings or FetchSettings.from_env()
    params = build_params(location, year)
    location = params["regions"]
    payload = request_fluview(params, settings, session=session)
    df = add_epiweek_columns(parse_fluview(payload, settings.metric))

    if df.empty:
        log.info("No observations for %s %s", location, year)
    if persist:
        persist_observations(df, location, year, settings.output_dir)
    return df

def fetch_observations_range(
    location: str,
    years: Iterable[int],
    persist: bool = False,
    settings: FetchSettings | None = None,
    session=None,
) -> pd.DataFrame:
    """Fetch each year in order and stack the results (input-year order, response order within a year)."""
    settings = settings or FetchSettings.from_env()
    frames = [
        fetch_observations(location, year, persist=persist, settings=settings, session=session)
        for year in years
    ]
    if not frames:
        return add_epiweek_columns(empty_frame(settings.metric))

    out = pd.concat(frames, ignore_index=True)
    log.info("Fetched %d observations for %s over %d years", len(out), location, len(frames))
    return out
