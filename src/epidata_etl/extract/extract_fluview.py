"""
Extract weekly ILI observations from the Delphi Epidata fluview endpoint.
- One synchronous GET per (location, year)
- Returns the observations as a DataFrame in response order
"""

from __future__ import annotations
import logging
import numpy as np
import requests
import pandas as pd
from epidata_etl.core.config import FetchSettings
from epidata_etl.core.errors import ConfigurationError, ResponseFormatError
from epidata_etl.models.columns import observation_columns
from epidata_etl.transforms.epiweeks import epiweek_range

log = logging.getLogger(__name__)

# Epidata result codes
RESULT_OK = 1
RESULT_NO_RESULTS = -2

def build_params(location: str, year: int) -> dict:
    if not location or not str(location).strip():
        raise ConfigurationError("location must be a non-empty region code")
    if isinstance(year, bool) or not isinstance(year, (int, np.integer)):
        raise ConfigurationError(f"year must be an integer, got {year!r}")
    return {"regions": str(location).strip(), "epiweeks": epiweek_range(int(year))}

def request_fluview(params: dict, settings: FetchSettings, session=None) -> dict:
    """GET the endpoint and decode the JSON body. Transport errors propagate unchanged."""
    getter = session.get if session is not None else requests.get
    log.info("GET %s regions=%s epiweeks=%s", settings.base_url, params["regions"], params["epiweeks"])
    try:
        r = getter(settings.base_url, params=params, timeout=settings.timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        log.error("Request failed for %s: %s", params, e)
        raise

    try:
        payload = r.json()
    except ValueError as e:
        raise ResponseFormatError(f"Response body is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ResponseFormatError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload

def empty_frame(metric: str) -> pd.DataFrame:
    return pd.DataFrame(columns=observation_columns(metric)).astype({metric: "float64"})

def parse_fluview(payload: dict, metric: str) -> pd.DataFrame:
    """Project the epidata array onto region, epiweek and the metric column."""
    cols = observation_columns(metric)
    result = payload.get("result")
    if result == RESULT_NO_RESULTS:
        log.info("No results: %s", payload.get("message", ""))
        return empty_frame(metric)
    if result is not None and result != RESULT_OK:
        raise ResponseFormatError(f"Epidata error (result={result}): {payload.get('message', '')}")

    rows = payload.get("epidata")
    if rows is None:
        raise ResponseFormatError("Response has no 'epidata' field")
    if not isinstance(rows, list):
        raise ResponseFormatError(f"'epidata' must be a list, got {type(rows).__name__}")
    if not rows:
        return empty_frame(metric)

    records = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ResponseFormatError(f"Observation {i} is not an object")
        missing = [c for c in cols if c not in row]
        if missing:
            raise ResponseFormatError(f"Observation {i} is missing fields: {missing}")
        records.append({c: row[c] for c in cols})

    df = pd.DataFrame(records, columns=cols)
    df[metric] = pd.to_numeric(df[metric], errors="coerce")
    log.info("Parsed %d observations", len(df))
    return df
