"""
Extract per-record diagnostic codes, raw DataFrame.
"""
import logging
from pathlib import Path
import pandas as pd
from epidata_etl.core.config import CODES_FILE
from epidata_etl.core.errors import ConfigurationError
from epidata_etl.models.columns import ID_COLUMN

log = logging.getLogger(__name__)

def read_code_records(path: str | Path = CODES_FILE, id_column: str = ID_COLUMN) -> pd.DataFrame:
    """Read a codes CSV: id as integer, every other column as nullable strings."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.strip()
    if id_column not in df.columns:
        raise ConfigurationError(f"'{id_column}' must be a column name in {Path(path).name}")

    code_cols = [c for c in df.columns if c != id_column]
    for col in code_cols:
        s = df[col].str.strip()
        df[col] = s.where(s.ne(""), None)
    df[id_column] = pd.to_numeric(df[id_column].str.strip(), errors="raise").astype("int64")

    log.info("Extracted code records: %s (%d rows, %d code columns)", path, len(df), len(code_cols))
    return df
