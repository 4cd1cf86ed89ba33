"""
Flag records carrying opioid-related diagnostic codes.

Each record holds an id plus any number of code columns. The codes are
reshaped to long form, tested per id against a reference set of four-character
prefixes, and reshaped back to the original wide layout with a 0/1 flag column
appended.
"""

from __future__ import annotations
import logging
from collections.abc import Iterable
import numpy as np
import pandas as pd
from pathlib import Path
from epidata_etl.core.config import DEFAULT_OPIOID_CODES, CODES_FILE, CODES_FLAGGED
from epidata_etl.core.errors import ConfigurationError
from epidata_etl.extract.extract_codes import read_code_records
from epidata_etl.models.columns import ID_COLUMN, FLAG_COLUMN, NAME_COLUMN, VALUE_COLUMN

log = logging.getLogger(__name__)

PREFIX_LEN = 4

def _free_name(base: str, taken) -> str:
    """``base`` with leading underscores added until it is not in ``taken``."""
    taken = set(taken)
    name = base
    while name in taken:
        name = "_" + name
    return name

def _validate(df: pd.DataFrame, id_column: str) -> None:
    if id_column not in df.columns:
        raise ConfigurationError(f"'{id_column}' must be a column name in df")
    dup_ids = df.loc[df[id_column].duplicated(), id_column]
    if not dup_ids.empty:
        raise ConfigurationError(
            f"'{id_column}' must be unique; duplicated: {dup_ids.unique().tolist()}"
        )
    if df[id_column].isna().any():
        raise ConfigurationError(f"'{id_column}' contains null values")

def _reference_set(reference_codes) -> set[str]:
    # a bare string would iterate as single characters
    if isinstance(reference_codes, str):
        raise ConfigurationError(
            f"reference_codes must be a collection of codes, not the string {reference_codes!r}"
        )
    codes = {str(c) for c in reference_codes}
    if not codes:
        raise ConfigurationError("reference_codes must not be empty")
    return codes

def to_long(
    df: pd.DataFrame,
    id_column: str = ID_COLUMN,
    columns: list[str] | None = None,
    name_column: str | None = None,
    value_column: str | None = None,
) -> pd.DataFrame:
    """
    (id, name, value) triples, one per cell of the given (default: all non-id) columns.

    The name/value columns default to "name"/"value", underscore-prefixed when
    ``df`` already has a column of that name.
    """
    if columns is None:
        columns = [c for c in df.columns if c != id_column]
    name_column = name_column or _free_name(NAME_COLUMN, df.columns)
    value_column = value_column or _free_name(VALUE_COLUMN, list(df.columns) + [name_column])
    return df.melt(
        id_vars=[id_column],
        value_vars=columns,
        var_name=name_column,
        value_name=value_column,
    )

def to_wide(
    long_df: pd.DataFrame,
    id_column: str,
    columns: list[str],
    ids: pd.Series | None = None,
    name_column: str | None = None,
    value_column: str | None = None,
) -> pd.DataFrame:
    """Inverse of to_long: one row per id (in ``ids`` order if given), columns in ``columns`` order."""
    name_column, value_column = _long_columns(long_df, id_column, name_column, value_column)
    wide = long_df.pivot(index=id_column, columns=name_column, values=value_column)
    if ids is not None:
        wide = wide.reindex(pd.Index(ids, name=id_column))
    wide = wide.reindex(columns=columns)
    wide.columns.name = None
    return wide.reset_index()

def _long_columns(long_df, id_column, name_column, value_column) -> tuple[str, str]:
    if name_column and value_column:
        return name_column, value_column
    rest = [c for c in long_df.columns if c != id_column]
    if len(rest) != 2:
        raise ConfigurationError(f"Expected (id, name, value) columns, got {list(long_df.columns)}")
    return name_column or rest[0], value_column or rest[1]

def flag_ids(
    long_df: pd.DataFrame,
    id_column: str,
    reference_codes: Iterable[str],
    value_column: str | None = None,
) -> pd.Series:
    """Per-id 0/1: does any non-null value's 4-char prefix sit in reference_codes."""
    codes = _reference_set(reference_codes)
    _, value_column = _long_columns(long_df, id_column, None, value_column)
    prefixes = long_df[value_column].astype("string").str[:PREFIX_LEN]
    hits = prefixes.isin(codes).fillna(False).astype(bool)
    any_hit = hits.groupby(long_df[id_column].to_numpy(), sort=False).any()
    return pd.Series(np.where(any_hit, 1, 0), index=any_hit.index, name=FLAG_COLUMN)

def annotate_opioid(
    df: pd.DataFrame,
    id_column: str = ID_COLUMN,
    reference_codes: Iterable[str] = DEFAULT_OPIOID_CODES,
    flag_column: str = FLAG_COLUMN,
) -> pd.DataFrame:
    _validate(df, id_column)
    reference_codes = _reference_set(reference_codes)

    code_cols = [c for c in df.columns if c not in (id_column, flag_column)]
    out_cols = [c for c in df.columns if c != flag_column]

    if df.empty or not code_cols:
        out = df.reindex(columns=out_cols).copy()
        out[flag_column] = pd.Series(0, index=out.index, dtype="int64")
        return out

    name_col = _free_name(NAME_COLUMN, df.columns)
    value_col = _free_name(VALUE_COLUMN, list(df.columns) + [name_col])
    long_df = to_long(df, id_column, code_cols, name_col, value_col)
    flags = flag_ids(long_df, id_column, reference_codes, value_col)

    out = to_wide(long_df, id_column, code_cols, ids=df[id_column], name_column=name_col, value_column=value_col)
    out = out.reindex(columns=out_cols)
    out = out.astype(df.dtypes[out_cols].to_dict())
    out[flag_column] = out[id_column].map(flags).fillna(0).astype("int64")

    log.info("Opioid flag: %d of %d records flagged", int(out[flag_column].sum()), len(out))
    return out

def main(
    input_path: str | Path = CODES_FILE,
    output_path: str | Path = CODES_FLAGGED,
    reference_codes: Iterable[str] = DEFAULT_OPIOID_CODES,
) -> pd.DataFrame:
    df_raw = read_code_records(input_path)
    df_flagged = annotate_opioid(df_raw, reference_codes=reference_codes)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    df_flagged.to_csv(output_path, index=False)
    log.info("Saved flagged records: %s (%d rows)", output_path, len(df_flagged))
    return df_flagged
