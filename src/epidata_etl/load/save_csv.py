"""
Write DataFrames to CSV without ever overwriting an existing file.
"""

from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from epidata_etl.core.errors import PersistenceConflict

log = logging.getLogger(__name__)

def write_csv_exclusive(df: pd.DataFrame, path: str | Path) -> Path:
    """
    Create ``path`` and write ``df`` to it.

    Raises PersistenceConflict if the file already exists. A write that fails
    after the file was created removes it again, so a later run can retry.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        # "x": the existence check and the create are one open() call
        f = open(path, "x", newline="", encoding="utf-8")
    except FileExistsError as e:
        raise PersistenceConflict(path) from e

    try:
        with f:
            df.to_csv(f, index=False)
    except Exception:
        log.error("Write to %s failed; removing partial file", path)
        path.unlink(missing_ok=True)
        raise
    log.info("Wrote %s (%d rows)", path, len(df))
    return path
