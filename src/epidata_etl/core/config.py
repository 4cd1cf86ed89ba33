
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv
from epidata_etl.core.errors import ConfigurationError

load_dotenv()

# project paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
DATA_DIR   = BASE_DIR / "data"
RAW_DIR    = DATA_DIR / "raw"
CLEAN_DIR  = DATA_DIR / "cleaned"
LOGS_DIR   = Path(os.getenv("EPIDATA_LOGS_DIR", DATA_DIR / "logs"))

# input files
CODES_FILE = RAW_DIR / "record_axis_codes.csv"

# output files
CODES_FLAGGED = CLEAN_DIR / "record_axis_codes_flagged.csv"

# opioid poisoning prefixes (ICD-10 T40.0 - T40.4)
DEFAULT_OPIOID_CODES = ("T400", "T401", "T402", "T403", "T404")

# Delphi Epidata fluview endpoint
FLUVIEW_URL = "https://api.delphi.cmu.edu/epidata/fluview/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_METRIC = "wili"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class FetchSettings:
    """Settings for one retrieval run. Passed explicitly into the services."""
    base_url: str = FLUVIEW_URL
    timeout: float = DEFAULT_TIMEOUT
    metric: str = DEFAULT_METRIC
    output_dir: Path = Path(".")

    @classmethod
    def from_env(cls) -> "FetchSettings":
        timeout = os.getenv("EPIDATA_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout_s = float(timeout)
        except ValueError:
            raise ConfigurationError(f"EPIDATA_TIMEOUT must be a number, got {timeout!r}")
        return cls(
            base_url=os.getenv("EPIDATA_FLUVIEW_URL", FLUVIEW_URL),
            timeout=timeout_s,
            metric=os.getenv("EPIDATA_METRIC", DEFAULT_METRIC),
            output_dir=Path(os.getenv("EPIDATA_OUTPUT_DIR", ".")),
        )
