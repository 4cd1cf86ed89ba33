"""
Flag opioid-related codes in a per-record codes CSV.
Run with:
    python -m epidata_etl.scripts.run_opioid_flag [INPUT] [--output PATH] [--codes T400 T401 ...]
"""
import argparse
import logging
from epidata_etl.core.config import CODES_FILE, CODES_FLAGGED, DEFAULT_OPIOID_CODES
from epidata_etl.core.logging_setup import setup_logging
from epidata_etl.transforms.opioid_flag import main as flag_codes

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Append a 0/1 opioid flag to each record.")
    p.add_argument("input", nargs="?", default=str(CODES_FILE), help="codes CSV with an 'id' column")
    p.add_argument("--output", default=str(CODES_FLAGGED), help="where to write the flagged CSV")
    p.add_argument("--codes", nargs="+", default=list(DEFAULT_OPIOID_CODES),
                   help="four-character code prefixes to flag")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING ... (default: $LOG_LEVEL or INFO)")
    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    log = logging.getLogger(__name__)
    log.info("Flagging %s with codes %s", args.input, ", ".join(args.codes))
    df = flag_codes(args.input, args.output, args.codes)
    print(df.to_string(index=False))

if __name__ == "__main__":
    main()
