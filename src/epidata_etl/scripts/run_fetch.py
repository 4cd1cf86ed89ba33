"""
CLI wrapper for fetching fluview ILI observations.
Run with:
    python -m epidata_etl.scripts.run_fetch wa 2019
    python -m epidata_etl.scripts.run_fetch wa 2012 2013 2014 --persist
"""
import argparse
import logging
from dataclasses import replace
from pathlib import Path
from epidata_etl.core.config import FetchSettings
from epidata_etl.core.logging_setup import setup_logging
from epidata_etl.services.fluview import fetch_observations_range

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Fetch weekly ILI observations for one region.")
    p.add_argument("location", help="region code, e.g. 'wa' or 'nat'")
    p.add_argument("years", nargs="+", type=int, help="epi years, fetched in the order given")
    p.add_argument("--persist", action="store_true", help="write {location}{year}.csv per year")
    p.add_argument("--output-dir", default=None, help="directory for persisted CSVs")
    p.add_argument("--metric", default=None, help="illness-rate field (default: wili)")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING ... (default: $LOG_LEVEL or INFO)")
    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    log = logging.getLogger(__name__)

    settings = FetchSettings.from_env()
    if args.output_dir:
        settings = replace(settings, output_dir=Path(args.output_dir))
    if args.metric:
        settings = replace(settings, metric=args.metric)

    log.info("Fetching %s for years %s", args.location, args.years)
    df = fetch_observations_range(args.location, args.years, persist=args.persist, settings=settings)
    log.info("Fetch complete: %d rows", len(df))
    print(df.to_string(index=False))
    return df

if __name__ == "__main__":
    main()
