"""Command-line interface for writing Xi-pi candidate tables from JSON batches."""

from __future__ import annotations

import argparse
from dataclasses import replace

from .io import load_batches_json, load_run_configuration_json, write_tables
from .logger import configure_logging, logger
from .models import RunConfiguration
from .producer import TreeCreator
from .variants import PROCESS_VARIANTS


def build_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="xipi-tree",
        description="Flatten charm-baryon -> Xi pi candidates into event and candidate tables.",
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Input JSON with key 'batches' (or a single batch with events/tracks/candidates).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional run-configuration JSON (zPvCut and process switches).",
    )
    parser.add_argument(
        "--variant",
        default=None,
        choices=[v.switch for v in PROCESS_VARIANTS],
        help="Enable only this process switch, overriding the configuration file.",
    )
    parser.add_argument(
        "--z-pv-cut",
        type=float,
        default=None,
        help="Cut on the absolute primary-vertex z coordinate (default 10).",
    )
    parser.add_argument("--out-dir", required=True, help="Directory for output tables.")
    parser.add_argument("--prefix", default="xipi", help="Output file-name prefix.")
    parser.add_argument(
        "--format",
        default="parquet",
        choices=["parquet", "csv", "pkl"],
        help="Output table format.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def build_configuration(args: argparse.Namespace) -> RunConfiguration:
    """Merge the optional configuration file with command-line overrides."""
    config = load_run_configuration_json(args.config) if args.config else RunConfiguration()
    if args.variant is not None:
        config = replace(config, process_switches={args.variant: True})
    if args.z_pv_cut is not None:
        config = replace(config, z_pv_cut=args.z_pv_cut)
    return config


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint: validate configuration, process batches, write tables."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    # Configuration is validated before the input is read.
    creator = TreeCreator(build_configuration(args))
    batches = load_batches_json(args.input)
    creator.process_batches(batches)
    paths = write_tables(args.out_dir, creator.close(), prefix=args.prefix, fmt=args.format)
    for path in paths:
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
