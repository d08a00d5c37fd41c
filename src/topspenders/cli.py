"""Command-line interface for the top spenders report.

Usage: topspenders [--stop-on-error] [-o OUTPUT] INPUT

The report is written to stdout unless `--output` is given; logs and skipped
row diagnostics go to stderr (and optionally a log file).
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from topspenders.config import PipelineConfig, get_settings
from topspenders.errors import ConfigError, TopSpendersError
from topspenders.logging_config import configure_logging, parse_level
from topspenders.pipeline import top_spenders

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI."""
    p = argparse.ArgumentParser(
        prog="topspenders",
        description="Rank the top 5 card spenders per month from a CSV of transactions.",
    )
    p.add_argument("input", type=Path, help="CSV file of transactions")
    p.add_argument(
        "--stop-on-error",
        action="store_true",
        default=None,
        help="Stop processing on the first parsing error",
    )
    p.add_argument("-o", "--output", type=Path, default=None, help="Report file (default: stdout)")
    p.add_argument("--log-file", type=Path, default=None)
    p.add_argument("--log-level", type=parse_level, default=None, help="Level name or number")
    p.add_argument(
        "--error-log",
        type=Path,
        default=None,
        help="File receiving one line per skipped input row",
    )
    return p


def run(args: argparse.Namespace, stop_on_error: bool) -> int:
    """Open the streams, run the pipeline and map the outcome to an exit status."""
    cfg = PipelineConfig(stop_on_error=stop_on_error)

    try:
        source = args.input.open("rb")
    except OSError as e:
        log.error("Failed to open input file %s: %s", args.input, e)
        return 1

    with source:
        try:
            if args.output is None:
                top_spenders(source, sys.stdout.buffer, cfg)
            else:
                with args.output.open("wb") as sink:
                    top_spenders(source, sink, cfg)
        except OSError as e:
            log.error("Failed to open output file %s: %s", args.output, e)
            return 1
        except TopSpendersError as e:
            log.error("Failed to process transactions: %s", e)
            return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and run the pipeline."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        s = get_settings()
    except ConfigError as e:
        configure_logging(None)
        log.error("%s", e)
        return 1

    configure_logging(
        args.log_file or s.log_path,
        s.log_level if args.log_level is None else args.log_level,
        args.error_log or s.error_log_path,
    )

    stop_on_error = s.stop_on_error if args.stop_on_error is None else args.stop_on_error
    return run(args, stop_on_error)


if __name__ == "__main__":
    raise SystemExit(main())
