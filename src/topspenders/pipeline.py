"""Core entry point: CSV transactions in, ranked monthly report out."""

from __future__ import annotations

import logging
from typing import BinaryIO

from topspenders.aggregate.build_ranking import rank_top_spenders
from topspenders.aggregate.monthly import aggregate_monthly
from topspenders.aggregate.write_report import write_report
from topspenders.config import PipelineConfig
from topspenders.ingest.stream import TransactionStream

log = logging.getLogger(__name__)


def top_spenders(
    source: BinaryIO,
    sink: BinaryIO,
    config: PipelineConfig | None = None,
) -> None:
    """Rank the top five card spenders of every month.

    Reads transactions from `source` (UTF-8 CSV with a header row) and writes
    the report to `sink`. Neither stream is closed.

    Bad rows are logged and skipped unless `config.stop_on_error` is set, in
    which case the first one is raised and nothing is written.

    Raises:
        RowError: first bad row under `stop_on_error`.
        SourceReadError: the input could not be read.
        SinkWriteError: the report could not be written.
    """
    cfg = config or PipelineConfig()
    log.info("Processing transactions (stop_on_error=%s)", cfg.stop_on_error)

    with TransactionStream(source) as stream:
        index = aggregate_monthly(stream, stop_on_error=cfg.stop_on_error)

    write_report(rank_top_spenders(index), sink)
