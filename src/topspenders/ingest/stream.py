"""Streaming producer that turns a CSV byte stream into transactions.

A daemon thread reads the input row by row, decodes and validates each row,
and hands one `StreamItem` at a time to the consumer through a one-slot
`queue.Queue`. Items arrive in input order. Per-row failures are delivered as
items carrying the error; the producer never stops on them. A failure of the
source itself is delivered once and ends the stream.
"""

from __future__ import annotations

import csv
import io
import logging
import queue
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from topspenders.clean.validate import validate_transaction
from topspenders.errors import RowError, SourceReadError, TopSpendersError
from topspenders.ingest.decode import decode_record
from topspenders.models import Transaction

log = logging.getLogger(__name__)

_END = object()


@dataclass(frozen=True)
class StreamItem:
    """One result from the stream: either a transaction or an error.

    Attributes:
        line: Input line number the item was read from (0 when unknown).
        transaction: The validated transaction, or ``None`` on error.
        error: The row or source error, or ``None`` on success.
    """
    line: int
    transaction: Transaction | None = None
    error: TopSpendersError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TransactionStream:
    """Lazy, single-pass iterator over the transactions of a CSV input.

    The header row is read and discarded before any item is produced. Use it
    as a context manager (or call `close`) so an early exit by the consumer
    releases the producer thread.
    """

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._handoff: queue.Queue[object] = queue.Queue(maxsize=1)
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._produce, name="transaction-producer", daemon=True
        )
        self._started = False

    def __enter__(self) -> TransactionStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[StreamItem]:
        if self._started:
            raise RuntimeError("TransactionStream can only be iterated once")
        self._started = True
        self._thread.start()
        try:
            while True:
                item = self._handoff.get()
                if item is _END:
                    return
                if not isinstance(item, StreamItem):
                    raise TypeError(f"unexpected item on the handoff queue: {item!r}")
                yield item
        finally:
            self.close()

    @property
    def running(self) -> bool:
        """Whether the producer thread is still alive."""
        return self._thread.is_alive()

    def close(self, timeout: float = 1.0) -> None:
        """Stop the producer and wait briefly for it to exit."""
        if not self._started:
            return
        self._stop.set()
        # Free the slot so a producer blocked in put() can observe the stop flag.
        try:
            self._handoff.get_nowait()
        except queue.Empty:
            pass
        self._thread.join(timeout)
        if self._thread.is_alive():
            log.debug("Producer still blocked on the source after close()")

    # --------------------------------------------------
    # Producer side
    # --------------------------------------------------
    def _offer(self, item: object) -> bool:
        """Hand one item to the consumer; False once the consumer has gone."""
        if self._stop.is_set():
            return False
        self._handoff.put(item)
        return not self._stop.is_set()

    def _produce(self) -> None:
        text = io.TextIOWrapper(self._source, encoding="utf-8", newline="")
        try:
            self._read_rows(csv.reader(text))
        finally:
            try:
                # Leave the caller's byte stream open.
                text.detach()
            finally:
                self._offer(_END)

    def _read_rows(self, reader: Iterator[list[str]]) -> None:
        try:
            next(reader)
        except StopIteration:
            self._offer(StreamItem(0, error=SourceReadError("input has no header row")))
            return
        except (csv.Error, UnicodeDecodeError, OSError) as e:
            self._offer(StreamItem(1, error=SourceReadError(f"failed to read header: {e}")))
            return

        while True:
            try:
                record = next(reader)
            except StopIteration:
                return
            except (csv.Error, UnicodeDecodeError, OSError) as e:
                line = getattr(reader, "line_num", 0)
                self._offer(StreamItem(line, error=SourceReadError(f"line {line}: {e}")))
                return

            if not record:
                continue

            line = getattr(reader, "line_num", 0)
            try:
                tx = validate_transaction(decode_record(record, line), line)
            except RowError as e:
                item = StreamItem(line, error=e)
            else:
                item = StreamItem(line, transaction=tx)

            if not self._offer(item):
                return
