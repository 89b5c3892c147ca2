from __future__ import annotations

from typing import TYPE_CHECKING

from ...constants import Defaults
from ..logging.null_logger import NullLogger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...application.ports.services import BatchSinkPort, LoggerPort
    from ...domain.entities.scalars import Row


class BatchProcessor:
    """Group rows into bounded batches and hand each one to a sink.

    The sink is called synchronously as soon as a batch is full, so peak
    memory depends on ``batch_size`` rather than on the number of rows.
    Sink exceptions are not caught: they propagate to whoever is adding rows
    and no further batches are delivered.
    """

    def __init__(
        self,
        sink: BatchSinkPort,
        batch_size: int = Defaults.BATCH_SIZE,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.sink = sink
        self.batch_size = batch_size
        self._logger: LoggerPort = logger or NullLogger()
        self._batch: list[Row] = []
        self._finished = False
        self.rows_processed = 0
        self.batches_delivered = 0

    @property
    def pending_rows(self) -> int:
        return len(self._batch)

    def add(self, row: Row) -> None:
        if self._finished:
            raise RuntimeError("BatchProcessor.add() called after finish()")
        self._batch.append(row)
        self.rows_processed += 1
        if len(self._batch) >= self.batch_size:
            self._deliver()

    def extend(self, rows: Iterable[Row]) -> None:
        for row in rows:
            self.add(row)

    def finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        if self._batch:
            self._deliver()

    def _deliver(self) -> None:
        batch = self._batch[:]
        self._batch.clear()
        self.sink(batch)
        self.batches_delivered += 1
        self._logger.log_batch_delivered(self.batches_delivered, len(batch))
