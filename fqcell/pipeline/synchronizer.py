#!/usr/bin/env python3
"""
Stream synchronizer

Advances the cell reader and every read reader by one record per tick and
forwards each read record, header rewritten with the cell barcode, to its writer.
Record n of every read stream is only ever labeled with the barcode of cell
record n; any divergence in stream length or framing stops the run.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from tqdm import tqdm

from ..barcode.extractor import BarcodeExtractor
from ..barcode.injector import BARCODE_DELIMITER, inject_barcode
from ..config.run_config import StreamConfig
from ..errors import ExtractionError, FqCellError, OutputWriteError, StreamLengthMismatchError
from ..fastq.reader import FastqReader
from ..fastq.record import FastqRecord
from ..fastq.writer import FastqWriter

logger = logging.getLogger(__name__)

CELL_STREAM = "cell"


class PipelineState(Enum):
    """Synchronizer states"""
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunContext:
    """
    Mutable state of a single run, threaded through the synchronizer

    Attributes:
        state: Current PipelineState
        record_index: 1-based index of the record being processed (0 before the first tick)
        records_processed: Number of fully written ticks
        barcode_counts: Occurrences of each injected barcode, None unless counting was requested
        error: Fatal error, if the run failed
    """
    state: PipelineState = PipelineState.RUNNING
    record_index: int = 0
    records_processed: int = 0
    barcode_counts: Optional[Counter] = None
    error: Optional[FqCellError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE


class StreamSynchronizer:
    """
    Lockstep driver for one cell stream and one or two read streams

    Args:
        cell_reader: Reader over the cell/barcode stream
        read_readers: Read stream name -> reader, e.g. {'r1': ..., 'r2': ...}
        writers: Read stream name -> writer; must have the same keys as read_readers
        config: Barcode extraction settings
        delimiter: Separator used when injecting the barcode
        count_barcodes: Keep a count per distinct barcode (memory grows with barcode diversity)
        show_progress: Display a tqdm progress bar while running
    """

    def __init__(self, cell_reader: FastqReader, read_readers: Dict[str, FastqReader],
                 writers: Dict[str, FastqWriter], config: Optional[StreamConfig] = None,
                 delimiter: str = BARCODE_DELIMITER, count_barcodes: bool = False,
                 show_progress: bool = False):
        if not read_readers:
            raise ValueError("At least one read stream is required")
        if set(read_readers) != set(writers):
            raise ValueError(
                f"Read streams {sorted(read_readers)} and writers {sorted(writers)} do not match"
            )
        self.cell_reader = cell_reader
        self.read_readers = read_readers
        self.writers = writers
        self.extractor = BarcodeExtractor(config)
        self.delimiter = delimiter
        self.count_barcodes = count_barcodes
        self.show_progress = show_progress

    def step(self, context: RunContext) -> bool:
        """
        Run one tick

        Returns:
            bool: True if a record was processed, False once all streams ended together

        Raises:
            FqCellError: any format, extraction, length or write error; context.state is FAILED
        """
        if context.state is not PipelineState.RUNNING:
            raise RuntimeError(f"Cannot step a synchronizer in state {context.state.value}")

        index = context.record_index + 1
        try:
            cell_record = self.cell_reader.read()
            if cell_record is None:
                context.state = PipelineState.DRAINING
                self._drain(index)
                context.state = PipelineState.DONE
                return False

            read_records = {name: reader.read() for name, reader in self.read_readers.items()}
            self._check_lengths(read_records, index)

            context.record_index = index
            barcode = self._extract(cell_record, index)
            for name, record in read_records.items():
                new_id = inject_barcode(record.id, barcode, self.delimiter)
                self._write(name, record.with_id(new_id), index)
        except FqCellError as e:
            context.state = PipelineState.FAILED
            context.error = e
            raise

        context.records_processed += 1
        if self.count_barcodes:
            if context.barcode_counts is None:
                context.barcode_counts = Counter()
            context.barcode_counts[barcode] += 1
        return True

    def run(self, context: Optional[RunContext] = None) -> RunContext:
        """Step until every stream has ended; raises on the first fatal error"""
        context = context or RunContext()
        with tqdm(desc="Processing reads", unit=' reads', unit_scale=True,
                  disable=not self.show_progress) as progress:
            while self.step(context):
                progress.update(1)
        logger.info("All streams ended after %d records", context.records_processed)
        return context

    def _drain(self, index: int):
        # cell stream has ended; every read stream must end on the same tick
        active = [name for name, reader in self.read_readers.items() if reader.read() is not None]
        if active:
            raise StreamLengthMismatchError(
                f"Input streams have different lengths: {CELL_STREAM} ended "
                f"while {', '.join(active)} still had records",
                record_index=index,
                stream=CELL_STREAM,
            )

    def _check_lengths(self, read_records: Dict[str, Optional[FastqRecord]], index: int):
        ended = [name for name, rec in read_records.items() if rec is None]
        if ended:
            active = [CELL_STREAM] + [name for name, rec in read_records.items() if rec is not None]
            raise StreamLengthMismatchError(
                f"Input streams have different lengths: {', '.join(ended)} ended "
                f"while {', '.join(active)} still had records",
                record_index=index,
                stream=ended[0],
            )

    def _extract(self, cell_record: FastqRecord, index: int) -> str:
        try:
            return self.extractor.extract(cell_record)
        except ExtractionError as e:
            e.record_index = index
            e.stream = CELL_STREAM
            raise

    def _write(self, name: str, record: FastqRecord, index: int):
        try:
            self.writers[name].write(record)
        except OutputWriteError as e:
            e.record_index = index
            raise
