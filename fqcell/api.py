#!/usr/bin/env python3
"""
fqcell Main API Module

Provides the high-level entry point that opens the cell and read FASTQ files,
runs the stream synchronizer and reports the outcome
"""

import logging
import time
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config.run_config import RunConfig
from .errors import FqCellError, OutputWriteError, UnreadableStreamError
from .fastq.reader import FastqReader
from .fastq.writer import FastqWriter
from .pipeline.synchronizer import CELL_STREAM, PipelineState, RunContext, StreamSynchronizer
from .utils.misc import open_fastq_file

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """
    Outcome of a barcode injection run

    Attributes:
        records_processed: Number of records written to each output
        output_paths: Output file per read stream
        barcode_counts: Occurrences of each injected barcode (empty unless counting was enabled)
        processing_time: Processing time in seconds
        state: Final synchronizer state
    """
    records_processed: int
    output_paths: Dict[str, Path] = field(default_factory=dict)
    barcode_counts: Dict[str, int] = field(default_factory=dict)
    processing_time: float = 0.0
    state: PipelineState = PipelineState.DONE

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def num_unique_barcodes(self) -> int:
        """Return number of distinct barcodes injected"""
        return len(self.barcode_counts)

    def to_df(self) -> pd.DataFrame:
        """Convert barcode counts to pandas DataFrame

        Returns:
            pd.DataFrame: columns 'barcode' and 'count', most frequent first
        """
        df = pd.DataFrame(
            list(self.barcode_counts.items()), columns=['barcode', 'count']
        )
        return df.sort_values(['count', 'barcode'], ascending=[False, True]).reset_index(drop=True)

    def print_summary(self):
        """Print run summary"""
        print("fqcell Run Summary")
        print("=" * 40)
        print(f"Status: {self.state.value}")
        print(f"Records processed: {self.records_processed}")
        print(f"Unique barcodes: {self.num_unique_barcodes}")
        print(f"Processing time: {self.processing_time:.2f} seconds")
        for name, path in self.output_paths.items():
            print(f"  {name}: {path}")


def _open_input(stack: ExitStack, path: Path, name: str) -> FastqReader:
    try:
        handle = stack.enter_context(open_fastq_file(path, "r"))
    except OSError as e:
        raise UnreadableStreamError(f"Cannot open {path}: {e}", record_index=1, stream=name) from e
    return FastqReader(handle, name=name)


def _open_output(stack: ExitStack, path: Path, name: str) -> FastqWriter:
    # Writer.close() flushes and closes the handle; registered so it runs on failure too
    try:
        handle = open_fastq_file(path, "w")
    except OSError as e:
        raise OutputWriteError(f"Cannot create {path}: {e}", stream=name) from e
    writer = FastqWriter(handle, name=name)
    stack.callback(writer.close)
    return writer


def add_cell_barcodes(config: RunConfig, context: Optional[RunContext] = None) -> RunResult:
    """
    Embed cell barcodes into the read headers of R1 (and R2)

    Args:
        config: Run configuration
        context: Optional run context to observe progress; a new one is created otherwise

    Returns:
        RunResult: Success summary

    Raises:
        FileNotFoundError: an input file does not exist
        FqCellError: the first fatal format, extraction, length or write error.
            Outputs already written are flushed and left in place as a valid prefix.
    """
    start_time = time.time()

    for name, path in config.input_paths().items():
        if not path.exists():
            raise FileNotFoundError(f"Input file for {name} does not exist: {path}")

    output_paths = config.output_paths()
    context = context or RunContext()
    logger.info("Adding cell barcodes from %s to %s", config.cell_path,
                ", ".join(str(config.input_paths()[name]) for name in config.read_streams))

    with ExitStack() as stack:
        cell_reader = _open_input(stack, config.cell_path, CELL_STREAM)
        read_readers = {
            name: _open_input(stack, config.input_paths()[name], name)
            for name in config.read_streams
        }
        writers = {
            name: _open_output(stack, output_paths[name], name)
            for name in config.read_streams
        }

        synchronizer = StreamSynchronizer(
            cell_reader,
            read_readers,
            writers,
            config=config.stream,
            delimiter=config.delimiter,
            count_barcodes=config.count_barcodes,
            show_progress=config.show_progress,
        )
        try:
            synchronizer.run(context)
        except FqCellError as e:
            logger.error("Run failed: %s", e)
            logger.info("Kept %d records already written to outputs", context.records_processed)
            raise

    processing_time = time.time() - start_time
    logger.info("Processed %d records in %.2f seconds", context.records_processed, processing_time)

    return RunResult(
        records_processed=context.records_processed,
        output_paths=output_paths,
        barcode_counts=dict(context.barcode_counts or {}),
        processing_time=processing_time,
        state=context.state,
    )
