#!/usr/bin/env python3
"""
Cell barcode extraction

Slices the barcode out of a cell record's sequence and optionally flips it.
Offsets always refer to the sequence as read, before any reverse complement.
"""

from typing import Optional

from ..config.run_config import StreamConfig
from ..errors import RangeOutOfBoundsError
from ..fastq.record import FastqRecord
from ..utils.sequence_utils import reverse_complement


def extract_barcode(sequence: str, config: Optional[StreamConfig] = None) -> str:
    """
    Derive the barcode from a cell sequence

    Args:
        sequence: Cell record sequence
        config: Extraction settings (None = whole sequence, as read)

    Returns:
        str: Barcode, possibly empty

    Raises:
        RangeOutOfBoundsError: skip_from/stop_at exceed the sequence, or stop_at < skip_from

    Examples:
        >>> extract_barcode("ACGTACGTTT", StreamConfig(skip_from=2, stop_at=8))
        'GTACGT'
    """
    if config is None:
        return sequence

    length = len(sequence)
    start = config.start
    end = config.stop_at if config.stop_at is not None else length

    if start > length:
        raise RangeOutOfBoundsError(
            f"skip_from={start} exceeds cell sequence length {length}"
        )
    if end > length:
        raise RangeOutOfBoundsError(
            f"stop_at={end} exceeds cell sequence length {length}"
        )
    if end < start:
        raise RangeOutOfBoundsError(
            f"stop_at={end} is before skip_from={start}"
        )

    barcode = sequence[start:end]
    if config.reverse_complement:
        barcode = reverse_complement(barcode)
    return barcode


class BarcodeExtractor:
    """Barcode extractor bound to one StreamConfig"""

    def __init__(self, config: Optional[StreamConfig] = None):
        self.config = config or StreamConfig()

    def extract(self, record: FastqRecord) -> str:
        if self.config.is_identity:
            return record.sequence
        return extract_barcode(record.sequence, self.config)

    __call__ = extract
