#!/usr/bin/env python3
"""
Error types raised while synchronizing cell and read FASTQ streams

Every error is fatal for a run. Errors carry the 1-based index of the record
being processed and, where known, the name of the stream that triggered it.
"""

from typing import Optional


class FqCellError(Exception):
    """Base class for all fqcell run errors"""

    kind = "FqCellError"

    def __init__(self, message: str, record_index: Optional[int] = None,
                 stream: Optional[str] = None):
        self.message = message
        self.record_index = record_index
        self.stream = stream
        super().__init__(message)

    def __str__(self) -> str:
        location = []
        if self.stream is not None:
            location.append(f"stream '{self.stream}'")
        if self.record_index is not None:
            location.append(f"record {self.record_index}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class FormatError(FqCellError, ValueError):
    """Input stream does not follow the 4-line FASTQ framing"""

    kind = "FormatError"


class TruncatedRecordError(FormatError):
    """Stream ended after 1-3 lines of a record"""

    kind = "TruncatedRecord"


class MalformedRecordError(FormatError):
    """Record lines are present but the id or separator marker is wrong"""

    kind = "MalformedRecord"


class UnreadableStreamError(FormatError):
    """Underlying file or decompressor failed"""

    kind = "UnreadableStream"


class ExtractionError(FqCellError, ValueError):
    """Barcode could not be derived from a cell record"""

    kind = "ExtractionError"


class RangeOutOfBoundsError(ExtractionError):
    """Trim offsets fall outside the cell sequence"""

    kind = "RangeOutOfBounds"


class StreamLengthMismatchError(FqCellError):
    """Input streams do not end on the same record"""

    kind = "StreamLengthMismatch"


class OutputWriteError(FqCellError, OSError):
    """Record could not be persisted to an output stream"""

    kind = "OutputWriteError"
