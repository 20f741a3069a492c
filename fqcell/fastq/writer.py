"""
FASTQ record writer
"""

import logging
from typing import TextIO

from ..errors import OutputWriteError
from .record import FastqRecord

logger = logging.getLogger(__name__)


class FastqWriter:
    """
    Serialize records to a text handle in 4-line form

    Output is buffered by the handle; it is flushed when the writer is closed.
    """

    def __init__(self, handle: TextIO, name: str = "output"):
        self.handle = handle
        self.name = name
        self.records_written = 0
        self.closed = False

    def write(self, record: FastqRecord):
        try:
            self.handle.write(
                f"{record.id}\n{record.sequence}\n{record.separator}\n{record.quality}\n"
            )
        except OSError as e:
            raise OutputWriteError(
                f"Failed to write record: {e}",
                record_index=self.records_written + 1,
                stream=self.name,
            ) from e
        self.records_written += 1

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self.handle.flush()
            self.handle.close()
        except OSError as e:
            raise OutputWriteError(
                f"Failed to flush output: {e}", stream=self.name
            ) from e
        logger.debug("Closed %s after %d records", self.name, self.records_written)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
