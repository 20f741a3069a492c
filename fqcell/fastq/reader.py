#!/usr/bin/env python3
"""
FASTQ record reader

Pulls one 4-line record at a time from a text handle (plain or gzip, see
fqcell.utils.misc.open_fastq_file). The reader is lazy and cannot be
restarted; reopen the underlying file to read it again.
"""

import zlib
from typing import Iterator, Optional, TextIO

from ..errors import MalformedRecordError, TruncatedRecordError, UnreadableStreamError
from .record import FastqRecord

_READ_ERRORS = (OSError, EOFError, zlib.error, UnicodeDecodeError)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class FastqReader:
    """
    Iterator over the records of a single FASTQ stream

    Args:
        handle: Text handle supporting readline()
        name: Stream name used in error messages ('cell', 'r1', 'r2', ...)

    Examples:
        >>> import io
        >>> reader = FastqReader(io.StringIO("@r1\\nACGT\\n+\\nIIII\\n"), name="r1")
        >>> [rec.sequence for rec in reader]
        ['ACGT']
    """

    def __init__(self, handle: TextIO, name: str = "input"):
        self.handle = handle
        self.name = name
        self.records_read = 0
        self._exhausted = False

    def __iter__(self) -> Iterator[FastqRecord]:
        return self

    def __next__(self) -> FastqRecord:
        record = self.read()
        if record is None:
            raise StopIteration
        return record

    def _readline(self) -> str:
        try:
            return self.handle.readline()
        except _READ_ERRORS as e:
            raise UnreadableStreamError(
                f"Failed to read input: {e}",
                record_index=self.records_read + 1,
                stream=self.name,
            ) from e

    def _only_blank_lines_remain(self) -> bool:
        while True:
            line = self._readline()
            if not line:
                return True
            if line.strip():
                return False

    def read(self) -> Optional[FastqRecord]:
        """
        Read the next record

        Returns:
            FastqRecord, or None once the stream has cleanly ended

        Raises:
            TruncatedRecordError: stream ended after 1-3 lines of a record
            MalformedRecordError: missing '@' or '+' marker
            UnreadableStreamError: underlying I/O or decompression failure
        """
        if self._exhausted:
            return None

        index = self.records_read + 1
        id_line = self._readline()
        if not id_line:
            self._exhausted = True
            return None

        if not id_line.strip():
            # trailing blank lines after the last record are not a record
            if self._only_blank_lines_remain():
                self._exhausted = True
                return None
            raise MalformedRecordError(
                "Blank line found between records", record_index=index, stream=self.name
            )

        lines = [id_line]
        for _ in range(3):
            line = self._readline()
            if not line:
                self._exhausted = True
                raise TruncatedRecordError(
                    f"Stream ended after {len(lines)} of 4 record lines",
                    record_index=index,
                    stream=self.name,
                )
            lines.append(line)

        id_line, seq, separator, qual = (_strip_terminator(line) for line in lines)

        if not id_line.startswith("@"):
            raise MalformedRecordError(
                f"Record header does not start with '@': {id_line[:50]!r}",
                record_index=index,
                stream=self.name,
            )
        if not separator.startswith("+"):
            raise MalformedRecordError(
                f"Separator line does not start with '+': {separator[:50]!r}",
                record_index=index,
                stream=self.name,
            )

        self.records_read = index
        return FastqRecord(id=id_line, sequence=seq, separator=separator, quality=qual)
