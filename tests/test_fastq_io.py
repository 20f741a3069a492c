#!/usr/bin/env python3
"""
FASTQ reader/writer tests
"""

import gzip
import io

import pytest

from fqcell.errors import (
    FormatError,
    MalformedRecordError,
    OutputWriteError,
    TruncatedRecordError,
    UnreadableStreamError,
)
from fqcell.fastq import FastqReader, FastqRecord, FastqWriter
from fqcell.utils.misc import open_fastq_file


def _reader(text, name="r1"):
    return FastqReader(io.StringIO(text), name=name)


class TestFastqRecord:
    """Record data structure"""

    def test_with_id_keeps_other_lines(self):
        rec = FastqRecord("@r1", "ACGT", "+r1", "IIII")
        new = rec.with_id("@r1_AAAA")
        assert new.id == "@r1_AAAA"
        assert (new.sequence, new.separator, new.quality) == ("ACGT", "+r1", "IIII")
        assert rec.id == "@r1"

class TestFastqReader:
    """Record reader"""

    def test_reads_records_in_order(self):
        reader = _reader("@a\nAC\n+\nII\n@b\nGT\n+\nJJ\n")
        records = list(reader)
        assert [r.id for r in records] == ["@a", "@b"]
        assert [r.sequence for r in records] == ["AC", "GT"]
        assert reader.records_read == 2

    def test_read_returns_none_at_end(self):
        reader = _reader("@a\nAC\n+\nII\n")
        assert reader.read() is not None
        assert reader.read() is None
        assert reader.read() is None

    def test_empty_stream(self):
        assert list(_reader("")) == []

    def test_missing_final_newline(self):
        records = list(_reader("@a\nAC\n+\nII"))
        assert records[0].quality == "II"

    def test_crlf_terminators_are_stripped(self):
        handle = io.StringIO("@a desc\r\nAC\r\n+\r\nII\r\n", newline="")
        rec = FastqReader(handle).read()
        assert rec.id == "@a desc"
        assert rec.quality == "II"

    def test_separator_is_opaque(self):
        rec = _reader("@a\nAC\n+a some text\nII\n").read()
        assert rec.separator == "+a some text"

    def test_quality_starting_with_at_sign(self):
        rec = _reader("@a\nAC\n+\n@I\n").read()
        assert rec.quality == "@I"

    def test_trailing_blank_lines_are_ignored(self):
        assert len(list(_reader("@a\nAC\n+\nII\n\n\n"))) == 1

    def test_blank_line_between_records(self):
        reader = _reader("@a\nAC\n+\nII\n\n@b\nGT\n+\nJJ\n")
        reader.read()
        with pytest.raises(MalformedRecordError):
            reader.read()

    @pytest.mark.parametrize("text,lines_present", [
        ("@b\n", 1),
        ("@b\nGT\n", 2),
        ("@b\nGT\n+\n", 3),
    ])
    def test_truncated_record(self, text, lines_present):
        reader = _reader("@a\nAC\n+\nII\n" + text, name="r2")
        reader.read()
        with pytest.raises(TruncatedRecordError) as exc_info:
            reader.read()
        err = exc_info.value
        assert err.record_index == 2
        assert err.stream == "r2"
        assert f"{lines_present} of 4" in str(err)
        assert isinstance(err, FormatError)

    def test_missing_at_marker(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            _reader(">a\nAC\n+\nII\n").read()
        assert exc_info.value.record_index == 1

    def test_missing_plus_marker(self):
        with pytest.raises(MalformedRecordError):
            _reader("@a\nAC\n-\nII\n").read()

    def test_corrupt_gzip_is_unreadable(self, tmp_path):
        path = tmp_path / "bad.fastq.gz"
        path.write_bytes(b"this is not gzip data\n")
        with open_fastq_file(path) as handle:
            reader = FastqReader(handle, name="cell")
            with pytest.raises(UnreadableStreamError) as exc_info:
                reader.read()
        assert exc_info.value.stream == "cell"
        assert exc_info.value.record_index == 1

    def test_lone_carriage_return_stays_in_line(self, tmp_path):
        path = tmp_path / "cr.fastq"
        path.write_bytes(b"@r1\rx 1:N:0\nAC\n+\nII\n")
        with open_fastq_file(path) as handle:
            records = list(FastqReader(handle))
        assert len(records) == 1
        assert records[0].id == "@r1\rx 1:N:0"

    def test_non_utf8_header_bytes(self, tmp_path):
        path = tmp_path / "latin.fastq.gz"
        with gzip.open(path, "wb") as f:
            f.write(b"@r\xe9\xff 1:N:0\nAC\n+\nII\n")
        with open_fastq_file(path) as handle:
            rec = FastqReader(handle).read()
        assert rec.id.encode("latin-1") == b"@r\xe9\xff 1:N:0"

    def test_reads_gzip(self, tmp_path):
        path = tmp_path / "ok.fq.gz"
        with gzip.open(path, "wt") as f:
            f.write("@a\nAC\n+\nII\n")
        with open_fastq_file(path) as handle:
            assert [r.sequence for r in FastqReader(handle)] == ["AC"]


class _FailingHandle(io.StringIO):
    def write(self, s):
        raise OSError("disk full")


class TestFastqWriter:
    """Record writer"""

    def test_write_four_lines(self):
        handle = io.StringIO()
        writer = FastqWriter(handle, name="r1")
        writer.write(FastqRecord("@r1_AAAA", "ACGT", "+", "IIII"))
        writer.write(FastqRecord("@r2_CCCC", "TTTT", "+r2", "JJJJ"))
        assert handle.getvalue() == "@r1_AAAA\nACGT\n+\nIIII\n@r2_CCCC\nTTTT\n+r2\nJJJJ\n"
        assert writer.records_written == 2

    def test_close_is_idempotent(self):
        handle = io.StringIO()
        writer = FastqWriter(handle)
        writer.close()
        writer.close()
        assert handle.closed

    def test_context_manager_closes(self, tmp_path):
        path = tmp_path / "out.fastq"
        with FastqWriter(open_fastq_file(path, "w")) as writer:
            writer.write(FastqRecord("@a", "A", "+", "I"))
        assert path.read_text() == "@a\nA\n+\nI\n"

    def test_header_bytes_written_unchanged(self, tmp_path):
        path = tmp_path / "out.fastq"
        with FastqWriter(open_fastq_file(path, "w")) as writer:
            writer.write(FastqRecord("@r\xe9\rx_AA", "A", "+", "I"))
        assert path.read_bytes() == b"@r\xe9\rx_AA\nA\n+\nI\n"

    def test_write_failure(self):
        writer = FastqWriter(_FailingHandle(), name="r2")
        with pytest.raises(OutputWriteError) as exc_info:
            writer.write(FastqRecord("@a", "A", "+", "I"))
        assert exc_info.value.stream == "r2"
        assert writer.records_written == 0


if __name__ == "__main__":
    pytest.main([__file__])
