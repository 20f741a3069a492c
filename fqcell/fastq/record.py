"""
FASTQ record data structure
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class FastqRecord:
    """
    One 4-line FASTQ entry

    Attributes:
        id: Header line including the leading '@' marker
        sequence: Sequence line
        separator: Third line, passed through as-is ('+' optionally followed by the id)
        quality: Quality line

    len(sequence) == len(quality) is expected of well-formed input but is not checked.
    """
    id: str
    sequence: str
    separator: str
    quality: str

    def with_id(self, new_id: str) -> "FastqRecord":
        """Return a copy of the record with the header line replaced"""
        return replace(self, id=new_id)
