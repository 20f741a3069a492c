"""
FASTQ record model, reader and writer
"""

from .record import FastqRecord
from .reader import FastqReader
from .writer import FastqWriter

__all__ = [
    'FastqRecord',
    'FastqReader',
    'FastqWriter'
]
