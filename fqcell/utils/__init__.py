"""
Utility modules
"""

from .misc import open_fastq_file, is_gzipped_path, make_output_path
from .sequence_utils import complement, reverse_complement
__all__ = [
    'open_fastq_file',
    'is_gzipped_path',
    'make_output_path',
    'complement',
    'reverse_complement'
]
