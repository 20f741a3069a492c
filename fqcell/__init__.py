"""
fqcell - embed cell barcodes into paired-end FASTQ read names

Main features:
- Lockstep reading of a cell/barcode FASTQ and one or two read FASTQs
- Barcode trimming and reverse complement
- Header rewriting that keeps the pair descriptor trailing
- Plain and gzip-compressed input/output
"""

__version__ = "0.1.0"
__author__ = "fqcell developers"

# Export main API interfaces
from .api import add_cell_barcodes, RunResult
from .config.run_config import RunConfig, StreamConfig
from .errors import FqCellError

__all__ = [
    '__version__',
    '__author__',
    # Main API
    'add_cell_barcodes',
    'RunResult',
    # Configuration
    'RunConfig',
    'StreamConfig',
    'FqCellError'
]
