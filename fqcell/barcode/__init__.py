"""
Barcode extraction and header injection
"""

from .extractor import BarcodeExtractor, extract_barcode
from .injector import BARCODE_DELIMITER, inject_barcode

__all__ = [
    'BarcodeExtractor',
    'extract_barcode',
    'BARCODE_DELIMITER',
    'inject_barcode'
]
