#!/usr/bin/env python3
"""
Sequence processing utility functions

Provides the nucleotide helpers needed to orient cell barcodes
"""

# DNA sequence related constants
COMPLEMENT_MAP = {
    'A': 'T', 'T': 'A', 'G': 'C', 'C': 'G',
    'a': 't', 't': 'a', 'g': 'c', 'c': 'g',
}
# Characters outside the map (N, IUPAC codes, '.') translate to themselves
_COMPLEMENT_TABLE = str.maketrans(COMPLEMENT_MAP)


def complement(seq: str) -> str:
    """
    Complement a DNA sequence, preserving case

    Args:
        seq: DNA sequence string

    Returns:
        str: Complemented sequence

    Examples:
        >>> complement("ACgtN")
        'TGcaN'
    """
    return seq.translate(_COMPLEMENT_TABLE)


def reverse_complement(seq: str) -> str:
    """
    Calculate reverse complement of DNA sequence

    Unlike strict validators, ambiguous bases are tolerated and kept as-is.

    Args:
        seq: DNA sequence string

    Returns:
        str: Reverse complement sequence

    Examples:
        >>> reverse_complement("AACG")
        'CGTT'
    """
    if not seq:
        return ""
    return complement(seq)[::-1]
