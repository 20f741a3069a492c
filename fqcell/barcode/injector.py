"""
Read header rewriting

"@READ1 1:N:0" + "ACGTAC" -> "@READ1_ACGTAC 1:N:0". The barcode is attached to
the identifier token so mappers keep it in the read name, while the
descriptor (pair number, index) stays trailing.
"""

import re

BARCODE_DELIMITER = "_"

# identifier token, then the descriptor starting at the first space or tab
_HEADER_RE = re.compile(r"^([^ \t]*)(.*)$", re.DOTALL)


def inject_barcode(id_line: str, barcode: str, delimiter: str = BARCODE_DELIMITER) -> str:
    """
    Append a barcode to the identifier token of a FASTQ header

    Args:
        id_line: Original header line (with '@' marker)
        barcode: Barcode to embed; may be empty
        delimiter: Separator between identifier and barcode

    Returns:
        str: New header line; descriptor preserved verbatim
    """
    token, descriptor = _HEADER_RE.match(id_line).groups()
    return f"{token}{delimiter}{barcode}{descriptor}"
