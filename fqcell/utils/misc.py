import gzip
import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]

# Longest first so that ".fastq.gz" wins over ".gz"
FASTQ_EXTENSIONS = (".fastq.gz", ".fq.gz", ".fastq", ".fq")
DEFAULT_OUTPUT_SUFFIX = "_cells_added"
# latin-1 maps every byte to one character, so headers round-trip unchanged
FASTQ_ENCODING = "latin-1"


def is_gzipped_path(file_path: PathLike) -> bool:
    return str(file_path).endswith(".gz")


def open_fastq_file(file_path: PathLike, mode: str = "r"):
    """Open text or gz FASTQ in text mode for reading ('r') or writing ('w').

    Lines split on \\n only, so a stray \\r stays part of its line.
    """
    if mode not in ("r", "w"):
        raise ValueError(f"Unsupported mode: {mode}")
    if is_gzipped_path(file_path):
        return gzip.open(file_path, mode + "t", encoding=FASTQ_ENCODING, newline="\n")
    return open(file_path, mode, encoding=FASTQ_ENCODING, newline="\n")


def make_output_path(input_path: PathLike, suffix: str = DEFAULT_OUTPUT_SUFFIX,
                     out_dir: Optional[PathLike] = None) -> Path:
    """
    Derive the output filename for a read stream.

    The suffix is inserted before a recognized FASTQ extension:
    ``R1.fastq.gz`` -> ``R1_cells_added.fastq.gz``. Unrecognized names keep their
    name and get the suffix appended, followed by ``.gz`` when the input was gzipped.
    """
    input_path = Path(input_path)
    filename = input_path.name
    for ext in FASTQ_EXTENSIONS:
        if filename.endswith(ext) and len(filename) > len(ext):
            new_name = f"{filename[:-len(ext)]}{suffix}{ext}"
            break
    else:
        if is_gzipped_path(filename) and len(filename) > 3:
            new_name = f"{filename[:-3]}{suffix}.gz"
        else:
            new_name = f"{filename}{suffix}"

    parent = Path(out_dir) if out_dir is not None else input_path.parent
    return parent / new_name
