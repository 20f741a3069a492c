#!/usr/bin/env python3
"""
Run configuration module

Holds the immutable settings consumed by the synchronizer: which files to
read, how to cut the barcode out of each cell record, and where to write.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..utils.misc import DEFAULT_OUTPUT_SUFFIX, make_output_path


@dataclass(frozen=True)
class StreamConfig:
    """
    Barcode extraction settings for the cell stream

    Attributes:
        skip_from: Number of leading bases to drop (None = 0)
        stop_at: Absolute end offset in the untrimmed sequence (None = sequence end)
        reverse_complement: Reverse-complement the sliced barcode
    """
    skip_from: Optional[int] = None
    stop_at: Optional[int] = None
    reverse_complement: bool = False

    def __post_init__(self):
        """Validate offsets"""
        for name in ("skip_from", "stop_at"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if (self.skip_from is not None and self.stop_at is not None
                and self.stop_at < self.skip_from):
            raise ValueError(
                f"stop_at ({self.stop_at}) must not be smaller than skip_from ({self.skip_from})"
            )

    @property
    def start(self) -> int:
        return self.skip_from or 0

    @property
    def is_identity(self) -> bool:
        """True when the whole cell sequence is used unchanged"""
        return self.skip_from is None and self.stop_at is None and not self.reverse_complement


@dataclass
class RunConfig:
    """
    Complete configuration of one barcode injection run

    Attributes:
        cell_path: Cell/barcode FASTQ
        r1_path: Read 1 FASTQ
        r2_path: Optional read 2 FASTQ
        stream: Barcode extraction settings
        output_suffix: Token inserted before the FASTQ extension of output names
        output_dir: Directory for outputs (default: next to each input)
        delimiter: Separator between read identifier and barcode
        count_barcodes: Keep per-barcode counts for RunResult.to_df (off by default)
        show_progress: Display a tqdm progress bar
    """
    cell_path: Union[str, Path]
    r1_path: Union[str, Path]
    r2_path: Optional[Union[str, Path]] = None
    stream: StreamConfig = field(default_factory=StreamConfig)
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    output_dir: Optional[Union[str, Path]] = None
    delimiter: str = "_"
    count_barcodes: bool = False
    show_progress: bool = False

    def __post_init__(self):
        """Normalize paths and validate parameters"""
        self.cell_path = Path(self.cell_path)
        self.r1_path = Path(self.r1_path)
        if self.r2_path is not None:
            self.r2_path = Path(self.r2_path)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)

        if not self.output_suffix:
            raise ValueError("output_suffix cannot be empty")
        if not self.delimiter or any(c.isspace() for c in self.delimiter):
            raise ValueError(f"delimiter must be non-empty and contain no whitespace: {self.delimiter!r}")

        inputs = {path.resolve() for path in self.input_paths().values()}
        claimed: Dict[Path, str] = {}
        for name, out_path in self.output_paths().items():
            resolved = out_path.resolve()
            if resolved in inputs:
                raise ValueError(f"Output path for {name} would overwrite an input: {out_path}")
            if resolved in claimed:
                raise ValueError(
                    f"Outputs for {claimed[resolved]} and {name} would both be written to {out_path}"
                )
            claimed[resolved] = name

    def input_paths(self) -> Dict[str, Path]:
        paths = {"cell": self.cell_path, "r1": self.r1_path}
        if self.r2_path is not None:
            paths["r2"] = self.r2_path
        return paths

    @property
    def read_streams(self) -> List[str]:
        """Names of the active read streams in processing order"""
        return ["r1", "r2"] if self.r2_path is not None else ["r1"]

    def output_paths(self) -> Dict[str, Path]:
        """Output file for every active read stream"""
        paths = {"r1": make_output_path(self.r1_path, self.output_suffix, self.output_dir)}
        if self.r2_path is not None:
            paths["r2"] = make_output_path(self.r2_path, self.output_suffix, self.output_dir)
        return paths

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "RunConfig":
        """Load configuration from dictionary"""
        data = dict(config_data)
        if 'cell_path' not in data or 'r1_path' not in data:
            raise ValueError("Configuration requires 'cell_path' and 'r1_path'")

        # Extraction settings may be nested under 'stream' or given at top level
        stream_data = dict(data.pop('stream', None) or {})
        for key in ('skip_from', 'stop_at', 'reverse_complement'):
            if key in data:
                stream_data[key] = data.pop(key)

        unknown = set(data) - {
            'cell_path', 'r1_path', 'r2_path', 'output_suffix',
            'output_dir', 'delimiter', 'count_barcodes', 'show_progress',
        }
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        return cls(stream=StreamConfig(**stream_data), **data)

    @classmethod
    def from_json_file(cls, config_file: Union[str, Path]) -> "RunConfig":
        """Load configuration from JSON file"""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file does not exist: {config_file}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)

        return cls.from_dict(config_data)

    def summary(self) -> str:
        """Return configuration summary information"""
        outputs = self.output_paths()
        lines = [
            "=== fqcell Run Configuration ===",
            f"Cell FASTQ: {self.cell_path}",
            f"R1 FASTQ: {self.r1_path} -> {outputs['r1']}",
        ]
        if self.r2_path is not None:
            lines.append(f"R2 FASTQ: {self.r2_path} -> {outputs['r2']}")
        lines.extend([
            f"Skip from: {self.stream.skip_from}",
            f"Stop at: {self.stream.stop_at}",
            f"Reverse complement: {self.stream.reverse_complement}",
        ])
        return "\n".join(lines)
