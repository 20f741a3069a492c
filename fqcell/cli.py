#!/usr/bin/env python3
"""
Command line interface for fqcell
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .api import add_cell_barcodes
from .config.run_config import RunConfig, StreamConfig
from .errors import FqCellError
from .logging_utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    # Custom formatter that preserves formatting and shows defaults
    class CustomFormatter(argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter):
        pass

    example_text = '''
Examples:
  Barcode in the first 16 bases of the cell read:
    fqcell -c Cell.fastq.gz -1 R1.fastq.gz -2 R2.fastq.gz --to-char 16

  Reverse-complemented barcode, written to another directory:
    fqcell -c I2.fastq.gz -1 R1.fastq.gz --recomp --out-dir ./tagged
'''

    parser = argparse.ArgumentParser(
        prog="fqcell",
        description="Embed cell barcodes from a cell FASTQ into the read names of R1/R2.",
        epilog=example_text,
        formatter_class=CustomFormatter,
    )
    parser.add_argument("-c", "--cell", help="Cell/barcode FASTQ(.gz)")
    parser.add_argument("-1", "--r1", help="Read 1 FASTQ(.gz)")
    parser.add_argument("-2", "--r2", default=None, help="Read 2 FASTQ(.gz), optional")
    parser.add_argument("--from-char", type=_non_negative_int, default=None,
                        help="Drop this many leading bases of the cell sequence")
    parser.add_argument("--to-char", type=_non_negative_int, default=None,
                        help="Absolute end offset of the barcode in the cell sequence")
    parser.add_argument("--recomp", action="store_true",
                        help="Reverse-complement the barcode after trimming")
    parser.add_argument("--config", default=None,
                        help="JSON run configuration; command line options override it")
    parser.add_argument("--out-dir", default=None,
                        help="Output directory (default: next to each input)")
    parser.add_argument("--suffix", default=None,
                        help="Token inserted before the FASTQ extension of outputs "
                             "(default: _cells_added)")
    parser.add_argument("--barcode-summary", default=None,
                        help="Write barcode counts to this TSV file")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("--log-file", default=None, help="Also write log messages to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Merge an optional JSON config with command line options"""
    data = {}
    if args.config:
        base = RunConfig.from_json_file(args.config)
        data = {
            'cell_path': base.cell_path,
            'r1_path': base.r1_path,
            'r2_path': base.r2_path,
            'skip_from': base.stream.skip_from,
            'stop_at': base.stream.stop_at,
            'reverse_complement': base.stream.reverse_complement,
            'output_suffix': base.output_suffix,
            'output_dir': base.output_dir,
            'delimiter': base.delimiter,
            'count_barcodes': base.count_barcodes,
            'show_progress': base.show_progress,
        }

    overrides = {
        'cell_path': args.cell,
        'r1_path': args.r1,
        'r2_path': args.r2,
        'skip_from': args.from_char,
        'stop_at': args.to_char,
        'output_suffix': args.suffix,
        'output_dir': args.out_dir,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    if args.recomp:
        data['reverse_complement'] = True
    if args.barcode_summary:
        data['count_barcodes'] = True
    data['show_progress'] = not args.no_progress

    if data.get('cell_path') is None or data.get('r1_path') is None:
        raise ValueError("--cell and --r1 are required (on the command line or in --config)")

    stream = StreamConfig(
        skip_from=data.pop('skip_from', None),
        stop_at=data.pop('stop_at', None),
        reverse_complement=data.pop('reverse_complement', False),
    )
    return RunConfig(stream=stream, **data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        config = config_from_args(args)
    except (ValueError, FileNotFoundError) as e:
        parser.error(str(e))

    logger.debug("\n%s", config.summary())

    try:
        result = add_cell_barcodes(config)
    except FqCellError as e:
        logger.error("%s: %s", e.kind, e)
        if e.record_index is not None:
            logger.error("Failure at record %d%s", e.record_index,
                         f" of stream '{e.stream}'" if e.stream else "")
        return EXIT_FAILURE
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_FAILURE

    if args.barcode_summary:
        result.to_df().to_csv(args.barcode_summary, sep="\t", index=False)
        logger.info("%d unique barcodes", result.num_unique_barcodes)
        logger.info("Barcode summary written to %s", args.barcode_summary)

    logger.info("Done: %d records", result.records_processed)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
