#!/usr/bin/env python3
"""
BLAST Skin Tools Join Module

Parses every BLAST result file in a directory, splits the query ids into
sample key and sequence ordinal, and left-joins the hits onto the sample
metadata table. The joined table is written as TSV.

Examples:
  blast-skin-tools join --blast-dir blast_results \
                        --metadata-file SraRunTable.txt \
                        --output-file joined_table.tsv

  # Tab-separated BLAST output in nested folders:
  blast-skin-tools join --blast-dir blast_results --recursive --sep '\\t' \
                        --metadata-file SraRunTable.txt
"""

import sys
import time
import argparse
import logging

from blast_skin_tools.logger import setup_logger, log_print
from blast_skin_tools.errors import BlastSkinError
from blast_skin_tools.analysis.join import build_joined_table
from blast_skin_tools.core.report import write_joined_table

logger = logging.getLogger('blast_skin_tools')


def add_input_arguments(parser):
    """Input options shared by the join and report commands."""
    parser.add_argument("--blast-dir", required=True,
                        help="Directory containing one BLAST result file per run")
    parser.add_argument("--metadata-file", required=True,
                        help="Tab-delimited sample metadata file with a header row")
    parser.add_argument("--run-col", default="Run",
                        help="Metadata column holding run accessions (default: Run)")
    parser.add_argument("--sep", default=",",
                        help="Delimiter of the BLAST result files (default: ','; use '\\t' for tabs)")
    parser.add_argument("--recursive", action="store_true",
                        help="Search the BLAST directory recursively")
    parser.add_argument("--threads", type=int, default=1,
                        help="Number of threads used to parse BLAST files (default: 1)")
    parser.add_argument("--log-file", default=None, help="Path to log file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    return parser


def decode_sep(sep):
    """Turn a literal '\\t' given on the command line into a tab."""
    return "\t" if sep in ("\\t", "tab") else sep


def parse_args(args=None):
    """Parse command line arguments for the join module."""
    parser = argparse.ArgumentParser(
        description="Join BLAST result files with sample metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_input_arguments(parser)
    parser.add_argument("--output-file", default="joined_table.tsv",
                        help="Path of the joined TSV table (default: joined_table.tsv)")
    return parser.parse_args(args)


def main(args=None):
    """Main function for the join module."""
    args = parse_args(args)

    setup_logger(args.log_file, args.log_level)
    logger.info("Starting BLAST Skin Tools Join Module")
    start_time = time.time()

    try:
        joined = build_joined_table(
            args.blast_dir,
            args.metadata_file,
            run_col=args.run_col,
            sep=decode_sep(args.sep),
            recursive=args.recursive,
            threads=args.threads,
        )
    except BlastSkinError as e:
        log_print(f"Error: {e}", level="error")
        return 1

    write_joined_table(joined, args.output_file)
    logger.info(f"Saved joined table with {len(joined)} rows: {args.output_file}")

    elapsed_time = time.time() - start_time
    minutes, seconds = divmod(elapsed_time, 60)
    logger.info(f"Total processing time: {int(minutes)}m {int(seconds)}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
