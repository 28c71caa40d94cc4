# blast_skin_tools/blast/aggregator.py
"""
Discover per-run BLAST result files and concatenate them into one table.
"""

import os
import glob
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import pandas as pd

from blast_skin_tools.logger import log_table_summary
from blast_skin_tools.errors import AggregationError, ParseError
from blast_skin_tools.blast.parser import parse_blast_file, DEFAULT_SEP

logger = logging.getLogger('blast_skin_tools')


def find_blast_files(blast_dir: str, pattern: str = "*", recursive: bool = False) -> List[str]:
    """
    List BLAST result files in a directory, sorted by path.

    Hidden files (starting with '.') are skipped.

    Args:
        blast_dir: Directory holding one result file per run
        pattern: Glob pattern for file names
        recursive: Also descend into subdirectories

    Returns:
        Sorted list of file paths
    """
    if not os.path.isdir(blast_dir):
        raise AggregationError(f"BLAST results directory does not exist: {blast_dir}", path=blast_dir)

    # directory names like "run[1]" must not be read as glob syntax
    root = glob.escape(str(blast_dir))
    if recursive:
        candidates = glob.glob(os.path.join(root, "**", pattern), recursive=True)
    else:
        candidates = glob.glob(os.path.join(root, pattern))

    files = sorted(
        path for path in candidates
        if os.path.isfile(path) and not os.path.basename(path).startswith(".")
    )
    logger.info(f"Found {len(files)} BLAST result files in {blast_dir}")
    return files


def _parse_one(path, sep, allow_empty):
    try:
        return parse_blast_file(path, sep=sep, allow_empty=allow_empty)
    except ParseError as e:
        raise AggregationError(f"Failed to parse BLAST file {path}: {e}", path=path) from e


def aggregate_blast_files(
    paths: List[str],
    sep: str = DEFAULT_SEP,
    threads: int = 1,
    allow_empty: bool = False,
) -> pd.DataFrame:
    """
    Parse every file and concatenate all hits into a single table.

    Files are processed in sorted path order, so the same set of files always
    yields the same row order. A single unparseable file aborts the whole
    aggregation.

    Args:
        paths: BLAST result file paths
        sep: Field delimiter of the result files
        threads: Number of worker threads used for parsing
        allow_empty: Accept empty result files (runs without hits)

    Returns:
        Concatenated DataFrame with a fresh RangeIndex

    Raises:
        AggregationError: no input files or any file failed to parse
    """
    paths = sorted(str(p) for p in paths)
    if not paths:
        raise AggregationError("No BLAST result files to aggregate")

    if threads and threads > 1:
        logger.info(f"Parsing {len(paths)} BLAST files with {threads} threads")
        with ThreadPoolExecutor(max_workers=threads) as executor:
            # map() yields in submission order
            tables = list(executor.map(lambda p: _parse_one(p, sep, allow_empty), paths))
    else:
        tables = [_parse_one(p, sep, allow_empty) for p in paths]

    combined = pd.concat(tables, ignore_index=True)
    log_table_summary(combined, f"Aggregated BLAST hits from {len(paths)} files")
    return combined


def load_blast_directory(
    blast_dir: str,
    pattern: str = "*",
    recursive: bool = False,
    sep: str = DEFAULT_SEP,
    threads: int = 1,
    allow_empty: bool = False,
    files: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Find and aggregate all BLAST result files under ``blast_dir``."""
    if files is None:
        files = find_blast_files(blast_dir, pattern=pattern, recursive=recursive)
    return aggregate_blast_files(files, sep=sep, threads=threads, allow_empty=allow_empty)
