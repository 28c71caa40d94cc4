# blast_skin_tools/analysis/join.py
"""
Join the sample metadata table with the aggregated BLAST hits.

Metadata drives the join: every metadata row is kept (once per matching hit,
or once with empty hit columns), and hits whose sample key is not in the
metadata are dropped and reported.
"""

import logging
from typing import List, Optional

import pandas as pd

from blast_skin_tools.logger import log_table_summary
from blast_skin_tools.errors import JoinKeyError
from blast_skin_tools.blast.schema import SAMPLE_KEY_COL, BLAST_FIELDS
from blast_skin_tools.blast.aggregator import load_blast_directory
from blast_skin_tools.blast.parser import DEFAULT_SEP
from blast_skin_tools.analysis.metadata import load_metadata, DEFAULT_RUN_COL

logger = logging.getLogger('blast_skin_tools')

_LEFT_POS = "__metadata_row"
_RIGHT_POS = "__hit_row"


def unmatched_sample_keys(metadata: pd.DataFrame, alignments: pd.DataFrame,
                          run_col: str = DEFAULT_RUN_COL, key_col: str = SAMPLE_KEY_COL) -> List[str]:
    """Return the sorted sample keys present in the hits but absent from the metadata."""
    _check_keys(metadata, alignments, run_col, key_col)
    known = set(metadata[run_col].dropna())
    return sorted(set(alignments[key_col].dropna()) - known)


def _check_keys(metadata, alignments, run_col, key_col):
    if run_col not in metadata.columns:
        raise JoinKeyError(run_col, "metadata")
    if key_col not in alignments.columns:
        raise JoinKeyError(key_col, "alignment")


def join_metadata_alignments(
    metadata: pd.DataFrame,
    alignments: pd.DataFrame,
    run_col: str = DEFAULT_RUN_COL,
    key_col: str = SAMPLE_KEY_COL,
) -> pd.DataFrame:
    """
    Left join metadata (driving side) with BLAST hits on run_col == key_col.

    Args:
        metadata: Sample metadata table
        alignments: Aggregated hit table
        run_col: Run identifier column in the metadata
        key_col: Sample key column in the hits

    Returns:
        Joined DataFrame: metadata columns followed by hit columns. Rows follow
        metadata order, with matching hits in their aggregated order.

    Raises:
        JoinKeyError: if a key column is missing on either side
    """
    _check_keys(metadata, alignments, run_col, key_col)

    dropped = unmatched_sample_keys(metadata, alignments, run_col, key_col)
    if dropped:
        n_dropped = int(alignments[key_col].isin(dropped).sum())
        shown = dropped if len(dropped) <= 10 else dropped[:10] + ["..."]
        logger.warning(
            f"Dropping {n_dropped} hits from {len(dropped)} samples without metadata: {shown}"
        )

    left = metadata.copy()
    left[_LEFT_POS] = range(len(left))
    right = alignments.copy()
    right[_RIGHT_POS] = range(len(right))

    # keep integer hit columns integer on rows without a match
    for field in BLAST_FIELDS:
        if field.dtype == "int" and field.name in right.columns:
            right[field.name] = right[field.name].astype("Int64")

    joined = pd.merge(
        left,
        right,
        how="left",
        left_on=run_col,
        right_on=key_col,
        suffixes=("", "_blast"),
    )
    joined = joined.sort_values([_LEFT_POS, _RIGHT_POS], kind="stable", na_position="last")
    joined = joined.drop(columns=[_LEFT_POS, _RIGHT_POS]).reset_index(drop=True)

    n_without_hits = int(joined[key_col].isna().sum()) if key_col in joined.columns else 0
    log_table_summary(
        joined, f"Joined table ({len(metadata)} metadata rows, {n_without_hits} without hits)"
    )
    return joined


def build_joined_table(
    blast_dir: str,
    metadata_file: str,
    run_col: str = DEFAULT_RUN_COL,
    sep: str = DEFAULT_SEP,
    pattern: str = "*",
    recursive: bool = False,
    threads: int = 1,
    allow_empty: bool = False,
    files: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Load metadata, aggregate every BLAST file in blast_dir and join them.

    Returns:
        The joined DataFrame used by all downstream views
    """
    metadata = load_metadata(metadata_file, run_col=run_col)
    alignments = load_blast_directory(
        blast_dir,
        pattern=pattern,
        recursive=recursive,
        sep=sep,
        threads=threads,
        allow_empty=allow_empty,
        files=files,
    )
    return join_metadata_alignments(metadata, alignments, run_col=run_col)
