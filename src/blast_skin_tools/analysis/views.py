# blast_skin_tools/analysis/views.py
"""
Read-only summary views over the joined metadata/BLAST table.

None of these modify their input; each returns a new DataFrame.
"""

import logging
from typing import List, Optional, Sequence

import pandas as pd

from blast_skin_tools.blast.schema import SPECIES_COL, SAMPLE_KEY_COL
from blast_skin_tools.analysis.metadata import DEFAULT_RUN_COL

logger = logging.getLogger('blast_skin_tools')


def filter_records(joined: pd.DataFrame, **criteria) -> pd.DataFrame:
    """
    Keep rows matching every column == value criterion.

    A list, tuple or set value keeps rows whose column is any of the values.

    Example:
        filter_records(joined, sex_s="female", env_material="sebum")
    """
    mask = pd.Series(True, index=joined.index)
    for col, value in criteria.items():
        if col not in joined.columns:
            raise KeyError(f"Filter column '{col}' not found in joined table")
        if isinstance(value, (list, tuple, set)):
            matches = joined[col].isin(list(value))
        else:
            matches = joined[col] == value
        # nullable columns compare to NA on rows without hits
        mask &= matches.fillna(False).astype(bool)
    return joined[mask]


def top_species(joined: pd.DataFrame, top_n: int = 10, species_col: str = SPECIES_COL,
                **criteria) -> pd.DataFrame:
    """
    Count hits per species after filtering and return the top_n most frequent.

    Ties keep the order in which species first appear in the filtered table.
    Rows without a species (metadata rows without hits) are not counted.

    Returns:
        DataFrame with columns [species_col, "count"]
    """
    subset = filter_records(joined, **criteria) if criteria else joined
    counts = subset.groupby(species_col, sort=False, dropna=True).size()
    counts = counts.sort_values(ascending=False, kind="stable")
    if top_n is not None:
        counts = counts.head(top_n)
    return counts.rename("count").reset_index()


def top_species_by_group(joined: pd.DataFrame, group_cols: Sequence[str], top_n: int = 10,
                         species_col: str = SPECIES_COL) -> pd.DataFrame:
    """
    Top species for every combination of group_cols (e.g. sex and body site).

    Groups come out in order of first appearance; inside each group the
    ranking is the same as top_species.
    """
    group_cols = list(group_cols)
    for col in group_cols:
        if col not in joined.columns:
            raise KeyError(f"Group column '{col}' not found in joined table")

    frames = []
    for key, sub in joined.groupby(group_cols, sort=False, dropna=True):
        if not isinstance(key, tuple):
            key = (key,)
        top = top_species(sub, top_n=top_n, species_col=species_col)
        if top.empty:
            continue
        top.insert(0, "rank", range(1, len(top) + 1))
        for col, value in reversed(list(zip(group_cols, key))):
            top.insert(0, col, value)
        frames.append(top)

    if not frames:
        return pd.DataFrame(columns=group_cols + ["rank", species_col, "count"])
    return pd.concat(frames, ignore_index=True)


def metric_distribution(joined: pd.DataFrame, group_col: str, metric: str,
                        **criteria) -> pd.DataFrame:
    """
    Descriptive statistics of a numeric hit column per group.

    Returns:
        DataFrame indexed by group with count, mean, std, min, 25%, 50%, 75%, max
    """
    subset = filter_records(joined, **criteria) if criteria else joined
    for col in (group_col, metric):
        if col not in subset.columns:
            raise KeyError(f"Column '{col}' not found in joined table")

    values = subset[[group_col, metric]].dropna().copy()
    values[metric] = values[metric].astype(float)
    stats = values.groupby(group_col, sort=True)[metric].describe()
    logger.debug(f"Distribution of {metric} over {len(stats)} groups of '{group_col}'")
    return stats


def hits_per_sample(joined: pd.DataFrame, run_col: str = DEFAULT_RUN_COL,
                    key_col: str = SAMPLE_KEY_COL,
                    extra_cols: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Number of BLAST hits per run; runs without hits get 0.

    Args:
        joined: Joined table
        run_col: Run identifier column
        key_col: Sample key column (null on rows without hits)
        extra_cols: Metadata columns to carry along (e.g. sex, body site)

    Returns:
        DataFrame with run_col, extra_cols and "hits", in metadata order
    """
    extra_cols = [c for c in (extra_cols or []) if c != run_col]
    for col in [run_col, key_col] + extra_cols:
        if col not in joined.columns:
            raise KeyError(f"Column '{col}' not found in joined table")

    has_hit = joined[key_col].notna()
    counts = has_hit.groupby(joined[run_col], sort=False).sum().astype(int)
    per_run = joined[[run_col] + extra_cols].drop_duplicates(subset=[run_col])
    per_run = per_run.reset_index(drop=True)
    per_run["hits"] = per_run[run_col].map(counts).fillna(0).astype(int)
    return per_run
