# blast_skin_tools/analysis/statistical.py
import os
import logging
import traceback

import numpy as np
import pandas as pd
from scipy.stats import kruskal
from statsmodels.stats.multitest import multipletests
import scikit_posthocs as sp

from blast_skin_tools.utils.file_utils import sanitize_filename

DEFAULT_METRICS = ["pident", "length", "mismatch", "gapopen", "evalue", "bitscore"]


def _metric_frame(joined, group_col, metric):
    sub = joined[[group_col, metric]].dropna().copy()
    sub[metric] = sub[metric].astype(float)
    return sub


def kruskal_wallis_dunn(joined, group_col="sex_s", metrics=None, alpha=0.05, logger=None):
    """
    1) Kruskal-Wallis across groups for each alignment metric
    2) Adjust p-values (Benjamini–Hochberg)
    3) Dunn's post-hoc for significant metrics

    Args:
        joined: Joined metadata/BLAST table
        group_col: Metadata column defining the groups (e.g. sex_s, env_material)
        metrics: Numeric hit columns to test (default: DEFAULT_METRICS)
        alpha: Significance threshold
        logger: Logger instance for logging

    Returns:
        Tuple of (kw_results_df, dict_of_posthoc_dfs)
    """
    metrics = list(metrics or DEFAULT_METRICS)
    if logger:
        logger.info(f"Running Kruskal-Wallis and Dunn's (group={group_col}, metrics={metrics})")
    if group_col not in joined.columns:
        raise KeyError(f"Group column '{group_col}' not found in joined table")

    results = []
    for metric in metrics:
        if metric not in joined.columns:
            raise KeyError(f"Metric column '{metric}' not found in joined table")
        sub = _metric_frame(joined, group_col, metric)
        groups = sub[group_col].unique()
        group_data = [sub.loc[sub[group_col] == g, metric] for g in groups]
        if len(group_data) < 2 or any(len(x) < 2 for x in group_data):
            if logger:
                logger.warning(f"Skipping {metric}: need two groups with at least two hits each")
            continue
        try:
            stat, pval = kruskal(*group_data)
        except ValueError as e:
            # all values identical
            if logger:
                logger.warning(f"Error Kruskal-Wallis on {metric}: {str(e)}")
            continue
        if not np.isfinite(pval):
            if logger:
                logger.warning(f"Kruskal-Wallis on {metric} gave no p-value; skipping")
            continue
        results.append({
            "metric": metric,
            "n_groups": len(groups),
            "n_hits": len(sub),
            "KW_stat": stat,
            "KW_pvalue": pval,
        })

    if not results:
        return pd.DataFrame(), {}
    kw_df = pd.DataFrame(results)
    reject, pvals_corrected, _, _ = multipletests(kw_df["KW_pvalue"], alpha=alpha, method="fdr_bh")
    kw_df["KW_padj"] = pvals_corrected
    kw_df["Reject_H0"] = reject

    posthoc_results = {}
    sig_metrics = kw_df[kw_df["Reject_H0"]]["metric"].tolist()
    for metric in sig_metrics:
        sub = _metric_frame(joined, group_col, metric)
        posthoc_results[metric] = sp.posthoc_dunn(sub, val_col=metric, group_col=group_col, p_adjust="holm")
    return kw_df, posthoc_results


def run_statistical_tests(joined, output_dir, logger, group_col="sex_s", metrics=None, alpha=0.05):
    """
    Run statistical tests on the alignment metrics and save results.

    Args:
        joined: Joined metadata/BLAST table
        output_dir: Directory to save results
        logger: Logger instance
        group_col: Column name for grouping variable
        metrics: Numeric hit columns to test
        alpha: Significance threshold

    Returns:
        Path to the Kruskal-Wallis results CSV, or None if nothing was testable
    """
    logger.info(f"Running statistical tests on alignment metrics with grouping variable '{group_col}'.")
    try:
        kw_results, dunn_results = kruskal_wallis_dunn(
            joined,
            group_col=group_col,
            metrics=metrics,
            alpha=alpha,
            logger=logger,
        )
    except Exception as e:
        logger.error(f"Error in statistical tests: {str(e)}")
        logger.error(traceback.format_exc())
        raise

    if kw_results.empty:
        logger.warning("No valid KW results. No file saved.")
        return None

    os.makedirs(output_dir, exist_ok=True)
    kw_path = os.path.join(output_dir, f"kruskal_wallis_{sanitize_filename(group_col)}.csv")
    kw_results.to_csv(kw_path, index=False)
    logger.info(f"Saved Kruskal-Wallis results: {kw_path}")

    sig_count = int(kw_results["Reject_H0"].sum())
    logger.info(f"{sig_count} significant metrics found after FDR correction")

    if dunn_results:
        dunn_dir = os.path.join(output_dir, "dunn_posthoc_tests")
        os.makedirs(dunn_dir, exist_ok=True)
        for metric, pdf in dunn_results.items():
            path = os.path.join(dunn_dir, f"dunn_{sanitize_filename(group_col)}_{sanitize_filename(metric)}.csv")
            pdf.to_csv(path)
        logger.info(f"Saved Dunn's post-hoc results for {len(dunn_results)} metrics.")
    return kw_path
