# blast_skin_tools/analysis/visualizations.py
import os
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from blast_skin_tools.blast.schema import SPECIES_COL
from blast_skin_tools.utils.file_utils import sanitize_filename

logger = logging.getLogger('blast_skin_tools')


def _save(output_dir, name, output_format, dpi):
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{sanitize_filename(name)}.{output_format}")
    plt.tight_layout()
    plt.savefig(path, format=output_format, dpi=dpi, bbox_inches='tight')
    plt.close()
    return path


def plot_metric_histogram(joined, metric, hue_col="sex_s", output_dir=".", name=None,
                          bins=30, output_format="svg", dpi=300, title=None):
    """
    Histogram of a numeric hit column, one colour per group.

    Args:
        joined: Joined metadata/BLAST table
        metric: Numeric hit column (e.g. mismatch, length)
        hue_col: Metadata column to split by (e.g. sex_s)
        output_dir: Directory to save the plot
        name: Output file stem (default: <metric>_histogram_by_<hue_col>)

    Returns:
        Path to the saved plot, or None if there was nothing to plot
    """
    data = joined[[metric, hue_col]].dropna().copy()
    if data.empty:
        logger.warning(f"No data to plot histogram of {metric}")
        return None
    data[metric] = data[metric].astype(float)

    plt.figure(figsize=(8, 5))
    sns.histplot(data=data, x=metric, hue=hue_col, bins=bins, element="step", common_norm=False)
    plt.title(title or f"Distribution of {metric} by {hue_col}")
    plt.xlabel(metric)
    plt.ylabel("Number of hits")
    path = _save(output_dir, name or f"{metric}_histogram_by_{hue_col}", output_format, dpi)
    logger.info(f"Saved {metric} histogram: {path}")
    return path


def plot_metric_density(joined, metric, group_col="host_subject_id_s", output_dir=".", name=None,
                        output_format="svg", dpi=300, title=None):
    """
    Kernel density estimate of a numeric hit column per group (e.g. per subject).

    Returns:
        Path to the saved plot, or None if there was nothing to plot
    """
    data = joined[[metric, group_col]].dropna().copy()
    if data.empty:
        logger.warning(f"No data to plot density of {metric}")
        return None
    data[metric] = data[metric].astype(float)

    plt.figure(figsize=(8, 5))
    sns.kdeplot(data=data, x=metric, hue=group_col, common_norm=False, warn_singular=False)
    plt.title(title or f"Density of {metric} by {group_col}")
    plt.xlabel(metric)
    path = _save(output_dir, name or f"{metric}_density_by_{group_col}", output_format, dpi)
    logger.info(f"Saved {metric} density plot: {path}")
    return path


def plot_top_species(top_df, title, output_dir=".", name="top_species", species_col=SPECIES_COL,
                     output_format="svg", dpi=300):
    """
    Horizontal bar chart of a top-N species table (as returned by top_species).

    Returns:
        Path to the saved plot, or None for an empty table
    """
    if top_df.empty:
        logger.warning(f"No species to plot for '{title}'")
        return None

    plt.figure(figsize=(8, max(3, 0.4 * len(top_df))))
    sns.barplot(data=top_df, x="count", y=species_col, orient="h", color="steelblue")
    plt.title(title)
    plt.xlabel("Number of hits")
    plt.ylabel("")
    path = _save(output_dir, name, output_format, dpi)
    logger.info(f"Saved top species plot: {path}")
    return path
