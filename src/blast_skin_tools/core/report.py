# blast_skin_tools/core/report.py
"""
Main module for blast_skin_tools package.

Runs the whole analysis once: build the joined table, then write the summary
tables, statistical tests and plots comparing male and female skin samples.
"""
import os
import time
import logging

from blast_skin_tools.logger import setup_logger, log_print
from blast_skin_tools.blast.parser import DEFAULT_SEP
from blast_skin_tools.analysis.metadata import (
    DEFAULT_RUN_COL,
    SEX_COL,
    BODY_SITE_COL,
    SAMPLE_TYPE_COL,
    SUBJECT_COL,
)
from blast_skin_tools.analysis.join import build_joined_table
from blast_skin_tools.analysis.views import (
    top_species,
    top_species_by_group,
    metric_distribution,
    hits_per_sample,
)
from blast_skin_tools.analysis.statistical import run_statistical_tests
from blast_skin_tools.analysis.visualizations import (
    plot_metric_histogram,
    plot_metric_density,
    plot_top_species,
)
from blast_skin_tools.utils.file_utils import sanitize_filename

DISTRIBUTION_METRICS = ["mismatch", "length", "pident"]


def write_joined_table(joined, path):
    """Write the joined table as TSV; same input always gives the same bytes."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    joined.to_csv(path, sep="\t", index=False, lineterminator="\n")
    return path


def run_report(
    blast_dir,
    metadata_file,
    output_dir,
    run_col=DEFAULT_RUN_COL,
    sex_col=SEX_COL,
    site_col=BODY_SITE_COL,
    subject_col=SUBJECT_COL,
    sep=DEFAULT_SEP,
    recursive=False,
    threads=1,
    top_n=10,
    skip_plots=False,
    plot_format="svg",
    log_file=None,
    log_level=logging.INFO,
):
    """
    Build the joined table and write every report artifact.

    Args:
        blast_dir: Directory with one BLAST result file per run
        metadata_file: Tab-delimited sample metadata with a header row
        output_dir: Directory for output files
        run_col: Run identifier column in the metadata
        sex_col: Metadata column with the host sex
        site_col: Metadata column with the sampled body site
        subject_col: Metadata column with the host subject id
        sep: Delimiter of the BLAST result files
        recursive: Search blast_dir recursively
        threads: Threads used to parse BLAST files
        top_n: Number of species in each top-species table
        skip_plots: Only write tables
        plot_format: Image format for plots
        log_file: Path to log file
        log_level: Logging level number or name

    Returns:
        Dict mapping artifact names to written paths
    """
    logger = setup_logger(log_file=log_file, log_level=log_level)
    log_print("Starting BLAST skin microbiome report", level="info")
    start_time = time.time()

    joined = build_joined_table(
        blast_dir,
        metadata_file,
        run_col=run_col,
        sep=sep,
        recursive=recursive,
        threads=threads,
    )

    tables_dir = os.path.join(output_dir, "tables")
    plots_dir = os.path.join(output_dir, "plots")
    stats_dir = os.path.join(output_dir, "statistics")
    os.makedirs(tables_dir, exist_ok=True)

    artifacts = {}
    artifacts["joined_table"] = write_joined_table(joined, os.path.join(output_dir, "joined_table.tsv"))
    logger.info(f"Saved joined table: {artifacts['joined_table']}")

    per_sample = hits_per_sample(joined, run_col=run_col,
                                 extra_cols=[c for c in (sex_col, site_col, SAMPLE_TYPE_COL, subject_col)
                                             if c in joined.columns])
    path = os.path.join(tables_dir, "hits_per_sample.tsv")
    per_sample.to_csv(path, sep="\t", index=False)
    artifacts["hits_per_sample"] = path

    if sex_col not in joined.columns:
        log_print(f"Column '{sex_col}' not in metadata; skipping sex comparisons", level="warning")
        return artifacts

    group_cols = [sex_col, site_col] if site_col in joined.columns else [sex_col]
    by_group = top_species_by_group(joined, group_cols, top_n=top_n)
    path = os.path.join(tables_dir, "top_species_by_" + "_".join(group_cols) + ".tsv")
    by_group.to_csv(path, sep="\t", index=False)
    artifacts["top_species_by_group"] = path

    for sex in sorted(joined[sex_col].dropna().unique()):
        top = top_species(joined, top_n=top_n, **{sex_col: sex})
        path = os.path.join(tables_dir, f"top_species_{sanitize_filename(sex)}.tsv")
        top.to_csv(path, sep="\t", index=False)
        artifacts[f"top_species_{sex}"] = path
        if not skip_plots:
            plot_path = plot_top_species(top, f"Top {top_n} species: {sex}", output_dir=plots_dir,
                                         name=f"top_species_{sex}", output_format=plot_format)
            if plot_path:
                artifacts[f"top_species_{sex}_plot"] = plot_path

    for metric in DISTRIBUTION_METRICS:
        dist = metric_distribution(joined, sex_col, metric)
        path = os.path.join(tables_dir, f"{metric}_by_{sanitize_filename(sex_col)}.tsv")
        dist.to_csv(path, sep="\t")
        artifacts[f"{metric}_distribution"] = path

    kw_path = run_statistical_tests(joined, stats_dir, logger, group_col=sex_col)
    if kw_path:
        artifacts["kruskal_wallis"] = kw_path

    if not skip_plots:
        for metric in ("mismatch", "length"):
            plot_path = plot_metric_histogram(joined, metric, hue_col=sex_col,
                                              output_dir=plots_dir, output_format=plot_format)
            if plot_path:
                artifacts[f"{metric}_histogram"] = plot_path
            if subject_col in joined.columns:
                plot_path = plot_metric_density(joined, metric, group_col=subject_col,
                                                output_dir=plots_dir, output_format=plot_format)
                if plot_path:
                    artifacts[f"{metric}_density"] = plot_path

    elapsed = time.time() - start_time
    mm, ss = divmod(elapsed, 60)
    log_print(f"Report completed in {int(mm)}m {int(ss)}s; {len(artifacts)} files written to {output_dir}",
              level="info")
    return artifacts
