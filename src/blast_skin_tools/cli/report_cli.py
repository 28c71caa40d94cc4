#!/usr/bin/env python3
"""
BLAST Skin Tools Report Module

Builds the joined BLAST/metadata table and writes the comparison of male and
female skin communities:
- top species tables (per sex, and per sex and body site)
- hits per sample
- mismatch / length / identity distributions per sex
- Kruskal-Wallis and Dunn's tests of the alignment metrics by sex
- histograms and density plots

Example:
  blast-skin-tools report --blast-dir blast_results \
                          --metadata-file SraRunTable.txt \
                          --output-dir ./skin_report --top-n 15
"""

import sys
import argparse

from blast_skin_tools.logger import log_print
from blast_skin_tools.errors import BlastSkinError
from blast_skin_tools.cli.join_cli import add_input_arguments, decode_sep
from blast_skin_tools.core.report import run_report


def parse_args(args=None):
    """Parse command line arguments for the report module."""
    parser = argparse.ArgumentParser(
        description="Summarize BLAST hits of skin samples by sex and body site",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_input_arguments(parser)
    parser.add_argument("--output-dir", default="./skin_report", help="Directory for output files")
    parser.add_argument("--sex-col", default="sex_s", help="Metadata column with host sex")
    parser.add_argument("--site-col", default="env_material", help="Metadata column with the body site")
    parser.add_argument("--subject-col", default="host_subject_id_s",
                        help="Metadata column with the subject identifier")
    parser.add_argument("--top-n", type=int, default=10, help="Species per top-species table (default: 10)")
    parser.add_argument("--skip-plots", action="store_true", help="Only write tables")
    parser.add_argument("--plot-format", default="svg", choices=["svg", "png", "pdf"],
                        help="Image format for plots (default: svg)")
    return parser.parse_args(args)


def main(args=None):
    """Main function for the report module."""
    args = parse_args(args)
    try:
        run_report(
            args.blast_dir,
            args.metadata_file,
            args.output_dir,
            run_col=args.run_col,
            sex_col=args.sex_col,
            site_col=args.site_col,
            subject_col=args.subject_col,
            sep=decode_sep(args.sep),
            recursive=args.recursive,
            threads=args.threads,
            top_n=args.top_n,
            skip_plots=args.skip_plots,
            plot_format=args.plot_format,
            log_file=args.log_file,
            log_level=args.log_level,
        )
    except BlastSkinError as e:
        log_print(f"Error: {e}", level="error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
