# blast_skin_tools/__init__.py
"""
BLAST Skin Tools - compare skin bacterial communities of male and female hosts.

This package provides a small workflow over BLAST tabular output:
1. Parsing per-run BLAST result files and splitting query ids
2. Concatenating all runs into one hit table
3. Left-joining the hits onto SRA run metadata
4. Top species tables, descriptive statistics and statistical tests
5. Histograms and density plots
"""

__version__ = "0.1.0"

from blast_skin_tools.logger import setup_logger, log_print

from blast_skin_tools.errors import (
    BlastSkinError,
    ParseError,
    AggregationError,
    LoadError,
    JoinKeyError,
)

from blast_skin_tools.blast import (
    parse_blast_file,
    split_query_id,
    find_blast_files,
    aggregate_blast_files,
    load_blast_directory,
)

from blast_skin_tools.analysis import (
    load_metadata,
    join_metadata_alignments,
    build_joined_table,
    top_species,
)
