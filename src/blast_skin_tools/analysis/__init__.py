"""Metadata loading, joining and downstream analysis of BLAST hits."""

from blast_skin_tools.analysis.metadata import load_metadata

from blast_skin_tools.analysis.join import (
    join_metadata_alignments,
    unmatched_sample_keys,
    build_joined_table,
)

from blast_skin_tools.analysis.views import (
    filter_records,
    top_species,
    top_species_by_group,
    metric_distribution,
    hits_per_sample,
)

from blast_skin_tools.analysis.statistical import (
    kruskal_wallis_dunn,
    run_statistical_tests,
)
