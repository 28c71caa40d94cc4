"""Reading and aggregating BLAST tabular output."""

from blast_skin_tools.blast.schema import BLAST_FIELDS, NORMALIZED_COLUMNS
from blast_skin_tools.blast.parser import parse_blast_file, split_query_id
from blast_skin_tools.blast.aggregator import (
    find_blast_files,
    aggregate_blast_files,
    load_blast_directory,
)
