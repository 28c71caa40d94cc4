# blast_skin_tools/blast/schema.py
"""
Column schema for BLAST tabular output written with
``-outfmt "10 sscinames std"`` (comma separated, no header).
"""

from typing import NamedTuple


class BlastField(NamedTuple):
    name: str
    dtype: str
    description: str


BLAST_FIELDS = (
    BlastField("sscinames", "str", "Subject scientific name"),
    BlastField("qseqid", "str", "Query sequence id (<sample_key>.<ordinal>)"),
    BlastField("sseqid", "str", "Subject sequence id"),
    BlastField("pident", "float", "Percentage of identical matches"),
    BlastField("length", "int", "Alignment length"),
    BlastField("mismatch", "int", "Number of mismatches"),
    BlastField("gapopen", "int", "Number of gap openings"),
    BlastField("qstart", "int", "Start of alignment in query"),
    BlastField("qend", "int", "End of alignment in query"),
    BlastField("sstart", "int", "Start of alignment in subject"),
    BlastField("send", "int", "End of alignment in subject"),
    BlastField("evalue", "float", "Expect value"),
    BlastField("bitscore", "float", "Bit score"),
)

FIELD_NAMES = [f.name for f in BLAST_FIELDS]
FIELD_COUNT = len(BLAST_FIELDS)

QUERY_ID_COL = "qseqid"
SAMPLE_KEY_COL = "sample_key"
ORDINAL_COL = "sequence_ordinal"
SPECIES_COL = "sscinames"

# qseqid is replaced in place by the two key columns
NORMALIZED_COLUMNS = []
for _name in FIELD_NAMES:
    if _name == QUERY_ID_COL:
        NORMALIZED_COLUMNS.extend([SAMPLE_KEY_COL, ORDINAL_COL])
    else:
        NORMALIZED_COLUMNS.append(_name)
del _name

NUMERIC_FIELDS = [f.name for f in BLAST_FIELDS if f.dtype != "str"]


def field_dtype(name):
    """Return the schema dtype ('str', 'int' or 'float') of a raw column."""
    for field in BLAST_FIELDS:
        if field.name == name:
            return field.dtype
    raise KeyError(name)
