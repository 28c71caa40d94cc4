#!/usr/bin/env python3
"""
Shared pytest fixtures for the test suite.

Provides temporary directories, small BLAST result files and a matching
sample metadata table.
"""
import sys
import shutil
import tempfile
from pathlib import Path

# Add src directory to Python path for test imports
_src_path = Path(__file__).parent.parent / 'src'
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

import pytest


METADATA_ROWS = [
    ["Run", "sex_s", "env_material", "sample_type_s", "host_subject_id_s"],
    ["ERR1942280", "female", "sebum", "palm", "F1"],
    ["ERR1942281", "male", "sebum", "palm", "M1"],
    ["ERR1942282", "female", "sweat", "palm", "F1"],
    ["ERR1942283", "male", "sweat", "mouse", "M2"],
]


def blast_line(species, query_id, pident=99.0, length=250, mismatch=1, gapopen=0,
               evalue="1e-120", bitscore=450.0):
    """One comma separated BLAST row in sscinames + std order."""
    fields = [
        species, query_id, "gi|123|ref|NR_000001.1|", pident, length, mismatch, gapopen,
        1, length, 100, 100 + length - 1, evalue, bitscore,
    ]
    return ",".join(str(f) for f in fields)


def write_blast_file(path, lines):
    path.write_text("".join(line + "\n" for line in lines))
    return path


# ============================================================
# PATH FIXTURES
# ============================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that is cleaned up after tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def metadata_file(temp_dir):
    """Tab-delimited SRA-style run table."""
    path = temp_dir / "SraRunTable.txt"
    path.write_text("".join("\t".join(row) + "\n" for row in METADATA_ROWS))
    return path


@pytest.fixture
def blast_dir(temp_dir):
    """
    One BLAST result file per run.

    ERR1942283 has metadata but no file; ERR9999999 has hits but no metadata.
    """
    blast = temp_dir / "blast_results"
    blast.mkdir()
    write_blast_file(blast / "ERR1942280.csv", [
        blast_line("Bartonella washoensis", "ERR1942280.1", mismatch=0, length=240),
        blast_line("Cutibacterium acnes", "ERR1942280.2", mismatch=1, length=250),
        blast_line("Staphylococcus epidermidis", "ERR1942280.3", mismatch=2, length=260),
        blast_line("Cutibacterium acnes", "ERR1942280.4", mismatch=0, length=255),
    ])
    write_blast_file(blast / "ERR1942281.csv", [
        blast_line("Staphylococcus hominis", "ERR1942281.1", mismatch=5, length=230),
        blast_line("Cutibacterium acnes", "ERR1942281.2", mismatch=7, length=245),
    ])
    write_blast_file(blast / "ERR1942282.csv", [
        blast_line("Micrococcus luteus", "ERR1942282.1", mismatch=3, length=270),
        blast_line("Staphylococcus epidermidis", "ERR1942282.2", mismatch=4, length=235),
    ])
    write_blast_file(blast / "ERR9999999.csv", [
        blast_line("Escherichia coli", "ERR9999999.1"),
        blast_line("Escherichia coli", "ERR9999999.2"),
    ])
    return blast
