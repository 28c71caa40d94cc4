#!/usr/bin/env python3
"""
Tests for blast_skin_tools/blast/parser.py and schema.py

Tests cover:
- Query id splitting (split_query_id)
- Parsing single BLAST files (parse_blast_file)
- Field count, value and file errors
"""
import pandas as pd
import pytest

from blast_skin_tools.blast.parser import parse_blast_file, split_query_id, empty_alignment_table
from blast_skin_tools.blast.schema import BLAST_FIELDS, NORMALIZED_COLUMNS, NUMERIC_FIELDS, field_dtype
from blast_skin_tools.errors import ParseError

from conftest import blast_line, write_blast_file


# ============================================================
# SCHEMA TESTS
# ============================================================

class TestSchema:
    """Tests for the BLAST column schema."""

    def test_raw_fields_in_output_order(self):
        """Test the raw columns follow the sscinames + std order."""
        assert [f.name for f in BLAST_FIELDS] == [
            "sscinames", "qseqid", "sseqid", "pident", "length", "mismatch", "gapopen",
            "qstart", "qend", "sstart", "send", "evalue", "bitscore",
        ]

    def test_normalized_columns_replace_query_id(self):
        """Test qseqid is replaced in place by sample_key and sequence_ordinal."""
        assert len(NORMALIZED_COLUMNS) == 14
        assert NORMALIZED_COLUMNS[:3] == ["sscinames", "sample_key", "sequence_ordinal"]
        assert "qseqid" not in NORMALIZED_COLUMNS

    def test_field_dtype(self):
        """Test dtype lookup and unknown names."""
        assert field_dtype("pident") == "float"
        assert field_dtype("mismatch") == "int"
        with pytest.raises(KeyError):
            field_dtype("staxids")

    def test_numeric_fields(self):
        """Test the numeric columns are every raw column except the identifiers."""
        assert "sscinames" not in NUMERIC_FIELDS
        assert "qseqid" not in NUMERIC_FIELDS
        assert "sseqid" not in NUMERIC_FIELDS
        assert len(NUMERIC_FIELDS) == 10
        assert all(field_dtype(name) in ("int", "float") for name in NUMERIC_FIELDS)


# ============================================================
# SPLIT QUERY ID TESTS
# ============================================================

class TestSplitQueryId:
    """Tests for the split_query_id function."""

    def test_splits_sample_and_ordinal(self):
        """Test 'X.Y' gives sample_key X and ordinal Y."""
        result = split_query_id(pd.Series(["ERR1942280.1", "SRR5.12"]))

        assert result["sample_key"].tolist() == ["ERR1942280", "SRR5"]
        assert result["sequence_ordinal"].tolist() == ["1", "12"]

    def test_splits_on_first_separator_only(self):
        """Test extra separators stay in the ordinal."""
        result = split_query_id(pd.Series(["ERR1.2.3"]))

        assert result.loc[0, "sample_key"] == "ERR1"
        assert result.loc[0, "sequence_ordinal"] == "2.3"

    def test_reconstructs_original_id(self):
        """Test sample_key + '.' + ordinal is the original id."""
        ids = pd.Series(["ERR1942280.1", "A.B.C", "x.0"])
        result = split_query_id(ids)

        rebuilt = result["sample_key"] + "." + result["sequence_ordinal"]
        assert rebuilt.tolist() == ids.tolist()

    def test_missing_separator_raises(self):
        """Test an id without separator is rejected."""
        with pytest.raises(ParseError, match="ERR1942280"):
            split_query_id(pd.Series(["ERR1942280.1", "ERR1942280"]))

    @pytest.mark.parametrize("bad_id", [".1", "ERR1942280."])
    def test_empty_part_raises(self, bad_id):
        """Test ids with an empty sample key or ordinal are rejected."""
        with pytest.raises(ParseError):
            split_query_id(pd.Series([bad_id]))

    def test_custom_separator(self):
        """Test splitting on another separator."""
        result = split_query_id(pd.Series(["ERR1_7"]), separator="_")

        assert result.loc[0, "sample_key"] == "ERR1"
        assert result.loc[0, "sequence_ordinal"] == "7"

    def test_empty_series(self):
        """Test an empty series gives an empty frame with both columns."""
        result = split_query_id(pd.Series([], dtype=object))

        assert list(result.columns) == ["sample_key", "sequence_ordinal"]
        assert len(result) == 0


# ============================================================
# PARSE BLAST FILE TESTS
# ============================================================

class TestParseBlastFile:
    """Tests for the parse_blast_file function."""

    def test_parses_rows(self, temp_dir):
        """Test a valid file yields normalized, typed rows in file order."""
        path = write_blast_file(temp_dir / "run.csv", [
            blast_line("Bartonella washoensis", "ERR1942280.1", pident=98.5, mismatch=2),
            blast_line("Cutibacterium acnes", "ERR1942280.2"),
        ])

        df = parse_blast_file(path)

        assert list(df.columns) == NORMALIZED_COLUMNS
        assert len(df) == 2
        first = df.iloc[0]
        assert first["sscinames"] == "Bartonella washoensis"
        assert first["sample_key"] == "ERR1942280"
        assert first["sequence_ordinal"] == "1"
        assert first["pident"] == pytest.approx(98.5)
        assert first["mismatch"] == 2
        assert df["length"].dtype == "int64"
        assert df["evalue"].dtype == "float64"
        assert df["evalue"].iloc[0] == pytest.approx(1e-120)

    def test_no_deduplication(self, temp_dir):
        """Test identical rows are all kept."""
        line = blast_line("Cutibacterium acnes", "ERR1.1")
        path = write_blast_file(temp_dir / "run.csv", [line, line, line])

        assert len(parse_blast_file(path)) == 3

    def test_tab_separated(self, temp_dir):
        """Test parsing tab separated output."""
        line = blast_line("Cutibacterium acnes", "ERR1.1").replace(",", "\t")
        path = write_blast_file(temp_dir / "run.tsv", [line])

        df = parse_blast_file(path, sep="\t")

        assert df.loc[0, "sample_key"] == "ERR1"

    def test_missing_file_raises(self, temp_dir):
        """Test a missing file is a ParseError naming the path."""
        with pytest.raises(ParseError, match="does not exist") as exc:
            parse_blast_file(temp_dir / "missing.csv")
        assert exc.value.path.endswith("missing.csv")

    def test_empty_file_raises(self, temp_dir):
        """Test an empty file is rejected by default."""
        path = temp_dir / "empty.csv"
        path.write_text("")

        with pytest.raises(ParseError, match="empty"):
            parse_blast_file(path)

    def test_empty_file_allowed(self, temp_dir):
        """Test allow_empty returns an empty normalized table."""
        path = temp_dir / "empty.csv"
        path.write_text("")

        df = parse_blast_file(path, allow_empty=True)

        assert len(df) == 0
        assert list(df.columns) == NORMALIZED_COLUMNS

    def test_too_few_fields_raises(self, temp_dir):
        """Test rows with fewer than thirteen fields are rejected."""
        path = write_blast_file(temp_dir / "run.csv", ["Cutibacterium acnes,ERR1.1,gi|1|,99.0"])

        with pytest.raises(ParseError, match="expected 13 fields") as exc:
            parse_blast_file(path)
        assert exc.value.record == 1

    def test_short_later_row_raises(self, temp_dir):
        """Test a short row after valid rows is reported with its record number."""
        good = blast_line("Cutibacterium acnes", "ERR1.1")
        short = ",".join(good.split(",")[:10])
        path = write_blast_file(temp_dir / "run.csv", [good, short])

        with pytest.raises(ParseError, match="record 2") as exc:
            parse_blast_file(path)
        assert exc.value.record == 2

    def test_blank_lines_are_not_records(self, temp_dir):
        """Test blank lines are skipped and not counted in the record number."""
        good = blast_line("Cutibacterium acnes", "ERR1.1")
        bad = blast_line("Cutibacterium acnes", "ERR1.2", mismatch="many")
        path = write_blast_file(temp_dir / "run.csv", [good, "", "", bad])

        with pytest.raises(ParseError, match="mismatch") as exc:
            parse_blast_file(path)
        assert exc.value.record == 2

    def test_blank_lines_skipped(self, temp_dir):
        """Test blank lines between hits do not produce rows."""
        good = blast_line("Cutibacterium acnes", "ERR1.1")
        path = write_blast_file(temp_dir / "run.csv", [good, "", good])

        assert len(parse_blast_file(path)) == 2

    def test_invalid_utf8_raises(self, temp_dir):
        """Test a file that is not UTF-8 text is a ParseError naming the path."""
        line = blast_line("Bartonella washoensis", "ERR1.2").encode("utf-8")
        path = temp_dir / "run.csv"
        path.write_bytes(line.replace(b"Bartonella", b"B\xffartonella", 1) + b"\n")

        with pytest.raises(ParseError, match="UTF-8") as exc:
            parse_blast_file(path)
        assert exc.value.path == str(path)
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_extra_fields_raise(self, temp_dir):
        """Test a row with an extra field is rejected."""
        good = blast_line("Cutibacterium acnes", "ERR1.1")
        path = write_blast_file(temp_dir / "run.csv", [good, good + ",9606"])

        with pytest.raises(ParseError):
            parse_blast_file(path)

    def test_non_numeric_value_raises(self, temp_dir):
        """Test a non-numeric value in a numeric column is rejected."""
        path = write_blast_file(temp_dir / "run.csv", [
            blast_line("Cutibacterium acnes", "ERR1.1", mismatch="many"),
        ])

        with pytest.raises(ParseError, match="mismatch"):
            parse_blast_file(path)

    def test_fractional_integer_raises(self, temp_dir):
        """Test a fractional value in an integer column is rejected."""
        path = write_blast_file(temp_dir / "run.csv", [
            blast_line("Cutibacterium acnes", "ERR1.1", length=250.5),
        ])

        with pytest.raises(ParseError, match="length"):
            parse_blast_file(path)

    def test_malformed_query_id_raises(self, temp_dir):
        """Test a query id without separator fails the file."""
        path = write_blast_file(temp_dir / "run.csv", [blast_line("Cutibacterium acnes", "ERR1")])

        with pytest.raises(ParseError, match="ERR1") as exc:
            parse_blast_file(path)
        assert exc.value.path == str(path)


def test_empty_alignment_table_dtypes():
    """Test the empty table carries the schema dtypes."""
    df = empty_alignment_table()

    assert list(df.columns) == NORMALIZED_COLUMNS
    assert df["mismatch"].dtype == "int64"
    assert df["pident"].dtype == "float64"
