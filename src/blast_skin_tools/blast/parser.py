# blast_skin_tools/blast/parser.py
"""
Parse a single BLAST tabular result file into a normalized DataFrame.

The compound query id (``ERR1942280.1``) is split into ``sample_key`` and
``sequence_ordinal`` on the first separator; any further separators stay in
the ordinal.
"""

import os
import logging
import pandas as pd

from blast_skin_tools.errors import ParseError
from blast_skin_tools.blast.schema import (
    BLAST_FIELDS,
    FIELD_COUNT,
    FIELD_NAMES,
    NORMALIZED_COLUMNS,
    NUMERIC_FIELDS,
    QUERY_ID_COL,
    SAMPLE_KEY_COL,
    ORDINAL_COL,
    field_dtype,
)

logger = logging.getLogger('blast_skin_tools')

DEFAULT_SEP = ","
QUERY_ID_SEPARATOR = "."

_PANDAS_DTYPES = {"str": "object", "int": "int64", "float": "float64"}


def empty_alignment_table():
    """Return a zero-row table with the normalized columns and dtypes."""
    dtypes = {SAMPLE_KEY_COL: "object", ORDINAL_COL: "object"}
    for field in BLAST_FIELDS:
        dtypes[field.name] = _PANDAS_DTYPES[field.dtype]
    return pd.DataFrame({col: pd.Series(dtype=dtypes[col]) for col in NORMALIZED_COLUMNS})


def split_query_id(query_ids, separator=QUERY_ID_SEPARATOR, path=None):
    """
    Split compound query ids into sample key and sequence ordinal.

    Args:
        query_ids: Series of ids of the form ``<sample_key><separator><ordinal>``
        separator: Separator between the two parts
        path: Source file, only used in error messages

    Returns:
        DataFrame with ``sample_key`` and ``sequence_ordinal`` columns,
        aligned on the index of ``query_ids``

    Raises:
        ParseError: if an id has no separator or an empty part
    """
    if len(query_ids) == 0:
        return pd.DataFrame({
            SAMPLE_KEY_COL: pd.Series(dtype="object"),
            ORDINAL_COL: pd.Series(dtype="object"),
        })

    query_ids = query_ids.astype(str)
    parts = query_ids.str.partition(separator)
    malformed = (parts[1] != separator) | (parts[0] == "") | (parts[2] == "")
    if malformed.any():
        position = int(malformed.to_numpy().argmax())
        bad_id = query_ids.iloc[position]
        raise ParseError(
            f"query id '{bad_id}' is not of the form <sample_key>{separator}<ordinal>",
            path=path,
            record=position + 1,
        )

    return pd.DataFrame({SAMPLE_KEY_COL: parts[0], ORDINAL_COL: parts[2]}, index=query_ids.index)


def _coerce_numeric(df, path):
    """Convert typed schema columns in place; raises ParseError on bad values."""
    for name in NUMERIC_FIELDS:
        dtype = field_dtype(name)
        raw = df[name]
        values = pd.to_numeric(raw, errors="coerce")
        bad = values.isna()
        if dtype == "int":
            bad = bad | (values % 1 != 0)
        if bad.any():
            position = int(bad.to_numpy().argmax())
            raise ParseError(
                f"column '{name}' expects {dtype}, got '{raw.iloc[position]}'",
                path=path,
                record=position + 1,
            )
        df[name] = values.astype(_PANDAS_DTYPES[dtype])
    return df


def parse_blast_file(path, sep=DEFAULT_SEP, allow_empty=False, id_separator=QUERY_ID_SEPARATOR):
    """
    Read one BLAST result file into the normalized alignment table.

    Args:
        path: Path to the BLAST output file (no header row)
        sep: Field delimiter
        allow_empty: Return an empty table for an empty file instead of failing
        id_separator: Separator inside the query id column

    Returns:
        DataFrame with NORMALIZED_COLUMNS, one row per hit, in file order

    Raises:
        ParseError: missing/empty file, wrong field count or bad values
    """
    path = str(path)
    if not os.path.isfile(path):
        raise ParseError("BLAST result file does not exist", path=path)

    try:
        df = pd.read_csv(
            path,
            sep=sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        if allow_empty:
            logger.warning(f"Empty BLAST result file: {path}")
            return empty_alignment_table()
        raise ParseError("BLAST result file is empty", path=path)
    except pd.errors.ParserError as e:
        raise ParseError(f"malformed row ({e})", path=path) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"file is not valid UTF-8 text ({e})", path=path) from e

    # the column count comes from the first record; longer later rows fail above
    if df.shape[1] != FIELD_COUNT:
        raise ParseError(f"expected {FIELD_COUNT} fields per row, found {df.shape[1]}",
                         path=path, record=1)

    # short rows are padded with NaN by pandas
    short_rows = df.isna().any(axis=1)
    if short_rows.any():
        position = int(short_rows.to_numpy().argmax())
        found = int(df.iloc[position].notna().sum())
        raise ParseError(
            f"expected {FIELD_COUNT} fields per row, found {found}",
            path=path,
            record=position + 1,
        )

    df.columns = FIELD_NAMES
    df = _coerce_numeric(df, path)

    keys = split_query_id(df[QUERY_ID_COL], separator=id_separator, path=path)
    df[SAMPLE_KEY_COL] = keys[SAMPLE_KEY_COL]
    df[ORDINAL_COL] = keys[ORDINAL_COL]
    df = df[NORMALIZED_COLUMNS].reset_index(drop=True)

    logger.debug(f"Parsed {len(df)} hits from {path}")
    return df
