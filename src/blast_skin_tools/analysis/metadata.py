# blast_skin_tools/analysis/metadata.py
import logging
import pandas as pd

from blast_skin_tools.logger import log_table_summary
from blast_skin_tools.errors import LoadError
from blast_skin_tools.utils.file_utils import check_file_exists

DEFAULT_RUN_COL = "Run"
SEX_COL = "sex_s"
BODY_SITE_COL = "env_material"
SAMPLE_TYPE_COL = "sample_type_s"
SUBJECT_COL = "host_subject_id_s"

logger = logging.getLogger('blast_skin_tools')


def load_metadata(metadata_file, run_col=DEFAULT_RUN_COL, sep="\t"):
    """
    Read the sample metadata table (SRA run table style).

    Every column is read as text; no numeric, categorical or missing-value
    inference ("NA" stays the string "NA").

    Args:
        metadata_file: Path to the tab-delimited metadata file with a header row
        run_col: Column holding the run accession that BLAST sample keys refer to
        sep: Field delimiter

    Returns:
        DataFrame containing the sample metadata, in file order

    Raises:
        LoadError: missing/empty file or no run identifier column
    """
    if not check_file_exists(metadata_file, "Sample metadata"):
        raise LoadError(f"Sample metadata file does not exist or is not readable: {metadata_file}",
                        path=metadata_file)

    try:
        # "NA", "null" and empty cells are metadata values, not missing data
        df = pd.read_csv(metadata_file, sep=sep, dtype=str, keep_default_na=False, na_filter=False)
    except pd.errors.EmptyDataError as e:
        raise LoadError(f"Sample metadata file is empty (no header row): {metadata_file}",
                        path=metadata_file) from e
    except pd.errors.ParserError as e:
        raise LoadError(f"Malformed sample metadata file {metadata_file}: {e}",
                        path=metadata_file) from e
    except UnicodeDecodeError as e:
        raise LoadError(f"Sample metadata file {metadata_file} is not valid UTF-8 text: {e}",
                        path=metadata_file) from e

    if run_col not in df.columns:
        # a headerless file ends up here too: its first record became the header
        raise LoadError(
            f"Run identifier column '{run_col}' not found in {metadata_file}; "
            f"header columns: {list(df.columns)}",
            path=metadata_file,
            column=run_col,
        )

    log_table_summary(df, f"Loaded sample metadata from {metadata_file}")
    logger.debug(f"Sample metadata columns: {list(df.columns)}")
    return df
