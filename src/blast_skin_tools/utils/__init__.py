"""Utility helpers for file handling."""

from blast_skin_tools.utils.file_utils import check_file_exists, sanitize_filename
