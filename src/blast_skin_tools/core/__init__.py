"""
Core functionality for BLAST Skin Tools.

- report.py: run the full report from BLAST results and metadata
"""

from blast_skin_tools.core.report import run_report, write_joined_table
