# src/blast_skin_tools/cli/__init__.py
"""
Command-line interface modules for blast_skin_tools.

- join_cli.py: Build and save the joined BLAST/metadata table
- report_cli.py: Full report (tables, statistics, plots)
- main_cli.py: Main CLI interface that dispatches to the other modules
"""
