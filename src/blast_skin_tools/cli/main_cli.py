#!/usr/bin/env python3
"""
BLAST Skin Tools - Main CLI Interface

Compare skin-associated bacterial communities of male and female hosts from
BLAST results and SRA run metadata.

Available Commands:
  join    - Parse BLAST result files and join them with sample metadata
  report  - Write top species tables, statistics and plots

Example Usage:
  blast-skin-tools join --blast-dir blast_results --metadata-file SraRunTable.txt
  blast-skin-tools report --blast-dir blast_results --metadata-file SraRunTable.txt --output-dir skin_report

For more information on any command, use:
  blast-skin-tools [command] --help
"""

import sys
import argparse
import logging
import warnings

from blast_skin_tools.cli import join_cli
from blast_skin_tools.cli import report_cli

logger = logging.getLogger('blast_skin_tools')

COMMANDS = {
    'join': join_cli.main,
    'report': report_cli.main,
}


def print_help():
    parser = argparse.ArgumentParser(
        prog="blast-skin-tools",
        description="BLAST Skin Tools - skin microbiome comparison from BLAST output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.print_help()


def main(argv=None):
    """
    Main entry point for BLAST Skin Tools CLI.

    Parses the command name and dispatches the remaining arguments to the
    matching module.
    """
    warnings.filterwarnings("ignore", category=FutureWarning)

    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv or argv[0] in ('-h', '--help'):
        print_help()
        return 0

    command, rest = argv[0], argv[1:]
    if command not in COMMANDS:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
        logger.error(f"Unknown command: {command}")
        print("\nAvailable commands:")
        print("  join    - Parse BLAST result files and join them with sample metadata")
        print("  report  - Write top species tables, statistics and plots")
        print("\nFor more information on any command, use:")
        print("  blast-skin-tools [command] --help")
        return 1

    return COMMANDS[command](rest)


if __name__ == "__main__":
    sys.exit(main())
