#!/usr/bin/env python3
"""
Confecção OP - Ordens de Produção
Main entry point for the command line tools
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config.constants import APP_NAME
from config.settings import get_settings
from domain.exceptions import ConfeccaoBaseException
from domain.sizing import get_size_weight
from operations.size_sort_ops import sort_size_labels

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """
    Configure logging for the application.

    Sets up console output with pretty formatting.
    Suppresses noisy third-party loggers.
    """
    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler (stderr keeps stdout clean for command output)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    logging.getLogger('openpyxl').setLevel(logging.WARNING)

    logging.debug(f"{APP_NAME} - logging initialized - Level: {level}")


def cmd_sort_labels(args) -> int:
    """Print size labels in size order with their weights."""
    for label in sort_size_labels(args.labels):
        print(f"{label}\t{get_size_weight(label).weight:g}")
    return 0


def cmd_grade(args) -> int:
    """Print a grade sheet in size order."""
    from services.excel_reader import read_grade_sheet

    grades = read_grade_sheet(Path(args.file), sheet_name=args.sheet)
    for grade in grades:
        print(f"{grade['nome']}\t{grade['quantidadePrevista']}")
    print(f"Total: {sum(g['quantidadePrevista'] for g in grades)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(prog="confeccao-op", description=APP_NAME)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sort_parser = subparsers.add_parser("sort-labels", help="Sort size labels")
    sort_parser.add_argument("labels", nargs="+", help='e.g. "Camiseta;TAMANHO:GG" or "M"')
    sort_parser.set_defaults(func=cmd_sort_labels)

    grade_parser = subparsers.add_parser("grade", help="Read a grade sheet (.xlsx)")
    grade_parser.add_argument("file", help="Excel file with Produto, Tamanho, Quantidade")
    grade_parser.add_argument("--sheet", default=None, help="Sheet name (default: first)")
    grade_parser.set_defaults(func=cmd_grade)

    return parser


def main(argv=None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging("DEBUG" if args.debug or settings.debug_mode else settings.log_level)

    try:
        return args.func(args)
    except ConfeccaoBaseException as e:
        logger.error(str(e))
        print(f"\n❌ {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
