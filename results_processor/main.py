"""
Main entry point for the Competition Results Summary Generator.
"""

import argparse
import os
import sys
import traceback
from typing import List, Optional

from .parsers import load_workbook, extract_results
from .processors import annotate_highlighted_rows
from .utils.constants import DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH
from .utils.log import info, error, success, debug, set_verbosity, set_use_emoji
from .website import generate_report


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Competition Results Summary - scan DMT/TRA result sheets and generate a filterable HTML report"
    )
    parser.add_argument(
        '--in', '--input',
        dest='input',
        default=str(DEFAULT_INPUT_PATH),
        help='Results spreadsheet (.xlsx)'
    )
    parser.add_argument(
        '--out', '--output',
        dest='output',
        default=str(DEFAULT_OUTPUT_PATH),
        help='HTML report to write'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable extra debug output'
    )
    parser.add_argument(
        '--no-emoji',
        action='store_true',
        help='Disable emoji in console output'
    )
    return parser.parse_args(argv)


def run(input_path: str, output_path: str) -> int:
    """
    Run the full pipeline: load, extract, annotate, render.

    Args:
        input_path: Results spreadsheet
        output_path: Report destination

    Returns:
        Number of records written
    """
    info(f"Loading {input_path}...")
    workbook = load_workbook(input_path)
    try:
        included = workbook.included_sheets()
        info(f"Result sheets: {', '.join(included) if included else 'none'}")

        records = extract_results(workbook)
        info(f"Extracted {len(records)} results")

        records = annotate_highlighted_rows(workbook, records)
    finally:
        workbook.close()

    generate_report(records, output_path)
    return len(records)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    set_verbosity(args.verbose)
    set_use_emoji(not args.no_emoji)

    input_path = os.path.abspath(args.input)
    output_path = os.path.abspath(args.output)

    if not os.path.exists(input_path):
        error(f"Input file not found: {input_path}")
        sys.exit(1)

    debug(f"Output: {output_path}")

    try:
        run(input_path, output_path)
    except Exception as e:
        error(f"Error during processing: {e}")
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)

    success("Processing complete!")


if __name__ == '__main__':
    main()
