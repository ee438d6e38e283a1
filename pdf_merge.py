#!/usr/bin/env python3
"""
pdf_merge.py
Merge PDF files, and every PDF found under given directories, into one file

Usage:
  python pdf_merge.py -o merged.pdf a.pdf b.pdf
  python pdf_merge.py -o combined.pdf scans/ extra.pdf
  python pdf_merge.py /path/to/dir          # writes dir.pdf in the current folder

Inputs are merged in case-insensitive alphabetical order of their full paths.
"""

import argparse
import sys
from typing import List, Optional

from merge_config import EXIT_NO_ARGS, EXIT_OK
from pdf_utils import (
    MergeJob,
    PdfMergeError,
    UsageError,
    EmptyResultError,
    InputScanError,
    OutputAmbiguityError,
    merge_pdfs,
    resolve_inputs,
    select_output,
)

EPILOG = """\
If a single directory is provided and -o is omitted, the directory name is
used as the output filename in the current directory.

Examples:
  pdf-merge -o merged.pdf a.pdf b.pdf
  pdf-merge /path/to/dir
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pdf-merge',
        description='Merge PDF files and directories of PDFs into one PDF',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument('inputs', nargs='*', metavar='FILE_or_DIR',
                        help='PDF files, or directories searched recursively for PDFs')
    parser.add_argument('-o', '--output', metavar='OUTPUT.pdf',
                        help='Output PDF path (the next argument is always taken, '
                             'even if it starts with "-")')
    return parser


def attach_output_values(argv: List[str]) -> List[str]:
    """Rewrite '-o VALUE' as '--output=VALUE' so a value like '-x.pdf' is not read as a flag."""
    joined = []
    tokens = iter(argv)
    for token in tokens:
        if token == '--':
            joined.append(token)
            joined.extend(tokens)
            break
        if token in ('-o', '--output'):
            value = next(tokens, None)
            joined.append(token if value is None else f'--output={value}')
        else:
            joined.append(token)
    return joined


def in_argv_order(argv: List[str], tokens: List[str]) -> List[str]:
    pending = list(tokens)
    ordered = []
    for token in argv:
        if token in pending:
            pending.remove(token)
            ordered.append(token)
    return ordered + pending


def run(argv: Optional[List[str]] = None) -> int:
    """Run one merge from command-line arguments and return the exit code."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return EXIT_NO_ARGS

    argv = attach_output_values(argv)
    try:
        # -h exits 0, a bare -o exits 2; both print their own text
        args, unknown = parser.parse_known_intermixed_args(argv)
    except SystemExit as e:
        return e.code

    # anything that is not -o/-h is a path, "-scan.pdf" included
    inputs = in_argv_order(argv, args.inputs + unknown)

    try:
        if not inputs:
            raise UsageError("No input files or directories provided.")

        pdfs = resolve_inputs(inputs)
        if not pdfs:
            raise EmptyResultError("No PDF files found in the given inputs.")

        output_path = select_output(args.output, inputs)
        merge_pdfs(MergeJob(tuple(pdfs), output_path))
    except InputScanError as e:
        print(f"❌ Error while scanning inputs: {e}", file=sys.stderr)
        return e.exit_code
    except (UsageError, OutputAmbiguityError) as e:
        print(f"❌ {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return e.exit_code
    except PdfMergeError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code

    print(f"Merged {len(pdfs)} PDF(s) into: {output_path}")
    return EXIT_OK


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
