#!/usr/bin/env python3
"""
pdf_utils.py - Shared utilities for merging PDFs

Functions used by pdf_merge.py for:
- Input resolution (files and recursive directory scans)
- Output path selection
- PDF merging with guaranteed stream cleanup
"""

import contextlib
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from PyPDF2 import PdfWriter

from merge_config import (
    EXIT_MERGE_FAILED,
    EXIT_NO_OUTPUT,
    EXIT_NO_PDFS,
    EXIT_SCAN_FAILED,
    EXIT_USAGE,
    FOLLOW_SYMLINKS,
    OUTPUT_SUFFIX,
    PDF_EXTENSION,
)


# ============================================================================
# ERRORS
# ============================================================================

class PdfMergeError(Exception):
    """Base class for failures reported by the merge tool."""
    exit_code = 1


class UsageError(PdfMergeError):
    exit_code = EXIT_USAGE


class InputScanError(PdfMergeError):
    """An input could not be found or a directory could not be read."""
    exit_code = EXIT_SCAN_FAILED


class PathNotFoundError(InputScanError):
    def __init__(self, path: Path):
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class EmptyResultError(PdfMergeError):
    exit_code = EXIT_NO_PDFS


class OutputAmbiguityError(PdfMergeError):
    """No -o given and the inputs are not a single directory."""
    exit_code = EXIT_NO_OUTPUT


class MergeFailure(PdfMergeError):
    exit_code = EXIT_MERGE_FAILED


# ============================================================================
# INPUT RESOLUTION
# ============================================================================

def warn_to_stderr(message: str) -> None:
    print(f"⚠️  {message}", file=sys.stderr)


def is_pdf(name: str) -> bool:
    """True when the text after the last '.' in name is 'pdf' (any case)."""
    base = os.path.basename(name)
    if '.' not in base:
        return False
    return base.rsplit('.', 1)[1].lower() == PDF_EXTENSION


def _absolute(path: Path) -> Path:
    # abspath normalizes ".." and "." without following symlinks
    return Path(os.path.abspath(path))


def _raise_walk_error(err: OSError) -> None:
    raise InputScanError(f"Cannot read directory: {err}") from err


def scan_directory(root: Path) -> List[Path]:
    """
    Collect every PDF beneath a directory, at any depth.

    Non-PDF files are skipped silently. Symlinked directories are not
    descended into unless FOLLOW_SYMLINKS is set.

    Args:
        root: Directory to walk

    Returns:
        Absolute, normalized PDF paths in walk order (unsorted)

    Raises:
        InputScanError: if a directory under root cannot be listed
    """
    found = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error,
                                                  followlinks=FOLLOW_SYMLINKS):
        for name in filenames:
            candidate = Path(dirpath) / name
            if is_pdf(name) and candidate.is_file():
                found.append(_absolute(candidate))
    return found


def sort_key(path: Path) -> Tuple[str, str]:
    text = str(path)
    return (text.lower(), text)


def resolve_inputs(inputs: Iterable[str],
                   warn: Callable[[str], None] = warn_to_stderr) -> List[Path]:
    """
    Expand file and directory arguments into a sorted list of PDF paths.

    Inputs are checked in the order given; the first one that does not
    exist aborts the whole resolution. Explicit files that are not PDFs are
    reported through warn and skipped. The combined result is ordered by
    absolute path, case-insensitively, regardless of argument order.

    Args:
        inputs: Path strings from the command line
        warn: Sink for warnings about skipped files

    Returns:
        Absolute PDF paths (may be empty)

    Raises:
        PathNotFoundError: if any input does not exist
        InputScanError: if a directory cannot be scanned
    """
    collected = []
    for raw in inputs:
        path = Path(raw)
        if not path.exists():
            raise PathNotFoundError(path)
        if path.is_dir():
            collected.extend(scan_directory(path))
        elif path.is_file():
            if is_pdf(path.name):
                collected.append(_absolute(path))
            else:
                warn(f"Skipping non-PDF file: {path}")
    return sorted(collected, key=sort_key)


# ============================================================================
# OUTPUT PATH
# ============================================================================

def select_output(explicit_output: Optional[str], original_inputs: List[str]) -> Path:
    """
    Decide where the merged PDF goes.

    Args:
        explicit_output: Value of -o/--output, if given
        original_inputs: Path arguments exactly as typed

    Returns:
        explicit_output as a Path, or "<dirname>.pdf" (relative to the cwd)
        when the only input is a directory

    Raises:
        OutputAmbiguityError: if neither rule applies
    """
    if explicit_output is not None:
        return Path(explicit_output)

    if len(original_inputs) == 1 and Path(original_inputs[0]).is_dir():
        # "." and "dir/" still need a usable base name
        dir_name = _absolute(Path(original_inputs[0])).name
        if dir_name:
            return Path(dir_name + OUTPUT_SUFFIX)

    raise OutputAmbiguityError(
        "Output filename must be specified with -o when not providing a single directory."
    )


# ============================================================================
# PDF MERGING
# ============================================================================

@dataclass(frozen=True)
class MergeJob:
    inputs: Tuple[Path, ...]
    output: Path

    def __post_init__(self):
        if not self.inputs:
            raise ValueError("MergeJob needs at least one input PDF")


def _open_input(path: Path):
    return open(path, 'rb')


def _close_quietly(stream) -> None:
    try:
        stream.close()
    except OSError:
        pass  # best-effort close


def merge_pdfs(job: MergeJob) -> Path:
    """
    Merge the job's PDFs, in order, into job.output.

    Each input is opened once and stays open until the output is written.
    Every stream that was opened is closed before returning or raising,
    even if a later open or the merge itself fails.

    Args:
        job: Ordered inputs and destination

    Returns:
        The destination path

    Raises:
        MergeFailure: on any I/O or PDF read/write error
    """
    try:
        job.output.absolute().parent.mkdir(parents=True, exist_ok=True)

        with contextlib.ExitStack() as stack:
            streams = []
            for pdf_path in job.inputs:
                stream = _open_input(pdf_path)
                stack.callback(_close_quietly, stream)
                streams.append(stream)

            writer = PdfWriter()
            for stream in streams:
                writer.append(stream)

            with open(job.output, 'wb') as output_file:
                writer.write(output_file)
    except Exception as e:
        raise MergeFailure(f"Failed to merge PDFs: {str(e) or type(e).__name__}") from e

    return job.output
