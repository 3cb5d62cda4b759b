#!/usr/bin/env python

"""
nhi_check/tools/check_nhi.py

===============================================================================

    Copyright (C) 2015, University of Cambridge, Department of Psychiatry.
    Created by Rudolf Cardinal (rnc1001@cam.ac.uk).

    This file is part of NHI-check.

    NHI-check is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    NHI-check is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with NHI-check. If not, see <https://www.gnu.org/licenses/>.

===============================================================================

**Command-line tool to check NHI numbers.**

Reads NHIs from the command line and/or a file (one per line), and writes one
CSV line per NHI:

.. code-block:: none

    ZAC5361,valid
    ZZZ0044,invalid

The exit code is 0 if every NHI was acceptable, and 1 otherwise, so the tool
can be used in shell scripts.

"""

import argparse
import logging
from typing import Iterable, List, Optional, TextIO, Tuple

from cardinal_pythonlib.file_io import (
    gen_noncomment_lines,
    smart_open,
    writeline_nl,
)
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger
from rich_argparse import ArgumentDefaultsRichHelpFormatter

from nhi_check.common.constants import (
    EnvVar,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    HISO_10046_URL,
    STDIN_OR_STDOUT,
)
from nhi_check.common.exceptions import call_main_with_exception_reporting
from nhi_check.common.sysops import die, envvar_is_true
from nhi_check.nhi import is_test_nhi, is_valid_nhi
from nhi_check.version import NHI_CHECK_VERSION_PRETTY

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================


class NhiResult:
    """
    Results reported for each NHI.
    """

    VALID = "valid"
    INVALID = "invalid"
    TEST = "test"  # valid, but reserved for testing, and we're excluding those


# =============================================================================
# Checking
# =============================================================================


def classify_nhi(nhi: str, exclude_test: bool = False) -> str:
    """
    Classifies a single string as one of the :class:`NhiResult` values.

    Args:
        nhi:
            a potential NHI
        exclude_test:
            report valid NHIs from the range reserved for testing as
            :attr:`NhiResult.TEST` rather than :attr:`NhiResult.VALID`?
    """
    if not is_valid_nhi(nhi):
        return NhiResult.INVALID
    if exclude_test and is_test_nhi(nhi):
        return NhiResult.TEST
    return NhiResult.VALID


def check_nhis(
    nhis: Iterable[str], exclude_test: bool = False
) -> List[Tuple[str, str]]:
    """
    Checks multiple NHIs.

    Returns:
        list of ``(nhi, result)`` tuples, in input order
    """
    results = []  # type: List[Tuple[str, str]]
    for nhi in nhis:
        result = classify_nhi(nhi, exclude_test=exclude_test)
        log.debug(f"{nhi!r}: {result}")
        results.append((nhi, result))
    return results


def all_acceptable(results: Iterable[Tuple[str, str]]) -> bool:
    """
    Were all the NHIs valid (and, if we are excluding them, not test NHIs)?
    """
    return all(result == NhiResult.VALID for _, result in results)


def gen_nhis_from_file(filename: str) -> Iterable[str]:
    """
    Yields NHIs from a file (or ``-`` for stdin), one per line. Comments
    (marked with ``#``) and blank lines are ignored.
    """
    log.info(f"Reading from: {filename}")
    with smart_open(filename, "rt") as f:  # type: TextIO
        yield from gen_noncomment_lines(f)


def write_results(
    results: Iterable[Tuple[str, str]], output_filename: str
) -> None:
    """
    Writes ``nhi,result`` CSV lines to a file (or ``-`` for stdout).
    """
    with smart_open(output_filename, "wt") as o:  # type: TextIO
        for nhi, result in results:
            writeline_nl(o, f"{nhi},{result}")


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        exit code
    """
    # noinspection PyTypeChecker
    parser = argparse.ArgumentParser(
        description=f"Check New Zealand National Health Index (NHI) numbers "
        f"against the HISO 10046:2023 validation routine. "
        f"({NHI_CHECK_VERSION_PRETTY})",
        epilog=f"See {HISO_10046_URL}",
        formatter_class=ArgumentDefaultsRichHelpFormatter,
    )
    parser.add_argument(
        "nhi", nargs="*", help="NHI numbers to check (case-insensitive)"
    )
    parser.add_argument(
        "--infile",
        type=str,
        help=f"Input file, or {STDIN_OR_STDOUT!r} for stdin. "
        f"Use one line per NHI. "
        f"Comments (marked with '#') and blank lines are ignored. "
        f"Lines have whitespace stripped left and right. "
        f"A file with no NHIs in it counts as success.",
    )
    parser.add_argument(
        "--outfile",
        type=str,
        default=STDIN_OR_STDOUT,
        help=f"Output file, or {STDIN_OR_STDOUT!r} for stdout. "
        f"One 'nhi,result' line is written per NHI.",
    )
    parser.add_argument(
        "--exclude_test",
        action="store_true",
        default=envvar_is_true(EnvVar.EXCLUDE_TEST),
        help=f"Treat NHIs reserved for testing (beginning with Z) as "
        f"unacceptable. The default comes from the environment variable "
        f"{EnvVar.EXCLUDE_TEST}.",
    )
    parser.add_argument(
        "--include_test",
        dest="exclude_test",
        action="store_false",
        default=argparse.SUPPRESS,
        help=f"Treat valid NHIs reserved for testing as acceptable, "
        f"overriding {EnvVar.EXCLUDE_TEST}.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Be verbose"
    )

    args = parser.parse_args(argv)
    main_only_quicksetup_rootlogger(
        level=logging.DEBUG if args.verbose else logging.INFO
    )

    nhis = list(args.nhi)
    if args.infile:
        nhis.extend(gen_nhis_from_file(args.infile))
    if not nhis:
        if not args.infile:
            die("No NHIs to check; specify some, or use --infile")
        log.warning(f"No NHIs found in {args.infile}")
        return EXIT_SUCCESS

    results = check_nhis(nhis, exclude_test=args.exclude_test)
    write_results(results, args.outfile)
    n_ok = sum(1 for _, result in results if result == NhiResult.VALID)
    log.info(f"{n_ok} of {len(results)} NHI(s) acceptable")
    return EXIT_SUCCESS if all_acceptable(results) else EXIT_FAILURE


def entry_point() -> None:
    """
    Console script entry point.
    """
    call_main_with_exception_reporting(main)


if __name__ == "__main__":
    entry_point()
