#!/usr/bin/env python

"""
nhi_check/tools/generate_nhi.py

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

**Command-line tool to generate random valid NHI numbers, e.g. for test
data.**

"""

import argparse
import logging
import random
from typing import List, Optional, TextIO

from cardinal_pythonlib.file_io import smart_open, writeline_nl
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger
from rich_argparse import ArgumentDefaultsRichHelpFormatter

from nhi_check.common.constants import STDIN_OR_STDOUT
from nhi_check.common.exceptions import call_main_with_exception_reporting
from nhi_check.nhi import generate_random_nhi, NhiFormat
from nhi_check.version import NHI_CHECK_VERSION_PRETTY

log = logging.getLogger(__name__)


def generate_nhis(
    n: int,
    nhi_format: Optional[NhiFormat] = None,
    test: bool = True,
    seed: Optional[int] = None,
) -> List[str]:
    """
    Generates random valid NHIs.

    Args:
        n:
            how many
        nhi_format:
            format to use, or ``None`` to pick one at random for each NHI
        test:
            use the range reserved for testing (``Z`` prefix)?
        seed:
            random number seed, for reproducible output
    """
    if n < 0:
        raise ValueError(f"Can't generate a negative number of NHIs: {n}")
    rng = random.Random(seed)
    return [
        generate_random_nhi(nhi_format=nhi_format, test=test, rng=rng)
        for _ in range(n)
    ]


def main(argv: Optional[List[str]] = None) -> None:
    """
    Command-line entry point.
    """
    # noinspection PyTypeChecker
    parser = argparse.ArgumentParser(
        description=f"Generate random valid New Zealand National Health Index "
        f"(NHI) numbers. ({NHI_CHECK_VERSION_PRETTY})",
        formatter_class=ArgumentDefaultsRichHelpFormatter,
    )
    parser.add_argument(
        "--n", type=int, default=10, help="Number of NHIs to generate"
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in NhiFormat],
        default=None,
        help="NHI format (by default, chosen at random for each NHI)",
    )
    parser.add_argument(
        "--real_prefix",
        action="store_true",
        help="Generate NHIs outside the range reserved for testing. They may "
        "belong to real people!",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random number seed"
    )
    parser.add_argument(
        "--outfile",
        type=str,
        default=STDIN_OR_STDOUT,
        help=f"Output file, or {STDIN_OR_STDOUT!r} for stdout",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Be verbose"
    )

    args = parser.parse_args(argv)
    main_only_quicksetup_rootlogger(
        level=logging.DEBUG if args.verbose else logging.INFO
    )

    if args.real_prefix:
        log.warning("Generating NHIs that may belong to real people")
    nhis = generate_nhis(
        n=args.n,
        nhi_format=NhiFormat(args.format) if args.format else None,
        test=not args.real_prefix,
        seed=args.seed,
    )
    with smart_open(args.outfile, "wt") as o:  # type: TextIO
        for nhi in nhis:
            writeline_nl(o, nhi)


def entry_point() -> None:
    """
    Console script entry point.
    """
    call_main_with_exception_reporting(main)


if __name__ == "__main__":
    entry_point()
