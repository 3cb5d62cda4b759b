#!/usr/bin/env python

"""
nhi_check/common/exceptions.py

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

**Exception-handling functions.**

Used by the ``nhi_check`` and ``nhi_generate`` console scripts, so that an
unexpected error is logged (rather than dumped) and still gives the same exit
code as "some NHIs were unacceptable".

"""

import logging
import sys
import traceback
from typing import Callable, Optional

from nhi_check.common.constants import EXIT_FAILURE, EXIT_SUCCESS

log = logging.getLogger(__name__)


def report_exception(exc: Exception) -> None:
    """
    Logs an unexpected exception from a console script: the message at
    CRITICAL level, then the full traceback at ERROR level (visible without
    ``--verbose``).

    Args:
        exc: the exception
    """
    log.critical(exc)  # the exception message
    traceback_msg = "".join(
        traceback.format_exception(
            None, exc, exc.__traceback__  # etype: ignored
        )
    )  # https://www.python.org/dev/peps/pep-3134/
    log.error(traceback_msg)


def call_main_with_exception_reporting(
    main_function: Callable[[], Optional[int]]
) -> None:
    """
    Runs a console script's ``main()`` and exits the process.

    - An integer return value is used as the exit code (e.g. ``nhi_check``
      returns :data:`EXIT_FAILURE` if any NHI was unacceptable).
    - Any other return value means :data:`EXIT_SUCCESS`.
    - An exception is reported via :func:`report_exception` and gives
      :data:`EXIT_FAILURE`. :exc:`SystemExit` (e.g. from argparse or
      :func:`nhi_check.common.sysops.die`) passes through untouched.
    """
    try:
        result = main_function()
        if isinstance(result, int):
            sys.exit(result)
        else:
            sys.exit(EXIT_SUCCESS)
    except Exception as exc:
        report_exception(exc)
        sys.exit(EXIT_FAILURE)
