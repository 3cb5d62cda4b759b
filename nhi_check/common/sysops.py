#!/usr/bin/env python

"""
nhi_check/common/sysops.py

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

**Simple system operations.**

"""

import logging
import os
import sys

from nhi_check.common.constants import (
    EXIT_FAILURE,
    LOWER_CASE_STRINGS_MEANING_TRUE,
)

log = logging.getLogger(__name__)


def die(
    msg: str, log_level: int = logging.CRITICAL, exit_code: int = EXIT_FAILURE
) -> None:
    """
    Prints a message and hard-exits the program.

    Args:
        msg: message
        log_level: log level to use
        exit_code: exit code (errorlevel)
    """
    log.log(level=log_level, msg=msg)
    sys.exit(exit_code)


def envvar_is_true(envvar: str, default: bool = False) -> bool:
    """
    Reads a boolean setting from an environment variable.

    Args:
        envvar: environment variable name
        default: value to use if the variable is unset or blank

    Returns:
        bool: ``True`` if the (case-insensitive) value is one of
        :data:`LOWER_CASE_STRINGS_MEANING_TRUE`; ``default`` if unset or
        blank; otherwise ``False``.
    """
    value = os.environ.get(envvar, "").strip()
    if not value:
        return default
    result = value.lower() in LOWER_CASE_STRINGS_MEANING_TRUE
    log.debug(f"Environment variable {envvar}={value!r} -> {result}")
    return result
