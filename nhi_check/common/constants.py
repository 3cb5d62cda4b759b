#!/usr/bin/env python

"""
nhi_check/common/constants.py

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

**Constants used throughout NHI-check.**

"""


# =============================================================================
# Plain constants
# =============================================================================

HISO_10046_URL = (
    "https://www.tewhatuora.govt.nz/publications/"
    "hiso-100462023-consumer-health-identity-standard/"
)

EXIT_FAILURE = 1
EXIT_SUCCESS = 0

LOWER_CASE_STRINGS_MEANING_TRUE = ["true", "1", "t", "y", "yes"]

STDIN_OR_STDOUT = "-"


# =============================================================================
# Environment variables
# =============================================================================


class EnvVar:
    """
    Environment variable names.
    """

    EXCLUDE_TEST = "NHI_CHECK_EXCLUDE_TEST"
    # ... if true, command-line checks treat NHIs reserved for testing (Z
    # prefix) as unacceptable, unless overridden on the command line.


# =============================================================================
# NHI-check top-level commands
# =============================================================================


class NhiCommand:
    """
    Top-level commands within NHI-check, recorded here to ensure
    consistency.
    """

    CHECK = "nhi_check"
    GENERATE = "nhi_generate"
