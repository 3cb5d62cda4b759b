#!/usr/bin/env python

"""
nhi_check/version.py

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

**Version constants for NHI-check.**

"""

import sys


# =============================================================================
# Constants
# =============================================================================

NHI_CHECK_VERSION = "1.0.0"
NHI_CHECK_VERSION_DATE = "2026-10-19"

MINIMUM_PYTHON_VERSION = (3, 9)


# =============================================================================
# Derived constants
# =============================================================================

NHI_CHECK_VERSION_PRETTY = (
    f"NHI-check version {NHI_CHECK_VERSION}, {NHI_CHECK_VERSION_DATE}."
)
MINIMUM_PYTHON_VERSION_AS_DECIMAL = ".".join(
    str(_) for _ in MINIMUM_PYTHON_VERSION
)


# =============================================================================
# Helper functions
# =============================================================================


def require_minimum_python_version():
    """
    Checks that we are running the required minimum Python version.
    """
    assert (
        sys.version_info >= MINIMUM_PYTHON_VERSION
    ), f"Need Python {MINIMUM_PYTHON_VERSION_AS_DECIMAL}+"
