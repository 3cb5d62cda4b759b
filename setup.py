"""
setup.py

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

NHI-check setup file

To use:

    python setup.py sdist

    twine upload dist/*

To install in development mode:

    pip install -e .[dev]

"""

from setuptools import find_packages, setup
from codecs import open
import os

from nhi_check.common.constants import NhiCommand
from nhi_check.version import NHI_CHECK_VERSION, require_minimum_python_version

require_minimum_python_version()


# =============================================================================
# Constants
# =============================================================================

# Directories
THIS_DIR = os.path.abspath(os.path.dirname(__file__))

# Get the long description from the README file
with open(os.path.join(THIS_DIR, "README.rst"), encoding="utf-8") as f:
    LONG_DESCRIPTION = f.read()

# Package dependencies
INSTALL_REQUIRES = [
    "cardinal_pythonlib>=2.1.0",  # RNC libraries: logging, file I/O
    "colorlog>=4.1.0",  # colour in logs (via cardinal_pythonlib.logs)
    "faker>=13.3.1",  # test data creation (nhi_check.testing)
    "rich-argparse>=0.5.0",  # colourful help
]

EXTRAS_REQUIRE = {
    # -------------------------------------------------------------------------
    # For development only:
    # -------------------------------------------------------------------------
    "dev": [
        "black>=24.3.0",  # auto code formatter
        "flake8>=5.0.4",  # code checks
        "pytest>=8.3.4",  # automatic testing
    ],
}


# =============================================================================
# setup args
# =============================================================================

setup(
    name="nhi-check",
    version=NHI_CHECK_VERSION,
    description="NHI-check: validation of New Zealand National Health Index "
    "numbers (HISO 10046:2023)",
    long_description=LONG_DESCRIPTION,
    # Choose your license
    license="GNU General Public License v3 or later (GPLv3+)",
    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Healthcare Industry",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",  # noqa: E501
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
    ],
    keywords="NHI New Zealand health identifier checksum HISO 10046",
    packages=find_packages(include=["nhi_check", "nhi_check.*"]),
    # finds all the .py files in subdirectories, as long as there are
    # __init__.py files
    include_package_data=True,
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        "console_scripts": [
            # Format is "script=module:function".
            f"{NhiCommand.CHECK}=nhi_check.tools.check_nhi:entry_point",
            f"{NhiCommand.GENERATE}=nhi_check.tools.generate_nhi:entry_point",
        ],
    },
)
