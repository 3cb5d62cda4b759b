#!/usr/bin/env python

"""
nhi_check/nhi.py

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

**Validation of New Zealand National Health Index (NHI) numbers.**

Implements the NHI validation routine of HISO 10046:2023, the Consumer Health
Identity Standard (see :data:`nhi_check.common.constants.HISO_10046_URL`).
Two formats are in use:

.. code-block:: none

    Legacy format:  AAANNNC     e.g. ZAC5361
    Current format: AAANNAC     e.g. ZBN77VL

    A = letter (the letters I and O are never used)
    N = digit
    C = check character: a digit (legacy) or a letter (current)

Checks are case-insensitive; :class:`NHI` values hold the upper-case form.

Note that these functions only check that an NHI is consistent with the
standard. They do not check that it has been *assigned* to a person.

NHIs beginning with ``Z`` are reserved for testing. They are valid NHIs, so
:func:`is_valid_nhi` accepts them. To exclude them, check separately, e.g.

.. code-block:: python

    valid_real_nhi = is_valid_nhi(x) and not is_test_nhi(x)

"""

from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import re
from typing import Any, List, Optional

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

NHI_LENGTH = 7

NHI_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ"
# ... 24 letters; no I or O. A letter's value is its 1-based position in this
# string, so A=1, H=8, J=9, N=13, P=14, Z=24.

NHI_CHECKSUM_WEIGHTINGS = [7, 6, 5, 4, 3, 2]

LEGACY_NHI_MODULUS = 11
CURRENT_NHI_MODULUS = 23

TEST_NHI_PREFIX = "Z"

_LETTER = "[A-HJ-NP-Z]"
_DIGIT = "[0-9]"  # not \d, which also matches non-ASCII digits

LEGACY_NHI_REGEX = re.compile(f"{_LETTER}{{3}}{_DIGIT}{{4}}")
CURRENT_NHI_REGEX = re.compile(f"{_LETTER}{{3}}{_DIGIT}{{2}}{_LETTER}{{2}}")
LEGACY_NHI_PREFIX_REGEX = re.compile(f"{_LETTER}{{3}}{_DIGIT}{{3}}")
CURRENT_NHI_PREFIX_REGEX = re.compile(f"{_LETTER}{{3}}{_DIGIT}{{2}}{_LETTER}")

WHITESPACE_REGEX = re.compile(r"\s")


class NhiFormat(Enum):
    """
    The two NHI formats of HISO 10046:2023.
    """

    LEGACY = "legacy"  # AAANNNC, numeric check digit
    CURRENT = "current"  # AAANNAC, alphabetic check character


# =============================================================================
# Checksums
# =============================================================================


def nhi_char_value(c: str) -> int:
    """
    Returns the value of a single NHI character, as used for checksums.
    Digits are worth their numeric value; letters are worth their position in
    :data:`NHI_ALPHABET` (A=1 ... Z=24, skipping I and O).

    Raises:
        :exc:`ValueError` for anything else
    """
    if len(c) == 1:
        if "0" <= c <= "9":
            return int(c)
        pos = NHI_ALPHABET.find(c)
        if pos >= 0:
            return pos + 1
    raise ValueError(f"Not an NHI character: {c!r}")


def nhi_checksum(first6: str) -> int:
    """
    Calculates the weighted sum of the first six characters of an NHI: each
    character's value (see :func:`nhi_char_value`) is multiplied by the
    corresponding weighting in :data:`NHI_CHECKSUM_WEIGHTINGS` (7 down to 2).

    Args:
        first6: the first six characters, in upper case

    Raises:
        :exc:`ValueError` if the string is not six NHI characters
    """
    if len(first6) != len(NHI_CHECKSUM_WEIGHTINGS):
        raise ValueError(f"bad string to nhi_checksum: {first6!r}")
    return sum(
        nhi_char_value(c) * w
        for (c, w) in zip(first6, NHI_CHECKSUM_WEIGHTINGS)
    )


def legacy_nhi_check_digit(first6: str) -> Optional[int]:
    """
    Calculates the check digit for a legacy-format NHI.

    Args:
        first6: the first six characters (AAANNN), in upper case

    Returns:
        the check digit, or ``None`` if there is no valid check digit for
        this prefix (in which case no legacy NHI can start with it)

    Method:

    1. Calculate the weighted checksum (:func:`nhi_checksum`).
    2. Take the remainder after division by 11.
    3. If that is zero, the NHI is invalid.
    4. Subtract the remainder from 11, giving 1-10.
    5. If this is 10, use 0 instead.

    Raises:
        :exc:`ValueError` if ``first6`` isn't a legacy prefix
    """
    if not LEGACY_NHI_PREFIX_REGEX.fullmatch(first6):
        raise ValueError(f"bad string to legacy_nhi_check_digit: {first6!r}")
    remainder = nhi_checksum(first6) % LEGACY_NHI_MODULUS
    if remainder == 0:
        return None
    return (LEGACY_NHI_MODULUS - remainder) % 10


def current_nhi_check_char(first6: str) -> str:
    """
    Calculates the check character for a current-format NHI.

    Args:
        first6: the first six characters (AAANNA), in upper case

    Returns:
        the check letter

    Method:

    1. Calculate the weighted checksum (:func:`nhi_checksum`).
    2. Take the remainder after division by 23.
    3. Subtract the remainder from 23, giving 1-23.
    4. The check character is the letter with that value (A-Y; never Z).

    Raises:
        :exc:`ValueError` if ``first6`` isn't a current-format prefix
    """
    if not CURRENT_NHI_PREFIX_REGEX.fullmatch(first6):
        raise ValueError(f"bad string to current_nhi_check_char: {first6!r}")
    remainder = nhi_checksum(first6) % CURRENT_NHI_MODULUS
    check_value = CURRENT_NHI_MODULUS - remainder
    # ... 1-23, so NHI_ALPHABET[0] (A) to NHI_ALPHABET[22] (Y)
    return NHI_ALPHABET[check_value - 1]


# =============================================================================
# Validation
# =============================================================================


def is_valid_legacy_nhi(nhi: str) -> bool:
    """
    Is this a valid legacy-format (AAANNNC) NHI? Case-insensitive.
    """
    if not isinstance(nhi, str):
        return False
    nhi = nhi.upper()
    if not LEGACY_NHI_REGEX.fullmatch(nhi):
        return False
    expected_check_digit = legacy_nhi_check_digit(nhi[:6])
    if expected_check_digit is None:
        log.debug(
            f"is_valid_legacy_nhi: {nhi!r} has a checksum of zero; no check "
            f"digit is valid"
        )
        return False
    if int(nhi[6]) != expected_check_digit:
        log.debug(f"is_valid_legacy_nhi: check digit mismatch for {nhi!r}")
        return False
    return True


def is_valid_current_nhi(nhi: str) -> bool:
    """
    Is this a valid current-format (AAANNAC) NHI? Case-insensitive.
    """
    if not isinstance(nhi, str):
        return False
    nhi = nhi.upper()
    if not CURRENT_NHI_REGEX.fullmatch(nhi):
        return False
    if nhi[6] != current_nhi_check_char(nhi[:6]):
        log.debug(
            f"is_valid_current_nhi: check character mismatch for {nhi!r}"
        )
        return False
    return True


def is_valid_nhi(nhi: Any) -> bool:
    """
    Checks a string against the New Zealand NHI validation routine of
    HISO 10046:2023. Case-insensitive. Never raises; anything that isn't a
    string is simply invalid.

    Args:
        nhi: a potential NHI string

    Returns:
        bool: valid (in either format)?

    Examples:

    .. code-block:: python

        is_valid_nhi("ZAC5361")  # True
        is_valid_nhi("zbn77vl")  # True
        is_valid_nhi("ZZZ0044")  # False
        is_valid_nhi("ZZZ00AA")  # False
    """
    if not isinstance(nhi, str):
        log.debug("is_valid_nhi: parameter was not of string type")
        return False
    if len(nhi) != NHI_LENGTH:
        log.debug(f"is_valid_nhi: not {NHI_LENGTH} characters: {nhi!r}")
        return False
    # Legacy first, then current.
    return is_valid_legacy_nhi(nhi) or is_valid_current_nhi(nhi)


def nhi_format(nhi: Any) -> Optional[NhiFormat]:
    """
    Returns the format of a valid NHI, or ``None`` if it is not valid.
    """
    if is_valid_legacy_nhi(nhi):
        return NhiFormat.LEGACY
    if is_valid_current_nhi(nhi):
        return NhiFormat.CURRENT
    return None


def is_test_nhi(nhi: str) -> bool:
    """
    Does this string start with the prefix reserved for test NHIs (``Z``,
    case-insensitive)? This does not check validity; combine with
    :func:`is_valid_nhi` as required.
    """
    return isinstance(nhi, str) and nhi.upper().startswith(TEST_NHI_PREFIX)


# =============================================================================
# NHI value type
# =============================================================================


class NHIParseError(ValueError):
    """
    Raised when a string is not a valid NHI. There is a single error kind:
    we do not distinguish between bad length, bad characters, and a failed
    checksum.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid NHI: {value!r}")


@dataclass(frozen=True, order=True)
class NHI:
    """
    Represents a valid NHI number, in upper case.

    Instances can only be created from strings that pass :func:`is_valid_nhi`;
    anything else raises :exc:`NHIParseError`. Equality, ordering and hashing
    use the upper-case string.

    .. code-block:: python

        nhi = NHI("zbn77vl")
        nhi.as_str()  # "ZBN77VL"
        nhi.format  # NhiFormat.CURRENT
    """

    value: str
    format: NhiFormat = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        fmt = nhi_format(self.value)
        if fmt is None:
            raise NHIParseError(self.value)
        # Frozen dataclass, so we have to bypass our own __setattr__.
        object.__setattr__(self, "value", self.value.upper())
        object.__setattr__(self, "format", fmt)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "NHI":
        """
        Parses a string to an :class:`NHI`.

        Raises:
            :exc:`NHIParseError` if the string is not a valid NHI
        """
        return cls(value)

    def as_str(self) -> str:
        """
        Returns the underlying (upper-case) string.
        """
        return self.value

    def is_test(self) -> bool:
        """
        Is this NHI reserved for testing?
        """
        return self.value.startswith(TEST_NHI_PREFIX)

    def is_not_test(self) -> bool:
        """
        Is this NHI outside the range reserved for testing? (That doesn't mean
        it has been assigned to anyone.)
        """
        return not self.is_test()


def parse_nhi(value: str) -> NHI:
    """
    Parses a string to an :class:`NHI`, case-insensitively.

    Raises:
        :exc:`NHIParseError` if the string is not a valid NHI
    """
    return NHI(value)


def nhi_or_none(value: str) -> Optional[NHI]:
    """
    Returns an :class:`NHI`, or ``None`` if the string is not a valid NHI.
    """
    try:
        return NHI(value)
    except NHIParseError:
        return None


def nhi_from_text_or_none(s: str) -> Optional[NHI]:
    """
    Returns a validated :class:`NHI` from a piece of text (e.g. ``"zac 5361"``,
    as it might be typed), or ``None`` if it is not valid. All whitespace is
    removed first.
    """
    funcname = "nhi_from_text_or_none: "
    if not s:
        log.debug(funcname + "incoming parameter was empty")
        return None
    s = WHITESPACE_REGEX.sub("", s)
    nhi = nhi_or_none(s)
    if nhi is None:
        log.debug(funcname + "failed validation")
    return nhi


# =============================================================================
# Generating NHIs
# =============================================================================


def _random_letters(n: int, rng: random.Random) -> List[str]:
    return [rng.choice(NHI_ALPHABET) for _ in range(n)]


def _random_digits(n: int, rng: random.Random) -> List[str]:
    return [str(rng.randint(0, 9)) for _ in range(n)]


def generate_random_nhi(
    nhi_format: Optional[NhiFormat] = None,
    test: bool = True,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Returns a random valid NHI, as a string.

    Args:
        nhi_format:
            format to use; if ``None``, one is chosen at random
        test:
            produce an NHI from the range reserved for testing (``Z`` prefix)?
            If ``False``, the NHI will *not* start with ``Z``, and may
            therefore belong to a real person.
        rng:
            random number generator to use (e.g. for reproducibility);
            defaults to a new, randomly seeded generator
    """
    rng = rng or random.Random()
    if nhi_format is None:
        nhi_format = rng.choice(list(NhiFormat))
    if test:
        first_letter_choices = TEST_NHI_PREFIX
    else:
        first_letter_choices = NHI_ALPHABET.replace(TEST_NHI_PREFIX, "")
    while True:
        chars = [rng.choice(first_letter_choices)]
        chars.extend(_random_letters(2, rng))
        if nhi_format == NhiFormat.LEGACY:
            chars.extend(_random_digits(3, rng))
            first6 = "".join(chars)
            check_digit = legacy_nhi_check_digit(first6)
            if check_digit is None:
                continue  # no legacy NHI starts with this prefix; try again
            return first6 + str(check_digit)
        chars.extend(_random_digits(2, rng))
        chars.extend(_random_letters(1, rng))
        first6 = "".join(chars)
        return first6 + current_nhi_check_char(first6)


def generate_nhi_from_first_6_chars(first6: str) -> Optional[str]:
    """
    Returns a valid NHI, as a string, given its first six characters (in
    either format; case-insensitive). The particular purpose is to make NHIs
    that *look* fake.

    For example:

    .. code-block:: none

        ZZZ004_ : no; checksum zero, so no check digit works
        ZZZ001_ : yes, valid if completed to ZZZ0016
        ZZZ00A_ : yes, valid if completed to ZZZ00AC

    Returns ``None`` (with a warning) if the prefix is unusable.
    """
    if not isinstance(first6, str) or len(first6) != 6:
        log.warning("Not 6 characters")
        return None
    first6 = first6.upper()
    if LEGACY_NHI_PREFIX_REGEX.fullmatch(first6):
        check_digit = legacy_nhi_check_digit(first6)
        if check_digit is None:
            log.warning("No valid check digit: checksum is zero")
            return None
        return first6 + str(check_digit)
    if CURRENT_NHI_PREFIX_REGEX.fullmatch(first6):
        return first6 + current_nhi_check_char(first6)
    log.warning("Not the start of a legacy (AAANNN) or current (AAANNA) NHI")
    return None
