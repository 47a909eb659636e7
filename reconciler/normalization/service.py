"""Company name normalization.

Turns a free-text company name into the form used for comparison:

1. Lower-case
2. Replace runs of ``, . - ( )`` with a single space
3. Drop one trailing corporate suffix token (``inc``, ``llc``, ``corp`` ...)
4. Collapse whitespace
5. Trim
"""

import re
from typing import Optional

CORPORATE_SUFFIXES = (
    "inc",
    "llc",
    "corp",
    "co",
    "ltd",
    "engineering",
    "engineers",
    "group",
    "company",
    "technologies",
    "consulting",
)

_PUNCTUATION_RUN = re.compile(r"[,.\-()]+")

# The suffix must be its own token (preceded by whitespace). Trailing
# whitespace is allowed so "Acme, Inc." strips the same way as "Acme Inc".
_TRAILING_SUFFIX = re.compile(
    r"\s+(?:" + "|".join(CORPORATE_SUFFIXES) + r")\.?\s*$",
    re.IGNORECASE,
)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_company_name(name: Optional[str]) -> str:
    """Normalize a company name for matching.

    Only one suffix token is removed: "Ace Engineering Group" becomes
    "ace engineering". A name that is nothing but a suffix ("Engineering")
    is kept, since there is no preceding token.

    Args:
        name: Raw company name (None is treated as empty)

    Returns:
        Normalized name, or "" for empty/whitespace-only input

    Examples:
        >>> normalize_company_name("Acme, Inc.")
        'acme'
        >>> normalize_company_name("Ace Engineering")
        'ace'
        >>> normalize_company_name("Intel Corporation")
        'intel corporation'
    """
    if not name:
        return ""

    normalized = name.lower()
    normalized = _PUNCTUATION_RUN.sub(" ", normalized)
    normalized = _TRAILING_SUFFIX.sub("", normalized, count=1)
    normalized = _WHITESPACE_RUN.sub(" ", normalized)
    return normalized.strip()
