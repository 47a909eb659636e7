"""Name normalization and employer deduplication.

This module provides:
- normalize_company_name: canonical comparable form of a company name
- dedupe_employers: one EmployerCandidate per distinct employer
"""

from .employers import dedupe_employers
from .service import CORPORATE_SUFFIXES, normalize_company_name

__all__ = [
    "normalize_company_name",
    "dedupe_employers",
    "CORPORATE_SUFFIXES",
]
