"""Company-name matching against the reference snapshot.

This module provides:
- CompanyMatcher: tiered rule matcher over a snapshot of reference companies
- match_company: single-lookup convenience wrapper
- MatchResult / MatchRule: outcome of matching one employer
"""

from .engine import (
    PREFIX_MIN_LENGTH,
    SUBSTRING_MIN_LENGTH,
    CompanyMatcher,
    apply_match_rules,
    match_company,
)
from .models import MatchResult, MatchRule

__all__ = [
    "CompanyMatcher",
    "match_company",
    "apply_match_rules",
    "MatchResult",
    "MatchRule",
    "PREFIX_MIN_LENGTH",
    "SUBSTRING_MIN_LENGTH",
]
