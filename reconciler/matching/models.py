"""Data models for company matching results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from reconciler.domain.models import EmployerCandidate, ReferenceCompany


class MatchRule(str, Enum):
    """Rule that accepted a match, in precedence order."""

    EXACT = "exact"
    REFERENCE_PREFIX = "reference_prefix"
    SEARCH_PREFIX = "search_prefix"
    REFERENCE_SUBSTRING = "reference_substring"
    SEARCH_SUBSTRING = "search_substring"


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of matching one employer against the reference snapshot.

    Attributes:
        candidate: The employer that was matched
        company: Reference company it resolved to, or None if unmatched
        rule: Rule that accepted the match, or None if unmatched
    """

    candidate: EmployerCandidate
    company: Optional[ReferenceCompany] = None
    rule: Optional[MatchRule] = None

    @property
    def matched(self) -> bool:
        """Whether the employer resolved to a reference company."""
        return self.company is not None
