"""Company matching engine.

Resolves a search-side employer name to at most one reference company using
a tiered rule set applied to normalized names:

1. Exact: normalized names are equal
2. Reference prefix: reference (>= 5 chars) followed by a space starts the
   search name
3. Search prefix: search name (>= 5 chars) followed by a space starts the
   reference name
4. Reference substring: reference (>= 8 chars) appears anywhere in the
   search name
5. Search substring: search name (>= 8 chars) appears anywhere in the
   reference name

Short names only match on whole-word prefixes because they turn up inside
unrelated longer names ("intel" in "intellivation"). Reference companies are
scanned in load order and the first company satisfying any rule wins.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from reconciler.domain.models import EmployerCandidate, ReferenceCompany
from reconciler.normalization.service import normalize_company_name

from .models import MatchResult, MatchRule

logger = logging.getLogger(__name__)

PREFIX_MIN_LENGTH = 5
SUBSTRING_MIN_LENGTH = 8


def apply_match_rules(search_norm: str, reference_norm: str) -> Optional[MatchRule]:
    """Test one pair of normalized names against the rules in precedence order.

    Args:
        search_norm: Normalized search-side name
        reference_norm: Normalized reference name

    Returns:
        The first rule satisfied, or None
    """
    if not search_norm or not reference_norm:
        return None

    if search_norm == reference_norm:
        return MatchRule.EXACT
    if len(reference_norm) >= PREFIX_MIN_LENGTH and search_norm.startswith(reference_norm + " "):
        return MatchRule.REFERENCE_PREFIX
    if len(search_norm) >= PREFIX_MIN_LENGTH and reference_norm.startswith(search_norm + " "):
        return MatchRule.SEARCH_PREFIX
    if len(reference_norm) >= SUBSTRING_MIN_LENGTH and reference_norm in search_norm:
        return MatchRule.REFERENCE_SUBSTRING
    if len(search_norm) >= SUBSTRING_MIN_LENGTH and search_norm in reference_norm:
        return MatchRule.SEARCH_SUBSTRING
    return None


class CompanyMatcher:
    """Matches employer names against a fixed snapshot of reference companies.

    Normalized reference names are computed once at construction. The
    snapshot's order is kept as given and defines which company wins when
    several would match.
    """

    def __init__(self, companies: Sequence[ReferenceCompany], logger_instance: logging.Logger = None):
        """Initialize CompanyMatcher.

        Args:
            companies: Reference companies in load order
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self._index: List[Tuple[str, ReferenceCompany]] = [
            (normalize_company_name(company.company_name), company) for company in companies
        ]

    def __len__(self) -> int:
        return len(self._index)

    def find_with_rule(self, search_name: str) -> Optional[Tuple[ReferenceCompany, MatchRule]]:
        """Find the first company matching ``search_name`` and the rule used.

        Args:
            search_name: Raw employer name from the search provider

        Returns:
            (company, rule) for the first company satisfying any rule, or None
        """
        search_norm = normalize_company_name(search_name)
        if not search_norm:
            return None

        for reference_norm, company in self._index:
            rule = apply_match_rules(search_norm, reference_norm)
            if rule is not None:
                return company, rule
        return None

    def find(self, search_name: str) -> Optional[ReferenceCompany]:
        """Find the first company matching ``search_name``, or None."""
        found = self.find_with_rule(search_name)
        return found[0] if found else None

    def evaluate(self, candidate: EmployerCandidate) -> MatchResult:
        """Match one employer candidate and log the decision.

        Args:
            candidate: Deduplicated employer from the search results

        Returns:
            MatchResult, matched or not
        """
        found = self.find_with_rule(candidate.name)

        if found is None:
            self.logger.debug(
                f"No reference company for employer: {candidate.name}",
                extra={
                    "event": "matching.employer.unmatched",
                    "employer": candidate.name,
                },
            )
            return MatchResult(candidate=candidate)

        company, rule = found
        self.logger.info(
            f"Employer matched: {candidate.name} -> {company.company_name}",
            extra={
                "event": "matching.employer.matched",
                "employer": candidate.name,
                "company_name": company.company_name,
                "company_id": company.id,
                "rule": rule.value,
            },
        )
        return MatchResult(candidate=candidate, company=company, rule=rule)


def match_company(
    search_name: str, candidates: Sequence[ReferenceCompany]
) -> Optional[ReferenceCompany]:
    """Resolve one employer name against reference companies.

    Convenience wrapper for single lookups; build a CompanyMatcher once when
    matching many names against the same snapshot.

    Args:
        search_name: Raw employer name
        candidates: Reference companies in scan order

    Returns:
        First matching company, or None
    """
    return CompanyMatcher(candidates).find(search_name)
