"""Employer deduplication across all searches of a run."""

from typing import Dict, Iterable, List

from reconciler.domain.models import EmployerCandidate, RawJobListing
from reconciler.logging import get_logger

logger = get_logger(__name__, component="normalization")


def dedupe_employers(listings: Iterable[RawJobListing]) -> List[EmployerCandidate]:
    """Collapse listings into one candidate per distinct employer.

    Employers are keyed by their name lower-cased, without any other
    normalization or trimming, so "Acme" and "ACME" collapse while "Acme" and
    "Acme, Inc." do not. The first listing seen for a key supplies the
    candidate's title, location and URL. Output keeps first-seen order.
    Listings with no employer name are skipped.

    Args:
        listings: Listings from all searches, in query then provider order

    Returns:
        Distinct employers in first-seen order
    """
    employers: Dict[str, EmployerCandidate] = {}
    skipped = 0

    for listing in listings:
        if not listing.employer_name:
            skipped += 1
            continue

        key = listing.employer_name.lower()
        if key not in employers:
            employers[key] = EmployerCandidate.from_listing(listing)

    logger.debug(
        f"Deduplicated listings into {len(employers)} employers",
        extra={
            "event": "normalization.employers.deduplicated",
            "unique_employers": len(employers),
            "skipped_without_employer": skipped,
        },
    )

    return list(employers.values())
