"""Reconciliation pipeline: search, deduplicate, match, update, report."""

from .models import MatchSummary, PipelineRunResult, ReconciliationReport, UpdateFailure
from .runner import ReconciliationPipeline, apply_match_updates, collect_listings, reconcile

__all__ = [
    "ReconciliationPipeline",
    "reconcile",
    "collect_listings",
    "apply_match_updates",
    "ReconciliationReport",
    "PipelineRunResult",
    "MatchSummary",
    "UpdateFailure",
]
