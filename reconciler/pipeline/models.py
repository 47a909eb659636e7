"""Data models for reconciliation reports and run results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from reconciler.domain.models import EmployerCandidate
from reconciler.utils.timestamps import format_iso_timestamp


@dataclass(frozen=True)
class MatchSummary:
    """
    One matched employer as listed in the report.

    Attributes:
        search_name: Employer name as returned by the search provider
        company_name: Canonical name of the matched reference company
        tier: Tier of the reference company, passed through unchanged
        rule: Name of the rule that accepted the match
    """

    search_name: str
    company_name: str
    tier: Optional[Union[int, str]] = None
    rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_name": self.search_name,
            "company_name": self.company_name,
            "tier": self.tier,
            "rule": self.rule,
        }


@dataclass(frozen=True)
class UpdateFailure:
    """
    A store update that failed for a matched company.

    Attributes:
        company_name: Canonical name of the company
        operation: "set_active_role" or "set_tracking_status"
        error: Error message
    """

    company_name: str
    operation: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company_name": self.company_name,
            "operation": self.operation,
            "error": self.error,
        }


@dataclass
class ReconciliationReport:
    """
    Summary of one reconciliation run.

    Attributes:
        timestamp: When the run's updates were stamped (UTC)
        total_jobs_found: Raw listings returned across all searches
        unique_employers: Distinct employers after deduplication
        matched_count: Employers that resolved to a reference company
        unmatched_count: Employers that did not
        matches: One entry per matched employer, in processing order
        unmatched_preview: First unmatched employers, bounded by the preview limit
        update_failures: Store updates that failed; the matches still count
    """

    timestamp: datetime
    total_jobs_found: int = 0
    unique_employers: int = 0
    matched_count: int = 0
    unmatched_count: int = 0
    matches: List[MatchSummary] = field(default_factory=list)
    unmatched_preview: List[EmployerCandidate] = field(default_factory=list)
    update_failures: List[UpdateFailure] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        """Whether any store update failed."""
        return bool(self.update_failures)

    def to_dict(self) -> Dict[str, Any]:
        """Render the report as a JSON-serializable dict."""
        return {
            "timestamp": format_iso_timestamp(self.timestamp),
            "total_jobs_found": self.total_jobs_found,
            "unique_employers": self.unique_employers,
            "matched_count": self.matched_count,
            "unmatched_count": self.unmatched_count,
            "matches": [m.to_dict() for m in self.matches],
            "unmatched_preview": [c.model_dump() for c in self.unmatched_preview],
            "update_failures": [f.to_dict() for f in self.update_failures],
        }


@dataclass
class PipelineRunResult:
    """
    Outcome of ReconciliationPipeline.run_once().

    Exactly one of ``report`` and ``error_message`` is set unless the run was
    skipped.

    Attributes:
        run_id: Identifier carried in every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        report: Report of a completed run
        error_message: Why the run aborted
        error_type: Exception class name of the abort
        skipped: Whether the run was skipped because another was in progress
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    report: Optional[ReconciliationReport] = None
    error_message: Optional[str] = None
    error_type: Optional[str] = None
    skipped: bool = False

    @property
    def succeeded(self) -> bool:
        """Whether the run completed and produced a report."""
        return self.report is not None

    @property
    def had_errors(self) -> bool:
        """Whether the run aborted or any update failed."""
        return self.error_message is not None or bool(self.report and self.report.had_errors)

    @property
    def total_duration_seconds(self) -> float:
        return (self.run_finished_at - self.run_started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Render the report, or a structured error for aborted/skipped runs."""
        if self.report is not None:
            return self.report.to_dict()
        if self.skipped:
            return {
                "error": "Run skipped: previous run still in progress",
                "error_type": "RunSkipped",
                "timestamp": format_iso_timestamp(self.run_started_at),
            }
        return {
            "error": self.error_message,
            "error_type": self.error_type,
            "timestamp": format_iso_timestamp(self.run_finished_at),
        }
