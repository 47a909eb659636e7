"""Reconciliation orchestration: search, deduplicate, match, update, report."""

import threading
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Protocol, Sequence
from uuid import uuid4

from reconciler.adapters.exceptions import ProviderError, StoreReadError, StoreWriteError
from reconciler.adapters.factory import build_reference_store, build_search_provider
from reconciler.config.environment import EnvironmentConfig
from reconciler.config.models import AppConfig
from reconciler.domain.models import RawJobListing, ReferenceCompany
from reconciler.logging import get_logger
from reconciler.logging.context import log_context
from reconciler.matching.engine import CompanyMatcher
from reconciler.normalization.employers import dedupe_employers
from reconciler.utils.timestamps import utc_now

from .models import MatchSummary, PipelineRunResult, ReconciliationReport, UpdateFailure

logger = get_logger(__name__, component="pipeline")

TRACKING_STATUS_OPENING = "opening"
DEFAULT_UNMATCHED_PREVIEW_LIMIT = 20

SearchFn = Callable[[str], Sequence[RawJobListing]]


class CompanyUpdater(Protocol):
    """Update operations the reconciliation applies to matched companies."""

    def set_active_role(self, company_name: str, active: bool) -> None: ...

    def set_tracking_status(self, company_name: str, status: str, checked_at: datetime) -> None: ...


def collect_listings(search_queries: Iterable[str], search_fn: SearchFn) -> List[RawJobListing]:
    """Run every query in order and pool the results.

    Raises:
        ProviderError: Propagated from the first failing search
    """
    listings: List[RawJobListing] = []
    for query in search_queries:
        with log_context(query=query):
            results = search_fn(query)
            listings.extend(results)
            logger.debug(
                f"Search returned {len(results)} listings",
                extra={"event": "pipeline.search.completed", "count": len(results)},
            )
    return listings


def apply_match_updates(
    store: CompanyUpdater, company_name: str, checked_at: datetime
) -> List[UpdateFailure]:
    """Mark a matched company as having an opening.

    Both updates are attempted even if the first one fails.

    Returns:
        Failures, empty when both updates succeeded
    """
    failures: List[UpdateFailure] = []
    updates = (
        ("set_active_role", lambda: store.set_active_role(company_name, True)),
        (
            "set_tracking_status",
            lambda: store.set_tracking_status(company_name, TRACKING_STATUS_OPENING, checked_at),
        ),
    )

    for operation, apply in updates:
        try:
            apply()
        except StoreWriteError as e:
            logger.error(
                f"Update failed for {company_name}: {e}",
                extra={
                    "event": "pipeline.update.failed",
                    "company_name": company_name,
                    "operation": operation,
                    "error": str(e),
                },
            )
            failures.append(UpdateFailure(company_name=company_name, operation=operation, error=str(e)))

    return failures


def reconcile(
    search_queries: Sequence[str],
    reference_companies: Sequence[ReferenceCompany],
    search_fn: SearchFn,
    store: CompanyUpdater,
    unmatched_preview_limit: int = DEFAULT_UNMATCHED_PREVIEW_LIMIT,
    now: Optional[datetime] = None,
) -> ReconciliationReport:
    """
    Reconcile search results against a reference snapshot.

    Steps:
    1. Run every query in the given order and pool the listings
    2. Deduplicate employers (case-insensitive, first seen wins)
    3. Match each employer against the snapshot in load order
    4. For each match, set the active-role flag and the "opening" tracking
       status; a failed update is recorded and the run continues
    5. Build the report

    Args:
        search_queries: Queries in run order
        reference_companies: Snapshot of reference companies in load order
        search_fn: Runs one query, returns listings in provider order
        store: Receives the two updates for each matched company
        unmatched_preview_limit: Maximum unmatched employers listed in the report
        now: Timestamp for the report and tracking updates (default: utc_now())

    Returns:
        ReconciliationReport

    Raises:
        ProviderError: If any search fails; no updates have been applied then
    """
    checked_at = now or utc_now()

    listings = collect_listings(search_queries, search_fn)
    employers = dedupe_employers(listings)
    matcher = CompanyMatcher(reference_companies)

    logger.info(
        f"Matching {len(employers)} employers against {len(matcher)} companies",
        extra={
            "event": "pipeline.matching.started",
            "total_jobs_found": len(listings),
            "unique_employers": len(employers),
            "reference_companies": len(matcher),
        },
    )

    report = ReconciliationReport(
        timestamp=checked_at,
        total_jobs_found=len(listings),
        unique_employers=len(employers),
    )

    for candidate in employers:
        result = matcher.evaluate(candidate)

        if not result.matched:
            report.unmatched_count += 1
            if len(report.unmatched_preview) < unmatched_preview_limit:
                report.unmatched_preview.append(candidate)
            continue

        company = result.company
        report.matched_count += 1
        report.matches.append(
            MatchSummary(
                search_name=candidate.name,
                company_name=company.company_name,
                tier=company.tier,
                rule=result.rule.value,
            )
        )

        with log_context(employer=candidate.name, company_name=company.company_name):
            report.update_failures.extend(
                apply_match_updates(store, company.company_name, checked_at)
            )

    return report


class ReconciliationPipeline:
    """
    Runs one reconciliation against the configured provider and store.

    Reference data is fetched fresh on every run; nothing is kept between
    runs. Overlapping runs are skipped.
    """

    def __init__(
        self,
        app_config: AppConfig,
        env_config: EnvironmentConfig,
        search_provider=None,
        reference_store=None,
    ):
        """
        Initialize the pipeline.

        Args:
            app_config: Application configuration (queries, report settings)
            env_config: Credentials
            search_provider: Object with search(query); built from config if None
            reference_store: Object with list_companies() and the update
                operations; built from config if None
        """
        self.app_config = app_config
        self.env_config = env_config
        if search_provider is None:
            search_provider = build_search_provider(app_config, env_config)
        if reference_store is None:
            reference_store = build_reference_store(app_config, env_config)
        self.search_provider = search_provider
        self.reference_store = reference_store
        self._lock = threading.Lock()

    def run_once(self) -> PipelineRunResult:
        """
        Execute one reconciliation run.

        Abort-class failures (search provider or snapshot load) produce a
        result with ``error_message`` set and no report. Failed updates are
        listed in the report.

        Returns:
            PipelineRunResult
        """
        run_started_at = utc_now()
        run_id = uuid4().hex

        if not self._lock.acquire(blocking=False):
            with log_context(run_id=run_id):
                logger.warning(
                    "Run skipped: previous run still in progress",
                    extra={"event": "pipeline.run.skipped", "reason": "lock_held"},
                )
            return PipelineRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                skipped=True,
            )

        try:
            with log_context(run_id=run_id):
                logger.info(
                    "Reconciliation run started",
                    extra={
                        "event": "pipeline.run.started",
                        "query_count": len(self.app_config.search_queries),
                    },
                )

                try:
                    companies = self.reference_store.list_companies()
                    report = reconcile(
                        search_queries=self.app_config.search_queries,
                        reference_companies=companies,
                        search_fn=self.search_provider.search,
                        store=self.reference_store,
                        unmatched_preview_limit=self.app_config.report.unmatched_preview_limit,
                    )
                except (ProviderError, StoreReadError) as e:
                    logger.error(
                        f"Reconciliation run aborted: {e}",
                        extra={
                            "event": "pipeline.run.aborted",
                            "error_type": type(e).__name__,
                            "error": str(e),
                        },
                    )
                    return self._failed(run_id, run_started_at, e)
                except Exception as e:
                    logger.error(
                        f"Unexpected error during reconciliation: {e}",
                        extra={
                            "event": "pipeline.run.aborted",
                            "error_type": type(e).__name__,
                            "error": str(e),
                        },
                        exc_info=True,
                    )
                    return self._failed(run_id, run_started_at, e)

                result = PipelineRunResult(
                    run_id=run_id,
                    run_started_at=run_started_at,
                    run_finished_at=utc_now(),
                    report=report,
                )

                logger.info(
                    "Reconciliation run completed",
                    extra={
                        "event": "pipeline.run.completed",
                        "duration_ms": int(result.total_duration_seconds * 1000),
                        "total_jobs_found": report.total_jobs_found,
                        "unique_employers": report.unique_employers,
                        "matched_count": report.matched_count,
                        "unmatched_count": report.unmatched_count,
                        "update_failures": len(report.update_failures),
                    },
                )
                return result
        finally:
            self._lock.release()

    @staticmethod
    def _failed(run_id: str, run_started_at: datetime, error: Exception) -> PipelineRunResult:
        return PipelineRunResult(
            run_id=run_id,
            run_started_at=run_started_at,
            run_finished_at=utc_now(),
            error_message=str(error),
            error_type=type(error).__name__,
        )
