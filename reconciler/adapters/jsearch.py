"""JSearch (RapidAPI) job search provider."""

from __future__ import annotations

import logging
from typing import Any

import requests

from reconciler.config.models import SearchConfig
from reconciler.domain.models import RawJobListing

from .base import BaseClient
from .exceptions import AdapterConfigurationError, AdapterError, AdapterHTTPError, ProviderError

logger = logging.getLogger(__name__)


class JSearchAdapter(BaseClient):
    """Search provider backed by the JSearch API.

    One call to search() requests ``pages_per_query`` pages in a single API
    request (the API pages internally via ``num_pages``).

    API Details:
        Endpoint: https://jsearch.p.rapidapi.com/search
        Method: GET
        Authentication: x-rapidapi-key / x-rapidapi-host headers
        Response: JSON object with a 'data' array of job objects
    """

    ADAPTER_NAME = "jsearch"
    API_HOST = "jsearch.p.rapidapi.com"
    API_URL = f"https://{API_HOST}/search"

    def __init__(
        self,
        api_key: str,
        search_config: SearchConfig | None = None,
        timeout: int = 30,
        user_agent: str = "CompanyOpeningReconciler/1.0",
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: RapidAPI key
            search_config: Paging and filter settings (defaults apply if None)
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header
            session: Optional pre-built session

        Raises:
            AdapterConfigurationError: If the API key is empty
        """
        if not api_key:
            raise AdapterConfigurationError("JSearch API key cannot be empty")

        super().__init__(timeout=timeout, user_agent=user_agent, session=session)
        self.search_config = search_config or SearchConfig()
        self._session.headers.update({
            "x-rapidapi-key": api_key,
            "x-rapidapi-host": self.API_HOST,
        })

    def search(self, query: str) -> list[RawJobListing]:
        """Run one search query.

        Args:
            query: Free-text query, e.g. "mechanical engineer Denver Colorado"

        Returns:
            Listings in provider order

        Raises:
            ProviderError: On any non-success response or unreadable payload
        """
        params = {
            "query": query,
            "page": str(self.search_config.start_page),
            "num_pages": str(self.search_config.pages_per_query),
            "country": self.search_config.country,
            "date_posted": self.search_config.date_posted,
        }

        logger.info(
            "Searching jobs on JSearch",
            extra={
                "event": "provider.search.started",
                "adapter": self.ADAPTER_NAME,
                "query": query,
                "num_pages": params["num_pages"],
            },
        )

        try:
            response = self._make_request(self.API_URL, params=params)
        except AdapterHTTPError as e:
            raise ProviderError(
                f"JSearch API error {e.status_code}: {e}",
                query=query,
                status_code=e.status_code,
            ) from e
        except AdapterError as e:
            raise ProviderError(f"JSearch request failed: {e}", query=query) from e

        if not isinstance(response, dict):
            raise ProviderError(
                f"Expected JSON object response, got {type(response).__name__}",
                query=query,
            )

        # The API reports some failures in-band with status "ERROR"
        if str(response.get("status", "OK")).upper() == "ERROR":
            error = response.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(f"JSearch API error: {message or 'unknown error'}", query=query)

        jobs_data = response.get("data") or []
        if not isinstance(jobs_data, list):
            raise ProviderError(
                f"Expected 'data' field to be array, got {type(jobs_data).__name__}",
                query=query,
            )

        listings = []
        for job in jobs_data:
            try:
                listings.append(self._transform_job(job))
            except (TypeError, ValueError) as e:
                logger.warning(
                    "Skipping malformed JSearch job",
                    extra={
                        "event": "provider.search.malformed_job",
                        "adapter": self.ADAPTER_NAME,
                        "query": query,
                        "error": str(e),
                    },
                )

        logger.info(
            f"JSearch returned {len(listings)} listings",
            extra={
                "event": "provider.search.completed",
                "adapter": self.ADAPTER_NAME,
                "query": query,
                "count": len(listings),
            },
        )
        return listings

    @staticmethod
    def _transform_job(job: Any) -> RawJobListing:
        """Transform a JSearch job object to a RawJobListing."""
        if not isinstance(job, dict):
            raise TypeError(f"Expected job object, got {type(job).__name__}")

        return RawJobListing(
            employer_name=_text(job.get("employer_name")),
            job_title=_text(job.get("job_title")),
            city=_text(job.get("job_city")),
            apply_url=_text(job.get("job_apply_link")),
        )


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
