"""Supabase (PostgREST) client for the reference company store."""

from __future__ import annotations

import logging
from datetime import datetime

import requests
from pydantic import ValidationError

from reconciler.config.models import ReferenceStoreConfig
from reconciler.domain.models import ReferenceCompany
from reconciler.utils.timestamps import format_iso_timestamp

from .base import BaseClient
from .exceptions import AdapterConfigurationError, AdapterError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = "id,companyname,tier,activerole"


class ReferenceStoreClient(BaseClient):
    """Reads the company snapshot and applies match updates.

    API Details:
        Endpoint: {url}/rest/v1/{table}
        Authentication: apikey and Authorization: Bearer headers
        Reads: GET with select/order/offset/limit, ordered by id
        Writes: PATCH filtered by companyname=eq.<name>, Prefer: return=minimal
    """

    ADAPTER_NAME = "supabase"

    def __init__(
        self,
        store_config: ReferenceStoreConfig,
        service_key: str,
        timeout: int = 30,
        user_agent: str = "CompanyOpeningReconciler/1.0",
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the store client.

        Args:
            store_config: Store URL, table names and page size
            service_key: Supabase service key
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header
            session: Optional pre-built session

        Raises:
            AdapterConfigurationError: If the service key is empty
        """
        if not service_key:
            raise AdapterConfigurationError("Supabase service key cannot be empty")

        super().__init__(timeout=timeout, user_agent=user_agent, session=session)
        self.store_config = store_config
        self._session.headers.update({
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
        })

    def _table_url(self, table: str) -> str:
        return f"{self.store_config.url}/rest/v1/{table}"

    def list_companies(self) -> list[ReferenceCompany]:
        """Load every reference company, ordered by id.

        Pages through the table until a page shorter than ``page_size`` comes
        back.

        Returns:
            Companies in id order

        Raises:
            StoreReadError: On any failed page or unreadable row
        """
        url = self._table_url(self.store_config.companies_table)
        page_size = self.store_config.page_size
        companies: list[ReferenceCompany] = []
        offset = 0

        while True:
            params = {
                "select": COMPANY_COLUMNS,
                "order": "id",
                "offset": str(offset),
                "limit": str(page_size),
            }
            try:
                batch = self._make_request(url, params=params)
            except AdapterError as e:
                raise StoreReadError(
                    f"Failed to load companies at offset {offset}: {e}", offset=offset
                ) from e

            if not isinstance(batch, list):
                raise StoreReadError(
                    f"Expected array of companies at offset {offset}, got {type(batch).__name__}",
                    offset=offset,
                )

            try:
                companies.extend(ReferenceCompany.model_validate(row) for row in batch)
            except ValidationError as e:
                raise StoreReadError(
                    f"Invalid company row at offset {offset}: {e}", offset=offset
                ) from e

            logger.debug(
                "Loaded company page",
                extra={
                    "event": "store.companies.page_loaded",
                    "offset": offset,
                    "count": len(batch),
                },
            )

            if len(batch) < page_size:
                break
            offset += page_size

        logger.info(
            f"Loaded {len(companies)} reference companies",
            extra={"event": "store.companies.loaded", "count": len(companies)},
        )
        return companies

    def set_active_role(self, company_name: str, active: bool) -> None:
        """Set the active-role flag on a company.

        Raises:
            StoreWriteError: If the update fails
        """
        self._patch(
            self.store_config.companies_table,
            company_name,
            {"activerole": active},
            operation="set_active_role",
        )

    def set_tracking_status(self, company_name: str, status: str, checked_at: datetime) -> None:
        """Set a company's tracking status and last-checked time.

        Raises:
            StoreWriteError: If the update fails
        """
        self._patch(
            self.store_config.tracking_table,
            company_name,
            {"status": status, "lastchecked": format_iso_timestamp(checked_at)},
            operation="set_tracking_status",
        )

    def _patch(self, table: str, company_name: str, body: dict, operation: str) -> None:
        try:
            self._make_request(
                self._table_url(table),
                method="PATCH",
                headers={"Content-Type": "application/json", "Prefer": "return=minimal"},
                params={"companyname": f"eq.{company_name}"},
                json_data=body,
                expect_json=False,
            )
        except AdapterError as e:
            raise StoreWriteError(
                f"{operation} failed for {company_name}: {e}",
                company_name=company_name,
                operation=operation,
            ) from e

        logger.debug(
            f"Applied {operation} for {company_name}",
            extra={
                "event": "store.company.updated",
                "operation": operation,
                "company_name": company_name,
                "table": table,
            },
        )
