"""Clients for the external collaborators of a reconciliation run.

- JSearchAdapter: job search provider (jsearch.JSearchAdapter)
- ReferenceStoreClient: Supabase company store (reference_store.ReferenceStoreClient)

Use the factory functions to build them from configuration:
    from reconciler.adapters.factory import build_reference_store, build_search_provider

Exception handling:
    from reconciler.adapters.exceptions import ProviderError, StoreReadError, StoreWriteError
"""

from .base import BaseClient
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
    ProviderError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from .factory import build_reference_store, build_search_provider
from .jsearch import JSearchAdapter
from .reference_store import ReferenceStoreClient

__all__ = [
    "BaseClient",
    "build_search_provider",
    "build_reference_store",
    "JSearchAdapter",
    "ReferenceStoreClient",
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
    "ProviderError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
]
