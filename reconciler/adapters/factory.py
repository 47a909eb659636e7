"""Factory functions for building the provider and store clients."""

import logging

from reconciler.config.environment import EnvironmentConfig
from reconciler.config.models import AppConfig

from .exceptions import AdapterConfigurationError
from .jsearch import JSearchAdapter
from .reference_store import ReferenceStoreClient

logger = logging.getLogger(__name__)


def build_search_provider(app_config: AppConfig, env_config: EnvironmentConfig) -> JSearchAdapter:
    """Create the JSearch provider from configuration.

    Raises:
        AdapterConfigurationError: If the client cannot be configured
    """
    logger.debug(
        "Creating search provider",
        extra={"adapter": JSearchAdapter.ADAPTER_NAME, "timeout": app_config.advanced.http_request_timeout},
    )
    try:
        return JSearchAdapter(
            api_key=env_config.rapidapi_key,
            search_config=app_config.search,
            timeout=app_config.advanced.http_request_timeout,
            user_agent=app_config.advanced.user_agent,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create search provider: {e}") from e


def build_reference_store(app_config: AppConfig, env_config: EnvironmentConfig) -> ReferenceStoreClient:
    """Create the reference store client from configuration.

    Raises:
        AdapterConfigurationError: If the client cannot be configured
    """
    logger.debug(
        "Creating reference store client",
        extra={"adapter": ReferenceStoreClient.ADAPTER_NAME, "url": app_config.reference_store.url},
    )
    try:
        return ReferenceStoreClient(
            store_config=app_config.reference_store,
            service_key=env_config.supabase_service_key,
            timeout=app_config.advanced.http_request_timeout,
            user_agent=app_config.advanced.user_agent,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create reference store client: {e}") from e
