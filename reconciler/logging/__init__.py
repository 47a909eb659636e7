"""Structured logging helpers for the reconciler."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags every record with a component name.

    Fields passed through ``extra`` on the individual call win over the
    adapter defaults.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, optionally bound to a component.

    Args:
        name: Logger name (typically __name__)
        component: Component label added to every record (e.g. "pipeline")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="matching")
        >>> logger.info("Employer matched", extra={"event": "matching.employer.matched"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
