"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    queries = config_dict.get("search_queries", [])
    if isinstance(queries, list):
        normalized = [q.strip() for q in queries if isinstance(q, str)]
        duplicates = sorted({q for q in normalized if normalized.count(q) > 1})
        if duplicates:
            warning_messages.append(
                f"Duplicate search queries will run more than once per run: {', '.join(duplicates)}"
            )

    # Every query costs pages_per_query provider requests
    search = config_dict.get("search", {})
    if isinstance(search, dict) and isinstance(queries, list):
        pages = search.get("pages_per_query", 2)
        if isinstance(pages, int) and len(queries) * pages > 50:
            warning_messages.append(
                f"{len(queries)} queries x {pages} pages = {len(queries) * pages} "
                "provider requests per run may exhaust the API quota"
            )

    scan_interval = config_dict.get("scan_interval")
    if isinstance(scan_interval, str):
        try:
            if parse_duration(scan_interval) < 86400:
                warning_messages.append(
                    f"Short scan_interval ({scan_interval}) may exhaust the search API quota"
                )
        except DurationParseError:
            # Reported as a validation error by the schema
            pass

    report = config_dict.get("report", {})
    if isinstance(report, dict) and report.get("unmatched_preview_limit") == 0:
        warning_messages.append("unmatched_preview_limit is 0; unmatched employers will not be listed")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
