#!/usr/bin/env python3
"""Shared script utilities.

Keep scripts tiny: centralize structured logging + the single HTTP call path.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import requests


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, sort_keys=True, default=str))


def send_request(
    logger: logging.Logger,
    session: "requests.Session",
    method: str,
    url: str,
    *,
    timeout: int,
    **kwargs: Any,
) -> "requests.Response":
    """Issue exactly one request; non-2xx responses raise requests.HTTPError."""
    method_upper = method.upper()
    log_event(logger, logging.DEBUG, "http_request", method=method_upper, url=url)

    response = session.request(method=method_upper, url=url, timeout=timeout, **kwargs)
    log_event(
        logger,
        logging.DEBUG,
        "http_response",
        method=method_upper,
        url=url,
        status_code=response.status_code,
    )
    response.raise_for_status()
    return response
