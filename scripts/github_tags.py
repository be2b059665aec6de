#!/usr/bin/env python3
"""Bounded, paginated retrieval of repository data from the GitHub REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from semver_range import is_valid_version
from shared import log_event, send_request


DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
DEFAULT_LIMIT = 500
LOGGER = logging.getLogger("tagalias.github_tags")


def github_headers(token: str) -> dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def fetch_repo_data(
    endpoint: str,
    *,
    api_base_url: str,
    repository: str,
    headers: dict[str, str],
    timeout: int,
    per_page: int = DEFAULT_PER_PAGE,
    limit: int = DEFAULT_LIMIT,
    session: requests.Session | None = None,
) -> list[dict[str, Any]]:
    """Collect up to ``limit`` items from ``/repos/{repository}/{endpoint}``.

    Pages are requested in order; retrieval stops once ``limit`` items are
    held or a page comes back shorter than ``per_page``.
    """
    url = f"{api_base_url.rstrip('/')}/repos/{repository}/{endpoint}"
    created_session = session is None
    http = session or requests.Session()
    items: list[dict[str, Any]] = []
    page = 1
    try:
        while True:
            response = send_request(
                LOGGER,
                http,
                "GET",
                url,
                headers=headers,
                params={"per_page": per_page, "page": page},
                timeout=timeout,
            )
            data = response.json()
            if not isinstance(data, list):
                raise RuntimeError(f"expected a JSON array from {url}, got {type(data).__name__}")

            for item in data:
                items.append(item)
                if len(items) >= limit:
                    return items

            if len(data) < per_page:
                return items
            page += 1
    finally:
        log_event(LOGGER, logging.DEBUG, "repo_data_fetched", endpoint=endpoint, pages=page, items=len(items))
        if created_session:
            http.close()


def fetch_tag_names(
    *,
    api_base_url: str,
    repository: str,
    headers: dict[str, str],
    timeout: int,
    per_page: int = DEFAULT_PER_PAGE,
    limit: int = DEFAULT_LIMIT,
    session: requests.Session | None = None,
) -> list[str]:
    """Return the repository's tag names that parse as semantic versions."""
    records = fetch_repo_data(
        "tags",
        api_base_url=api_base_url,
        repository=repository,
        headers=headers,
        timeout=timeout,
        per_page=per_page,
        limit=limit,
        session=session,
    )

    names: list[str] = []
    for record in records:
        name = record.get("name") if isinstance(record, dict) else None
        if isinstance(name, str) and is_valid_version(name):
            names.append(name)
        else:
            log_event(LOGGER, logging.DEBUG, "tag_skipped", name=name, reason="not semver")
    return names
