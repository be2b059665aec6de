#!/usr/bin/env python3
"""Move floating major/minor alias tags (v1, v1.2) to a newly pushed release tag.

An alias only moves when the triggering tag is the highest release in the
alias's range, so replaying an older tag never drags an alias backwards.
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from typing import Mapping

import requests

from alias_config import AliasConfig, build_config, validate_config
from git_tags import create_and_push_tag, describe_latest_tag
from github_tags import DEFAULT_LIMIT, DEFAULT_PER_PAGE, fetch_tag_names, github_headers
from semver_range import parse_version, resolve_latest_tag
from shared import configure_logging, log_event


LOGGER = logging.getLogger("tagalias.update_alias_tags")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Force-update vX and vX.Y alias tags when a release is the newest in its line."
    )
    parser.add_argument("--github-token", help="GitHub token (default: $GITHUB_TOKEN).")
    parser.add_argument("--repository", help="GitHub repository in owner/repo format (default: $GITHUB_REPOSITORY).")
    parser.add_argument("--api-base-url", help="GitHub API base URL (default: $GITHUB_API_URL or api.github.com).")
    parser.add_argument(
        "--match-tag",
        help="Release tag that triggered the run (default: $MATCH_TAG, else git describe).",
    )
    parser.add_argument("--alias-minor", help="Update the vX.Y alias (default: $ALIAS_MINOR or true).")
    parser.add_argument("--alias-major", help="Update the vX alias (default: $ALIAS_MAJOR or true).")
    parser.add_argument("--remote", default="origin", help="git remote to push aliases to (default: origin).")
    parser.add_argument(
        "--per-page",
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f"Tags requested per API page (default: {DEFAULT_PER_PAGE}).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum tags retrieved (default: {DEFAULT_LIMIT}).",
    )
    parser.add_argument("--timeout", type=int, default=30, help="HTTP timeout in seconds.")
    parser.add_argument("--dry-run", action="store_true", help="Log git commands without running them.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Structured log verbosity written to stderr.",
    )
    return parser.parse_args(argv)


def alias_prefix(match_tag: str) -> str:
    return "v" if match_tag.startswith("v") else ""


def plan_aliases(
    match_tag: str,
    tag_names: list[str],
    *,
    alias_minor: bool = True,
    alias_major: bool = True,
) -> list[str]:
    """Return the aliases ``match_tag`` should own, minor before major."""
    version = parse_version(match_tag)
    if version is None:
        raise ValueError(f"invalid semver tag: {match_tag}")

    prefix = alias_prefix(match_tag)
    candidates = [
        (alias_minor, f"~{version.major}.{version.minor}", f"{prefix}{version.major}.{version.minor}"),
        (alias_major, f"~{version.major}", f"{prefix}{version.major}"),
    ]

    aliases: list[str] = []
    for enabled, range_expr, alias in candidates:
        if not enabled:
            continue
        latest = resolve_latest_tag(tag_names, range_expr)
        log_event(LOGGER, logging.INFO, "alias_range_resolved", range=range_expr, latest=latest, match_tag=match_tag)
        if latest is not None and latest == match_tag:
            aliases.append(alias)
    return aliases


def resolve_match_tag(config: AliasConfig) -> str:
    if config.match_tag:
        return config.match_tag
    return describe_latest_tag()


def update_alias_tags(config: AliasConfig, session: requests.Session | None = None) -> list[str]:
    """Run one alias update; return the aliases pushed, in push order."""
    match_tag = resolve_match_tag(config)
    if not match_tag:
        log_event(LOGGER, logging.INFO, "no_tag_found")
        return []

    if parse_version(match_tag) is None:
        raise ValueError(f"invalid semver tag: {match_tag}")

    tag_names = fetch_tag_names(
        api_base_url=config.api_base_url,
        repository=config.repository,
        headers=github_headers(config.github_token),
        timeout=config.timeout,
        per_page=config.per_page,
        limit=config.limit,
        session=session,
    )
    log_event(LOGGER, logging.INFO, "tags_fetched", repository=config.repository, count=len(tag_names))

    published: list[str] = []
    for alias in plan_aliases(
        match_tag,
        tag_names,
        alias_minor=config.alias_minor,
        alias_major=config.alias_major,
    ):
        create_and_push_tag(alias, remote=config.remote, dry_run=config.dry_run)
        published.append(alias)
        log_event(LOGGER, logging.INFO, "alias_published", alias=alias, target=match_tag, dry_run=config.dry_run)
    return published


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    config = build_config(args, os.environ if environ is None else environ)
    try:
        validate_config(config)
    except ValueError as exc:
        log_event(LOGGER, logging.ERROR, "invalid_input", error=str(exc))
        return 1

    try:
        published = update_alias_tags(config)
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "unknown"
        text = exc.response.text if exc.response is not None else str(exc)
        log_event(
            LOGGER,
            logging.ERROR,
            "github_tags_http_error",
            status_code=status,
            response_body=text,
            repository=config.repository,
        )
        return 1
    except requests.RequestException as exc:
        log_event(LOGGER, logging.ERROR, "github_tags_request_failed", error=str(exc), repository=config.repository)
        return 1
    except RuntimeError as exc:
        log_event(LOGGER, logging.ERROR, "github_tags_unexpected_payload", error=str(exc), repository=config.repository)
        return 1
    except subprocess.CalledProcessError as exc:
        log_event(
            LOGGER,
            logging.ERROR,
            "git_command_failed",
            command=" ".join(str(part) for part in exc.cmd),
            returncode=exc.returncode,
            stderr=(exc.stderr or "").strip(),
        )
        return 1
    except ValueError as exc:
        log_event(LOGGER, logging.ERROR, "invalid_match_tag", error=str(exc))
        return 1

    for alias in published:
        print(alias)
    return 0


if __name__ == "__main__":
    sys.exit(main())
