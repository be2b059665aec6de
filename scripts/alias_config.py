#!/usr/bin/env python3
"""Run configuration: CLI flags layered over GitHub Actions environment variables."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import Mapping

from github_tags import DEFAULT_API_BASE_URL, DEFAULT_LIMIT, DEFAULT_PER_PAGE


REPOSITORY_RE = re.compile(r"^[^/\s]+/[^/\s]+$")
FALSE_VALUES = frozenset({"", "undefined", "null", "false", "0", "no", "off"})
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class AliasConfig:
    github_token: str
    repository: str
    api_base_url: str = DEFAULT_API_BASE_URL
    match_tag: str = ""
    alias_minor: bool = True
    alias_major: bool = True
    remote: str = "origin"
    per_page: int = DEFAULT_PER_PAGE
    limit: int = DEFAULT_LIMIT
    timeout: int = 30
    dry_run: bool = False


def parse_bool_input(value: object, default: bool = True) -> bool:
    """Interpret an action input; None means unset and falls back to default."""
    if value is None:
        return default
    return str(value).strip().lower() not in FALSE_VALUES


def _pick(cli_value: str | None, environ: Mapping[str, str], key: str, default: str = "") -> str:
    if cli_value is not None:
        return cli_value
    return environ.get(key, default)


def build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> AliasConfig:
    alias_minor = args.alias_minor if args.alias_minor is not None else environ.get("ALIAS_MINOR")
    alias_major = args.alias_major if args.alias_major is not None else environ.get("ALIAS_MAJOR")

    return AliasConfig(
        github_token=_pick(args.github_token, environ, "GITHUB_TOKEN"),
        repository=_pick(args.repository, environ, "GITHUB_REPOSITORY"),
        api_base_url=_pick(args.api_base_url, environ, "GITHUB_API_URL", DEFAULT_API_BASE_URL) or DEFAULT_API_BASE_URL,
        match_tag=_pick(args.match_tag, environ, "MATCH_TAG"),
        alias_minor=parse_bool_input(alias_minor),
        alias_major=parse_bool_input(alias_major),
        remote=args.remote,
        per_page=args.per_page,
        limit=args.limit,
        timeout=args.timeout,
        dry_run=args.dry_run,
    )


def validate_config(config: AliasConfig) -> None:
    if not config.github_token or not config.github_token.strip():
        raise ValueError("github-token must be non-empty")
    if not config.repository or not REPOSITORY_RE.match(config.repository):
        raise ValueError("repository must match owner/repo")
    if not config.api_base_url.startswith(("http://", "https://")):
        raise ValueError("api-base-url must start with http:// or https://")
    if not config.remote or not config.remote.strip():
        raise ValueError("remote must be non-empty")
    if config.per_page <= 0 or config.per_page > MAX_PER_PAGE:
        raise ValueError(f"per-page must be between 1 and {MAX_PER_PAGE}")
    if config.limit <= 0:
        raise ValueError("limit must be greater than zero")
    if config.timeout <= 0:
        raise ValueError("timeout must be greater than zero")
