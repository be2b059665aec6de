#!/usr/bin/env python3
"""Semantic-version range matching and latest-tag resolution.

Ranges use the npm grammar (``~1.2``, ``^1.0.0``, ``1.x``, ``1.2.3 - 2``,
``||``) via ``semantic_version.NpmSpec``, including npm's rule that a
pre-release only matches a range naming a pre-release on the same core.
"""

from __future__ import annotations

from typing import Iterable

import semantic_version
from semver import Version


class InvalidRange(ValueError):
    """Raised when a range expression cannot be parsed."""


def parse_version(tag: str) -> Version | None:
    """Parse a tag such as ``v1.2.3-rc.1``; return None when it is not semver."""
    if not isinstance(tag, str):
        return None
    text = tag.strip()
    if text.startswith("v"):
        text = text[1:]
    try:
        return Version.parse(text)
    except ValueError:
        return None


def is_valid_version(tag: str) -> bool:
    return parse_version(tag) is not None


def parse_range(range_expr: str) -> semantic_version.NpmSpec:
    if not isinstance(range_expr, str):
        raise InvalidRange(f"range must be a string, got {type(range_expr).__name__}")
    try:
        return semantic_version.NpmSpec(range_expr)
    except ValueError as exc:
        raise InvalidRange(f"invalid range: {range_expr!r}") from exc


def _matches(spec: semantic_version.NpmSpec, version: Version) -> bool:
    return spec.match(semantic_version.Version(str(version)))


def satisfies(tag: str, range_expr: str) -> bool:
    version = parse_version(tag)
    if version is None:
        return False
    try:
        spec = parse_range(range_expr)
    except InvalidRange:
        return False
    return _matches(spec, version)


def resolve_latest_tag(tags: Iterable[str], range_expr: str) -> str | None:
    """Return the highest-precedence tag satisfying range_expr, or None.

    Tags that are not semver are skipped. An unparsable range matches nothing
    rather than raising. The tag is returned exactly as given, prefix included.
    """
    try:
        spec = parse_range(range_expr)
    except InvalidRange:
        return None

    candidates: list[tuple[Version, str]] = []
    for tag in tags:
        version = parse_version(tag)
        if version is not None and _matches(spec, version):
            candidates.append((version, tag))

    if not candidates:
        return None

    candidates.sort(key=lambda candidate: candidate[0], reverse=True)
    return candidates[0][1]
