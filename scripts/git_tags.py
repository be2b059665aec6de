#!/usr/bin/env python3
"""git plumbing for alias tags: find the triggering tag, move and push aliases."""

from __future__ import annotations

import logging
import os
import subprocess

from shared import log_event


LOGGER = logging.getLogger("tagalias.git_tags")
NO_TAG_MARKERS = ("No names found", "No tags can describe")
# NO_TAG_MARKERS only match untranslated git output.
GIT_ENV_OVERRIDES = {"LC_ALL": "C"}


def describe_latest_tag() -> str:
    """Return the nearest tag reachable from HEAD, or "" when there is none."""
    result = subprocess.run(
        ["git", "describe", "--tags", "--abbrev=0"],
        capture_output=True,
        text=True,
        check=False,
        env={**os.environ, **GIT_ENV_OVERRIDES},
    )
    if result.returncode != 0:
        stderr = result.stderr or ""
        if any(marker in stderr for marker in NO_TAG_MARKERS):
            log_event(LOGGER, logging.INFO, "no_reachable_tag", stderr=stderr.strip())
            return ""
        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )
    return result.stdout.strip()


def create_and_push_tag(tag_name: str, *, remote: str = "origin", dry_run: bool = False) -> None:
    """Force-move ``tag_name`` to HEAD and force-push it to ``remote``.

    The local tag is not restored if the push fails; rerunning converges.
    """
    if not tag_name:
        return

    commands = [
        ["git", "tag", "-f", tag_name],
        ["git", "push", remote, tag_name, "--force"],
    ]
    for command in commands:
        if dry_run:
            log_event(LOGGER, logging.INFO, "git_command_skipped", command=" ".join(command), dry_run=True)
            continue
        subprocess.run(command, capture_output=True, text=True, check=True)
        log_event(LOGGER, logging.INFO, "git_command_ok", command=" ".join(command))
