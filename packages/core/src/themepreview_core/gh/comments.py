"""Tracking comment helpers for pull requests.

A deployment preview is recorded in a single issue comment per
(pull request, store). The comment carries two hidden HTML lines below the
human-readable message:

    <!-- Shopify Theme Actions for :<store url> -->
    <!-- themepreview:v1 theme-id=<digits> -->

The first is the lookup marker; the second is the theme id that teardown
recovers. No other state is persisted anywhere.
"""

from __future__ import annotations

import logging
import re

from github import Github

logger = logging.getLogger(__name__)

_THEME_ID_MARKER_RE = re.compile(r"<!-- themepreview:v1 theme-id=(\d+) -->")
# Comments written before the versioned line existed only carried the URL.
_PREVIEW_URL_RE = re.compile(r"[?&]preview_theme_id=(\d+)")


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def hidden_comment_marker(store_url: str) -> str:
    return f"Shopify Theme Actions for :{store_url}"


def encode_theme_id(theme_id: int) -> str:
    return f"<!-- themepreview:v1 theme-id={int(theme_id)} -->"


def build_comment_body(message: str, marker: str, theme_id: int) -> str:
    return f"{message}\n\n<!-- {marker} -->\n{encode_theme_id(theme_id)}"


def retrieve_theme_id(body: str | None) -> int | None:
    """Return the theme id embedded in a tracking comment body, or None."""
    if not body:
        return None
    match = _THEME_ID_MARKER_RE.search(body)
    if match is None:
        match = _PREVIEW_URL_RE.search(body)
    if match is None:
        return None
    return int(match.group(1))


def find_issue_comment(repo, pr_number: int, marker: str):
    """Return the first comment on the pull request carrying ``marker``, or None.

    Matches the whole hidden line so one store URL that prefixes another
    (``shop.example.com`` vs ``shop.example.com.au``) never matches.
    """
    hidden_line = f"<!-- {marker} -->"
    for comment in repo.get_issue(pr_number).get_comments():
        if hidden_line in (comment.body or ""):
            return comment
    return None


def create_replace_comment(repo, pr_number: int, message: str, marker: str, theme_id: int):
    """Edit the tracking comment in place, or create it when none exists yet."""
    body = build_comment_body(message, marker, theme_id)
    comment = find_issue_comment(repo, pr_number, marker)
    if comment is not None:
        logger.debug("Updating tracking comment %s on PR #%d", comment.id, pr_number)
        comment.edit(body)
        return comment
    logger.debug("Creating tracking comment on PR #%d", pr_number)
    return repo.get_issue(pr_number).create_comment(body)


def delete_issue_comment(comment) -> None:
    logger.debug("Deleting tracking comment %s", comment.id)
    comment.delete()
