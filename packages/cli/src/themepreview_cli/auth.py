"""GitHub token for commenting on the pull request.

Inside a workflow the token must come from the job (``GITHUB_TOKEN``), since
that is the identity the preview comment is written and later found under.
Local runs may borrow the GitHub CLI session instead.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def _in_github_actions(environ) -> bool:
    return environ.get("GITHUB_ACTIONS") == "true"


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    token = result.stdout.strip() if result.returncode == 0 else ""
    return token or None


def resolve_github_token(environ: dict | None = None) -> str | None:
    """Return the token to comment with, or None.

    Never raises. Teardown turns None into a ConfigurationError; deploy only
    needs the token once it comments.
    """
    env = os.environ if environ is None else environ
    token = env.get("GITHUB_TOKEN")
    if token:
        return token

    if _in_github_actions(env):
        logger.warning("GITHUB_TOKEN is not set; pass secrets.GITHUB_TOKEN to the step's env.")
        return None

    token = _gh_cli_token()
    if token:
        logger.debug("Using the gh CLI session token for a local run.")
    return token
