"""Preview lifecycle: deploy a branch theme and track it in a PR comment.

State per (pull request, store):

    NoPreview   --deployment_preview-->        PreviewLive
    PreviewLive --deployment_preview-->        PreviewLive  (comment edited in place)
    PreviewLive --remove_deployment_preview--> ThemeRemoved (comment kept unless delete_comment)
    NoPreview   --remove_deployment_preview--> NoPreview    (warning only)

Re-running a job is idempotent because the theme is looked up by name and
the comment by its hidden marker.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from rich.console import Console

from themepreview_core.context import RunContext, get_theme_name
from themepreview_core.errors import ConfigurationError
from themepreview_core.gh.comments import (
    create_replace_comment,
    delete_issue_comment,
    find_issue_comment,
    get_repo,
    hidden_comment_marker,
    retrieve_theme_id,
)
from themepreview_core.outputs import output_variables

console = Console(stderr=True)
logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    DEPLOY = "DEPLOY"
    DEPLOYMENT_PREVIEW = "DEPLOYMENT_PREVIEW"
    REMOVE_DEPLOYMENT_PREVIEW = "REMOVE_DEPLOYMENT_PREVIEW"


@dataclass
class GithubAuth:
    token: str | None


@dataclass
class DeploymentResult:
    theme_id: int
    preview_url: str
    comment_id: int | None = None


class PreviewController:
    """Coordinates the theme store and the PR comment for one CI run.

    ``theme_store`` is a themepreview_shopify.client.ThemeStore (or anything
    with the same methods). ``repo`` is a PyGithub Repository; when omitted it
    is resolved lazily from ``github_auth`` and ``context.repository``.
    """

    def __init__(
        self,
        github_auth: GithubAuth,
        shopify_auth,
        flags,
        context: RunContext,
        theme_store,
        repo=None,
        output: Callable[[dict[str, str]], None] = output_variables,
    ):
        self.github_auth = github_auth
        self.shopify_auth = shopify_auth
        self.flags = flags
        self.context = context
        self.theme_store = theme_store
        self.output = output
        self._repo = repo

    @property
    def marker(self) -> str:
        return hidden_comment_marker(self.shopify_auth.store_url)

    def _require_github(self) -> None:
        """Raise before any upload when a pull request run cannot comment."""
        if self._repo is not None or not self.context.is_pull_request:
            return
        if not self.github_auth.token:
            raise ConfigurationError("'GITHUB_TOKEN' is not set but is required to comment on the pull request.")
        if not self.context.repository:
            raise ConfigurationError("'GITHUB_REPOSITORY' is not set; cannot locate the pull request.")

    def _get_repo(self):
        if self._repo is None:
            self._require_github()
            self._repo = get_repo(self.context.repository, self.github_auth.token)
        return self._repo

    # ------------------------------------------------------------------ #
    # Deploy                                                               #
    # ------------------------------------------------------------------ #

    def deployment_preview(self) -> DeploymentResult:
        """Deploy the current branch into a theme named after it and comment the preview URL."""
        theme_name = get_theme_name(self.context)
        self._require_github()
        theme, created = self.theme_store.create_or_find_theme_with_name(theme_name, self.flags)
        logger.info("%s theme '%s' (%d)", "Created" if created else "Reusing", theme_name, theme.id)
        return self.deployment(theme.id)

    def deployment(self, theme_id: int | None = None) -> DeploymentResult:
        """Upload into ``theme_id``, publish outputs and upsert the tracking comment."""
        if not theme_id:
            raise ConfigurationError(
                "'shopifyThemeId' is not set but is required in order to deploy the theme to Shopify "
                "(if using the 'DEPLOY' action make sure to set 'SHOPIFY_THEME_ID')."
            )
        self._require_github()

        self.theme_store.deploy_theme(theme_id, self.flags)
        preview_url = self.theme_store.generate_theme_preview_url(theme_id)

        self.output(
            {
                "SHOPIFY_THEME_ID": str(theme_id),
                "SHOPIFY_THEME_PREVIEW_URL": preview_url,
            }
        )

        result = DeploymentResult(theme_id=theme_id, preview_url=preview_url)
        if not self.context.is_pull_request:
            console.print("[yellow]Not running from within a pull request; skipping the preview comment.[/yellow]")
            return result

        message = f":tada: '{self.shopify_auth.store_url}' preview at: \n <{preview_url}>"
        comment = create_replace_comment(
            self._get_repo(),
            self.context.pull_request_number,
            message,
            self.marker,
            theme_id,
        )
        result.comment_id = getattr(comment, "id", None)
        return result

    # ------------------------------------------------------------------ #
    # Teardown                                                             #
    # ------------------------------------------------------------------ #

    def remove_deployment_preview(self, delete_comment: bool = False) -> int | None:
        """Remove the theme recorded in the PR's tracking comment.

        Returns the removed theme id, or None when there was nothing to remove.
        The comment is left in place unless ``delete_comment`` is set.
        """
        if not self.github_auth.token:
            raise ConfigurationError("Cannot remove deployment preview theme as 'GITHUB_TOKEN' is not set.")
        if not self.context.is_pull_request:
            raise ConfigurationError(
                "Cannot remove deployment preview theme as job is not running from within a pull request."
            )

        comment = find_issue_comment(self._get_repo(), self.context.pull_request_number, self.marker)
        if comment is None or not comment.body:
            logger.warning("No tracking comment on PR #%d", self.context.pull_request_number)
            console.print(
                "[yellow]Cannot find the last deployment preview comment so no theme can be removed.[/yellow]"
            )
            return None

        theme_id = retrieve_theme_id(comment.body)
        if theme_id is None:
            console.print("[yellow]The deployment preview comment does not contain a theme id; nothing removed.[/yellow]")
            return None

        self.theme_store.remove_theme(theme_id)
        if delete_comment:
            delete_issue_comment(comment)
        return theme_id


def run_action(
    controller: PreviewController,
    action: Action | str,
    theme_id: int | None = None,
    delete_comment: bool = False,
):
    """Dispatch one of the three lifecycle actions by name."""
    action = Action(action)
    if action is Action.DEPLOY:
        return controller.deployment(theme_id)
    if action is Action.DEPLOYMENT_PREVIEW:
        return controller.deployment_preview()
    return controller.remove_deployment_preview(delete_comment=delete_comment)
