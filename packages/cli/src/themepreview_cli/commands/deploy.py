"""deploy-preview and deploy commands."""

from __future__ import annotations

import click
from rich.console import Console

from themepreview_cli.factory import build_controller, configuration_errors

console = Console()


def _report(result) -> None:
    console.print(f"[green]Theme {result.theme_id} deployed.[/green]")
    console.print(f"Preview: [bold]{result.preview_url}[/bold]")


@click.command("deploy-preview")
@click.pass_context
def deploy_preview_cmd(ctx):
    """Deploy the current branch into a theme named after it.

    The theme is created on first run and reused afterwards. The preview URL
    is posted (or updated) as a comment on the pull request.

    \b
    Required environment variables:
      SHOPIFY_STORE_URL      e.g. my-store.myshopify.com
      SHOPIFY_ACCESS_TOKEN   Admin API token or Theme Access password
      GITHUB_TOKEN           Token with pull request write access
    """
    config = ctx.obj["config"]
    with configuration_errors():
        controller = build_controller(config)
        result = controller.deployment_preview()
    _report(result)


@click.command("deploy")
@click.option(
    "--theme-id",
    type=int,
    default=None,
    help="Theme to deploy into. Defaults to SHOPIFY_THEME_ID.",
)
@click.pass_context
def deploy_cmd(ctx, theme_id: int | None):
    """Deploy into an existing theme and comment its preview URL."""
    config = ctx.obj["config"]
    with configuration_errors():
        controller = build_controller(config)
        result = controller.deployment(theme_id or config.get("theme_id"))
    _report(result)
