"""remove-preview command: tear down the theme behind a PR's preview comment."""

from __future__ import annotations

import click
from rich.console import Console

from themepreview_cli.factory import build_controller, configuration_errors

console = Console()


@click.command("remove-preview")
@click.option(
    "--delete-comment",
    is_flag=True,
    help="Also delete the preview comment (same as delete_comment_on_teardown: true).",
)
@click.pass_context
def remove_preview_cmd(ctx, delete_comment: bool):
    """Delete the preview theme recorded on the current pull request.

    Must run from a pull_request workflow (typically on `closed`). When no
    preview comment exists this is a no-op that exits 0.
    """
    config = ctx.obj["config"]
    delete_comment = delete_comment or bool(config.get("delete_comment_on_teardown"))

    with configuration_errors():
        controller = build_controller(config)
        theme_id = controller.remove_deployment_preview(delete_comment=delete_comment)

    if theme_id is not None:
        console.print(f"[green]Removed preview theme {theme_id}.[/green]")
