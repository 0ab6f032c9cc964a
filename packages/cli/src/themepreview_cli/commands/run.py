"""run command: single entry point driven by the ACTION input."""

from __future__ import annotations

import click

from themepreview_core.preview import Action, DeploymentResult, run_action
from themepreview_cli.commands.deploy import _report
from themepreview_cli.factory import build_controller, configuration_errors


@click.command("run")
@click.option(
    "--action",
    type=click.Choice([a.value for a in Action]),
    required=True,
    envvar="ACTION",
    help="Lifecycle step to perform.",
)
@click.option("--theme-id", type=int, default=None, help="Theme id for the DEPLOY action.")
@click.pass_context
def run_cmd(ctx, action: str, theme_id: int | None):
    """Run one lifecycle step, selected by --action or $ACTION."""
    config = ctx.obj["config"]
    with configuration_errors():
        controller = build_controller(config)
        result = run_action(
            controller,
            action,
            theme_id=theme_id or config.get("theme_id"),
            delete_comment=bool(config.get("delete_comment_on_teardown")),
        )
    if isinstance(result, DeploymentResult):
        _report(result)
