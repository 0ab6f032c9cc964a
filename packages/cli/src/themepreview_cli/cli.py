"""CLI entry point for themepreview.

Commands:
  deploy-preview  deploy the branch into a theme named after it and comment the preview URL
  deploy          deploy into an existing theme id
  remove-preview  delete the theme recorded in the PR's preview comment
  run             dispatch one of the above from the ACTION input
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from themepreview_cli.commands.deploy import deploy_cmd, deploy_preview_cmd
from themepreview_cli.commands.remove import remove_preview_cmd
from themepreview_cli.commands.run import run_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("themepreview"),
    prog_name="themepreview",
)
@click.option(
    "--config",
    "config_path",
    default=".themepreview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="THEMEPREVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Shopify theme deployment previews for pull requests."""
    from themepreview_core.config import load_config
    from themepreview_cli.auth import resolve_github_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(deploy_preview_cmd)
main.add_command(deploy_cmd)
main.add_command(remove_preview_cmd)
main.add_command(run_cmd)
