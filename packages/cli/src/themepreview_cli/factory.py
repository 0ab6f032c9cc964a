"""Wiring from merged config to a PreviewController.

Lives in the CLI package so neither themepreview_core nor
themepreview_shopify know about the config file format or the environment.
"""

from __future__ import annotations

import contextlib

import click

from themepreview_core.config import build_flags
from themepreview_core.context import RunContext
from themepreview_core.errors import ConfigurationError
from themepreview_core.preview import GithubAuth, PreviewController
from themepreview_shopify.client import ThemeStore
from themepreview_shopify.models import ShopifyAuth


def build_controller(config: dict, context: RunContext | None = None) -> PreviewController:
    store_url = config.get("store_url")
    if not store_url:
        raise ConfigurationError(
            "'SHOPIFY_STORE_URL' is not set. Export it or add 'store_url' to .themepreview.yml."
        )
    access_token = config.get("shopify_access_token")
    if not access_token:
        raise ConfigurationError("'SHOPIFY_ACCESS_TOKEN' (or 'SHOPIFY_PASSWORD') is not set.")

    flags = build_flags(config)
    shopify_auth = ShopifyAuth(store_url=store_url, access_token=access_token)
    theme_store = ThemeStore(shopify_auth, api_version=flags.api_version, timeout=flags.timeout)
    return PreviewController(
        github_auth=GithubAuth(token=config.get("github_token")),
        shopify_auth=shopify_auth,
        flags=flags,
        context=context or RunContext.from_env(),
        theme_store=theme_store,
    )


@contextlib.contextmanager
def configuration_errors():
    """Turn ConfigurationError into a ClickException (message shown, exit 1)."""
    try:
        yield
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
