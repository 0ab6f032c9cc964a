import os
from pathlib import Path
from typing import Optional

import yaml

from themepreview_shopify.models import ThemeKitFlags

DEFAULT_CONFIG: dict = {
    "store_url": None,
    "theme_dir": ".",
    "ignored_files": [],  # fnmatch patterns or directory names to skip (e.g. "config/settings_data.json", "node_modules/")
    "allow_live": False,
    "api_version": "2024-01",
    "timeout": 30,
    "delete_comment_on_teardown": False,
}


def load_config(config_path: str = ".themepreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .themepreview.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "ignored_files": list(DEFAULT_CONFIG["ignored_files"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["shopify_access_token"] = os.environ.get("SHOPIFY_ACCESS_TOKEN") or os.environ.get("SHOPIFY_PASSWORD")
    if os.environ.get("SHOPIFY_STORE_URL"):
        config["store_url"] = os.environ["SHOPIFY_STORE_URL"]

    theme_id = os.environ.get("SHOPIFY_THEME_ID")
    config["theme_id"] = int(theme_id) if theme_id and theme_id.isdigit() else None

    return config


def build_flags(config: dict) -> ThemeKitFlags:
    """Map the merged config onto the upload options understood by the theme store."""
    return ThemeKitFlags(
        directory=str(config.get("theme_dir") or "."),
        ignored_files=list(config.get("ignored_files") or []),
        allow_live=bool(config.get("allow_live")),
        api_version=config.get("api_version") or DEFAULT_CONFIG["api_version"],
        timeout=int(config.get("timeout") or DEFAULT_CONFIG["timeout"]),
    )
