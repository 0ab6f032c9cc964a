"""Shopify-side data models.

Decoupled from themepreview_core so the theme store can be used on its own;
the core only passes these through to ThemeStore and reads ``store_url``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def normalize_store_url(store_url: str) -> str:
    """``https://shop.myshopify.com/`` → ``shop.myshopify.com``."""
    url = store_url.strip()
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            url = url[len(scheme) :]
    return url.rstrip("/")


@dataclass
class ShopifyAuth:
    """Store URL plus an Admin API access token (or Theme Access password)."""

    store_url: str
    access_token: str

    def __post_init__(self):
        self.store_url = normalize_store_url(self.store_url)


@dataclass
class ThemeKitFlags:
    """Options controlling how a theme directory is uploaded.

    directory      local theme root; asset keys are paths relative to it
    ignored_files  fnmatch globs on the key or basename, or directory prefixes
    allow_live     permit uploading into the published (``main``) theme
    api_version    Admin API version segment of every request URL
    timeout        per-request timeout in seconds
    """

    directory: str = "."
    ignored_files: list[str] = field(default_factory=list)
    allow_live: bool = False
    api_version: str = "2024-01"
    timeout: int = 30


@dataclass
class Theme:
    id: int
    name: str
    role: str  # "main" | "unpublished" | "demo" | "development"

    @classmethod
    def from_api(cls, data: dict) -> Theme:
        return cls(id=int(data["id"]), name=data.get("name", ""), role=data.get("role", ""))
