"""Theme store backed by the Shopify Admin REST API.

Only the calls the preview lifecycle needs are implemented: list/create/delete
themes and PUT assets. Every request goes through ``_request`` so HTTP
failures surface uniformly as ThemeStoreError. There is no retry logic here;
a failed call ends the run.
"""

from __future__ import annotations

import base64
import fnmatch
import logging
from pathlib import Path

import requests

from themepreview_shopify.models import ShopifyAuth, Theme, ThemeKitFlags

logger = logging.getLogger(__name__)

_BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".ico",
    ".woff", ".woff2", ".ttf", ".eot", ".otf", ".mp4", ".pdf",
}

# Top-level directories Shopify accepts as asset keys.
_THEME_DIRECTORIES = ("assets", "config", "layout", "locales", "sections", "snippets", "templates", "blocks")


class ThemeStoreError(Exception):
    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def is_ignored(key: str, patterns: list[str]) -> bool:
    """Return True if the asset key matches any ignore pattern.

    Supports:
    - fnmatch globs on the full key: "config/settings_*.json"
    - fnmatch globs on the basename: "*.map"
    - Directory names/prefixes: "locales/" (matches any file within that tree)
    """
    for pattern in patterns:
        if fnmatch.fnmatch(key, pattern):
            return True
        if fnmatch.fnmatch(key.rsplit("/", 1)[-1], pattern):
            return True
        prefix = pattern.rstrip("/") + "/"
        if key.startswith(prefix):
            return True
    return False


def collect_theme_files(directory: str, ignored_files: list[str]) -> list[tuple[str, Path]]:
    """Return ``(asset key, path)`` pairs for every uploadable file, sorted by key."""
    root = Path(directory)
    files = []
    for top in _THEME_DIRECTORIES:
        base = root / top
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if not path.is_file():
                continue
            key = path.relative_to(root).as_posix()
            if is_ignored(key, ignored_files):
                logger.debug("Ignoring %s", key)
                continue
            files.append((key, path))
    return sorted(files)


def build_asset_payload(key: str, path: Path) -> dict:
    """Text assets go up as ``value``; anything that is not UTF-8 as base64 ``attachment``."""
    data = path.read_bytes()
    if path.suffix.lower() not in _BINARY_EXTENSIONS:
        try:
            return {"key": key, "value": data.decode("utf-8")}
        except UnicodeDecodeError:
            logger.debug("%s is not UTF-8, uploading as attachment", key)
    return {"key": key, "attachment": base64.b64encode(data).decode("ascii")}


class ThemeStore:
    """Theme operations against a single store.

    ``session`` is injectable so tests can stand in a MagicMock for
    ``requests.Session``.
    """

    def __init__(
        self,
        auth: ShopifyAuth,
        session: requests.Session | None = None,
        api_version: str = "2024-01",
        timeout: int = 30,
    ):
        if not auth.store_url:
            raise ValueError("ShopifyAuth.store_url is required.")
        self._auth = auth
        self._api_version = api_version
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "X-Shopify-Access-Token": auth.access_token,
                "Content-Type": "application/json",
            }
        )

    @property
    def auth(self) -> ShopifyAuth:
        return self._auth

    def _url(self, path: str) -> str:
        return f"https://{self._auth.store_url}/admin/api/{self._api_version}/{path}"

    def _request(self, method: str, path: str, **kwargs) -> dict:
        response = self._session.request(method, self._url(path), timeout=self._timeout, **kwargs)
        if response.status_code >= 400:
            raise ThemeStoreError(
                f"{method} {path} failed with HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                body=response.text,
            )
        if not response.content:
            return {}
        return response.json()

    # ------------------------------------------------------------------ #
    # Themes                                                               #
    # ------------------------------------------------------------------ #

    def list_themes(self) -> list[Theme]:
        data = self._request("GET", "themes.json")
        return [Theme.from_api(t) for t in data.get("themes", [])]

    def get_theme(self, theme_id: int) -> Theme:
        data = self._request("GET", f"themes/{theme_id}.json")
        return Theme.from_api(data["theme"])

    def create_or_find_theme_with_name(self, name: str, flags: ThemeKitFlags | None = None) -> tuple[Theme, bool]:
        """Return ``(theme, created)`` for the theme called ``name``.

        An existing theme with exactly that name is reused; otherwise a new
        unpublished theme is created.
        """
        for theme in self.list_themes():
            if theme.name == name:
                logger.info("Found existing theme '%s' (%d)", name, theme.id)
                return theme, False

        data = self._request("POST", "themes.json", json={"theme": {"name": name, "role": "unpublished"}})
        theme = Theme.from_api(data["theme"])
        logger.info("Created theme '%s' (%d)", name, theme.id)
        return theme, True

    def remove_theme(self, theme_id: int) -> None:
        self._request("DELETE", f"themes/{theme_id}.json")
        logger.info("Removed theme %d from %s", theme_id, self._auth.store_url)

    # ------------------------------------------------------------------ #
    # Upload                                                               #
    # ------------------------------------------------------------------ #

    def deploy_theme(self, theme_id: int, flags: ThemeKitFlags) -> list[str]:
        """Upload every non-ignored file under ``flags.directory`` into the theme.

        Returns the uploaded asset keys. Refuses the published theme unless
        ``flags.allow_live`` is set.
        """
        theme = self.get_theme(theme_id)
        if theme.role == "main" and not flags.allow_live:
            raise ThemeStoreError(
                f"Theme {theme_id} is the live theme of {self._auth.store_url}; "
                "set 'allow_live: true' to upload into it."
            )

        files = collect_theme_files(flags.directory, flags.ignored_files)
        if not files:
            logger.warning("No theme files found under %s", flags.directory)

        uploaded = []
        for key, path in files:
            self._request("PUT", f"themes/{theme_id}/assets.json", json={"asset": build_asset_payload(key, path)})
            logger.debug("Uploaded %s", key)
            uploaded.append(key)
        logger.info("Uploaded %d file(s) to theme %d", len(uploaded), theme_id)
        return uploaded

    def generate_theme_preview_url(self, theme_id: int) -> str:
        return f"https://{self._auth.store_url}?preview_theme_id={theme_id}"
