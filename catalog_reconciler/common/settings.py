"""
Runtime settings for the reconciliation jobs.

ReconcilerSettings carries the filesystem layout (rooted at an explicit
project directory) and job switches. SearchSettings carries the image-search
credential and provider parameters and refuses to exist without a key.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import (
    API_KEY_ENV_VARS,
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CATALOG_PATH,
    DEFAULT_IMAGES_DIR,
    DEFAULT_PUBLIC_DIR,
    SEARCH_DELAY_SECONDS,
    SEARCH_PER_PAGE,
    SITE_IMAGE_PREFIX,
)
from .errors import ConfigurationError, MissingCredentialError


@dataclass
class ReconcilerSettings:
    """Filesystem layout and job switches, all paths absolute."""
    root: Path
    catalog_path: Path
    images_dir: Path
    public_dir: Path
    artifacts_dir: Path
    site_image_prefix: str = SITE_IMAGE_PREFIX
    backup_before_write: Optional[bool] = None  # None = job default
    cache_bust: bool = True
    write_unchanged: Optional[bool] = None      # None = job default

    @classmethod
    def for_root(cls, root: str | Path, **overrides) -> "ReconcilerSettings":
        """Build settings using the default repository layout under root."""
        return cls.from_config(root, {}, **overrides)

    @classmethod
    def from_config(
        cls,
        root: str | Path,
        config: Mapping[str, Any],
        **overrides,
    ) -> "ReconcilerSettings":
        """
        Build settings from a parsed config mapping.

        Relative paths in the config are resolved against root. Keyword
        overrides (e.g. from CLI flags) win over config values; None
        overrides are ignored.
        """
        root = Path(root).resolve()
        values = dict(config)
        values.update({k: v for k, v in overrides.items() if v is not None})

        prefix = values.get("site_image_prefix", SITE_IMAGE_PREFIX)
        if not prefix.startswith("/") or not prefix.endswith("/"):
            raise ConfigurationError(
                f"site_image_prefix must start and end with '/': {prefix!r}"
            )

        return cls(
            root=root,
            catalog_path=root / values.get("catalog_path", DEFAULT_CATALOG_PATH),
            images_dir=root / values.get("images_dir", DEFAULT_IMAGES_DIR),
            public_dir=root / values.get("public_dir", DEFAULT_PUBLIC_DIR),
            artifacts_dir=root / values.get("artifacts_dir", DEFAULT_ARTIFACTS_DIR),
            site_image_prefix=prefix,
            backup_before_write=values.get("backup_before_write"),
            cache_bust=bool(values.get("cache_bust", True)),
            write_unchanged=values.get("write_unchanged"),
        )


@dataclass
class SearchSettings:
    """
    Image-search provider settings.

    The API key is validated on construction: an empty key raises
    MissingCredentialError so the job fails before any network call.
    """
    api_key: str = field(repr=False)
    delay_seconds: float = SEARCH_DELAY_SECONDS
    per_page: int = SEARCH_PER_PAGE
    safesearch: bool = True
    image_type: str = "photo"
    category_fallback: bool = False

    def __post_init__(self):
        if not self.api_key or not self.api_key.strip():
            raise MissingCredentialError(API_KEY_ENV_VARS)
        if self.per_page < 3 or self.per_page > 200:
            # Pixabay rejects per_page outside 3..200
            raise ConfigurationError(f"per_page must be between 3 and 200, got {self.per_page}")
        if self.delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    @classmethod
    def from_env(
        cls,
        search_config: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SearchSettings":
        """
        Read the API key from the environment and merge provider settings.

        The first non-empty variable of API_KEY_ENV_VARS wins.
        """
        if environ is None:
            environ = os.environ
        search_config = search_config or {}

        api_key = ""
        for name in API_KEY_ENV_VARS:
            api_key = environ.get(name, "")
            if api_key:
                break

        return cls(
            api_key=api_key,
            delay_seconds=float(search_config.get("delay_seconds", SEARCH_DELAY_SECONDS)),
            per_page=int(search_config.get("per_page", SEARCH_PER_PAGE)),
            safesearch=bool(search_config.get("safesearch", True)),
            image_type=search_config.get("image_type", "photo"),
            category_fallback=bool(search_config.get("category_fallback", False)),
        )
