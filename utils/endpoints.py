from typing import Any

from core.config import get_config  # type: ignore
from core.errors import ConfigurationError  # type: ignore

# logical slug -> REST base, anything else is used verbatim
CONTENT_TYPE_BASES = {
    "post": "posts",
    "page": "pages",
}

TAXONOMY_BASES = {
    "category": "categories",
    "post_tag": "tags",
    "tag": "tags",
}


def get_api_root(config: dict | None = None) -> str:
    """Return `<site_url>/wp-json` from config, raising when no site is configured."""
    _cfg = config if config is not None else (get_config() or {})
    site_url = str((_cfg.get("wordpress") or {}).get("site_url") or "").rstrip("/")
    if not site_url:
        raise ConfigurationError(
            "'wordpress.site_url' must be set in config.yaml or via WORDPRESS_SITE_URL"
        )
    return f"{site_url}/wp-json"


def rest_base(content_type: str) -> str:
    return CONTENT_TYPE_BASES.get(content_type, content_type)


def taxonomy_base(taxonomy: str) -> str:
    return TAXONOMY_BASES.get(taxonomy, taxonomy)


def compact(params: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None so omitted filters are never sent."""
    return {k: v for k, v in params.items() if v is not None}
