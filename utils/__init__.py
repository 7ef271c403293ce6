from .endpoints import compact, get_api_root, rest_base, taxonomy_base
from .envelope import tool_handler
from .response_utils import robust_parse_text
from .wordpress import make_external_request, make_wordpress_request

__all__ = [
    "compact",
    "get_api_root",
    "make_external_request",
    "make_wordpress_request",
    "rest_base",
    "robust_parse_text",
    "taxonomy_base",
    "tool_handler",
]
