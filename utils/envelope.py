"""Uniform result envelope shared by every tool.

    {"toolResult": {"content": [{"type": "text", "text": ...}], "isError": bool}}

`tool_handler` wraps a handler so that validation, the request and the
reshaping all run inside one try block. Whatever escapes becomes an error
envelope whose text is ``Error <action>: <message>``, optionally followed by
a hint looked up from the failure's HTTP status.
"""
from __future__ import annotations

import functools
import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import pydantic

from core.errors import MissingFieldError, ValidationError  # type: ignore

logger = logging.getLogger(__name__)

MISSING_FIELD = "missing_field"

HintKey = Union[int, str]
Hints = Mapping[HintKey, str]


def envelope(text: str, is_error: bool) -> dict[str, Any]:
    return {
        "toolResult": {
            "content": [{"type": "text", "text": text}],
            "isError": is_error,
        }
    }


def success(payload: Any) -> dict[str, Any]:
    return envelope(json.dumps(payload, indent=2, ensure_ascii=False, default=str), False)


def select_hint(exc: BaseException, hints: Optional[Hints]) -> Optional[str]:
    if not hints:
        return None
    if isinstance(exc, MissingFieldError):
        return hints.get(MISSING_FIELD)
    status = getattr(exc, "status", None)
    if isinstance(status, int):
        return hints.get(status)
    return None


def error_message(action: str, exc: BaseException, hints: Optional[Hints] = None) -> str:
    message = f"Error {action}: {exc}"
    hint = select_hint(exc, hints)
    if hint:
        message += f"\n\n{hint}"
    return message


def failure(action: str, exc: BaseException, hints: Optional[Hints] = None) -> dict[str, Any]:
    return envelope(error_message(action, exc, hints), True)


def tool_handler(action: str, hints: Optional[Hints] = None):
    """Decorate an async handler: validate its arguments and wrap the result.

    `action` completes the sentence "Error <action>: ...", e.g.
    "listing WooCommerce products".
    """

    def decorator(func: Callable[..., Awaitable[Any]]):
        validated = pydantic.validate_call(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                try:
                    payload = await validated(*args, **kwargs)
                except pydantic.ValidationError as e:
                    raise ValidationError.from_pydantic(e) from e
            except Exception as e:
                logger.warning(f"{func.__name__} failed: {e}")
                return failure(action, e, hints)
            return success(payload)

        return wrapper

    return decorator
