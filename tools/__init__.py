# tools package for MCP server tools
# Modules in this package expose `get_tools() -> dict[str, {"func", "title", "description"}]`.
# `collect_tools()` imports them and flattens the result into tool descriptors and handlers.
import inspect
import logging
import pkgutil
from importlib import import_module
from pathlib import Path
from typing import Any, Callable

from pydantic import create_model

logger = logging.getLogger(__name__)

__all__ = ["collect_tools", "input_schema"]


def input_schema(func: Callable) -> dict[str, Any]:
    """JSON schema for a handler's keyword parameters, built from its annotations."""
    fields = {}
    for name, param in inspect.signature(func).parameters.items():
        annotation = Any if param.annotation is inspect.Parameter.empty else param.annotation
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[name] = (annotation, default)
    model = create_model(f"{func.__name__}_params", **fields)
    schema = model.model_json_schema()
    schema.pop("title", None)
    return schema


def collect_tools() -> tuple[list[dict[str, Any]], dict[str, Callable]]:
    """Import every tool family and return (descriptors, handlers).

    A tool name maps to exactly one handler; a second module claiming the
    same name is an error.
    """
    descriptors: list[dict[str, Any]] = []
    handlers: dict[str, Callable] = {}
    owners: dict[str, str] = {}
    tools_path = Path(__file__).resolve().parent

    for _, name, _ in sorted(pkgutil.iter_modules([str(tools_path)]), key=lambda m: m[1]):
        if name.startswith("_"):
            continue
        module_name = f"{__name__}.{name}"
        mod = import_module(module_name)
        if not hasattr(mod, "get_tools"):
            continue
        logger.info(f"Imported tools module: {module_name}")
        for tool_name, meta in mod.get_tools().items():
            func = meta.get("func")
            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue
            if tool_name in handlers:
                raise ValueError(f"Tool {tool_name} defined in both {owners[tool_name]} and {module_name}")
            owners[tool_name] = module_name
            handlers[tool_name] = func
            descriptors.append({
                "name": tool_name,
                "title": meta.get("title"),
                "description": meta.get("description"),
                "input_schema": input_schema(func),
            })
    logger.info(f"Total tools collected: {len(handlers)}")
    return descriptors, handlers
