import importlib
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from fastapi import FastAPI
from fastapi.routing import APIRoute

from shareit.types.module import Module

shareit_error_logger = logging.getLogger("shareit.error")

T = TypeVar("T")


def load_modules(modules_dir: Path, package: str) -> list[Module]:
    """
    Import every `<package>.<module>.endpoints_<module>` file found in `modules_dir` and return the `module` object they declare.

    Endpoints files not declaring a `module` are logged and ignored.
    """
    module_list: list[Module] = []
    for endpoints_file in sorted(modules_dir.glob("*/endpoints_*.py")):
        endpoint_module = importlib.import_module(
            f"{package}.{endpoints_file.parent.name}.{endpoints_file.stem}",
        )
        if hasattr(endpoint_module, "module"):
            module_list.append(endpoint_module.module)
        else:
            shareit_error_logger.error(
                f"Module {endpoints_file} does not declare a module. It won't be enabled.",
            )
    return module_list


def paginate(elements: Sequence[T], offset: int, size: int) -> list[T]:
    """
    Return the `size` elements starting at index `offset`.
    An offset beyond the end of the sequence gives an empty list.
    """
    if offset >= len(elements):
        return []
    return list(elements[offset : offset + size])


def use_route_path_as_operation_ids(app: FastAPI) -> None:
    """
    Simplify operation IDs so that generated API clients have simpler function names.

    The operation_id will have the format "method_path", like "get_users_{user_id}".

    See https://fastapi.tiangolo.com/advanced/path-operation-advanced-configuration/
    """
    for route in app.routes:
        if isinstance(route, APIRoute):
            # The operation_id should be unique.
            method = "_".join(route.methods)
            route.operation_id = method.lower() + route.path.replace("/", "_")
