# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
JSON property trees.

A property tree is the decoded JSON body of a response: an ordered ``dict`` for
objects, a ``list`` for arrays, or a bare scalar. Remote Django views report
application errors inside a 200 response using a few well-known shapes, which
``check_django_error`` recognizes.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, MutableSequence
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import TreeCoercionError

if TYPE_CHECKING:
    from .http.models import HttpResponse

logger = logging.getLogger(__name__)

PropertyTree = Any
T = TypeVar("T")

_SCALARS = (str, int, float, bool)


def error_tree(message: str) -> dict[str, str]:
    return {"error": message}


def parse_property_tree(response: HttpResponse, url: str) -> PropertyTree:
    """
    Decode ``response`` into a property tree.

    A non-200 status is logged and turned into ``{"error": "Status <code> when getting <url>"}``
    so callers must inspect the tree. A 200 body that is not valid JSON is logged with
    its content and the decoding error is re-raised.
    """
    if response.code != 200:
        logger.error("When trying url [%s], received non-OK code %s", url, response.code)
        return error_tree(f"Status {response.code} when getting {url}")

    try:
        return json.loads(response.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error("error reading result of URL:\n\t%s", url)
        logger.error("response is:\n%s", response.text)
        raise


def ptree_has_child(tree: PropertyTree, name: str) -> bool:
    """True when ``name`` is a direct child of ``tree``."""
    return isinstance(tree, Mapping) and name in tree


def _child_text(tree: Mapping[str, Any], name: str) -> str:
    value = tree[name]
    if isinstance(value, str):
        return value
    return json.dumps(value)


def check_django_error(tree: PropertyTree | None) -> bool:
    """
    Check a property tree for upstream error shapes, logging what is found.

    Shapes are tested in order: ``info`` + ``traceback``, then ``djerror``, then
    ``error``. Returns True when an error was detected (or the tree is missing).
    """
    if tree is None:
        logger.error("JSON Error: null property tree")
        return True
    if ptree_has_child(tree, "info") and ptree_has_child(tree, "traceback"):
        logger.error("Django error: %s", _child_text(tree, "info"))
        logger.error("    traceback: %s", _child_text(tree, "traceback"))
        return True
    if ptree_has_child(tree, "djerror"):
        logger.error("Django error: %s", _child_text(tree, "djerror"))
        return True
    if ptree_has_child(tree, "error"):
        logger.error("HTTP Error: %s", _child_text(tree, "error"))
        return True
    return False


def _coerce_scalar(value: Any, element_type: Callable[[Any], T]) -> T:
    # Scalars keep their JSON spelling as text; numbers are never truncated.
    if element_type is str:
        return value if isinstance(value, str) else json.dumps(value)
    if element_type in (int, float) and isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if element_type is int and isinstance(value, float) and not value.is_integer():
        raise ValueError("number has a fractional part")
    return element_type(value)


def ptree_vector(
    tree: PropertyTree,
    out: MutableSequence[T],
    element_type: Callable[[Any], T] = str,
) -> int:
    """
    Append every direct child value of ``tree`` to ``out``, converted with ``element_type``.

    Meant for JSON arrays of uniform scalars; children are taken in the tree's own
    order (list items, or mapping values). Returns the number of values appended.
    Raises TreeCoercionError for nested children or values ``element_type`` rejects.
    """
    if isinstance(tree, Mapping):
        children = list(tree.values())
    elif isinstance(tree, list):
        children = list(tree)
    else:
        return 0

    converted: list[T] = []
    for index, value in enumerate(children):
        if value is not None and not isinstance(value, _SCALARS):
            raise TreeCoercionError(f"child {index} is not a scalar value: {type(value).__name__}")
        try:
            converted.append(_coerce_scalar(value, element_type))
        except (TypeError, ValueError) as exc:
            raise TreeCoercionError(f"child {index} ({value!r}) cannot be converted: {exc}") from exc

    out.extend(converted)
    return len(converted)


__all__ = [
    "PropertyTree",
    "check_django_error",
    "error_tree",
    "parse_property_tree",
    "ptree_has_child",
    "ptree_vector",
]
