# -----------------------------------------------------------------------------
# QUERY ENCODER
# Purpose: Flatten nested params (dicts, lists, scalars) into a form-encoded
# query string using bracket keys, the way PHP/jQuery style APIs expect them.
#
#     {"a": {"b": [1, 2]}, "c": "x y"}  ->  a[b][0]=1&a[b][1]=2&c=x+y
#
# Mapping keys are visited in sorted order and list items in index order,
# so the same input always produces the same string.
# -----------------------------------------------------------------------------

from collections.abc import Mapping
from functools import singledispatch
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

import httpx

Scalar = Union[str, int, float, bool, None]
ParamValue = Union[Scalar, List["ParamValue"], Mapping[str, "ParamValue"]]


def stringify(value: Any) -> str:
    """Canonical text for a scalar: booleans lowercase, None empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flat_key(path: List[str]) -> str:
    """
    Join a key path into one bracketed key.

    Example:
        ["a", "0", "c"] -> "a[0][c]"
        ["k"]           -> "k"
    """
    head, *rest = path
    return head + "".join(f"[{segment}]" for segment in rest)


@singledispatch
def _visit(value: Any, path: List[str], flat: Dict[str, str]) -> None:
    # Anything that is not a mapping or a list is a leaf
    flat[flat_key(path)] = stringify(value)


@_visit.register(Mapping)
def _visit_mapping(value: Mapping, path: List[str], flat: Dict[str, str]) -> None:
    for key in sorted(value, key=str):
        _visit(value[key], path + [str(key)], flat)


@_visit.register(list)
@_visit.register(tuple)
def _visit_sequence(value, path: List[str], flat: Dict[str, str]) -> None:
    for index, item in enumerate(value):
        _visit(item, path + [str(index)], flat)


def flatten_params(params: Mapping[str, ParamValue]) -> Dict[str, str]:
    """
    Flatten nested params into {flat_key: text}.

    Args:
        params: Top-level key -> scalar, list or mapping (nested freely)

    Returns:
        Flat map, insertion-ordered by traversal

    Example:
        flatten_params({"a": {"b": [1, 2]}})
        -> {"a[b][0]": "1", "a[b][1]": "2"}
    """
    flat: Dict[str, str] = {}
    for key in sorted(params, key=str):
        _visit(params[key], [str(key)], flat)
    return flat


def build_query(params: Optional[Mapping[str, ParamValue]]) -> str:
    """Encode nested params as a URL query string (without the leading '?')."""
    if not params:
        return ""
    return urlencode(flatten_params(params))


def append_query(url: str, params: Optional[Mapping[str, ParamValue]]) -> str:
    """
    Append encoded params to a URL that may already carry a query.

    Example:
        append_query("https://h/x?jsonp=jsonp", {"pn": 1})
        -> "https://h/x?jsonp=jsonp&pn=1"
    """
    query = build_query(params)
    if not query:
        return url

    separator = "&" if httpx.URL(url).query else "?"
    return f"{url}{separator}{query}"
