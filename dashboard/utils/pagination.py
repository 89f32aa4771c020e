"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

from flask import request

PAGINATION_SIZES: Tuple[int, ...] = (10, 25, 50, 100)


def get_per_page(param: str = "per_page", default: int = 10) -> int:
    """Return a validated per-page value from the query string.

    Parameters
    ----------
    param:
        Query string parameter containing the requested page size.
    default:
        Fallback value used when the parameter is missing or invalid.

    Returns
    -------
    int
        A value from :data:`PAGINATION_SIZES`.
    """

    value = request.args.get(param, type=int)
    if value in PAGINATION_SIZES:
        return value
    if default in PAGINATION_SIZES:
        return default
    return PAGINATION_SIZES[0]


def build_pagination_args(
    per_page: int,
    *,
    page_param: str = "page",
    per_page_param: str = "per_page",
) -> Dict[str, Union[str, List[str]]]:
    """Assemble query arguments for pagination links.

    The current query string is preserved except for ``page_param``; the
    validated ``per_page`` value always wins.
    """

    args: Dict[str, Union[str, List[str]]] = {}
    for key, values in request.args.lists():
        if key in {page_param, per_page_param} or not values:
            continue
        args[key] = values[0] if len(values) == 1 else values
    args[per_page_param] = str(per_page)
    return args
