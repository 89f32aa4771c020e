"""Route-level page caching on top of Flask-Caching."""

from __future__ import annotations

from flask import request, session

from dashboard import cache

INVOICES_PATH = "/dashboard/invoices"
VIEW_KEY_PREFIX = "view/%s"


def route_cache_key(path: str) -> str:
    """Return the cache key Flask-Caching uses for a cached view at ``path``."""

    return VIEW_KEY_PREFIX % path


def skip_route_cache() -> bool:
    """Bypass the cache for requests whose page differs from the plain route.

    Only the bare route is cached so :func:`revalidate_path` has a single key
    to drop.  Pages with pending flash messages are rendered fresh, otherwise
    the message would be stored in the cached copy.
    """

    return bool(request.args) or bool(session.get("_flashes"))


def cached_route(timeout=None):
    """Cache a GET view under its request path."""

    return cache.cached(
        timeout=timeout, key_prefix=VIEW_KEY_PREFIX, unless=skip_route_cache
    )


def revalidate_path(path: str) -> None:
    """Mark the cached page at ``path`` stale so the next request rebuilds it."""

    cache.delete(route_cache_key(path))
