"""Utility functions for the invoice dashboard."""

from .numeric import coerce_amount, format_cents, to_cents
from .route_cache import revalidate_path

__all__ = [
    "coerce_amount",
    "format_cents",
    "to_cents",
    "revalidate_path",
]
