"""Offset pagination over the filtered borrower sequence."""
import math
from typing import Sequence, TypeVar

from ..config import PAGE_SIZE_OPTIONS

T = TypeVar('T')


def validate_page_size(page_size: int) -> int:
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ValueError(f"Page size must be one of {PAGE_SIZE_OPTIONS}, got {page_size!r}")
    return page_size


def page_window(sequence: Sequence[T], page: int, page_size: int) -> Sequence[T]:
    """Return ``sequence[page*page_size : page*page_size + page_size]``.

    A page past the end yields an empty window.
    """
    if page < 0:
        raise ValueError(f"Page must be >= 0, got {page}")
    validate_page_size(page_size)
    start = page * page_size
    return sequence[start:start + page_size]


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Last valid page for ``total`` rows when ``page`` runs past the end."""
    return max(0, min(page, page_count(total, page_size) - 1))
