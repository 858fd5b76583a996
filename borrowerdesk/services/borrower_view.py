"""Derived borrower table view.

Everything the table shows is a pure function of
``(snapshot, search_term, active_tab, page, page_size)``:

    snapshot -> filter_borrowers -> classify_tab (group_sort in Repeat)
             -> page_window -> style_rows -> BorrowerPage
"""
import logging
from typing import List, Sequence

from ..data_structures import Borrower, BorrowerPage, BorrowerRow
from .borrower_filters import classify_tab, filter_borrowers
from .pagination import page_count, page_window
from .row_banding import RowStyleCache, style_rows
from .snapshot import BorrowerSnapshot

logger = logging.getLogger(__name__)


def visible_sequence(borrowers: Sequence[Borrower], search_term: str, active_tab: str) -> List[Borrower]:
    """The filtered (and in the Repeat tab, grouped) sequence across all pages."""
    return classify_tab(filter_borrowers(borrowers, search_term), active_tab)


def derive_view(snapshot: BorrowerSnapshot, search_term: str, active_tab: str,
                page: int, page_size: int, style_cache: RowStyleCache = None) -> BorrowerPage:
    """Build the view-model for one render of the borrower table."""
    sequence = visible_sequence(snapshot.borrowers, search_term, active_tab)
    window = page_window(sequence, page, page_size)
    if style_cache is not None:
        styles = style_cache.get(active_tab, window)
    else:
        styles = style_rows(active_tab, window)
    rows = [BorrowerRow(borrower, style) for borrower, style in zip(window, styles)]
    return BorrowerPage(
        rows=rows,
        total=len(sequence),
        page=page,
        page_size=page_size,
        page_count=page_count(len(sequence), page_size),
        active_tab=active_tab,
        error=snapshot.error,
    )


class DerivedViewCache:
    """Single-entry memo for :func:`derive_view`.

    The key is ``(snapshot.version, search_term, active_tab, page,
    page_size)``. Snapshots are immutable and every reload bumps the
    version, so an equal key always means an equal result.
    """

    def __init__(self):
        self._key = None
        self._page = None
        self.style_cache = RowStyleCache()

    def get(self, snapshot: BorrowerSnapshot, search_term: str, active_tab: str,
            page: int, page_size: int) -> BorrowerPage:
        key = (snapshot.version, search_term, active_tab, page, page_size)
        if key != self._key:
            logger.debug("Deriving borrower view for %s", key)
            self._page = derive_view(snapshot, search_term, active_tab, page, page_size,
                                     style_cache=self.style_cache)
            self._key = key
        return self._page

    def clear(self):
        self._key = None
        self._page = None
        self.style_cache.clear()
