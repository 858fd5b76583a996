"""UI State Manager for BorrowerDesk.

This module holds the list state of the Borrowers view: search text,
active tab, page and rows per page.
"""
from typing import Callable, Optional

from .config import DEFAULT_PAGE_SIZE, REPEAT_FILTER
from .services.borrower_filters import TAB_ALL, TAB_REPEAT, TABS
from .services.pagination import validate_page_size


class BorrowerListState:
    """Manages list state for the Borrowers view.

    Changing the search text, the active tab or the page size always
    returns to the first page.

    Attributes:
        search_term: Current search box text.
        active_tab: TAB_ALL or TAB_REPEAT.
        page: Zero-based page index.
        page_size: Rows per page, one of PAGE_SIZE_OPTIONS.
        on_changed: Callback invoked after any change.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, active_tab: str = TAB_ALL,
                 on_changed: Callable[['BorrowerListState'], None] = None):
        if active_tab not in TABS:
            raise ValueError(f"Unknown tab: {active_tab!r}")
        self._search_term = ""
        self._active_tab = active_tab
        self._page = 0
        self._page_size = validate_page_size(page_size)
        self.on_changed = on_changed

    @classmethod
    def from_filter(cls, filter_value: Optional[str], **kwargs) -> 'BorrowerListState':
        """Create a state from a deep-link filter value.

        ``"repeat_customers"`` opens the Repeat Customers tab; anything else
        opens All Borrowers.
        """
        tab = TAB_REPEAT if filter_value == REPEAT_FILTER else TAB_ALL
        return cls(active_tab=tab, **kwargs)

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def active_tab(self) -> str:
        return self._active_tab

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    def as_tuple(self):
        return (self._search_term, self._active_tab, self._page, self._page_size)

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed(self)

    def set_search_term(self, text: str) -> None:
        self._search_term = text or ""
        self._page = 0
        self._notify()

    def set_active_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab!r}")
        self._active_tab = tab
        self._page = 0
        self._notify()

    def set_page_size(self, page_size: int) -> None:
        self._page_size = validate_page_size(page_size)
        self._page = 0
        self._notify()

    def set_page(self, page: int) -> None:
        if page < 0:
            raise ValueError(f"Page must be >= 0, got {page}")
        self._page = page
        self._notify()

    def next_page(self) -> None:
        self.set_page(self._page + 1)

    def previous_page(self) -> None:
        if self._page > 0:
            self.set_page(self._page - 1)
