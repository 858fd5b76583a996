"""Row colouring for the borrower table.

In the Repeat tab consecutive rows of one customer form a run, and runs
alternate between the amber and blue schemes. The scan covers only the
rows of the current page: every page starts with fresh state, so a
customer whose rows straddle a page boundary begins a new run on the next
page. Keep that page-local behaviour unless global colouring is requested.

In the All tab every repeat-customer row gets the amber highlight and
nothing alternates.
"""
from typing import List, Sequence, Tuple

from ..config import AMBER_SCHEME, BLUE_SCHEME
from ..data_structures import Borrower, RowStyle, EMPTY_STYLE
from .borrower_filters import TAB_ALL, TAB_REPEAT

AMBER = RowStyle(*AMBER_SCHEME)
BLUE = RowStyle(*BLUE_SCHEME)

# toggle == 1 selects the first scheme
REPEAT_SCHEMES = (AMBER, BLUE)


def assign_run_colors(window: Sequence[Borrower]) -> List[RowStyle]:
    """Alternate schemes per run of equal customer_id within ``window``."""
    styles = []
    last_customer_id = None
    toggle = 0
    for borrower in window:
        if not borrower.is_repeat_customer:
            styles.append(EMPTY_STYLE)
            continue
        if borrower.customer_id != last_customer_id:
            toggle = 1 - toggle
            last_customer_id = borrower.customer_id
        styles.append(REPEAT_SCHEMES[0] if toggle else REPEAT_SCHEMES[1])
    return styles


def highlight_repeat_rows(window: Sequence[Borrower]) -> List[RowStyle]:
    return [AMBER if b.is_repeat_customer else EMPTY_STYLE for b in window]


def style_rows(active_tab: str, window: Sequence[Borrower]) -> List[RowStyle]:
    if active_tab == TAB_REPEAT:
        return assign_run_colors(window)
    if active_tab == TAB_ALL:
        return highlight_repeat_rows(window)
    raise ValueError(f"Unknown tab: {active_tab!r}")


class RowStyleCache:
    """Memoizes :func:`style_rows` on ``(active_tab, window)``.

    Only the most recent key is kept; a new tab or different window
    contents recompute the styles.
    """

    def __init__(self):
        self._key = None
        self._styles: Tuple[RowStyle, ...] = ()
        self.hits = 0
        self.misses = 0

    def get(self, active_tab: str, window: Sequence[Borrower]) -> Tuple[RowStyle, ...]:
        key = (active_tab, tuple(window))
        if key == self._key:
            self.hits += 1
            return self._styles
        self.misses += 1
        self._styles = tuple(style_rows(active_tab, window))
        self._key = key
        return self._styles

    def clear(self):
        self._key = None
        self._styles = ()
