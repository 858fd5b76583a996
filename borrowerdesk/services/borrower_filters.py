"""Search, tab classification and grouping sort for the borrower list.

All functions are pure: they take the current snapshot rows and return new
lists without touching their input. Text fields are expected to be
normalized to ``str`` when the snapshot is loaded; a ``None`` field here is
a caller bug and fails loudly.
"""
import functools
import locale
from typing import List, Sequence

from ..data_structures import Borrower

TAB_ALL = "all"
TAB_REPEAT = "repeat"
TABS = (TAB_ALL, TAB_REPEAT)


def matches_search(borrower: Borrower, query: str) -> bool:
    """Check one borrower against the search box text.

    Name and reference number match case-insensitively; customer id and
    contact number are plain substring matches.
    """
    lowered = query.lower()
    return (
        lowered in borrower.full_name.lower()
        or query in borrower.customer_id
        or query in borrower.contact_no
        or lowered in borrower.ref_no.lower()
    )


def filter_borrowers(records: Sequence[Borrower], query: str) -> Sequence[Borrower]:
    """Return the borrowers matching ``query``.

    An empty query returns ``records`` itself, order untouched.
    """
    if not query:
        return records
    return [b for b in records if matches_search(b, query)]


def classify_tab(records: Sequence[Borrower], active_tab: str) -> List[Borrower]:
    """Narrow the search result to the rows shown in ``active_tab``.

    The All tab passes everything through. The Repeat tab keeps repeat
    customers only and groups them with :func:`group_sort`.
    """
    if active_tab == TAB_ALL:
        return list(records)
    if active_tab == TAB_REPEAT:
        return group_sort([b for b in records if b.is_repeat_customer])
    raise ValueError(f"Unknown tab: {active_tab!r}")


def compare_for_grouping(a: Borrower, b: Borrower) -> int:
    if a.customer_id == b.customer_id:
        return a.borrower_id - b.borrower_id
    order = locale.strcoll(a.customer_id, b.customer_id)
    if order == 0:
        # Collation may tie distinct ids; keep groups apart
        order = (a.customer_id > b.customer_id) - (a.customer_id < b.customer_id)
    return order


def group_sort(records: Sequence[Borrower]) -> List[Borrower]:
    """Sort so each customer's borrowers are contiguous.

    Customers are ordered by locale-aware comparison of customer_id, and
    a customer's borrowers by ascending borrower_id.
    """
    return sorted(records, key=functools.cmp_to_key(compare_for_grouping))
