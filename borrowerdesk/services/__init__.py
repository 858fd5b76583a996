"""Services package for BorrowerDesk business logic.

This package contains the record store facade, snapshot loading and the
pure functions that derive the borrower table from a snapshot.
"""

from .record_store import RecordStore
from .snapshot import BorrowerSnapshot, SnapshotLoader
from .borrower_filters import TAB_ALL, TAB_REPEAT, filter_borrowers, classify_tab, group_sort
from .pagination import page_window, page_count
from .row_banding import assign_run_colors, highlight_repeat_rows, style_rows, RowStyleCache
from .borrower_view import derive_view, DerivedViewCache
from .borrower_validation import validate_borrower_form

__all__ = ['RecordStore', 'BorrowerSnapshot', 'SnapshotLoader',
           'TAB_ALL', 'TAB_REPEAT', 'filter_borrowers', 'classify_tab', 'group_sort',
           'page_window', 'page_count',
           'assign_run_colors', 'highlight_repeat_rows', 'style_rows', 'RowStyleCache',
           'derive_view', 'DerivedViewCache', 'validate_borrower_form']
