"""Borrowers view for BorrowerDesk."""
import logging

from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                             QTableWidget, QTableWidgetItem, QLineEdit, QTabBar,
                             QComboBox, QHeaderView, QFrame, QFileDialog, QAbstractItemView)
from PyQt6.QtGui import QColor
from PyQt6.QtCore import Qt, QThread, pyqtSignal

from ..config import PAGE_SIZE_OPTIONS, PAGE_SIZE_SETTING, DEFAULT_PAGE_SIZE
from ..dialogs import BorrowerDialog
from ..exceptions import BorrowerDeskError
from ..theme import ThemeManager
from ..ui_state_manager import BorrowerListState
from ..borrower_action_controller import BorrowerActionController
from ..services import RecordStore, SnapshotLoader, DerivedViewCache, derive_view, TAB_ALL, TAB_REPEAT
from ..services.borrower_export import export_rows
from ..services.pagination import clamp_page

logger = logging.getLogger(__name__)

TAB_ORDER = (TAB_ALL, TAB_REPEAT)
COLUMNS = ["", "Ref No", "Customer ID", "Full Name", "Contact", "Address", "Status", "Actions"]
ACCENT_COL = 0
ACTIONS_COL = len(COLUMNS) - 1


def saved_page_size(db):
    try:
        value = int(db.get_setting(PAGE_SIZE_SETTING, DEFAULT_PAGE_SIZE))
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return value if value in PAGE_SIZE_OPTIONS else DEFAULT_PAGE_SIZE


class SnapshotWorker(QThread):
    """Background worker loading a borrower snapshot."""
    loaded = pyqtSignal(object)  # BorrowerSnapshot

    def __init__(self, loader, invalidate=False):
        super().__init__()
        self.loader = loader
        self.invalidate = invalidate

    def run(self):
        if self.invalidate:
            snapshot = self.loader.invalidate_and_refetch()
        else:
            snapshot = self.loader.load()
        self.loaded.emit(snapshot)


class BorrowersView(QWidget):
    """Borrower table with search, All/Repeat tabs, pagination and row banding."""

    def __init__(self, main_window, db_manager, db_path, initial_filter=None):
        super().__init__()
        self.main_window = main_window
        self.db = db_manager
        self.theme_manager = ThemeManager(self.db)
        self.store = RecordStore(self.db)
        self.loader = SnapshotLoader.for_database(db_path)
        self.view_cache = DerivedViewCache()
        self.state = BorrowerListState.from_filter(
            initial_filter, page_size=saved_page_size(self.db), on_changed=self._on_state_changed)
        self.controller = BorrowerActionController(
            self.store,
            self,
            notify=getattr(main_window, "notify", None),
            on_refresh=self.invalidate_and_refetch,
            customers_getter=lambda: self.loader.snapshot.customers
        )
        self.current_page = None
        self._row_styles = []
        self._hover_row = -1
        self._workers = []

        self.create_widgets()
        self.apply_theme()
        self.render()

    def create_widgets(self):
        self.setObjectName("borrowersView")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(30, 20, 30, 20)
        layout.setSpacing(14)

        # --- HEADER ---
        header_layout = QHBoxLayout()
        self.title_label = QLabel("Borrowers")
        header_layout.addWidget(self.title_label)
        header_layout.addStretch()
        self.add_btn = QPushButton("+ Add Borrower")
        self.add_btn.setFixedHeight(36)
        self.add_btn.clicked.connect(self.add_borrower)
        header_layout.addWidget(self.add_btn)
        layout.addLayout(header_layout)

        # --- TABS ---
        self.tab_bar = QTabBar()
        self.tab_bar.addTab("All Borrowers")
        self.tab_bar.addTab("Repeat Customers")
        self.tab_bar.setCurrentIndex(TAB_ORDER.index(self.state.active_tab))
        self.tab_bar.currentChanged.connect(self._on_tab_changed)
        layout.addWidget(self.tab_bar)

        # --- SEARCH ---
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText(
            "Search borrowers by name, customer ID, contact, or reference number...")
        self.search_input.setMinimumHeight(40)
        self.search_input.textChanged.connect(self.state.set_search_term)
        layout.addWidget(self.search_input)

        # --- STATUS LINES ---
        self.loading_label = QLabel("Loading borrowers...")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.hide()
        layout.addWidget(self.loading_label)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        layout.addWidget(self.error_label)

        # --- TABLE ---
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.table.setMouseTracking(True)
        self.table.cellEntered.connect(self._on_cell_entered)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(ACCENT_COL, QHeaderView.ResizeMode.Fixed)
        self.table.setColumnWidth(ACCENT_COL, 4)
        header.setSectionResizeMode(ACTIONS_COL, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setFrameShape(QFrame.Shape.NoFrame)
        layout.addWidget(self.table, 1)

        # --- PAGINATION ---
        pager = QHBoxLayout()
        pager.addStretch()
        pager.addWidget(QLabel("Rows per page:"))
        self.page_size_combo = QComboBox()
        for size in PAGE_SIZE_OPTIONS:
            self.page_size_combo.addItem(str(size), size)
        self.page_size_combo.setCurrentIndex(PAGE_SIZE_OPTIONS.index(self.state.page_size))
        self.page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)
        pager.addWidget(self.page_size_combo)

        self.range_label = QLabel("0-0 of 0")
        pager.addWidget(self.range_label)

        self.prev_btn = QPushButton("<")
        self.prev_btn.setFixedWidth(32)
        self.prev_btn.clicked.connect(self.state.previous_page)
        self.next_btn = QPushButton(">")
        self.next_btn.setFixedWidth(32)
        self.next_btn.clicked.connect(self.state.next_page)
        pager.addWidget(self.prev_btn)
        pager.addWidget(self.next_btn)
        layout.addLayout(pager)

    def apply_theme(self):
        t = self.theme_manager
        self.setStyleSheet(f"QWidget#borrowersView {{ background-color: {t.get_color('bg_primary')}; }}")
        self.title_label.setStyleSheet(f"font-size: 22px; font-weight: bold; color: {t.get_color('text_primary')};")
        self.add_btn.setStyleSheet(f"""
            QPushButton {{ background-color: {t.get_color('accent')}; color: white; font-weight: 600; padding: 6px 18px; border-radius: 6px; border: none; }}
            QPushButton:hover {{ background-color: {t.get_color('accent_hover')}; }}
        """)
        self.search_input.setStyleSheet(f"""
            QLineEdit {{ background-color: {t.get_color('input_bg')}; border: 1px solid {t.get_color('border')}; border-radius: 8px; padding: 0 12px; font-size: 14px; }}
        """)
        self.table.setStyleSheet(f"""
            QTableWidget {{ background-color: {t.get_color('bg_secondary')}; gridline-color: {t.get_color('border')}; }}
            QHeaderView::section {{ background-color: {t.get_color('table_header_bg')}; color: {t.get_color('text_secondary')}; font-weight: 600; border: none; padding: 6px; }}
        """)
        self.error_label.setStyleSheet(f"""
            background-color: {t.get_color('danger_bg')}; color: {t.get_color('danger')};
            border: 1px solid {t.get_color('danger_border')}; border-radius: 6px; padding: 10px;
        """)
        self.loading_label.setStyleSheet(f"color: {t.get_color('text_secondary')}; font-size: 14px;")

    # --- Loading ---
    def refresh(self):
        """Load a snapshot in the background; the newest load wins."""
        self._start_worker(invalidate=False)

    def invalidate_and_refetch(self):
        self._start_worker(invalidate=True)

    def _start_worker(self, invalidate):
        self.loading_label.show()
        worker = SnapshotWorker(self.loader, invalidate=invalidate)
        worker.loaded.connect(self._on_snapshot_loaded)
        worker.finished.connect(lambda w=worker: self._workers.remove(w))
        self._workers.append(worker)
        worker.start()

    def _on_snapshot_loaded(self, snapshot):
        if snapshot is not self.loader.snapshot:
            logger.debug("Ignoring superseded snapshot v%d", snapshot.version)
            return
        self.loading_label.hide()
        self.render()

    # --- State changes ---
    def _on_tab_changed(self, index):
        self.state.set_active_tab(TAB_ORDER[index])

    def _on_page_size_changed(self, _index):
        size = self.page_size_combo.currentData()
        try:
            self.db.set_setting(PAGE_SIZE_SETTING, size)
        except BorrowerDeskError as e:
            logger.warning("Could not save page size: %s", e)
        self.state.set_page_size(size)

    def _on_state_changed(self, _state):
        self.render()

    # --- Rendering ---
    def render(self):
        snapshot = self.loader.snapshot
        s = self.state
        page = self.view_cache.get(snapshot, s.search_term, s.active_tab, s.page, s.page_size)
        if s.page > 0 and s.page >= page.page_count:
            # The list shrank under the current page (e.g. after a delete)
            s.set_page(clamp_page(s.page, page.total, s.page_size))
            return
        self.current_page = page

        if page.error:
            self.error_label.setText(page.error)
            self.error_label.show()
            self.table.hide()
        else:
            self.error_label.hide()
            self.table.show()

        self._fill_table(page)
        self.range_label.setText(page.range_label)
        self.prev_btn.setEnabled(page.has_previous)
        self.next_btn.setEnabled(page.has_next)

    def _fill_table(self, page):
        t = self.theme_manager
        self._hover_row = -1
        self._row_styles = [row.style for row in page.rows]
        self.table.setRowCount(len(page.rows))
        for i, row in enumerate(page.rows):
            b = row.borrower
            contact = b.contact_no
            if b.display_email:
                contact += f"\n{b.display_email}"
            status_item = QTableWidgetItem(row.status_label)
            status_item.setForeground(t.qcolor('warning' if b.is_repeat_customer else 'success'))

            self.table.setItem(i, ACCENT_COL, QTableWidgetItem(""))
            ref_item = QTableWidgetItem(b.ref_no)
            font = ref_item.font()
            font.setBold(True)
            ref_item.setFont(font)
            self.table.setItem(i, 1, ref_item)
            self.table.setItem(i, 2, QTableWidgetItem(b.customer_id))
            self.table.setItem(i, 3, QTableWidgetItem(b.full_name))
            self.table.setItem(i, 4, QTableWidgetItem(contact))
            self.table.setItem(i, 5, QTableWidgetItem(b.address))
            self.table.setItem(i, 6, status_item)
            self.table.setCellWidget(i, ACTIONS_COL, self._action_buttons(b))
            self._paint_row(i, row.style.background)
        self.table.resizeRowsToContents()

    def _action_buttons(self, borrower):
        cell = QWidget()
        cell_layout = QHBoxLayout(cell)
        cell_layout.setContentsMargins(4, 0, 4, 0)
        edit_btn = QPushButton("Edit")
        edit_btn.clicked.connect(lambda: self.edit_borrower(borrower))
        delete_btn = QPushButton("Delete")
        delete_btn.setStyleSheet(f"color: {self.theme_manager.get_color('danger')};")
        delete_btn.clicked.connect(lambda: self.delete_borrower(borrower))
        cell_layout.addWidget(edit_btn)
        cell_layout.addWidget(delete_btn)
        return cell

    def _paint_row(self, row_idx, background):
        style = self._row_styles[row_idx]
        if style.is_empty:
            return
        color = QColor(background)
        for col in range(ACTIONS_COL):
            item = self.table.item(row_idx, col)
            if item:
                item.setBackground(color)
        self.table.item(row_idx, ACCENT_COL).setBackground(QColor(style.border_accent))

    def _on_cell_entered(self, row_idx, _col):
        if row_idx == self._hover_row:
            return
        if 0 <= self._hover_row < len(self._row_styles):
            self._paint_row(self._hover_row, self._row_styles[self._hover_row].background)
        self._hover_row = row_idx
        if 0 <= row_idx < len(self._row_styles):
            self._paint_row(row_idx, self._row_styles[row_idx].hover_background)

    # --- Actions ---
    def add_borrower(self):
        self.controller.add_borrower(BorrowerDialog)

    def edit_borrower(self, borrower):
        self.controller.edit_borrower(borrower, BorrowerDialog)

    def delete_borrower(self, borrower):
        self.controller.delete_borrower(borrower)

    def all_rows(self):
        """Rows of every page, each page banded the way it is displayed."""
        snapshot = self.loader.snapshot
        s = self.state
        first = derive_view(snapshot, s.search_term, s.active_tab, 0, s.page_size)
        rows = list(first.rows)
        for page in range(1, first.page_count):
            rows.extend(derive_view(snapshot, s.search_term, s.active_tab, page, s.page_size).rows)
        return rows

    def export_view(self, all_pages=False):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Borrowers", "borrowers.xlsx", "Excel Files (*.xlsx);;CSV Files (*.csv)")
        if not path:
            return
        rows = self.all_rows() if all_pages else (self.current_page.rows if self.current_page else [])
        success, message = export_rows(rows, path)
        notify = getattr(self.main_window, "notify", None)
        if notify:
            notify(message, "success" if success else "error")
