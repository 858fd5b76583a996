"""Main application window for BorrowerDesk."""
import argparse
import locale
import logging
import os
import sys

from PyQt6.QtWidgets import (QApplication, QMainWindow, QMessageBox, QDialog,
                             QVBoxLayout, QPushButton, QLabel, QFileDialog)
from PyQt6.QtGui import QIcon, QAction, QKeySequence
from PyQt6.QtCore import Qt

from .config import NOTIFICATION_TIMEOUT_MS
from .database import DatabaseManager
from .exceptions import BorrowerDeskError
from .views.borrowers import BorrowersView

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "BORROWERDESK_LOG_LEVEL"


class StartupDialog(QDialog):
    """Dialog to select or create a database file."""
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BorrowerDesk - Select Database")
        self.setFixedSize(400, 200)
        self.selected_db = None

        layout = QVBoxLayout(self)
        layout.setSpacing(15)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = QLabel("Welcome to BorrowerDesk")
        title.setStyleSheet("font-size: 18px; font-weight: bold; color: #2b5797;")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        subtitle = QLabel("Please select a borrower database to continue:")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(subtitle)

        btn_new = QPushButton("Create New Database")
        btn_new.setMinimumHeight(40)
        btn_new.clicked.connect(self.create_new)
        layout.addWidget(btn_new)

        btn_open = QPushButton("Open Existing Database")
        btn_open.setMinimumHeight(40)
        btn_open.clicked.connect(self.open_existing)
        layout.addWidget(btn_open)

    def create_new(self):
        path, _ = QFileDialog.getSaveFileName(self, "Create New Database", "borrowers.db", "Database Files (*.db)")
        if path:
            if not path.endswith('.db'):
                path += '.db'
            self.selected_db = path
            self.accept()

    def open_existing(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Existing Database", "", "Database Files (*.db)")
        if path:
            self.selected_db = path
            self.accept()


class MainApp(QMainWindow):
    """Main application window."""

    def __init__(self, db_path, initial_filter=None):
        super().__init__()
        self.setWindowTitle(f"BorrowerDesk - [{db_path}]")
        self.resize(1200, 720)

        if getattr(sys, 'frozen', False):
            base_path = os.path.dirname(sys.executable)
        else:
            base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        icon_path = os.path.join(base_path, "resources", "icon.png")
        if os.path.exists(icon_path):
            self.setWindowIcon(QIcon(icon_path))

        self.db = DatabaseManager(db_path)
        self.borrowers_view = BorrowersView(self, self.db, db_path, initial_filter=initial_filter)
        self.setCentralWidget(self.borrowers_view)

        self.create_menus()
        self.borrowers_view.refresh()

    def create_menus(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        import_action = QAction("Import Customers...", self)
        import_action.triggered.connect(self.import_customers)
        file_menu.addAction(import_action)

        export_page_action = QAction("Export Current Page...", self)
        export_page_action.triggered.connect(lambda: self.borrowers_view.export_view(all_pages=False))
        file_menu.addAction(export_page_action)

        export_all_action = QAction("Export All Rows...", self)
        export_all_action.triggered.connect(lambda: self.borrowers_view.export_view(all_pages=True))
        file_menu.addAction(export_all_action)

        file_menu.addSeparator()
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        view_menu = menubar.addMenu("View")
        refresh_action = QAction("Refresh", self)
        refresh_action.setShortcut(QKeySequence("F5"))
        refresh_action.triggered.connect(self.borrowers_view.invalidate_and_refetch)
        view_menu.addAction(refresh_action)

        theme_action = QAction("Toggle Dark Mode", self)
        theme_action.triggered.connect(self.toggle_theme)
        view_menu.addAction(theme_action)

    def notify(self, message, level="success"):
        """Show a transient notification in the status bar."""
        color = "#B91C1C" if level == "error" else "#047857"
        self.statusBar().setStyleSheet(f"color: {color}; font-weight: 600;")
        self.statusBar().showMessage(message, NOTIFICATION_TIMEOUT_MS)

    def toggle_theme(self):
        try:
            self.borrowers_view.theme_manager.toggle_theme()
        except BorrowerDeskError as e:
            logger.error("Theme change failed: %s", e)
            self.notify(e.message, "error")
            return
        self.borrowers_view.apply_theme()
        self.borrowers_view.render()

    def import_customers(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import Customers", "", "CSV Files (*.csv)")
        if not path:
            return
        try:
            stats = self.db.import_customers_csv(path)
        except BorrowerDeskError as e:
            logger.error("Customer import failed: %s", e)
            QMessageBox.warning(self, "Import Failed", e.message)
            return
        self.notify(f"Imported {stats['imported']} customers ({stats['skipped']} skipped)")
        self.borrowers_view.invalidate_and_refetch()

    def closeEvent(self, event):
        """Confirm before exiting."""
        reply = QMessageBox.question(self, "Exit", "Are you sure you want to exit?",
                                    QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                    QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes:
            self.db.close()
            event.accept()
        else:
            event.ignore()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="borrowerdesk", description="Borrower listing dashboard")
    parser.add_argument("--db", help="Borrower database file; prompts when omitted")
    parser.add_argument("--filter", default="",
                        help="Initial list filter, e.g. 'repeat_customers' opens the Repeat Customers tab")
    args, _qt_args = parser.parse_known_args(argv)
    return args


def configure_logging():
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def configure_collation():
    """Collate customer ids with the user's locale."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("Using default collation: %s", e)


def main(argv=None):
    """Entry point for the application."""
    configure_logging()
    configure_collation()
    args = parse_args(sys.argv[1:] if argv is None else argv)
    app = QApplication(sys.argv)

    db_path = args.db
    if not db_path:
        dialog = StartupDialog()
        if dialog.exec() != QDialog.DialogCode.Accepted or not dialog.selected_db:
            sys.exit(0)
        db_path = dialog.selected_db

    logger.info("Opening %s", db_path)
    window = MainApp(db_path, initial_filter=args.filter)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
