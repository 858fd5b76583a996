from typing import Optional, Sequence

from PyQt6.QtWidgets import (QDialog, QFormLayout, QLineEdit, QPushButton,
                             QVBoxLayout, QHBoxLayout, QLabel, QComboBox,
                             QPlainTextEdit, QCompleter)
from PyQt6.QtCore import Qt

from .data_structures import Borrower, BorrowerFormData, Customer
from .services.borrower_validation import validate_borrower_form

ERROR_STYLE = "color: #dc3545; font-size: 11px;"
ERROR_BORDER = "border: 1px solid #dc3545;"


class BorrowerDialog(QDialog):
    """Dialog for adding/editing a borrower with inline validation.

    Choosing a customer copies its name, phone, email and address into the
    form; clearing the choice clears those fields.
    """

    FIELDS = ("customer_id", "full_name", "contact_no", "email", "address")

    def __init__(self, parent=None, customers: Sequence[Customer] = (), borrower: Optional[Borrower] = None):
        super().__init__(parent)
        self.customers = list(customers)
        self.borrower = borrower
        self.setWindowTitle("Edit Borrower" if borrower else "Add New Borrower")
        self.setMinimumWidth(480)
        self.layout = QFormLayout(self)
        self._inputs = {}
        self._errors = {}

        # Customer chooser with type-ahead
        self.customer_combo = QComboBox()
        self.customer_combo.setEditable(True)
        self.customer_combo.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        self.customer_combo.addItem("", None)
        for customer in self.customers:
            self.customer_combo.addItem(customer.display_label, customer.customer_id)
        completer = self.customer_combo.completer()
        completer.setFilterMode(Qt.MatchFlag.MatchContains)
        completer.setCompletionMode(QCompleter.CompletionMode.PopupCompletion)
        self.customer_combo.lineEdit().setPlaceholderText("Select Customer")
        self._add_row("Customer:", "customer_id", self.customer_combo)

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Enter full name")
        self._add_row("Full Name:", "full_name", self.name_input)

        self.contact_input = QLineEdit()
        self.contact_input.setPlaceholderText("10-digit number")
        self.contact_input.setMaxLength(10)
        self._add_row("Contact Number:", "contact_no", self.contact_input)

        self.email_input = QLineEdit()
        self.email_input.setPlaceholderText("Optional")
        self._add_row("Email:", "email", self.email_input)

        self.address_input = QPlainTextEdit()
        self.address_input.setFixedHeight(70)
        self._add_row("Address:", "address", self.address_input)

        if borrower:
            self._load_form(BorrowerFormData.from_borrower(borrower))
            self._preselect_customer(borrower.customer_id)

        self.customer_combo.currentIndexChanged.connect(self._on_customer_changed)
        self.name_input.textChanged.connect(lambda: self.clear_error("full_name"))
        self.contact_input.textChanged.connect(lambda: self.clear_error("contact_no"))
        self.email_input.textChanged.connect(lambda: self.clear_error("email"))
        self.address_input.textChanged.connect(lambda: self.clear_error("address"))

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self.reject)
        self.save_btn = QPushButton("Update" if borrower else "Add")
        self.save_btn.setDefault(True)
        self.save_btn.clicked.connect(self.validate_and_accept)
        btn_layout.addWidget(self.cancel_btn)
        btn_layout.addWidget(self.save_btn)
        self.layout.addRow(btn_layout)

    def _add_row(self, label, field, widget):
        error = QLabel()
        error.setStyleSheet(ERROR_STYLE)
        error.setWordWrap(True)
        error.hide()

        field_layout = QVBoxLayout()
        field_layout.setSpacing(2)
        field_layout.addWidget(widget)
        field_layout.addWidget(error)
        self.layout.addRow(label, field_layout)
        self._inputs[field] = widget
        self._errors[field] = error

    def _preselect_customer(self, customer_id):
        idx = self.customer_combo.findData(customer_id)
        self.customer_combo.blockSignals(True)
        self.customer_combo.setCurrentIndex(idx if idx >= 0 else 0)
        self.customer_combo.blockSignals(False)

    def selected_customer(self) -> Optional[Customer]:
        customer_id = self.customer_combo.currentData()
        for customer in self.customers:
            if customer.customer_id == customer_id:
                return customer
        return None

    def _on_customer_changed(self, _index):
        self._load_form(BorrowerFormData.from_customer(self.selected_customer()))
        self.clear_error("customer_id")

    def _load_form(self, data: BorrowerFormData):
        self.name_input.setText(data.full_name)
        self.contact_input.setText(data.contact_no)
        self.email_input.setText(data.email)
        self.address_input.setPlainText(data.address)

    def show_errors(self, errors):
        for field in self.FIELDS:
            if field in errors:
                self._errors[field].setText(errors[field])
                self._errors[field].show()
                self._inputs[field].setStyleSheet(ERROR_BORDER)
            else:
                self.clear_error(field)

    def clear_error(self, field):
        self._errors[field].hide()
        self._inputs[field].setStyleSheet("")

    def validate_and_accept(self):
        """Validate all fields before accepting the dialog."""
        errors = validate_borrower_form(self.get_data().as_dict())
        self.show_errors(errors)
        if not errors:
            self.accept()

    def get_data(self) -> BorrowerFormData:
        customer_id = self.customer_combo.currentData()
        return BorrowerFormData(
            customer_id=str(customer_id) if customer_id is not None else "",
            full_name=self.name_input.text().strip(),
            contact_no=self.contact_input.text().strip(),
            address=self.address_input.toPlainText().strip(),
            email=self.email_input.text().strip(),
        )
