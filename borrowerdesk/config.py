"""Centralized configuration for BorrowerDesk.

This module contains the page-size options, validation patterns, palette
definitions and other constants shared by the borrower listing services
and views.
"""

# =============================================================================
# PAGINATION
# =============================================================================

# Rows-per-page choices offered by the borrower table
PAGE_SIZE_OPTIONS = (5, 10, 25, 50)

# Rows per page on first start (before a preference is saved)
DEFAULT_PAGE_SIZE = 10

# Settings key for the persisted rows-per-page preference
PAGE_SIZE_SETTING = "borrowers_page_size"

# =============================================================================
# TABS / DEEP LINKS
# =============================================================================

# Query/filter token selecting the Repeat Customers tab
REPEAT_FILTER = "repeat_customers"

# Maximum rows requested from the store in one bulk fetch
FETCH_LIMIT = 1000

# =============================================================================
# VALIDATION
# =============================================================================

# Placeholder stored when a borrower has no email address
EMAIL_NOT_AVAILABLE = "N/A"

CONTACT_NO_PATTERN = r"[0-9]{10}"

EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"

# =============================================================================
# REFERENCE NUMBERS
# =============================================================================

# Borrower reference numbers look like BRW-0001
REF_NO_PREFIX = "BRW"
REF_NO_WIDTH = 4

# =============================================================================
# ROW BANDING PALETTES
# =============================================================================

# (background, hover background, border accent)
AMBER_SCHEME = ("#FFF9E6", "#FFF3CC", "#FFB300")
BLUE_SCHEME = ("#E8F4FF", "#D6ECFF", "#1E88E5")

# =============================================================================
# NOTIFICATIONS
# =============================================================================

# How long transient status-bar notifications stay visible (ms)
NOTIFICATION_TIMEOUT_MS = 4000
