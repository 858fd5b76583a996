from PyQt6.QtGui import QColor

THEME_SETTING = "app_theme"
LIGHT = "Light"
DARK = "Dark"


class Theme:
    LIGHT = {
        "bg_primary": "#F3F4F6",      # Window background
        "bg_secondary": "#FFFFFF",    # Table
        "text_primary": "#1F2937",
        "text_secondary": "#4B5563",
        "accent": "#3B82F6",
        "accent_hover": "#2563eb",
        "border": "#E5E7EB",
        "input_bg": "#FFFFFF",
        "table_header_bg": "#F9FAFB",
        "success": "#047857",         # "New Customer" status
        "warning": "#B45309",         # "Repeat Customer" status
        "danger": "#DC2626",
        "danger_bg": "#FEF2F2",
        "danger_border": "#FECACA",
    }

    DARK = {
        "bg_primary": "#111827",
        "bg_secondary": "#1F2937",
        "text_primary": "#F9FAFB",
        "text_secondary": "#9CA3AF",
        "accent": "#60A5FA",
        "accent_hover": "#3B82F6",
        "border": "#374151",
        "input_bg": "#374151",
        "table_header_bg": "#111827",
        "success": "#34D399",
        "warning": "#FBBF24",
        "danger": "#F87171",
        "danger_bg": "#3f1d1d",
        "danger_border": "#7f1d1d",
    }

    @classmethod
    def by_name(cls, name):
        return cls.DARK if name == DARK else cls.LIGHT


class ThemeManager:
    """Light/dark colour set of the borrower screens, persisted in settings."""

    def __init__(self, db_manager):
        self.db = db_manager
        self.current_theme_name = self.db.get_setting(THEME_SETTING, LIGHT)
        self.colors = Theme.by_name(self.current_theme_name)

    def set_theme(self, theme_name):
        self.db.set_setting(THEME_SETTING, theme_name)
        self.current_theme_name = theme_name
        self.colors = Theme.by_name(theme_name)

    def toggle_theme(self):
        self.set_theme(LIGHT if self.is_dark else DARK)
        return self.current_theme_name

    def get_color(self, key):
        return self.colors.get(key, "#ff0000")  # Red flags a missing key

    def qcolor(self, key):
        return QColor(self.get_color(key))

    @property
    def is_dark(self):
        return self.current_theme_name == DARK
