APP_TITLE = "Mags' Day"
DEFAULT_APP_ID = "default-mags-day-app"

VIEWS = ["dashboard", "schedules", "payments", "accomplishments", "settings"]
VIEW_LABELS = {
    "dashboard": "Dashboard",
    "schedules": "Schedules",
    "payments": "Payments",
    "accomplishments": "Triumphs",
    "settings": "Settings",
}
DEFAULT_VIEW = "dashboard"

THEMES = ["light", "dark"]
DEFAULT_THEME = "dark"

CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
}
DEFAULT_CURRENCY = "NGN"

SCHEDULES = "schedules"
PAYMENTS = "payments"
ACCOMPLISHMENTS = "accomplishments"
ENTRY_COLLECTIONS = [SCHEDULES, PAYMENTS, ACCOMPLISHMENTS]
NOTES_COLLECTION = "notes"
SETTINGS_COLLECTION = "settings"
SETTINGS_DOC_ID = "userSettings"

MIN_PASSWORD_LENGTH = 6
