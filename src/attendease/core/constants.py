"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CANCELLATION_LOCK_MINUTES = 30
OPEN_SESSION_GRACE_MINUTES = 30

PURCHASE_LOCATION = "Online Store"
PACKAGE_LABEL_PREFIX = "Package: "

DEFAULT_STORAGE_KEY = "attendease_v3_db"

GENERATED_PASSWORD_LENGTH = 8
PASSWORD_SYMBOLS = "!@#$%^&*"
