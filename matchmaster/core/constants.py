"""Global constants for the matchmaster application."""

# Firestore collection names
USERS_COLLECTION = "users"
TOURNAMENTS_COLLECTION = "tournaments"
MATCHES_COLLECTION = "matches"
ADMIN_LOGS_COLLECTION = "admin_logs"

# Store backends
STORE_BACKEND_FIRESTORE = "firestore"
STORE_BACKEND_MEMORY = "memory"

# Audit defaults
DEFAULT_ADMIN_NAME = "Unknown Admin"
DEFAULT_OVERRIDE_REASON = "No reason provided"

# Admin log browsing
ADMIN_LOG_PAGE_SIZE = 50
ADMIN_LOG_MAX_PAGE_SIZE = 200
