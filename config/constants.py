"""Constants used across the application."""

# Profile returned by the fixed-response backend
DEFAULT_FIXED_PROFILE = "Our great user profile"

BACKEND_FIXED = "fixed"
BACKEND_MEMORY = "memory"
BACKEND_POSTGRES = "postgres"
BACKENDS = (BACKEND_FIXED, BACKEND_MEMORY, BACKEND_POSTGRES)

# Retry tuning for connection-level database failures
DB_RETRY_ATTEMPTS = 2
DB_RETRY_BASE_DELAY = 0.5  # seconds, doubled per attempt
DB_RETRY_MAX_DELAY = 5.0
