"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_TTL_MINUTES = 10
DEFAULT_CODE_MAX_ATTEMPTS = 5
DEFAULT_MAX_DISTANCE_METERS = 3000.0
DEFAULT_PORT = 3000

SESSION_CODE_BYTES = 3
FINGERPRINT_LENGTH = 32

UNKNOWN_CLIENT = "unknown"
PRESENT_STATUS = "Present"

# Column widths in database/schema.sql.
MAX_NAME_LENGTH = 120
MAX_ROLL_NO_LENGTH = 64
MAX_CLIENT_IP_LENGTH = 64
MAX_USER_AGENT_LENGTH = 512
