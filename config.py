import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tripwell.db")

# Used for invite links and absolute URLs
APP_BASE_URL = os.getenv("APP_BASE_URL", "https://tripcrew.tripwell.app").rstrip("/")

# Single-tenant master container every traveler is linked to
ENTERPRISE_ID = os.getenv("ENTERPRISE_ID", "tripwell-enterprises-master-container")
ENTERPRISE_NAME = os.getenv("ENTERPRISE_NAME", "TripWell Enterprises")

FIREBASE_CREDENTIALS_PATH = os.getenv(
    "FIREBASE_CREDENTIALS_PATH",
    os.path.join(os.path.dirname(__file__), "serviceAccountKey.json"),
)

LOG_PATH = os.getenv("LOG_PATH")

# Invite codes and handles
JOIN_CODE_LENGTH = 6
JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O/1/I
JOIN_CODE_MAX_ATTEMPTS = 10
HANDLE_MAX_ATTEMPTS = 10
HANDLE_MAX_LENGTH = 50
HANDLE_PLACEHOLDER = "crew"
BOOTSTRAP_MAX_ATTEMPTS = 3
