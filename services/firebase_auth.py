import os
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials

from config import FIREBASE_CREDENTIALS_PATH
from utils.logger import get_logger

logger = get_logger("services.firebase_auth")

# set once per process
_initialized = False


def initialize_firebase_admin() -> bool:
    """Initialise the Firebase Admin SDK from a service account file or ADC."""
    global _initialized
    if _initialized:
        return True

    try:
        if os.path.exists(FIREBASE_CREDENTIALS_PATH):
            firebase_admin.initialize_app(credentials.Certificate(FIREBASE_CREDENTIALS_PATH))
            _initialized = True
            logger.info("Firebase Admin initialised with %s", FIREBASE_CREDENTIALS_PATH)
        elif os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
            firebase_admin.initialize_app()
            _initialized = True
            logger.info("Firebase Admin initialised from GOOGLE_APPLICATION_CREDENTIALS")
        else:
            logger.warning("Firebase credentials not found at %s; token verification disabled",
                           FIREBASE_CREDENTIALS_PATH)
    except ValueError:
        # initialize_app was already called elsewhere in the process
        _initialized = True
    except Exception:
        logger.exception("Error initialising Firebase Admin")

    return _initialized


def verify_id_token(id_token: str) -> Optional[dict]:
    """Decoded token claims (uid, email, name, picture), or None if invalid."""
    if not id_token or not initialize_firebase_admin():
        return None

    try:
        return auth.verify_id_token(id_token)
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError):
        logger.warning("Rejected Firebase ID token")
        return None
    except Exception:
        logger.exception("Firebase token verification error")
        return None
