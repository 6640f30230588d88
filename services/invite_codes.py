"""
Invite code and crew handle generation.

Codes are short, uppercase and typable (no 0/O/1/I). Handles are URL slugs
derived from the crew name. Both are checked against existing rows and
retried a bounded number of times before falling back to a clock-derived
value, so generation always terminates.
"""
import re
import secrets
import threading
import time
from typing import Callable

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import (
    JOIN_CODE_ALPHABET,
    JOIN_CODE_LENGTH,
    JOIN_CODE_MAX_ATTEMPTS,
    HANDLE_MAX_ATTEMPTS,
    HANDLE_MAX_LENGTH,
    HANDLE_PLACEHOLDER,
)
from models.JoinCode import JoinCode
from models.TripCrew import TripCrew
from utils.logger import get_logger

logger = get_logger("services.invite_codes")

_HANDLE_RE = re.compile(r"^[a-z0-9-]+$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

_clock_lock = threading.Lock()
_last_tick = 0


def _next_tick() -> int:
    """Millisecond clock read that never repeats or goes backwards in-process."""
    global _last_tick
    with _clock_lock:
        _last_tick = max(int(time.time() * 1000), _last_tick + 1)
        return _last_tick


def _encode(value: int, alphabet: str) -> str:
    base = len(alphabet)
    out = []
    while value:
        value, rem = divmod(value, base)
        out.append(alphabet[rem])
    return "".join(reversed(out)) or alphabet[0]


def random_join_code(length: int = JOIN_CODE_LENGTH) -> str:
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def fallback_join_code(length: int = JOIN_CODE_LENGTH) -> str:
    encoded = _encode(_next_tick(), JOIN_CODE_ALPHABET)
    return encoded[-length:].rjust(length, JOIN_CODE_ALPHABET[0])


def generate_join_code(is_taken: Callable[[str], bool]) -> str:
    """
    Draw random codes until one is not taken, up to JOIN_CODE_MAX_ATTEMPTS.
    After that, return a code derived from the clock.
    """
    for _ in range(JOIN_CODE_MAX_ATTEMPTS):
        code = random_join_code()
        if not is_taken(code):
            return code

    code = fallback_join_code()
    logger.warning("Join code collisions exhausted %s attempts, using clock fallback %s",
                   JOIN_CODE_MAX_ATTEMPTS, code)
    return code


def join_code_taken(db: Session, code: str) -> bool:
    # Legacy codes count too: they get registered lazily on first lookup
    if db.query(JoinCode.id).filter(JoinCode.code == code).first():
        return True
    return db.query(TripCrew.id).filter(
        func.upper(TripCrew.join_code) == code.upper()
    ).first() is not None


def generate_unique_join_code(db: Session) -> str:
    return generate_join_code(lambda code: join_code_taken(db, code))


# ---------- Handles ----------

def slugify(name: str | None) -> str:
    """
    "Cole Family Travel Crew" -> "cole-family-travel-crew"

    Never returns an empty string, and never a single character (which
    would not be recognised as a handle when resolving).
    """
    slug = _NON_ALNUM_RE.sub("-", (name or "").strip().lower()).strip("-")
    slug = slug[:HANDLE_MAX_LENGTH].rstrip("-")
    if not slug:
        return HANDLE_PLACEHOLDER
    if len(slug) < 2:
        return f"{slug}-{HANDLE_PLACEHOLDER}"
    return slug


def looks_like_handle(value: str) -> bool:
    return len(value) >= 2 and value == value.lower() and bool(_HANDLE_RE.match(value))


def _time_suffix() -> str:
    return _encode(_next_tick(), _BASE36)


def generate_handle(name: str | None, is_taken: Callable[[str], bool]) -> str:
    base = slugify(name)
    candidate = base
    for _ in range(HANDLE_MAX_ATTEMPTS):
        if not is_taken(candidate):
            return candidate
        candidate = f"{base}-{_time_suffix()[-6:]}"

    candidate = f"{base}-{_time_suffix()}"
    logger.warning("Handle collisions exhausted %s attempts for %r, using %s",
                   HANDLE_MAX_ATTEMPTS, base, candidate)
    return candidate


def handle_taken(db: Session, handle: str) -> bool:
    return db.query(TripCrew.id).filter(TripCrew.handle == handle).first() is not None


def generate_unique_handle(db: Session, name: str | None) -> str:
    return generate_handle(name, lambda handle: handle_taken(db, handle))
