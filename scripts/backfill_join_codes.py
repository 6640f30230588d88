#!/usr/bin/env python3
"""
Register legacy TripCrew.join_code values in the join_codes registry.

Not required for old links to keep working (the resolver registers a
legacy code the first time it is looked up), but useful to migrate
everything in one pass.

Usage:
    python -m scripts.backfill_join_codes
"""
import models  # noqa: F401
from database import Base, SessionLocal, engine
from services.join_registry import backfill_legacy_join_codes
from utils.logger import setup_api_logger


def main():
    setup_api_logger()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        count = backfill_legacy_join_codes(db)
    finally:
        db.close()
    print(f"Backfilled {count} legacy join code(s)")
    return 0


if __name__ == "__main__":
    exit(main())
