"""
Seed script for initial data
Provides a few sample auction listings to bootstrap a development database.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Dict, Any, Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal, check_connection, init_db
from app.models import Auction, Bid

logger = logging.getLogger(__name__)


# Sample listings; expiry is days from now
SAMPLE_AUCTIONS: List[Dict[str, Any]] = [
    {"title": "Vintage Film Camera", "description": "35mm rangefinder, fully working", "startingBid": 120.0, "days": 7},
    {"title": "Oak Writing Desk", "description": "Solid oak, early 1900s", "startingBid": 250.0, "days": 5},
    {"title": "Signed First Edition", "description": "Hardback, signed on the title page", "startingBid": 80.0, "days": 10},
    {"title": "Mountain Bike", "description": None, "startingBid": 300.0, "days": 3},
]


def validate_database_connection() -> bool:
    """Validate database is accessible before seeding."""
    try:
        if not check_connection():
            logger.error("Database connection failed. Is the database running?")
            return False
        logger.info("Database connection verified")
        return True
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        logger.error("   Ensure DATABASE_URL is correctly configured")
        return False


def seed_data(db: Optional[Session] = None, force: bool = False) -> bool:
    """
    Seed sample auctions.

    Args:
        db: Session to use; a new one is opened (and closed) when omitted
        force: If True, seed even if auctions already exist

    Returns:
        True if anything was inserted, False otherwise
    """
    owns_session = db is None
    if owns_session:
        if not validate_database_connection():
            return False
        init_db()
        db = SessionLocal()

    try:
        if not force and db.query(Auction).count() > 0:
            logger.info("Auctions already exist. Use --force to reseed.")
            return False

        now = datetime.now(timezone.utc)
        for item in SAMPLE_AUCTIONS:
            db.add(Auction(
                title=item["title"],
                description=item["description"],
                startingBid=item["startingBid"],
                currentBid=0,
                expiryDate=now + timedelta(days=item["days"])
            ))
            logger.debug(f"   - {item['title']} (${item['startingBid']})")
        db.commit()

        logger.info(f"Seeded {len(SAMPLE_AUCTIONS)} auctions")
        return True

    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()


def clear_data(db: Optional[Session] = None) -> None:
    """Delete all bids and auctions."""
    owns_session = db is None
    if owns_session:
        db = SessionLocal()
    try:
        db.query(Bid).delete()
        db.query(Auction).delete()
        db.commit()
        logger.info("All auctions and bids cleared")
    except Exception:
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) > 1:
        if sys.argv[1] == "--force":
            seed_data(force=True)
        elif sys.argv[1] == "--clear":
            clear_data()
        elif sys.argv[1] == "--help":
            print("Usage: python -m app.seed [OPTIONS]")
            print("")
            print("Options:")
            print("  --force   Seed auctions even if some already exist")
            print("  --clear   Delete all auctions and bids")
            print("  --help    Show this help message")
        else:
            print(f"Unknown option: {sys.argv[1]}")
            print("Use --help for usage information")
            sys.exit(1)
    else:
        seed_data()
