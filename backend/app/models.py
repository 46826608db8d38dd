"""
SQLAlchemy ORM Models for the auction site
Users, auction listings and the bids placed on them.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered users (email + bcrypt hash)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash, never plaintext


class Auction(Base):
    """Auction listings"""
    __tablename__ = "auction_lists"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    startingBid = Column(Float, nullable=False)
    currentBid = Column(Float, nullable=False, default=0)  # Not updated by bid placement
    expiryDate = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    bids = relationship("Bid", back_populates="auction")


class Bid(Base):
    """Bids placed against an auction"""
    __tablename__ = "bids"

    id = Column(Integer, primary_key=True)
    auctionId = Column(Integer, ForeignKey("auction_lists.id"), nullable=False, index=True)
    bidAmount = Column(Float, nullable=False)
    bidder = Column(String(255), nullable=False)  # Free-text display identity
    userId = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # Session user who placed it
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    auction = relationship("Auction", back_populates="bids")
