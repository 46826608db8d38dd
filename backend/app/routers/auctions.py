"""
Auctions Router
POST /api/auctions - Create an auction listing
GET /api/auctions - List all auction listings
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.auth import get_current_user
from app.models import Auction
from app.schemas import AuctionCreateRequest, AuctionResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auctions", tags=["Auctions"])


@router.post("", response_model=MessageResponse)
async def create_auction(
    auction_request: AuctionCreateRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """
    Create a new auction listing.
    The current bid starts at 0; only a confirmation is returned.
    """
    auction = Auction(
        title=auction_request.title,
        description=auction_request.description,
        startingBid=auction_request.startingBid,
        currentBid=0,
        expiryDate=auction_request.expiryDate
    )
    db.add(auction)
    db.commit()
    db.refresh(auction)

    logger.info(f"Auction {auction.id} '{auction.title}' created by user {current_user['sub']}")
    return MessageResponse(message="Auction created successfully")


@router.get("", response_model=List[AuctionResponse])
async def list_auctions(db: Session = Depends(get_db)):
    """Return every auction listing, unfiltered"""
    return db.query(Auction).order_by(Auction.id.asc()).all()
