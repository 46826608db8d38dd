"""
Bids Router - Handles auction bidding
POST /api/bids - Place a bid on an auction
GET /api/bid-history - Best bid per bidder per auction, with Won/Lost status
"""

import logging
import re
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.auth import get_current_user
from app.bid_history import get_bid_history
from app.models import Auction, Bid
from app.schemas import BidCreateRequest, BidHistoryEntry, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bids"])

_ID_PATTERN = re.compile(r"[0-9]+")
MAX_AUCTION_ID = 2**31 - 1  # Upper bound of the INTEGER primary key


def parse_auction_id(value: Union[int, str, None]) -> Optional[int]:
    """Return the auction id as an int in primary-key range, or None if it is malformed"""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not _ID_PATTERN.fullmatch(value.strip()) or len(value.strip()) > len(str(MAX_AUCTION_ID)):
            return None
        value = int(value.strip())
    if isinstance(value, int) and 0 < value <= MAX_AUCTION_ID:
        return value
    return None


@router.post("/bids", response_model=MessageResponse)
async def place_bid(
    bid_request: BidCreateRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """
    Place a bid on an auction.

    Validation order:
    - all of auctionId, bidAmount and bidder present (0 and "" count as missing)
    - auctionId well-formed
    - auction exists

    Bids are not compared against the starting or current bid.
    """
    logger.debug(f"Received bid request: {bid_request.model_dump()}")

    bidder = bid_request.bidder.strip() if bid_request.bidder else None
    if not bid_request.auctionId or not bid_request.bidAmount or not bidder:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields"
        )

    auction_id = parse_auction_id(bid_request.auctionId)
    if auction_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid auctionId format"
        )

    if bid_request.bidAmount < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="bidAmount must be positive"
        )

    auction = db.query(Auction).filter(Auction.id == auction_id).first()
    if not auction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Auction not found"
        )

    bid = Bid(
        auctionId=auction.id,
        bidAmount=bid_request.bidAmount,
        bidder=bidder,
        userId=current_user.get("user_id")
    )
    db.add(bid)
    db.commit()
    db.refresh(bid)

    logger.info(f"Bid {bid.id} of {bid.bidAmount} by '{bidder}' placed on auction {auction.id}")
    return MessageResponse(message="Bid placed successfully")


@router.get("/bid-history", response_model=List[BidHistoryEntry])
async def bid_history(db: Session = Depends(get_db)):
    """
    Each bidder's best bid per auction, sorted by auction title then amount
    (highest first). Every bid equal to the auction's highest is marked Won.
    """
    return get_bid_history(db)
