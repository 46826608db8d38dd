"""
Bid History Report
Per-auction summary of every bidder's best bid, labelled Won or Lost.

Rules:
- A bidder's repeated bids on one auction collapse to their highest bid.
  The bid record kept is the one that reached that amount; among equal
  amounts the earliest one seen wins.
- Best bids are grouped by auction title; the highest amount in the group
  is the winning amount.
- Every bidder whose best bid equals the winning amount is "Won" (ties
  produce several winners), everyone else is "Lost".
- Rows are sorted by auction title ascending, then amount descending.
- Auctions without bids do not appear.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from app.models import Auction, Bid
from app.schemas import BidHistoryEntry

logger = logging.getLogger(__name__)

STATUS_WON = "Won"
STATUS_LOST = "Lost"


def best_bids_by_bidder(rows: Iterable[Tuple[Bid, str]]) -> List[Tuple[Bid, str]]:
    """
    Collapse (bid, auction_title) rows to one row per (auction, bidder).

    Input order decides ties, so callers pass rows oldest first.
    """
    best: Dict[Tuple[int, str], Tuple[Bid, str]] = {}
    for bid, title in rows:
        key = (bid.auctionId, bid.bidder)
        current = best.get(key)
        if current is None or bid.bidAmount > current[0].bidAmount:
            best[key] = (bid, title)
    return list(best.values())


def build_bid_history(rows: Iterable[Tuple[Bid, str]]) -> List[BidHistoryEntry]:
    """Build the report from (bid, auction_title) rows"""
    best = best_bids_by_bidder(rows)

    winning: Dict[str, float] = {}
    for bid, title in best:
        if title not in winning or bid.bidAmount > winning[title]:
            winning[title] = bid.bidAmount

    entries = [
        BidHistoryEntry(
            id=bid.id,
            bidderName=bid.bidder,
            auctionTitle=title,
            amount=bid.bidAmount,
            status=STATUS_WON if bid.bidAmount == winning[title] else STATUS_LOST,
        )
        for bid, title in best
    ]
    entries.sort(key=lambda e: (e.auctionTitle, -e.amount, e.bidderName))
    return entries


def get_bid_history(db: Session) -> List[BidHistoryEntry]:
    """Join every bid to its auction and build the report"""
    rows = (
        db.query(Bid, Auction.title)
        .join(Auction, Bid.auctionId == Auction.id)
        .order_by(Bid.timestamp.asc(), Bid.id.asc())
        .all()
    )
    entries = build_bid_history(rows)
    logger.debug(f"Bid history built from {len(rows)} bids into {len(entries)} rows")
    return entries
