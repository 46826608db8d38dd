"""
Tests for auction bidding
Covers:
- POST /api/bids - validation order, auction lookup, persistence
- auctionId parsing
"""

from unittest.mock import MagicMock

import pytest

from app.main import app
from app.database import get_db
from app.models import Auction, Bid
from app.routers.bids import parse_auction_id


class TestParseAuctionId:
    """auctionId must be a positive integer or a string of digits"""

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        ("5", 5),
        (" 42 ", 42),
        ("abc", None),
        ("12x", None),
        ("0", None),
        (-3, None),
        ("-3", None),
        (True, None),
        (None, None),
        (2**31 - 1, 2**31 - 1),
        (2**31, None),
        (10**30, None),
        (str(10**30), None),
    ])
    def test_parse(self, value, expected):
        assert parse_auction_id(value) == expected


class TestPlaceBid:
    """Test POST /api/bids endpoint"""

    def test_place_bid_success(self, client, db_session, auth_headers, registered_user, auction):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction.id,
            "bidAmount": 25.5,
            "bidder": "alice"
        })

        assert response.status_code == 200
        assert response.json() == {"message": "Bid placed successfully"}

        bid = db_session.query(Bid).one()
        assert bid.auctionId == auction.id
        assert bid.bidAmount == 25.5
        assert bid.bidder == "alice"
        assert bid.userId == registered_user.id
        assert bid.timestamp is not None

    def test_string_auction_id_accepted(self, client, db_session, auth_headers, auction):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": str(auction.id),
            "bidAmount": 30,
            "bidder": "bob"
        })

        assert response.status_code == 200
        assert db_session.query(Bid).count() == 1

    def test_bid_does_not_touch_current_bid(self, client, db_session, auth_headers, auction):
        client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction.id,
            "bidAmount": 500,
            "bidder": "bob"
        })

        db_session.expire_all()
        assert db_session.get(Auction, auction.id).currentBid == 0

    def test_low_bid_accepted(self, client, auth_headers, auction):
        """Bids are not gated by the starting bid or earlier bids"""
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction.id,
            "bidAmount": 1,
            "bidder": "bob"
        })
        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {"bidAmount": 10, "bidder": "alice"},
        {"auctionId": 1, "bidder": "alice"},
        {"auctionId": 1, "bidAmount": 10},
        {"auctionId": 1, "bidAmount": 0, "bidder": "alice"},
        {"auctionId": 1, "bidAmount": 10, "bidder": ""},
        {"auctionId": 1, "bidAmount": 10, "bidder": "   "},
        {"auctionId": "", "bidAmount": 10, "bidder": "alice"},
    ])
    def test_missing_fields(self, client, db_session, auth_headers, auction, body):
        response = client.post("/api/bids", headers=auth_headers, json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"
        assert db_session.query(Bid).count() == 0

    @pytest.mark.parametrize("auction_id", ["abc", "12x", "0", -3, 10**30, str(10**30)])
    def test_malformed_auction_id(self, client, auth_headers, auction_id):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction_id,
            "bidAmount": 10,
            "bidder": "alice"
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid auctionId format"

    def test_malformed_id_rejected_before_lookup(self, client, auth_headers):
        mock_db = MagicMock()
        app.dependency_overrides[get_db] = lambda: mock_db

        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": "not-an-id",
            "bidAmount": 10,
            "bidder": "alice"
        })

        assert response.status_code == 400
        mock_db.query.assert_not_called()
        mock_db.add.assert_not_called()

    def test_unknown_auction_is_404(self, client, db_session, auth_headers):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": 999,
            "bidAmount": 10,
            "bidder": "alice"
        })

        assert response.status_code == 404
        assert response.json()["message"] == "Auction not found"
        assert db_session.query(Bid).count() == 0

    def test_negative_amount_rejected(self, client, auth_headers, auction):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction.id,
            "bidAmount": -5,
            "bidder": "alice"
        })
        assert response.status_code == 400

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_amount_rejected(self, client, db_session, auth_headers, auction, literal):
        response = client.post(
            "/api/bids",
            headers={**auth_headers, "Content-Type": "application/json"},
            content=f'{{"auctionId": {auction.id}, "bidAmount": {literal}, "bidder": "alice"}}'
        )

        assert response.status_code == 400
        assert "bidAmount" in response.json()["message"]
        assert db_session.query(Bid).count() == 0

    def test_non_numeric_amount_rejected(self, client, auth_headers, auction):
        response = client.post("/api/bids", headers=auth_headers, json={
            "auctionId": auction.id,
            "bidAmount": "lots",
            "bidder": "alice"
        })
        assert response.status_code == 400

    def test_requires_token(self, client, auction):
        response = client.post("/api/bids", json={
            "auctionId": auction.id,
            "bidAmount": 10,
            "bidder": "alice"
        })
        assert response.status_code == 401
