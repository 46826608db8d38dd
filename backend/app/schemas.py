"""
Pydantic schemas for request/response validation
"""

from datetime import datetime
from typing import Optional, Literal, Union
from pydantic import BaseModel, EmailStr, Field, field_validator


# ============================================================
# Auth Schemas
# ============================================================

class UserRegisterRequest(BaseModel):
    """Registration request schema"""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=72, description="Password (6-72 chars)")


class UserLoginRequest(BaseModel):
    """Login request schema; email is normalized the same way as on registration"""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class RegistrationResponse(BaseModel):
    """Registration result"""
    success: bool = True
    message: str


class LoginResponse(BaseModel):
    """Successful login with JWT session token"""
    success: bool = True
    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiry in seconds")


# ============================================================
# Auction Schemas
# ============================================================

class AuctionCreateRequest(BaseModel):
    """Request schema for creating an auction listing"""
    title: str = Field(..., min_length=1, max_length=255, description="Listing title")
    description: Optional[str] = Field(None, max_length=5000)
    startingBid: float = Field(..., ge=0, description="Opening price")
    expiryDate: datetime = Field(..., description="When bidding closes")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class AuctionResponse(BaseModel):
    """Auction listing as returned by GET /api/auctions"""
    id: int = Field(..., serialization_alias="_id")
    title: str
    description: Optional[str] = None
    startingBid: float
    currentBid: float = 0
    expiryDate: datetime

    class Config:
        from_attributes = True


# ============================================================
# Bid Schemas
# ============================================================

class BidCreateRequest(BaseModel):
    """
    Bid placement request.

    Fields are optional at the schema level so the router can answer
    missing and malformed values with 400 in a fixed order.
    """
    auctionId: Optional[Union[int, str]] = None
    bidAmount: Optional[float] = Field(None, allow_inf_nan=False)
    bidder: Optional[str] = None


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str


class BidHistoryEntry(BaseModel):
    """One row of the bid-history report: a bidder's best bid on an auction"""
    id: int = Field(..., serialization_alias="_id")
    bidderName: str
    auctionTitle: str
    amount: float
    status: Literal["Won", "Lost"]
