from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, validator


class FriendRequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REFUSED = "REFUSED"


class FriendRequestCreate(BaseModel):
    """Payload for creating a friend request, validated at the HTTP boundary"""
    from_: str = Field(alias="from", description="Pseudo of the user sending the request")
    to: str = Field(description="Pseudo of the user receiving the request")

    class Config:
        populate_by_name = True

    @validator("from_", "to")
    def pseudo_must_not_be_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Pseudo cannot be empty")
        return v


class FriendRequest(BaseModel):
    id: str
    from_: str = Field(alias="from")
    to: str
    status: FriendRequestStatus = FriendRequestStatus.PENDING
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True
