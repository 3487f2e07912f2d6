from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, validator

DEFAULT_DESCRIPTION = "Hello, I'm a new user !"


class UserStatus(str, Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class UserCreate(BaseModel):
    pseudo: str
    email: Optional[EmailStr] = None
    password: str = Field(min_length=1)
    description: str = DEFAULT_DESCRIPTION

    @validator("pseudo")
    def pseudo_must_not_be_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Pseudo cannot be empty")
        return v


class UserStatusUpdate(BaseModel):
    status: UserStatus


class User(BaseModel):
    id: str
    pseudo: str
    email: Optional[str] = None
    description: str = DEFAULT_DESCRIPTION
    friendList: List[str] = []
    status: UserStatus = UserStatus.OFFLINE
    created_at: datetime
    updated_at: datetime


class UserInDB(User):
    hashed_password: str
