from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from schemas.common import CamelModel


class UserIn(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr = Field(max_length=255)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)


class UserOut(CamelModel):
    id: int
    username: str
    email: EmailStr
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
