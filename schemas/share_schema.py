from pydantic import BaseModel, Field
from typing import Optional

class ShareLinkCreate(BaseModel):
    """Schema for creating a public share link."""
    expires_in_days: Optional[int] = Field(None, gt=0, examples=[30])

class ShareLinkInfo(BaseModel):
    """Schema for returning a share link."""
    slug: str
    trip_id: str
    path: str
    created_at: str
    expires_at: Optional[str] = None
