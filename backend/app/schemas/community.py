"""
Pydantic schemas for the community feed.
"""
from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime


FeedFilter = Literal["all", "trips", "tips", "questions"]


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    user_avatar: str = ""
    content: str
    created_at: datetime


class PostCreate(BaseModel):
    """Schema for sharing a story, tip or question."""
    content: str
    trip_name: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None


class PostResponse(BaseModel):
    """Post as seen by the requesting identity."""
    id: str
    user_id: str
    user_name: str
    user_avatar: str = ""
    content: str
    trip_name: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    image_url: Optional[str] = None
    likes: int
    is_liked: bool
    comments: List[CommentResponse] = []
    created_at: datetime
