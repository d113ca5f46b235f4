"""
Community feed routes.
"""
from fastapi import APIRouter, Depends, status
from typing import List, Optional
from app.core.identity import Identity
from app.schemas.community import CommentCreate, FeedFilter, PostCreate, PostResponse
from app.services.community_service import CommunityService
from app.api.dependencies import get_community_service, get_current_identity

router = APIRouter(prefix="/community", tags=["community"])


@router.get("/posts", response_model=List[PostResponse])
async def list_posts(
    q: Optional[str] = None,
    filter: FeedFilter = "all",
    identity: Identity = Depends(get_current_identity),
    service: CommunityService = Depends(get_community_service)
):
    """Feed, newest first, with text search and a post-kind filter."""
    return service.list_posts(identity, q, filter)


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    identity: Identity = Depends(get_current_identity),
    service: CommunityService = Depends(get_community_service)
):
    """Share a story, tip or question."""
    return service.create_post(
        identity,
        post_data.content,
        trip_name=post_data.trip_name,
        location=post_data.location,
        image_url=post_data.image_url,
    )


@router.post("/posts/{post_id}/like", response_model=PostResponse)
async def toggle_like(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: CommunityService = Depends(get_community_service)
):
    """Like a post, or take the like back."""
    return service.toggle_like(identity, post_id)


@router.post("/posts/{post_id}/comments", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    identity: Identity = Depends(get_current_identity),
    service: CommunityService = Depends(get_community_service)
):
    return service.add_comment(identity, post_id, comment.content)
