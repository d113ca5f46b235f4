"""
Community feed: travel stories, tips and questions kept in the local store.
"""
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional
from app.core.exceptions import EntityNotFoundError, TripAccessError, TripValidationError
from app.core.identity import Identity
from app.core.utils import new_remote_id, utcnow
from app.services.local_store import LocalStore

logger = logging.getLogger(__name__)


def _sample_posts() -> List[Dict[str, Any]]:
    now = utcnow()
    return [
        {
            "id": "1",
            "user_id": "user1",
            "user_name": "Sarah Johnson",
            "user_avatar": "",
            "content": "Just returned from an amazing trip to Paris! The Eiffel Tower at sunset was "
                       "absolutely breathtaking. Highly recommend visiting Montmartre for the best views!",
            "trip_name": "Paris Adventure",
            "location": "Paris, France",
            "date": "2026-03-10",
            "image_url": None,
            "liked_by": [],
            "base_likes": 24,
            "comments": [
                {
                    "id": "c1",
                    "user_id": "user2",
                    "user_name": "Mike Chen",
                    "user_avatar": "",
                    "content": "Sounds amazing! How many days did you spend there?",
                    "created_at": now.isoformat(),
                },
            ],
            "created_at": (now - timedelta(days=1)).isoformat(),
        },
        {
            "id": "2",
            "user_id": "user2",
            "user_name": "Mike Chen",
            "user_avatar": "",
            "content": "Looking for recommendations for budget-friendly accommodations in Tokyo. "
                       "Any suggestions? Planning a 5-day trip next month.",
            "trip_name": None,
            "location": "Tokyo, Japan",
            "date": None,
            "image_url": None,
            "liked_by": [],
            "base_likes": 18,
            "comments": [],
            "created_at": (now - timedelta(days=2)).isoformat(),
        },
        {
            "id": "3",
            "user_id": "user3",
            "user_name": "Emma Wilson",
            "user_avatar": "",
            "content": "Pro tip: book train tickets in Italy at least two weeks ahead. "
                       "Regional fares stay flat but the fast trains double in price.",
            "trip_name": None,
            "location": "Rome, Italy",
            "date": None,
            "image_url": None,
            "liked_by": [],
            "base_likes": 31,
            "comments": [],
            "created_at": (now - timedelta(days=3)).isoformat(),
        },
    ]


def _matches_filter(post: Dict[str, Any], filter_type: str) -> bool:
    content = post.get("content") or ""
    if filter_type == "trips":
        return bool(post.get("trip_name"))
    if filter_type == "tips":
        return "tip" in content.lower()
    if filter_type == "questions":
        return "?" in content
    return True


def _matches_search(post: Dict[str, Any], query: str) -> bool:
    needle = query.lower()
    return any(
        needle in (post.get(field) or "").lower()
        for field in ("content", "location", "user_name")
    )


class CommunityService:
    """Posts, likes and comments."""

    def __init__(self, local: LocalStore):
        self.local = local

    def _posts(self) -> List[Dict[str, Any]]:
        posts = self.local.get_posts()
        if posts is None:
            posts = _sample_posts()
            self.local.save_posts(posts)
        return posts

    def _find(self, posts: List[Dict[str, Any]], post_id: str) -> Dict[str, Any]:
        for post in posts:
            if post.get("id") == post_id:
                return post
        raise EntityNotFoundError("Post", post_id)

    def view(self, post: Dict[str, Any], identity: Identity) -> Dict[str, Any]:
        """Post as seen by an identity: like count and whether they liked it."""
        liked_by = post.get("liked_by") or []
        shown = {k: v for k, v in post.items() if k not in ("liked_by", "base_likes")}
        shown["likes"] = int(post.get("base_likes") or 0) + len(liked_by)
        shown["is_liked"] = identity.id in liked_by
        return shown

    def list_posts(self, identity: Identity, query: Optional[str] = None, filter_type: str = "all") -> List[Dict[str, Any]]:
        posts = self._posts()
        if query:
            posts = [p for p in posts if _matches_search(p, query)]
        posts = [p for p in posts if _matches_filter(p, filter_type)]
        posts = sorted(posts, key=lambda p: p.get("created_at") or "", reverse=True)
        return [self.view(p, identity) for p in posts]

    def create_post(self, identity: Identity, content: str, trip_name: Optional[str] = None,
                    location: Optional[str] = None, image_url: Optional[str] = None) -> Dict[str, Any]:
        if identity.is_admin:
            raise TripAccessError("Admins cannot post to the community feed")
        if not content or not content.strip():
            raise TripValidationError("Post content is required")
        post = {
            "id": new_remote_id(),
            "user_id": identity.id,
            "user_name": identity.display_name or "Anonymous",
            "user_avatar": identity.avatar_url or "",
            "content": content.strip(),
            "trip_name": trip_name or None,
            "location": location or None,
            "date": None,
            "image_url": image_url or None,
            "liked_by": [],
            "base_likes": 0,
            "comments": [],
            "created_at": utcnow().isoformat(),
        }
        self.local.save_posts([post] + self._posts())
        logger.info(f"Post {post['id']} created by {identity.id}")
        return self.view(post, identity)

    def toggle_like(self, identity: Identity, post_id: str) -> Dict[str, Any]:
        posts = self._posts()
        post = self._find(posts, post_id)
        liked_by = list(post.get("liked_by") or [])
        if identity.id in liked_by:
            liked_by.remove(identity.id)
        else:
            liked_by.append(identity.id)
        post["liked_by"] = liked_by
        self.local.save_posts(posts)
        return self.view(post, identity)

    def add_comment(self, identity: Identity, post_id: str, content: str) -> Dict[str, Any]:
        if not content or not content.strip():
            raise TripValidationError("Comment content is required")
        posts = self._posts()
        post = self._find(posts, post_id)
        post["comments"] = list(post.get("comments") or []) + [{
            "id": new_remote_id(),
            "user_id": identity.id,
            "user_name": identity.display_name or "Anonymous",
            "user_avatar": identity.avatar_url or "",
            "content": content.strip(),
            "created_at": utcnow().isoformat(),
        }]
        self.local.save_posts(posts)
        return self.view(post, identity)
