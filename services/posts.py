import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from models.user import User
from utils.document_id import new_document_id

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def author_fields(user: User, profile: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Display data copied onto posts and comments.
    Prefers the stored profile, falls back to the token claims.
    """
    profile = profile or {}
    return {
        "user": user.user_id,
        "name": profile.get("name") or user.name,
        "avatar": profile.get("avatar") or user.picture,
    }


def check_owner(owner_id: str, user_id: str) -> None:
    if owner_id != user_id:
        logger.info(f"[POSTS] User {user_id} is not the owner ({owner_id})")
        raise HTTPException(status_code=401, detail="User not authorized")


def new_post(user: User, profile: Optional[Dict[str, Any]], text: str) -> Dict[str, Any]:
    """Build the document for a new post"""
    return {
        **author_fields(user, profile),
        "text": text,
        "likes": [],
        "comments": [],
        "date": _now(),
    }


def edit_post(post: Dict[str, Any], user_id: str, text: str) -> Dict[str, Any]:
    check_owner(post.get("user"), user_id)
    post["text"] = text
    return post


def has_liked(post: Dict[str, Any], user_id: str) -> bool:
    return any(like.get("user") == user_id for like in post.get("likes", []))


def add_like(post: Dict[str, Any], user_id: str) -> List[Dict[str, Any]]:
    """
    Like a post on behalf of a user
    :return: the updated likes list, newest first
    """
    if has_liked(post, user_id):
        raise HTTPException(status_code=400, detail="Post already liked")

    likes = post.setdefault("likes", [])
    likes.insert(0, {"user": user_id})
    return likes


def remove_like(post: Dict[str, Any], user_id: str) -> List[Dict[str, Any]]:
    if not has_liked(post, user_id):
        raise HTTPException(status_code=400, detail="Post has not yet been liked")

    post["likes"] = [like for like in post["likes"] if like.get("user") != user_id]
    return post["likes"]


def add_comment(
        post: Dict[str, Any],
        user: User,
        profile: Optional[Dict[str, Any]],
        text: str
) -> List[Dict[str, Any]]:
    """
    Prepend a comment to a post
    :return: the updated comments list, newest first
    """
    comment = {
        "id": new_document_id(),
        **author_fields(user, profile),
        "text": text,
        "date": _now(),
    }
    comments = post.setdefault("comments", [])
    comments.insert(0, comment)
    return comments


def find_comment(post: Dict[str, Any], comment_id: str) -> Dict[str, Any]:
    for comment in post.get("comments", []):
        if comment.get("id") == comment_id:
            return comment
    raise HTTPException(status_code=404, detail="Comment does not exist")


def remove_comment(post: Dict[str, Any], comment_id: str, user_id: str) -> List[Dict[str, Any]]:
    comment = find_comment(post, comment_id)
    check_owner(comment.get("user"), user_id)

    post["comments"] = [c for c in post["comments"] if c.get("id") != comment_id]
    return post["comments"]


def edit_comment(
        post: Dict[str, Any],
        comment_id: str,
        user_id: str,
        text: str
) -> List[Dict[str, Any]]:
    comment = find_comment(post, comment_id)
    check_owner(comment.get("user"), user_id)

    comment["text"] = text
    return post["comments"]
