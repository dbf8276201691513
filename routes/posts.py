import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException

from dependencies import Firestore, CurrentUser, PostId, CommentId
from models.post import Post, PostRequest, CommentRequest, Like, Comment
from services import posts as post_rules

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("")
async def create_post(
        current_user: CurrentUser,
        db: Firestore,
        post_data: PostRequest,
) -> Post:
    """Create a new post"""
    profile = db.get_user(current_user.user_id)
    post = db.create_post(post_rules.new_post(current_user, profile, post_data.text))
    return post


@router.get("")
async def get_posts(current_user: CurrentUser, db: Firestore) -> List[Post]:
    """Get all posts, newest first"""
    return db.get_all_posts()


@router.get("/{post_id}")
async def get_post(current_user: CurrentUser, db: Firestore, post_id: PostId) -> Post:
    post = db.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.delete("/{post_id}")
async def delete_post(current_user: CurrentUser, db: Firestore, post_id: PostId) -> Dict[str, str]:
    """Delete a post owned by the current user"""
    post = db.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    post_rules.check_owner(post.get("user"), current_user.user_id)
    db.delete_post(post_id)
    return {"msg": "Post removed"}


@router.put("/{post_id}")
async def edit_post(
        current_user: CurrentUser,
        db: Firestore,
        post_id: PostId,
        post_data: PostRequest,
) -> Post:
    """Edit the text of a post owned by the current user"""
    post = db.update_post(
        post_id,
        lambda post: dict(post_rules.edit_post(post, current_user.user_id, post_data.text))
    )
    return post


@router.put("/like/{post_id}")
async def like_post(current_user: CurrentUser, db: Firestore, post_id: PostId) -> List[Like]:
    likes = db.update_post(post_id, lambda post: post_rules.add_like(post, current_user.user_id))
    logger.info(f"[POSTS] {current_user.user_id} liked {post_id}")
    return likes


@router.put("/unlike/{post_id}")
async def unlike_post(current_user: CurrentUser, db: Firestore, post_id: PostId) -> List[Like]:
    likes = db.update_post(post_id, lambda post: post_rules.remove_like(post, current_user.user_id))
    logger.info(f"[POSTS] {current_user.user_id} unliked {post_id}")
    return likes


@router.post("/comment/{post_id}")
async def add_comment(
        current_user: CurrentUser,
        db: Firestore,
        post_id: PostId,
        comment: CommentRequest,
) -> List[Comment]:
    """Add a comment to a post"""
    profile = db.get_user(current_user.user_id)
    return db.update_post(
        post_id,
        lambda post: post_rules.add_comment(post, current_user, profile, comment.text)
    )


@router.delete("/comment/{post_id}/{comment_id}")
async def delete_comment(
        current_user: CurrentUser,
        db: Firestore,
        post_id: PostId,
        comment_id: CommentId,
) -> List[Comment]:
    """Delete a comment owned by the current user"""
    return db.update_post(
        post_id,
        lambda post: post_rules.remove_comment(post, comment_id, current_user.user_id)
    )


@router.put("/comment/{post_id}/{comment_id}")
async def edit_comment(
        current_user: CurrentUser,
        db: Firestore,
        post_id: PostId,
        comment_id: CommentId,
        comment: CommentRequest,
) -> List[Comment]:
    """Edit a comment owned by the current user"""
    return db.update_post(
        post_id,
        lambda post: post_rules.edit_comment(post, comment_id, current_user.user_id, comment.text)
    )
