import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from models.user import User
from services.firestore import FirestoreDB
from utils.document_id import is_valid_document_id

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
        return User(
            user_id=decoded_token["uid"],
            email=decoded_token.get("email"),
            name=decoded_token.get("name"),
            picture=decoded_token.get("picture"),
        )
    except Exception as e:
        logger.warning(f"[AUTH] Invalid authentication token: {str(e)}")
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


def _check_document_id(value: str) -> str:
    if not is_valid_document_id(value):
        raise HTTPException(status_code=400, detail="Invalid ID")
    return value


async def valid_post_id(post_id: str) -> str:
    """Reject malformed post ids before touching the database"""
    return _check_document_id(post_id)


async def valid_comment_id(comment_id: str) -> str:
    return _check_document_id(comment_id)


CurrentUser = Annotated[User, Depends(get_current_user)]
Firestore = Annotated[FirestoreDB, Depends(get_firestore)]
PostId = Annotated[str, Depends(valid_post_id)]
CommentId = Annotated[str, Depends(valid_comment_id)]
