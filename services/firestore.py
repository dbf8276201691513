import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import firebase_admin
from fastapi import HTTPException
from firebase_admin import firestore as fs
from google.cloud import firestore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields never returned from a user profile read
PRIVATE_USER_FIELDS = ("password",)


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user profile by uid, without private fields"""
        snapshot = self.collection("users").document(user_id).get()
        if not snapshot.exists:
            return None

        user_data = snapshot.to_dict()
        for field in PRIVATE_USER_FIELDS:
            user_data.pop(field, None)
        user_data["id"] = snapshot.id
        return user_data

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection("posts").order_by("date", direction=firestore.Query.DESCENDING).stream()
        posts = []
        for doc in posts_ref:
            post_data = doc.to_dict()
            post_data["id"] = doc.id
            posts.append(post_data)
        return posts

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection("posts").document(post_id).get()
        if not snapshot.exists:
            return None

        post_data = snapshot.to_dict()
        post_data["id"] = snapshot.id
        return post_data

    def create_post(self, post_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post and return it with its generated id"""
        new_post_ref = self.collection("posts").document()
        new_post_ref.set(post_data)
        logger.info(f"[FIRESTORE] Created post {new_post_ref.id}")
        return {**post_data, "id": new_post_ref.id}

    def delete_post(self, post_id: str) -> None:
        self.collection("posts").document(post_id).delete()
        logger.info(f"[FIRESTORE] Deleted post {post_id}")

    def update_post(self, post_id: str, mutate: Callable[[Dict[str, Any]], T]) -> T:
        """
        Read-modify-write a post inside a transaction

        Args:
            post_id: The post to update
            mutate: Called with the post data, changes it in place and returns
                the value handed back to the caller

        Returns:
            Whatever ``mutate`` returned

        Raises:
            HTTPException: 404 if the post does not exist, or anything raised
                by ``mutate``; the document is left untouched in both cases
        """
        post_ref = self.collection("posts").document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise HTTPException(status_code=404, detail="Post not found")

            post_data = snapshot.to_dict()
            post_data["id"] = snapshot.id
            result = mutate(post_data)

            post_data.pop("id", None)
            transaction.set(post_ref, post_data)
            return result

        return update_in_transaction(transaction, post_ref)
