"""
Shared fixtures: an in-memory stand-in for FirestoreDB and a TestClient
with the database and current user dependencies overridden.
"""

import copy

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.user import User
from utils.document_id import new_document_id


class InMemoryFirestore:
    """Implements the FirestoreDB methods the routes use, backed by dicts"""

    def __init__(self):
        self.posts = {}
        self.users = {}

    def get_user(self, user_id):
        user = self.users.get(user_id)
        if user is None:
            return None
        user = {k: v for k, v in user.items() if k != "password"}
        user["id"] = user_id
        return user

    def get_all_posts(self):
        posts = [{**copy.deepcopy(data), "id": post_id} for post_id, data in self.posts.items()]
        return sorted(posts, key=lambda post: post["date"], reverse=True)

    def get_post(self, post_id):
        if post_id not in self.posts:
            return None
        return {**copy.deepcopy(self.posts[post_id]), "id": post_id}

    def create_post(self, post_data):
        post_id = new_document_id()
        self.posts[post_id] = copy.deepcopy(post_data)
        return {**post_data, "id": post_id}

    def delete_post(self, post_id):
        self.posts.pop(post_id, None)

    def update_post(self, post_id, mutate):
        if post_id not in self.posts:
            raise HTTPException(status_code=404, detail="Post not found")

        # Work on a copy; only commit when mutate succeeds
        post_data = {**copy.deepcopy(self.posts[post_id]), "id": post_id}
        result = mutate(post_data)
        post_data.pop("id", None)
        self.posts[post_id] = post_data
        return result


ALICE = User(user_id="alice-uid", email="alice@example.com", name="Alice", picture="alice.png")
BOB = User(user_id="bob-uid", email="bob@example.com", name="Bob", picture="bob.png")


@pytest.fixture
def db():
    database = InMemoryFirestore()
    database.users[ALICE.user_id] = {"name": "Alice A.", "avatar": "a.png", "password": "hash"}
    return database


@pytest.fixture
def auth():
    """Mutable holder for the user the next request is made as"""
    return {"user": ALICE}


@pytest.fixture
def client(db, auth):
    app.dependency_overrides[get_firestore] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: auth["user"]
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def post_id(client):
    """A post created by Alice"""
    response = client.post("/posts", json={"text": "first post"})
    assert response.status_code == 200
    return response.json()["id"]
