from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from utils.text import sanitize_text


class TextRequest(BaseModel):
    text: str = Field(default="", validate_default=True)

    @field_validator("text")
    @classmethod
    def text_required(cls, value: str) -> str:
        # Blank once markup is stripped counts as missing
        value = sanitize_text(value or "")
        if not value:
            raise ValueError("Text is required")
        return value


class PostRequest(TextRequest):
    pass


class CommentRequest(TextRequest):
    pass


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: str


class Post(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[Like] = []
    comments: List[Comment] = []
    date: str
