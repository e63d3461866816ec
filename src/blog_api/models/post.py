"""
Post-related Pydantic models
"""

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class AuthorName(BaseModel):
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)

    @field_validator("firstName", "lastName")
    @classmethod
    def reject_blank_name(cls, value: str) -> str:
        """Names are stored as sent; whitespace-only names are refused"""
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @property
    def full_name(self) -> str:
        return join_author_name(self.model_dump())


class PostCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author: AuthorName
    created: Optional[datetime] = Field(None, description="Creation timestamp, defaults to now")


class PostUpdateRequest(BaseModel):
    """Body of PUT /posts/{id}; id must repeat the path id"""
    id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)


class PostResponse(BaseModel):
    id: str
    author: str
    content: str
    title: str
    created: datetime

    @classmethod
    def from_document(cls, post: Dict[str, Any]) -> "PostResponse":
        """Shape a stored post for clients, flattening the author to one string"""
        return cls(
            id=str(post["id"]),
            author=join_author_name(post["author"]),
            content=post["content"],
            title=post["title"],
            created=post["created"]
        )


def join_author_name(author: Dict[str, Any]) -> str:
    """
    Flatten an author document to "firstName lastName".

    Lossy: a name that itself contains a space cannot be split back
    unambiguously.
    """
    return f"{author['firstName']} {author['lastName']}"
