"""
Post-related Pydantic models
"""

from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, field_validator

REQUIRED_POST_FIELDS = ("title", "content", "authorId", "category")

# JSON key -> posts table column
POST_COLUMNS = {
    "id": "id",
    "title": "title",
    "content": "content",
    "authorId": "author_id",
    "category": "category",
    "tags": "tags",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class PostWriteRequest(BaseModel):
    """Body of create and update requests.

    Every field is optional at the schema level so that a missing required
    field is reported as a 400 by the route rather than a 422.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    authorId: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None

    @field_validator("title", "content", "authorId", "category", "tags")
    @classmethod
    def reject_nul(cls, v):
        # PostgreSQL text columns cannot store NUL
        if v is not None and "\x00" in v:
            raise ValueError("NUL character is not allowed")
        return v

    def missing_required_fields(self) -> List[str]:
        """Names of required fields that are absent or empty"""
        return [name for name in REQUIRED_POST_FIELDS if not getattr(self, name)]

    def to_record(self) -> Dict[str, str]:
        """Column values for INSERT/UPDATE; tags default to an empty string"""
        return {
            "title": self.title,
            "content": self.content,
            "author_id": self.authorId,
            "category": self.category,
            "tags": self.tags or "",
        }


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    authorId: str
    category: str
    tags: str
    createdAt: str
    updatedAt: str


class DeleteResponse(BaseModel):
    message: str


def format_post(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a posts table row into the public JSON shape"""
    post = {}
    for key, column in POST_COLUMNS.items():
        value = row[column]
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        post[key] = value
    if post["tags"] is None:
        post["tags"] = ""
    return post
