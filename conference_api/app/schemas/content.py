"""
Pydantic models for content blocks.

A content block is a publishable piece of text, HTML, Markdown or JSON
shown on one of the conference pages.  Blocks are addressed by a
unique ``key`` and ordered within their ``category`` by ``order``.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from .common import CamelModel, NonEmptyStr, RecordMeta, TrimmedStr


ContentType = Literal["text", "html", "markdown", "json"]
ContentCategory = Literal["general", "home", "speakers", "program", "committee", "venue", "registration"]


class ContentBase(CamelModel):
    key: NonEmptyStr = Field(..., examples=["conference-overview"])
    title: Optional[TrimmedStr] = Field(None, examples=["Conference Overview"])
    content: str = Field(..., min_length=1, examples=["<p>Welcome to the conference.</p>"])
    type: ContentType = "html"
    category: ContentCategory = "general"
    is_published: bool = True
    order: int = 0
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ContentCreate(ContentBase):
    """Schema for creating a content block."""
    pass


class ContentUpdate(CamelModel):
    """Schema for updating a content block.

    All fields are optional; only provided fields will be updated.
    """
    key: Optional[NonEmptyStr] = None
    title: Optional[TrimmedStr] = None
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[ContentType] = None
    category: Optional[ContentCategory] = None
    is_published: Optional[bool] = None
    order: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class ContentRead(RecordMeta, ContentBase):
    """Schema for reading a content block from the API."""
    pass
