"""
Pydantic models for speaker profiles.

``session_id`` refers to a programme session managed outside this
service; it is stored as an opaque identifier and never resolved.
"""

from typing import Literal, Optional

from pydantic import Field

from .common import CamelModel, NonEmptyStr, OptionalEmail, RecordMeta, TrimmedStr


TalkType = Literal["keynote", "plenary", "invited", "contributed"]


class SocialLinks(CamelModel):
    twitter: Optional[TrimmedStr] = None
    linkedin: Optional[TrimmedStr] = None
    researchgate: Optional[TrimmedStr] = None
    orcid: Optional[TrimmedStr] = None


class SpeakerBase(CamelModel):
    name: NonEmptyStr = Field(..., examples=["Dr. Sarah Johnson"])
    title: Optional[TrimmedStr] = Field(None, examples=["Professor of Microbiology"])
    affiliation: Optional[TrimmedStr] = None
    bio: Optional[str] = None
    email: OptionalEmail = None
    website: Optional[TrimmedStr] = None
    image: Optional[TrimmedStr] = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    talk_title: Optional[TrimmedStr] = None
    talk_abstract: Optional[str] = None
    talk_type: TalkType = "contributed"
    session_id: Optional[str] = None
    is_keynote: bool = False
    is_published: bool = True
    order: int = 0


class SpeakerCreate(SpeakerBase):
    """Schema for creating a speaker profile."""
    pass


class SpeakerUpdate(CamelModel):
    """Schema for updating a speaker profile.

    All fields are optional; only provided fields will be updated.
    ``social_links`` replaces the stored links as a whole.
    """
    name: Optional[NonEmptyStr] = None
    title: Optional[TrimmedStr] = None
    affiliation: Optional[TrimmedStr] = None
    bio: Optional[str] = None
    email: OptionalEmail = None
    website: Optional[TrimmedStr] = None
    image: Optional[TrimmedStr] = None
    social_links: Optional[SocialLinks] = None
    talk_title: Optional[TrimmedStr] = None
    talk_abstract: Optional[str] = None
    talk_type: Optional[TalkType] = None
    session_id: Optional[str] = None
    is_keynote: Optional[bool] = None
    is_published: Optional[bool] = None
    order: Optional[int] = None


class SpeakerRead(RecordMeta, SpeakerBase):
    """Schema for reading a speaker profile from the API."""
    pass
