"""
Pydantic models for attendee registrations.

``RegistrationCreate`` describes what an attendee may submit through
the public form.  Workflow fields (``status``, ``payment_status``,
``registration_fee``, ``notes``) are owned by the organisers and are
added by the service, so a submission can never approve itself.
"""

from typing import List, Literal, Optional

from pydantic import Field, model_validator

from .common import CamelModel, Email, NonEmptyStr, RecordMeta, TrimmedStr


RegistrationType = Literal["regular", "student", "postdoc", "faculty", "industry"]
DietaryPreference = Literal["none", "vegetarian", "vegan", "halal", "kosher", "other"]
PaymentStatus = Literal["pending", "paid", "cancelled", "refunded"]
RegistrationStatus = Literal["pending", "approved", "rejected", "cancelled"]


class RegistrationCreate(CamelModel):
    """Schema for a public registration submission."""

    first_name: NonEmptyStr = Field(..., examples=["Ada"])
    last_name: NonEmptyStr = Field(..., examples=["Lovelace"])
    email: Email = Field(..., examples=["ada@example.org"])
    phone: Optional[TrimmedStr] = None
    affiliation: NonEmptyStr = Field(..., examples=["University of London"])
    position: Optional[TrimmedStr] = None
    country: NonEmptyStr = Field(..., examples=["United Kingdom"])
    registration_type: RegistrationType
    dietary: DietaryPreference = "none"
    dietary_other: Optional[TrimmedStr] = None
    accommodation: bool = False
    abstract_submission: bool = False
    abstract_title: Optional[TrimmedStr] = None
    abstract_content: Optional[str] = None

    @model_validator(mode="after")
    def drop_gated_fields(self):
        # Free-text dietary details only make sense for "other", and the
        # abstract fields only when an abstract is being submitted.
        if self.dietary != "other":
            self.dietary_other = None
        if not self.abstract_submission:
            self.abstract_title = None
            self.abstract_content = None
        return self


class RegistrationRead(RecordMeta, RegistrationCreate):
    """Schema for reading a stored registration."""

    payment_status: PaymentStatus = "pending"
    registration_fee: float = 0
    status: RegistrationStatus = "pending"
    notes: Optional[str] = None
    submitted_at: Optional[str] = None


class RegistrationReview(CamelModel):
    """Schema for an organiser's review of a registration.

    ``status`` is required; payment details and notes may be updated
    in the same request.
    """

    status: RegistrationStatus
    payment_status: Optional[PaymentStatus] = None
    registration_fee: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class RegistrationSubmitted(CamelModel):
    message: str
    registration_id: str


class RegistrationStatusRead(CamelModel):
    status: RegistrationStatus
    submitted_at: Optional[str] = None


class RegistrationPage(CamelModel):
    registrations: List[RegistrationRead]
    total: int
    page: int
    total_pages: int
