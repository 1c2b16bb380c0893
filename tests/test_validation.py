import pytest

from conference_api.app.core.errors import RecordValidationError
from conference_api.app.schemas.content import ContentCreate, ContentUpdate
from conference_api.app.schemas.registration import RegistrationCreate
from conference_api.app.services.validation import to_document, validate_patch, validate_payload

from .helpers import content_payload, registration_payload


def _fields(excinfo):
    return {item["field"]: item["message"] for item in excinfo.value.errors}


def test_empty_registration_reports_every_required_field():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(RegistrationCreate, {})
    assert _fields(excinfo) == {
        "firstName": "First name is required",
        "lastName": "Last name is required",
        "email": "Valid email is required",
        "affiliation": "Affiliation is required",
        "country": "Country is required",
        "registrationType": "Invalid registration type",
    }


@pytest.mark.parametrize("field,value", [("firstName", "   "), ("email", "not-an-email"), ("registrationType", "vip")])
def test_registration_rejects_invalid_values(field, value):
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(RegistrationCreate, registration_payload(**{field: value}))
    assert list(_fields(excinfo)) == [field]


def test_non_object_body_is_rejected():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(RegistrationCreate, ["not", "an", "object"])
    assert _fields(excinfo) == {"body": "Expected a JSON object"}


def test_registration_email_is_normalised_and_strings_trimmed():
    registration = validate_payload(
        RegistrationCreate,
        registration_payload(email="  Ada@Example.ORG ", firstName="  Ada "),
    )
    document = to_document(registration)
    assert document["email"] == "ada@example.org"
    assert document["firstName"] == "Ada"
    assert document["dietary"] == "none"
    assert document["accommodation"] is False


def test_gated_fields_are_dropped_unless_enabled():
    document = to_document(
        validate_payload(
            RegistrationCreate,
            registration_payload(dietary="vegan", dietaryOther="no nuts", abstractTitle="Ignored", abstractContent="Ignored"),
        )
    )
    assert document["dietaryOther"] is None
    assert document["abstractTitle"] is None
    assert document["abstractContent"] is None


def test_gated_fields_are_kept_when_enabled():
    document = to_document(
        validate_payload(
            RegistrationCreate,
            registration_payload(dietary="other", dietaryOther="no nuts", abstractSubmission=True, abstractTitle="Biofilms"),
        )
    )
    assert document["dietaryOther"] == "no nuts"
    assert document["abstractTitle"] == "Biofilms"


def test_public_submission_cannot_set_workflow_fields():
    document = to_document(validate_payload(RegistrationCreate, registration_payload(status="approved", paymentStatus="paid")))
    assert "status" not in document
    assert "paymentStatus" not in document


def test_content_defaults_are_applied():
    document = to_document(validate_payload(ContentCreate, {"key": "about", "content": "About us"}))
    assert document["type"] == "html"
    assert document["category"] == "general"
    assert document["isPublished"] is True
    assert document["order"] == 0
    assert document["metadata"] == {}


def test_content_rejects_unknown_category_and_type():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(ContentCreate, content_payload(category="sports", type="pdf"))
    assert set(_fields(excinfo)) == {"category", "type"}


def test_validate_patch_returns_only_sent_fields():
    patch = validate_patch(ContentUpdate, {"title": "New title", "isPublished": False}, ContentCreate)
    assert patch == {"title": "New title", "isPublished": False}


def test_validate_patch_allows_clearing_optional_fields():
    assert validate_patch(ContentUpdate, {"title": None}, ContentCreate) == {"title": None}


@pytest.mark.parametrize("field", ["key", "content", "isPublished", "metadata"])
def test_validate_patch_rejects_null_for_required_fields(field):
    with pytest.raises(RecordValidationError) as excinfo:
        validate_patch(ContentUpdate, {field: None}, ContentCreate)
    assert list(_fields(excinfo)) == [field]
