from .helpers import content_payload, registration_payload, speaker_payload


def _seed_content(store):
    store.insert("content", content_payload(key="welcome", category="home", order=2, isPublished=True))
    store.insert("content", content_payload(key="intro", category="home", order=1, isPublished=True))
    store.insert("content", content_payload(key="draft", category="home", order=0, isPublished=False))
    store.insert("content", content_payload(key="hotel", category="venue", order=0, isPublished=True))


def _seed_speakers(store):
    store.insert("speakers", speaker_payload(name="Zoe Park", talkType="invited", order=1, isKeynote=False, isPublished=True))
    store.insert("speakers", speaker_payload(name="Amir Haddad", talkType="invited", order=1, isKeynote=False, isPublished=True))
    store.insert("speakers", speaker_payload(name="Sarah Johnson", talkType="keynote", order=0, isKeynote=True, isPublished=True))
    store.insert("speakers", speaker_payload(name="Hidden Keynote", talkType="keynote", order=0, isKeynote=True, isPublished=False))


def test_health_reports_storage_backend(client, store):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["storage"] == store.name
    assert response.json()["status"] == "ok"


def test_info_returns_conference_metadata(client):
    response = client.get("/api/info")
    assert response.status_code == 200
    body = response.json()
    assert body["title"]
    assert body["importantDates"]["conferenceStart"] == "2025-09-29"
    assert body["contact"]["email"]


def test_list_content_filters_by_category_and_hides_drafts(client, store):
    _seed_content(store)
    response = client.get("/api/content", params={"category": "home"})
    assert response.status_code == 200
    assert [item["key"] for item in response.json()] == ["intro", "welcome"]


def test_list_content_without_filters_returns_published_only(client, store):
    _seed_content(store)
    keys = {item["key"] for item in client.get("/api/content").json()}
    assert keys == {"welcome", "intro", "hotel"}


def test_list_content_empty_collection(client):
    response = client.get("/api/content")
    assert response.status_code == 200
    assert response.json() == []


def test_get_content_by_key(client, store):
    _seed_content(store)
    response = client.get("/api/content/welcome")
    assert response.status_code == 200
    body = response.json()
    assert body["key"] == "welcome"
    assert body["isPublished"] is True
    assert "createdAt" in body


def test_unpublished_content_is_not_found(client, store):
    _seed_content(store)
    response = client.get("/api/content/draft")
    assert response.status_code == 404
    assert response.json() == {"detail": "Content not found"}


def test_unknown_content_filter_value_returns_empty_list(client, store):
    _seed_content(store)
    assert client.get("/api/content", params={"category": "nowhere"}).json() == []


def test_speakers_are_ordered_by_order_then_name(client, store):
    _seed_speakers(store)
    response = client.get("/api/speakers")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Sarah Johnson", "Amir Haddad", "Zoe Park"]


def test_speakers_filter_by_talk_type(client, store):
    _seed_speakers(store)
    names = [s["name"] for s in client.get("/api/speakers", params={"type": "invited"}).json()]
    assert names == ["Amir Haddad", "Zoe Park"]


def test_keynotes_exclude_unpublished_speakers(client, store):
    _seed_speakers(store)
    response = client.get("/api/speakers/keynotes")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Sarah Johnson"]


def test_register_creates_pending_registration(client, store):
    response = client.post("/api/register", json=registration_payload(status="approved"))
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Registration submitted successfully"

    stored = store.get("registrations", body["registrationId"])
    assert stored["status"] == "pending"
    assert stored["paymentStatus"] == "pending"
    assert stored["registrationFee"] == 0
    assert stored["submittedAt"]


def test_register_duplicate_email_is_case_insensitive(client, store):
    assert client.post("/api/register", json=registration_payload()).status_code == 201
    response = client.post("/api/register", json=registration_payload(email="ADA@example.org", firstName="Other"))
    assert response.status_code == 400
    assert response.json() == {"detail": "Email already registered"}
    assert store.count("registrations") == 1


def test_register_missing_field_reports_it_and_stores_nothing(client, store):
    payload = registration_payload()
    del payload["firstName"]
    response = client.post("/api/register", json=payload)
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert {"field": "firstName", "message": "First name is required"} in detail["errors"]
    assert store.count("registrations") == 0


def test_register_rejects_malformed_json(client, store):
    response = client.post(
        "/api/register",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert store.count("registrations") == 0


def test_registration_status_lookup(client):
    client.post("/api/register", json=registration_payload())
    response = client.get("/api/registration-status/Ada@Example.org")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "pending"
    assert body["submittedAt"]


def test_registration_status_unknown_email(client):
    response = client.get("/api/registration-status/nobody@example.org")
    assert response.status_code == 404


def test_register_rejects_email_of_mixed_case_legacy_record(client, store):
    # Older installations stored addresses exactly as typed.
    store.insert("registrations", {**registration_payload(email="Ada@Example.org"), "status": "approved"})
    response = client.post("/api/register", json=registration_payload(email="ada@example.org"))
    assert response.status_code == 400
    assert response.json() == {"detail": "Email already registered"}
    assert store.count("registrations") == 1


def test_registration_status_finds_mixed_case_legacy_record(client, store):
    store.insert("registrations", {**registration_payload(email="Ada@Example.org"), "status": "approved"})
    response = client.get("/api/registration-status/ada@example.org")
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
