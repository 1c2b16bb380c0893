ADMIN_EMAIL = "admin@conference.org"
ADMIN_PASSWORD = "s3cret-pass"
SECRET_KEY = "test_secret"


def registration_payload(**overrides):
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.org",
        "affiliation": "University of London",
        "country": "United Kingdom",
        "registrationType": "regular",
    }
    payload.update(overrides)
    return payload


def content_payload(**overrides):
    payload = {
        "key": "welcome",
        "title": "Welcome",
        "content": "<p>Welcome to the conference.</p>",
        "type": "html",
        "category": "home",
    }
    payload.update(overrides)
    return payload


def speaker_payload(**overrides):
    payload = {
        "name": "Dr. Sarah Johnson",
        "affiliation": "Harvard Medical School",
        "talkTitle": "Host-Pathogen Interactions",
        "talkType": "invited",
    }
    payload.update(overrides)
    return payload
