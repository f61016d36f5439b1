"""
Notekeeper Backend — Notes, Users and Login API Tests
=======================================================

What:  End-to-end tests through the HTTP layer (ASGITransport, SQLite).
Why:   Status codes, auth wiring and error bodies are only visible here.
"""

import uuid

import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy.exc import OperationalError

from app.database import get_db_session
from app.models.user import NAME_MAX_LENGTH, USERNAME_MAX_LENGTH


INITIAL_NOTES = [
    {"content": "HTML is easy"},
    {"content": "Browser can execute only JavaScript", "important": True},
]


@pytest_asyncio.fixture
async def seeded_notes(test_client, auth_header):
    """Two notes created through the API by root."""
    created = []
    for note in INITIAL_NOTES:
        response = await test_client.post("/api/notes", json=note, headers=auth_header)
        assert response.status_code == 201
        created.append(response.json())
    return created


class TestUserCreation:
    """POST /api/users when one user (root) already exists."""

    @pytest.mark.asyncio
    async def test_creation_succeeds_with_fresh_username(self, test_client, root_user, users_in_db):
        users_at_start = await users_in_db()

        response = await test_client.post(
            "/api/users",
            json={"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"},
        )

        assert response.status_code == 201
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["username"] == "mluukkai"
        assert body["name"] == "Matti Luukkainen"
        assert "password" not in body and "password_hash" not in body

        users_at_end = await users_in_db()
        assert len(users_at_end) == len(users_at_start) + 1
        assert "mluukkai" in [u.username for u in users_at_end]

    @pytest.mark.asyncio
    async def test_creation_fails_if_username_taken(self, test_client, root_user, users_in_db):
        users_at_start = await users_in_db()

        response = await test_client.post(
            "/api/users",
            json={"username": "root", "name": "Superuser", "password": "salainen"},
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
        assert "expected `username` to be unique" in response.json()["message"]
        assert len(await users_in_db()) == len(users_at_start)

    @pytest.mark.asyncio
    async def test_creation_fails_with_short_password(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "shortpw", "password": "ab"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert "password" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_creation_fails_without_username(self, test_client):
        response = await test_client.post("/api/users", json={"password": "salainen"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_users_listed_with_their_notes(self, test_client, seeded_notes):
        response = await test_client.get("/api/users")

        assert response.status_code == 200
        users = response.json()
        assert len(users) == 1
        assert users[0]["username"] == "root"
        assert "password_hash" not in users[0]
        contents = {n["content"] for n in users[0]["notes"]}
        assert contents == {n["content"] for n in INITIAL_NOTES}


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token_username_and_name(self, test_client, root_user):
        response = await test_client.post(
            "/api/login", json={"username": "root", "password": "sekret"}
        )

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"token", "username", "name"}
        assert body["username"] == "root"
        assert body["name"] == "Superuser"

        claims = jwt.decode(body["token"], "test-secret-key", algorithms=["HS256"])
        assert claims["id"] == str(root_user.id)
        assert "exp" not in claims

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client, root_user):
        response = await test_client.post(
            "/api/login", json={"username": "root", "password": "wrong"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, test_client, root_user):
        response = await test_client.post(
            "/api/login", json={"username": "nobody", "password": "sekret"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "invalid username or password"


class TestViewingNotes:

    @pytest.mark.asyncio
    async def test_notes_are_returned_as_json(self, test_client, seeded_notes):
        response = await test_client.get("/api/notes")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")

    @pytest.mark.asyncio
    async def test_all_notes_are_returned(self, test_client, seeded_notes):
        response = await test_client.get("/api/notes")
        assert len(response.json()) == len(INITIAL_NOTES)

    @pytest.mark.asyncio
    async def test_specific_note_is_within_returned_notes(self, test_client, seeded_notes):
        response = await test_client.get("/api/notes")
        contents = [n["content"] for n in response.json()]
        assert "Browser can execute only JavaScript" in contents

    @pytest.mark.asyncio
    async def test_public_shape_hides_internal_fields(self, test_client, seeded_notes):
        response = await test_client.get("/api/notes")
        for note in response.json():
            assert set(note) == {"id", "content", "date", "important", "user"}
            assert isinstance(note["id"], str)


class TestViewingSpecificNote:

    @pytest.mark.asyncio
    async def test_succeeds_with_valid_id(self, test_client, seeded_notes):
        note_to_view = seeded_notes[0]

        response = await test_client.get(f"/api/notes/{note_to_view['id']}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == note_to_view

    @pytest.mark.asyncio
    async def test_fails_with_404_if_note_does_not_exist(self, test_client, seeded_notes):
        response = await test_client.get(f"/api/notes/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_fails_with_400_if_id_is_invalid(self, test_client, seeded_notes):
        response = await test_client.get("/api/notes/5a3d5da59070081a82a3445")
        assert response.status_code == 400
        assert response.json()["error"] == "malformatted_id"


class TestAdditionOfNote:

    @pytest.mark.asyncio
    async def test_succeeds_with_valid_data(self, test_client, seeded_notes, auth_header, notes_in_db):
        notes_at_start = await notes_in_db()

        response = await test_client.post(
            "/api/notes",
            json={"content": "async/await simplifies making async calls", "important": True},
            headers=auth_header,
        )

        assert response.status_code == 201
        assert response.headers["content-type"].startswith("application/json")
        notes_at_end = await notes_in_db()
        assert len(notes_at_end) == len(notes_at_start) + 1
        assert "async/await simplifies making async calls" in [n.content for n in notes_at_end]

    @pytest.mark.asyncio
    async def test_fails_with_400_if_content_missing(self, test_client, seeded_notes, auth_header, notes_in_db):
        notes_at_start = await notes_in_db()

        response = await test_client.post(
            "/api/notes", json={"important": True}, headers=auth_header
        )

        assert response.status_code == 400
        assert "note validation failed" in response.json()["message"].lower()
        assert len(await notes_in_db()) == len(notes_at_start)

    @pytest.mark.asyncio
    async def test_fails_with_400_if_content_too_short(self, test_client, auth_header):
        response = await test_client.post(
            "/api/notes", json={"content": "abcd"}, headers=auth_header
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_fails_with_400_if_important_not_boolean(self, test_client, auth_header):
        response = await test_client.post(
            "/api/notes",
            json={"content": "valid content", "important": "very"},
            headers=auth_header,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_fails_with_401_without_token(self, test_client, root_user, notes_in_db):
        response = await test_client.post("/api/notes", json={"content": "no token here"})

        assert response.status_code == 401
        assert response.json()["message"] == "token missing"
        assert response.headers["www-authenticate"] == "Bearer"
        assert await notes_in_db() == []

    @pytest.mark.asyncio
    async def test_fails_with_401_with_forged_token(self, test_client, root_user):
        forged = jwt.encode(
            {"username": "root", "id": str(root_user.id)}, "not-the-key", algorithm="HS256"
        )
        response = await test_client.post(
            "/api/notes",
            json={"content": "forged token note"},
            headers={"Authorization": f"bearer {forged}"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_owner_comes_from_token_not_payload(self, test_client, root_user, auth_header):
        response = await test_client.post(
            "/api/notes",
            json={"content": "HTML is easy", "user": str(uuid.uuid4())},
            headers=auth_header,
        )

        assert response.status_code == 201
        assert response.json()["user"] == str(root_user.id)

    @pytest.mark.asyncio
    async def test_important_defaults_to_false(self, test_client, auth_header):
        response = await test_client.post(
            "/api/notes", json={"content": "HTML is easy"}, headers=auth_header
        )
        assert response.json()["important"] is False

    @pytest.mark.asyncio
    async def test_fresh_user_can_sign_up_log_in_and_post(self, test_client):
        signup = await test_client.post(
            "/api/users",
            json={"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"},
        )
        assert signup.status_code == 201

        login = await test_client.post(
            "/api/login", json={"username": "mluukkai", "password": "salainen"}
        )
        assert login.status_code == 200
        token = login.json()["token"]

        created = await test_client.post(
            "/api/notes",
            json={"content": "HTML is easy"},
            headers={"Authorization": f"bearer {token}"},
        )
        assert created.status_code == 201
        assert created.json()["user"] == signup.json()["id"]


class TestUpdateOfNote:

    @pytest.mark.asyncio
    async def test_toggle_importance_without_token(self, test_client, seeded_notes):
        note = seeded_notes[0]

        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"content": note["content"], "important": True}
        )

        assert response.status_code == 200
        assert response.json()["important"] is True
        assert response.json()["content"] == note["content"]
        assert response.json()["user"] == note["user"]

    @pytest.mark.asyncio
    async def test_fails_with_404_if_note_does_not_exist(self, test_client, seeded_notes):
        response = await test_client.put(
            f"/api/notes/{uuid.uuid4()}", json={"important": True}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_fails_with_400_if_content_too_short(self, test_client, seeded_notes):
        response = await test_client.put(
            f"/api/notes/{seeded_notes[0]['id']}", json={"content": "hey"}
        )
        assert response.status_code == 400


class TestDeletionOfNote:

    @pytest.mark.asyncio
    async def test_succeeds_with_204_if_id_is_valid(self, test_client, seeded_notes, auth_header, notes_in_db):
        note_to_delete = seeded_notes[0]

        response = await test_client.delete(
            f"/api/notes/{note_to_delete['id']}", headers=auth_header
        )

        assert response.status_code == 204
        notes_at_end = await notes_in_db()
        assert len(notes_at_end) == len(INITIAL_NOTES) - 1
        assert note_to_delete["content"] not in [n.content for n in notes_at_end]

    @pytest.mark.asyncio
    async def test_absent_id_is_not_an_error(self, test_client, seeded_notes, auth_header, notes_in_db):
        response = await test_client.delete(f"/api/notes/{uuid.uuid4()}", headers=auth_header)

        assert response.status_code == 204
        assert len(await notes_in_db()) == len(INITIAL_NOTES)

    @pytest.mark.asyncio
    async def test_fails_with_401_without_token(self, test_client, seeded_notes, notes_in_db):
        response = await test_client.delete(f"/api/notes/{seeded_notes[0]['id']}")

        assert response.status_code == 401
        assert len(await notes_in_db()) == len(INITIAL_NOTES)

    @pytest.mark.asyncio
    async def test_fails_with_400_if_id_is_invalid(self, test_client, auth_header):
        response = await test_client.delete("/api/notes/not-an-id", headers=auth_header)
        assert response.status_code == 400


class TestMiscellaneous:

    @pytest.mark.asyncio
    async def test_unknown_endpoint(self, test_client):
        response = await test_client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"] == "unknown_endpoint"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unsafe_request_id_is_replaced(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "bad id with spaces"})
        rid = response.headers["X-Request-ID"]
        assert rid != "bad id with spaces"
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get("/api/notes/bogus", headers={"X-Request-ID": "trace-42"})
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, test_app, test_client):
        async def explode():
            raise RuntimeError("boom")

        test_app.add_api_route("/api/explode", explode, methods=["GET"])

        response = await test_client.get("/api/explode", headers={"X-Request-ID": "trace-99"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-99"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-99"
        assert "boom" not in body["message"]

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, test_app, test_client, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

        async def broken_session():
            yield mock_db_session

        test_app.dependency_overrides[get_db_session] = broken_session

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestCredentialEdgeCases:
    """Inputs that the storage or hashing layers would reject on their own."""

    @pytest.mark.asyncio
    async def test_signup_rejects_nul_in_password(self, test_client, users_in_db):
        response = await test_client.post(
            "/api/users",
            json={"username": "nulluser", "name": "Nul", "password": "abc\u0000def"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert await users_in_db() == []

    @pytest.mark.asyncio
    async def test_login_with_nul_in_password_is_invalid_credentials(self, test_client, root_user):
        response = await test_client.post(
            "/api/login", json={"username": "root", "password": "se\u0000kret"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_signup_rejects_overlong_username(self, test_client, users_in_db):
        response = await test_client.post(
            "/api/users",
            json={"username": "u" * (USERNAME_MAX_LENGTH + 1), "password": "salainen"},
        )

        assert response.status_code == 400
        assert "username" in response.json()["message"]
        assert await users_in_db() == []

    @pytest.mark.asyncio
    async def test_signup_rejects_overlong_name(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "mluukkai", "name": "n" * (NAME_MAX_LENGTH + 1), "password": "salainen"},
        )

        assert response.status_code == 400
        assert "name" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_signup_accepts_username_at_maximum_length(self, test_client):
        response = await test_client.post(
            "/api/users",
            json={"username": "u" * USERNAME_MAX_LENGTH, "password": "salainen"},
        )
        assert response.status_code == 201
