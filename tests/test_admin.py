"""Tests for admin CRUD: users, studios, streams and permissions."""

from app.models import User, UserRole, UserStudioPermission


class TestAdminGate:
    def test_non_admin_is_forbidden(self, client, make_user, headers_for):
        operator = make_user("operator", role=UserRole.OPERATOR)

        response = client.get("/api/admin/users", headers=headers_for(operator))

        assert response.status_code == 403

    def test_unauthenticated_is_unauthorized(self, client):
        assert client.get("/api/admin/users").status_code == 401


class TestUsers:
    def test_create_user_hashes_password(self, client, db, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": "newbie", "password": "newbie123", "role": "operator"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert "password" not in body
        assert body["role"] == "operator"
        stored = db.query(User).filter(User.username == "newbie").one()
        assert stored.password != "newbie123"
        assert client.post("/api/auth/login", json={"username": "newbie", "password": "newbie123"}).status_code == 200

    def test_duplicate_username_is_conflict(self, client, admin_headers, make_user):
        make_user("taken")

        response = client.post(
            "/api/admin/users",
            json={"username": "taken", "password": "secret123"},
            headers=admin_headers,
        )

        assert response.status_code == 409

    def test_invalid_role_is_validation_error(self, client, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": "x", "password": "secret123", "role": "superuser"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_update_password(self, client, admin_headers, make_user):
        user = make_user("viewer", password="before1")

        response = client.patch(
            f"/api/admin/users/{user.id}", json={"password": "after12"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert "password" not in response.json()
        assert client.post("/api/auth/login", json={"username": "viewer", "password": "after12"}).status_code == 200

    def test_update_unknown_user(self, client, admin_headers):
        response = client.patch("/api/admin/users/nope", json={"first_name": "X"}, headers=admin_headers)

        assert response.status_code == 404

    def test_delete_deactivates_user(self, client, db, admin_headers, make_user):
        user = make_user("leaving", password="secret123")

        response = client.delete(f"/api/admin/users/{user.id}", headers=admin_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(User).filter(User.id == user.id).one().is_active is False
        assert client.post("/api/auth/login", json={"username": "leaving", "password": "secret123"}).status_code == 401
        listed = {u["username"]: u for u in client.get("/api/admin/users", headers=admin_headers).json()}
        assert listed["leaving"]["is_active"] is False

    def test_admin_cannot_delete_self(self, client, admin, admin_headers):
        response = client.delete(f"/api/admin/users/{admin.id}", headers=admin_headers)

        assert response.status_code == 400


class TestStudiosAndStreams:
    def test_create_and_update_studio(self, client, admin_headers):
        created = client.post("/api/admin/studios", json={"name": "Plex"}, headers=admin_headers)

        assert created.status_code == 201
        assert created.json()["primary_color"] == "#4A5568"

        updated = client.patch(
            f"/api/admin/studios/{created.json()['id']}",
            json={"color_code": "#7C9885"},
            headers=admin_headers,
        )
        assert updated.json()["primary_color"] == "#7C9885"

    def test_bad_color_code_is_validation_error(self, client, admin_headers):
        response = client.post(
            "/api/admin/studios", json={"name": "Plex", "color_code": "green"}, headers=admin_headers
        )

        assert response.status_code == 422

    def test_deactivated_studio_still_listed_for_admin(self, client, admin_headers, make_studio):
        studio = make_studio("Plex")

        client.delete(f"/api/admin/studios/{studio.id}", headers=admin_headers)

        listed = client.get("/api/admin/studios", headers=admin_headers).json()
        assert [(s["name"], s["is_active"]) for s in listed] == [("Plex", False)]
        assert client.get("/api/studios", headers=admin_headers).json() == []

    def test_create_stream_for_unknown_studio(self, client, admin_headers):
        response = client.post(
            "/api/admin/streams",
            json={"studio_id": "nope", "name": "Cam", "stream_url": "webrtc://x/live/cam"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    def test_delete_stream_is_soft(self, client, admin_headers, make_user, make_studio, make_stream, grant, headers_for):
        viewer = make_user("viewer")
        studio = make_studio("SoCal")
        stream = make_stream(studio, "SoCal Main Camera")
        grant(viewer, studio)

        assert client.delete(f"/api/admin/streams/{stream.id}", headers=admin_headers).status_code == 200

        studios = client.get("/api/studios", headers=headers_for(viewer)).json()
        assert studios[0]["streams"] == []
        assert client.get(f"/api/streams/{stream.id}", headers=headers_for(viewer)).status_code == 404
        kept = client.get(f"/api/admin/streams/{stream.id}", headers=admin_headers)
        assert kept.status_code == 200
        assert kept.json()["is_active"] is False
        with_streams = client.get("/api/admin/studios-with-streams", headers=admin_headers).json()
        assert [s["name"] for s in with_streams[0]["streams"]] == ["SoCal Main Camera"]

    def test_update_stream_fields(self, client, admin_headers, make_studio, make_stream):
        stream = make_stream(make_studio("SoCal"), "SoCal Main Camera")

        response = client.patch(
            f"/api/admin/streams/{stream.id}",
            json={"resolution": "720p", "fps": 24},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert (response.json()["resolution"], response.json()["fps"]) == ("720p", 24)


class TestPermissions:
    def test_grant_twice_updates_in_place(self, client, db, admin_headers, make_user, make_studio):
        viewer = make_user("viewer")
        studio = make_studio("SoCal")
        body = {"user_id": viewer.id, "studio_id": studio.id}

        first = client.post("/api/admin/permissions", json=body, headers=admin_headers).json()
        second = client.post(
            "/api/admin/permissions", json={**body, "can_control": True}, headers=admin_headers
        ).json()

        assert first["id"] == second["id"]
        assert (first["can_view"], first["can_control"]) == (True, False)
        assert second["can_control"] is True
        assert db.query(UserStudioPermission).filter_by(user_id=viewer.id, studio_id=studio.id).count() == 1

    def test_grant_for_unknown_user(self, client, admin_headers, make_studio):
        studio = make_studio("SoCal")

        response = client.post(
            "/api/admin/permissions", json={"user_id": "nope", "studio_id": studio.id}, headers=admin_headers
        )

        assert response.status_code == 404

    def test_revoke_removes_access(self, client, admin_headers, make_user, make_studio, grant, headers_for):
        viewer = make_user("viewer")
        studio = make_studio("SoCal")
        grant(viewer, studio, can_view=True, can_control=True)

        response = client.delete(f"/api/admin/permissions/{viewer.id}/{studio.id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get("/api/studios", headers=headers_for(viewer)).json() == []
        assert client.delete(
            f"/api/admin/permissions/{viewer.id}/{studio.id}", headers=admin_headers
        ).status_code == 404

    def test_list_permissions_filtered_by_user(self, client, admin_headers, make_user, make_studio, grant):
        viewer = make_user("viewer")
        operator = make_user("operator", role=UserRole.OPERATOR)
        studio = make_studio("SoCal")
        grant(viewer, studio)
        grant(operator, studio, can_control=True)

        listed = client.get(f"/api/admin/permissions?user_id={operator.id}", headers=admin_headers).json()

        assert len(listed) == 1
        assert listed[0]["can_control"] is True
        assert listed[0]["studio"]["name"] == "SoCal"


class TestNullFields:
    """Sending null for a required column is a validation error, not a database conflict."""

    def test_null_username(self, client, admin_headers, make_user):
        user = make_user("viewer")

        response = client.patch(f"/api/admin/users/{user.id}", json={"username": None}, headers=admin_headers)

        assert response.status_code == 422

    def test_null_studio_name(self, client, admin_headers, make_studio):
        studio = make_studio("SoCal")

        response = client.patch(f"/api/admin/studios/{studio.id}", json={"name": None}, headers=admin_headers)

        assert response.status_code == 422

    def test_null_stream_is_active(self, client, admin_headers, make_studio, make_stream):
        stream = make_stream(make_studio("SoCal"), "SoCal Main Camera")

        response = client.patch(f"/api/admin/streams/{stream.id}", json={"is_active": None}, headers=admin_headers)

        assert response.status_code == 422

    def test_nullable_field_may_be_cleared(self, client, admin_headers, make_studio, make_stream):
        stream = make_stream(make_studio("SoCal"), "SoCal Main Camera")

        response = client.patch(f"/api/admin/streams/{stream.id}", json={"description": None}, headers=admin_headers)

        assert response.status_code == 200
