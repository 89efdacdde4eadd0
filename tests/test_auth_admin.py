import re
from datetime import datetime, timedelta

import pytest

from atenas.domain.enums import RoleName
from atenas.infrastructure.orm.password_reset_token_model import PasswordResetTokenModel

from .factories import auth_headers, make_beneficiary, make_donation, make_headquarters, make_project, make_user


def _register(client, email="nuevo@example.com", username="nuevo", password="Secret123"):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "username": username, "password": password, "first_name": "Nuevo"},
    )


class TestAuthentication:

    def test_register_returns_donor_session(self, client):
        response = _register(client)
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["user"]["roles"] == ["donator"]
        assert body["user"]["primary_role"] == "donator"
        assert body["user"]["dashboard_path"] == "/donator"
        assert body["user"]["has_completed_profile"] is False
        assert body["tokens"]["token_type"] == "bearer"

    def test_register_rejects_duplicate_email(self, client, donor):
        response = _register(client, email="donor@example.com")
        assert response.status_code == 400

    @pytest.mark.parametrize("password", ["short1A", "nouppercase1", "NoDigitsHere"])
    def test_register_rejects_weak_passwords(self, client, password):
        assert _register(client, password=password).status_code == 422

    def test_login(self, client, donor):
        response = client.post("/api/v1/auth/login", json={"email": "donor@example.com", "password": "Secret123"})
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "donor@example.com"

    def test_login_hides_which_part_failed(self, client, donor):
        wrong_password = client.post("/api/v1/auth/login", json={"email": "donor@example.com", "password": "Nope1234"})
        unknown = client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": "Secret123"})
        assert wrong_password.status_code == unknown.status_code == 401
        assert wrong_password.json() == unknown.json()

    def test_refresh(self, client):
        tokens = _register(client).json()["tokens"]
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_access_token_is_not_a_refresh_token(self, client):
        tokens = _register(client).json()["tokens"]
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
        assert response.status_code == 401

    def test_session_picks_highest_role(self, client, db):
        user = make_user(db, "multi@atenas.org", roles=[RoleName.ENTRENADOR, RoleName.DIRECTOR_SEDE])
        body = client.get("/api/v1/auth/session", headers=auth_headers(user)).json()
        assert body["primary_role"] == "director_sede"
        assert body["dashboard_path"] == "/director-sede"
        assert body["has_completed_profile"] is True

    def test_session_requires_valid_token(self, client):
        response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401


class TestProfile:

    def test_update_profile(self, client, donor):
        response = client.put(
            "/api/v1/users/me", json={"phone": "3001112233", "username": "ana_g"}, headers=auth_headers(donor)
        )
        assert response.status_code == 200
        assert response.json()["phone"] == "3001112233"
        assert response.json()["username"] == "ana_g"

    def test_username_taken(self, client, db, donor):
        make_user(db, "other@example.com")
        response = client.put("/api/v1/users/me", json={"username": "other"}, headers=auth_headers(donor))
        assert response.status_code == 400

    def test_photo_upload(self, client, donor, storage):
        response = client.post(
            "/api/v1/users/me/photo",
            files={"file": ("me.png", b"\x89PNG", "image/png")},
            headers=auth_headers(donor),
        )
        assert response.status_code == 200, response.text
        [(bucket, object_name)] = storage.objects
        assert object_name.startswith(f"profiles/{donor.id}/")
        assert response.json()["profile_image_url"].endswith(object_name)

    def test_photo_rejects_other_types(self, client, donor):
        response = client.post(
            "/api/v1/users/me/photo",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers(donor),
        )
        assert response.status_code == 400


def _login(client, email, password):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


class TestPasswordRecovery:

    def test_forgot_password_emails_a_token(self, client, db, donor, mailer):
        response = client.post("/api/v1/auth/forgot-password", json={"email": "donor@example.com"})
        assert response.status_code == 200
        token = mailer.reset_tokens["donor@example.com"]
        stored = db.query(PasswordResetTokenModel).filter_by(token=token).one()
        assert stored.user_id == donor.id
        assert stored.used is False

    def test_unknown_email_gets_the_same_answer(self, client, donor, mailer):
        known = client.post("/api/v1/auth/forgot-password", json={"email": "donor@example.com"})
        unknown = client.post("/api/v1/auth/forgot-password", json={"email": "ghost@example.com"})
        assert known.json() == unknown.json()
        assert list(mailer.reset_tokens) == ["donor@example.com"]

    def test_reset_password_with_token(self, client, donor, mailer):
        client.post("/api/v1/auth/forgot-password", json={"email": "donor@example.com"})
        token = mailer.reset_tokens["donor@example.com"]

        response = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "Nueva2024"})
        assert response.status_code == 200, response.text
        assert _login(client, "donor@example.com", "Nueva2024").status_code == 200
        assert _login(client, "donor@example.com", "Secret123").status_code == 401

    def test_token_is_single_use(self, client, donor, mailer):
        client.post("/api/v1/auth/forgot-password", json={"email": "donor@example.com"})
        token = mailer.reset_tokens["donor@example.com"]
        client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "Nueva2024"})

        again = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "Otra2024x"})
        assert again.status_code == 400
        assert _login(client, "donor@example.com", "Nueva2024").status_code == 200

    def test_expired_token_rejected(self, client, db, donor):
        db.add(PasswordResetTokenModel(
            user_id=donor.id, token="expired-token", expires_at=datetime.utcnow() - timedelta(minutes=1)
        ))
        db.commit()
        response = client.post(
            "/api/v1/auth/reset-password", json={"token": "expired-token", "new_password": "Nueva2024"}
        )
        assert response.status_code == 400

    def test_reset_enforces_password_rules(self, client, donor, mailer):
        client.post("/api/v1/auth/forgot-password", json={"email": "donor@example.com"})
        token = mailer.reset_tokens["donor@example.com"]
        response = client.post("/api/v1/auth/reset-password", json={"token": token, "new_password": "short"})
        assert response.status_code == 422


class TestChangePassword:

    def test_change_password(self, client, donor):
        response = client.put(
            "/api/v1/users/me/password",
            json={"current_password": "Secret123", "new_password": "Cambio2024"},
            headers=auth_headers(donor),
        )
        assert response.status_code == 200, response.text
        assert _login(client, "donor@example.com", "Cambio2024").status_code == 200

    def test_wrong_current_password(self, client, donor):
        response = client.put(
            "/api/v1/users/me/password",
            json={"current_password": "Wrong1234", "new_password": "Cambio2024"},
            headers=auth_headers(donor),
        )
        assert response.status_code == 400
        assert _login(client, "donor@example.com", "Secret123").status_code == 200

    def test_new_password_must_differ(self, client, donor):
        response = client.put(
            "/api/v1/users/me/password",
            json={"current_password": "Secret123", "new_password": "Secret123"},
            headers=auth_headers(donor),
        )
        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = client.put(
            "/api/v1/users/me/password", json={"current_password": "Secret123", "new_password": "Cambio2024"}
        )
        assert response.status_code in (401, 403)


class TestAdminUsers:

    def test_create_user_returns_temporary_password(self, client, db, admin):
        headquarters = make_headquarters(db)
        response = client.post(
            "/api/v1/admin/users",
            json={
                "email": "Coach@Atenas.org",
                "username": "coach",
                "first_name": "Carlos",
                "roles": ["entrenador"],
                "headquarter_id": str(headquarters.headquarters_id),
            },
            headers=auth_headers(admin),
        )
        assert response.status_code == 201, response.text
        body = response.json()
        assert re.fullmatch(r"Temp[A-Za-z0-9]{8}!", body["temporary_password"])
        assert body["user"]["email"] == "coach@atenas.org"
        assert body["user"]["roles"] == ["entrenador"]

        login = client.post(
            "/api/v1/auth/login", json={"email": "coach@atenas.org", "password": body["temporary_password"]}
        )
        assert login.status_code == 200
        assert login.json()["user"]["dashboard_path"] == "/profile"

    def test_create_user_needs_a_role(self, client, admin):
        response = client.post(
            "/api/v1/admin/users", json={"email": "x@atenas.org", "username": "xx_user", "roles": []},
            headers=auth_headers(admin),
        )
        assert response.status_code == 422

    def test_update_roles(self, client, donor, admin):
        response = client.put(
            f"/api/v1/admin/users/{donor.id}", json={"roles": ["director"]}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert response.json()["roles"] == ["director"]

    def test_list_by_role(self, client, donor, admin):
        response = client.get("/api/v1/admin/users", params={"role": "donator"}, headers=auth_headers(admin))
        assert [u["email"] for u in response.json()] == ["donor@example.com"]

    def test_cannot_delete_self(self, client, admin):
        assert client.delete(f"/api/v1/admin/users/{admin.id}", headers=auth_headers(admin)).status_code == 400

    def test_delete_user(self, client, db, admin):
        user = make_user(db, "gone@example.com")
        assert client.delete(f"/api/v1/admin/users/{user.id}", headers=auth_headers(admin)).status_code == 200
        assert client.delete(f"/api/v1/admin/users/{user.id}", headers=auth_headers(admin)).status_code == 404

    def test_roles_listed_in_priority_order(self, client, admin):
        roles = client.get("/api/v1/admin/roles", headers=auth_headers(admin)).json()
        assert roles[:5] == ["admin", "director", "director_sede", "entrenador", "donator"]

    def test_non_admin_is_forbidden(self, client, db):
        director = make_user(db, "director@atenas.org", roles=[RoleName.DIRECTOR])
        assert client.get("/api/v1/admin/users", headers=auth_headers(director)).status_code == 403


class TestDashboards:

    def test_admin_dashboard(self, client, db, admin, donor):
        project = make_project(db)
        make_project(db, name="Cerrado", status="completed")
        make_donation(db, donor, project, 120000)
        make_donation(db, donor, project, 5000, status="pending")
        make_beneficiary(db, make_headquarters(db))

        response = client.get("/api/v1/admin/dashboard", headers=auth_headers(admin))
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total_users"] == 2
        assert stats["active_beneficiaries"] == 1
        assert float(stats["donations_this_month"]) == 120000
        assert stats["donations_this_month_count"] == 1
        assert stats["active_projects"] == 1
        assert len(response.json()["recent_donations"]) == 2

    def test_director_dashboard(self, client, db, donor):
        director = make_user(db, "director@atenas.org", roles=[RoleName.DIRECTOR])
        project = make_project(db, goal=400000)
        make_donation(db, donor, project, 100000)
        headquarters = make_headquarters(db, name="Norte")
        make_beneficiary(db, headquarters)

        response = client.get("/api/v1/director/dashboard", headers=auth_headers(director))
        assert response.status_code == 200
        body = response.json()
        assert float(body["projects"]["total_raised"]) == 100000
        assert float(body["projects"]["total_goal"]) == 400000
        assert body["headquarters"]["beneficiaries"][0]["beneficiaries"] == 1
        assert body["beneficiaries"]["by_status"]["activo"] == 1

    def test_director_dashboard_forbidden_for_donor(self, client, donor):
        assert client.get("/api/v1/director/dashboard", headers=auth_headers(donor)).status_code == 403
