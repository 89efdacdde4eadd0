from datetime import date

import httpx
import pytest

from atenas.api.dependencies import get_geocoding_service
from atenas.domain.enums import RoleName
from atenas.infrastructure.external_services.geocoding_service import GeocodingService
from atenas.main import app

from .factories import (
    auth_headers, make_beneficiary, make_donation, make_headquarters, make_project, make_user,
)


@pytest.fixture
def director(db):
    return make_user(db, "director@atenas.org", roles=[RoleName.DIRECTOR])


class TestProjects:

    def test_list_adds_raised_and_progress(self, client, db, donor):
        project = make_project(db, name="Becas", goal=200000, start_date=date(2024, 1, 1))
        make_project(db, name="Uniformes", goal=100000, start_date=date(2024, 6, 1))
        make_donation(db, donor, project, 150000)
        make_donation(db, donor, project, 150000)
        make_donation(db, donor, project, 99999, status="pending")

        response = client.get("/api/v1/projects/")
        assert response.status_code == 200
        projects = response.json()
        assert [p["name"] for p in projects] == ["Uniformes", "Becas"]
        becas = projects[1]
        assert float(becas["raised"]) == 300000
        assert becas["progress"] == 100

    def test_filters(self, client, db):
        make_project(db, name="Torneo regional", category="deporte", description="Copa")
        make_project(db, name="Biblioteca", category="educacion", status="completed")

        assert [p["name"] for p in client.get("/api/v1/projects/", params={"search": "copa"}).json()] == [
            "Torneo regional"
        ]
        assert [p["name"] for p in client.get("/api/v1/projects/", params={"status": "completed"}).json()] == [
            "Biblioteca"
        ]
        assert len(client.get("/api/v1/projects/", params={"category": "all"}).json()) == 2

    def test_create_requires_manager_role(self, client, donor):
        response = client.post("/api/v1/projects/", json={"name": "Becas"}, headers=auth_headers(donor))
        assert response.status_code == 403

    def test_create_with_headquarters(self, client, db, director):
        headquarters = make_headquarters(db)
        response = client.post(
            "/api/v1/projects/",
            json={"name": "Becas", "finance_goal": "500000", "headquarters_id": str(headquarters.headquarters_id)},
            headers=auth_headers(director),
        )
        assert response.status_code == 201, response.text
        assert response.json()["headquarters_ids"] == [str(headquarters.headquarters_id)]
        assert response.json()["progress"] == 0

    def test_create_validates_name(self, client, admin):
        response = client.post("/api/v1/projects/", json={"name": "ab"}, headers=auth_headers(admin))
        assert response.status_code == 422

    def test_update_headquarters_semantics(self, client, db, admin):
        north = make_headquarters(db, name="Norte")
        south = make_headquarters(db, name="Sur")
        project = make_project(db)
        url = f"/api/v1/projects/{project.project_id}"
        headers = auth_headers(admin)

        client.post(f"{url}/headquarters/{north.headquarters_id}", headers=headers)
        assert client.get(url).json()["headquarters_ids"] == [str(north.headquarters_id)]

        # Omitted keeps the assignment
        response = client.put(url, json={"description": "Nueva"}, headers=headers)
        assert response.json()["headquarters_ids"] == [str(north.headquarters_id)]

        # An id replaces it
        response = client.put(url, json={"headquarters_id": str(south.headquarters_id)}, headers=headers)
        assert response.json()["headquarters_ids"] == [str(south.headquarters_id)]

        # An empty string clears it
        response = client.put(url, json={"headquarters_id": ""}, headers=headers)
        assert response.json()["headquarters_ids"] == []
        assert client.get(url).json()["headquarters_ids"] == []

    def test_update_rejects_end_before_start(self, client, db, admin):
        project = make_project(db)
        response = client.put(
            f"/api/v1/projects/{project.project_id}",
            json={"start_date": "2024-05-01", "end_date": "2024-04-01"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 400

    def test_delete_blocked_by_donations(self, client, db, admin, donor):
        project = make_project(db)
        make_donation(db, donor, project, 1000)
        response = client.delete(f"/api/v1/projects/{project.project_id}", headers=auth_headers(admin))
        assert response.status_code == 400

    def test_delete(self, client, db, admin):
        project = make_project(db)
        assert client.delete(f"/api/v1/projects/{project.project_id}", headers=auth_headers(admin)).status_code == 200
        assert client.get(f"/api/v1/projects/{project.project_id}").status_code == 404


class TestHeadquarters:

    def test_creator_becomes_director(self, client, director):
        response = client.post(
            "/api/v1/headquarters/",
            json={"name": "Sede Sur", "address": "Cra 1 # 2-3", "city": "Cali"},
            headers=auth_headers(director),
        )
        assert response.status_code == 201, response.text
        assert response.json()["user_id"] == str(director.id)

    def test_admin_assigns_director(self, client, admin, director):
        response = client.post(
            "/api/v1/headquarters/",
            json={"name": "Sede Sur", "address": "Cra 1", "city": "Cali", "user_id": str(director.id)},
            headers=auth_headers(admin),
        )
        assert response.json()["user_id"] == str(director.id)

    def test_list_filters_and_stats(self, client, db):
        make_headquarters(db, name="Sede Norte", address="Av 3N")
        make_headquarters(db, name="Sede Jamundí", address="Calle 10", status="inactive")

        assert len(client.get("/api/v1/headquarters/", params={"status": "active"}).json()) == 1
        assert [h["name"] for h in client.get("/api/v1/headquarters/", params={"search": "av 3"}).json()] == [
            "Sede Norte"
        ]
        assert client.get("/api/v1/headquarters/stats").json() == {"total": 2, "active": 1, "inactive": 1}

    def test_toggle_status(self, client, db, admin):
        headquarters = make_headquarters(db)
        response = client.patch(
            f"/api/v1/headquarters/{headquarters.headquarters_id}/toggle-status", headers=auth_headers(admin)
        )
        assert response.json()["status"] == "inactive"

    def test_delete_blocked_by_beneficiaries(self, client, db, admin):
        headquarters = make_headquarters(db)
        make_beneficiary(db, headquarters)
        response = client.delete(f"/api/v1/headquarters/{headquarters.headquarters_id}", headers=auth_headers(admin))
        assert response.status_code == 400

    def test_image_upload(self, client, db, admin, storage):
        headquarters = make_headquarters(db)
        response = client.post(
            f"/api/v1/headquarters/{headquarters.headquarters_id}/image",
            files={"file": ("sede.png", b"\x89PNG", "image/png")},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200, response.text
        [(bucket, object_name)] = storage.objects
        assert object_name.startswith(f"headquarters/{headquarters.headquarters_id}/")
        assert response.json()["image_url"].endswith(object_name)

    def test_beneficiary_count(self, client, db):
        headquarters = make_headquarters(db)
        make_beneficiary(db, headquarters)
        make_beneficiary(db, headquarters, first_name="Sara")
        response = client.get(f"/api/v1/headquarters/{headquarters.headquarters_id}/beneficiaries/count")
        assert response.json()["count"] == 2


class TestHeadquartersMap:

    @pytest.fixture
    def geocoder(self):
        calls = []

        def handler(request):
            calls.append(request.url.params["q"])
            if "Desconocida" in request.url.params["q"]:
                return httpx.Response(200, json=[])
            return httpx.Response(200, json=[{"lat": "3.48", "lon": "-76.51"}])

        service = GeocodingService(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), cache={})
        app.dependency_overrides[get_geocoding_service] = lambda: service
        yield calls
        app.dependency_overrides.pop(get_geocoding_service, None)

    def test_markers_for_resolvable_active_sites(self, client, db, geocoder):
        make_headquarters(db, name="Norte", address="Av 3N # 20")
        make_headquarters(db, name="Perdida", address="Calle Desconocida")
        make_headquarters(db, name="Cerrada", address="Calle 1", status="inactive")

        response = client.get("/api/v1/public/headquarters/map")
        assert response.status_code == 200
        body = response.json()
        assert body["center"] == [3.4516, -76.532]
        assert [m["name"] for m in body["markers"]] == ["Norte"]
        assert body["markers"][0]["lat"] == 3.48
        assert len(geocoder) == 2

        client.get("/api/v1/headquarters/map")
        assert len(geocoder) == 2
