from datetime import date

import pytest

from atenas.domain.enums import RoleName
from atenas.infrastructure.orm.beneficiary_model import BeneficiaryModel, BeneficiaryEvaluationModel

from .factories import auth_headers, make_beneficiary, make_headquarters, make_user


TECHNICAL = {"pase": 5, "recepcion": 4, "remate": 3, "regate": 4, "ubicacion_espacio_temporal": 4}


@pytest.fixture
def site(db):
    """A site director running one headquarters, plus a second headquarters they do not run"""
    director = make_user(db, "sede@atenas.org", roles=[RoleName.DIRECTOR_SEDE])
    own = make_headquarters(db, name="Sede Norte", user_id=director.id)
    other = make_headquarters(db, name="Sede Sur")
    return director, own, other


def _payload(headquarters, **overrides):
    payload = {
        "first_name": "Luis",
        "last_name": "Pérez",
        "birth_date": date(date.today().year - 12, 3, 1).isoformat(),
        "category": "sub-13",
        "headquarters_id": str(headquarters.headquarters_id),
        "phone": "300 123 4567",
    }
    payload.update(overrides)
    return payload


class TestBeneficiaryCrud:

    def test_create_defaults(self, client, db, admin):
        headquarters = make_headquarters(db)
        response = client.post("/api/v1/beneficiaries/", json=_payload(headquarters), headers=auth_headers(admin))
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["status"] == "activo"
        assert body["registry_date"] == date.today().isoformat()
        assert body["age"] == 11 or body["age"] == 12

    def test_create_rejects_adults(self, client, db, admin):
        headquarters = make_headquarters(db)
        payload = _payload(headquarters, birth_date=date(date.today().year - 19, 1, 1).isoformat())
        response = client.post("/api/v1/beneficiaries/", json=payload, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_create_rejects_bad_phone(self, client, db, admin):
        headquarters = make_headquarters(db)
        payload = _payload(headquarters, phone="call me")
        response = client.post("/api/v1/beneficiaries/", json=payload, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_update_and_delete(self, client, db, admin):
        beneficiary = make_beneficiary(db, make_headquarters(db))
        url = f"/api/v1/beneficiaries/{beneficiary.beneficiary_id}"

        response = client.put(url, json={"attendance": 92.5, "status": "suspendido"}, headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["attendance"] == 92.5
        assert response.json()["status"] == "suspendido"

        assert client.put(url, json={"attendance": 120}, headers=auth_headers(admin)).status_code == 400
        assert client.delete(url, headers=auth_headers(admin)).status_code == 200
        assert client.get(url, headers=auth_headers(admin)).status_code == 404

    def test_low_performance_and_attendance(self, client, db, admin):
        headquarters = make_headquarters(db)
        make_beneficiary(db, headquarters, first_name="Bajo", performance=40, attendance=95)
        make_beneficiary(db, headquarters, first_name="Alto", performance=85, attendance=70)
        headers = auth_headers(admin)

        low_performance = client.get("/api/v1/beneficiaries/low-performance", headers=headers).json()
        assert [b["first_name"] for b in low_performance] == ["Bajo"]
        low_attendance = client.get("/api/v1/beneficiaries/low-attendance", headers=headers).json()
        assert [b["first_name"] for b in low_attendance] == ["Alto"]
        custom = client.get("/api/v1/beneficiaries/low-performance", params={"threshold": 90}, headers=headers)
        assert len(custom.json()) == 2

    def test_stats(self, client, db, admin):
        north = make_headquarters(db, name="Norte")
        make_beneficiary(db, north, category="sub-10")
        make_beneficiary(db, north, category="sub-12", status="pendiente")
        stats = client.get("/api/v1/beneficiaries/stats", headers=auth_headers(admin)).json()
        assert stats["total"] == 2
        assert stats["by_category"] == {"sub-10": 1, "sub-12": 1}
        assert stats["by_headquarters"] == {str(north.headquarters_id): 2}

    def test_photo_upload_path(self, client, db, admin, storage):
        beneficiary = make_beneficiary(db, make_headquarters(db))
        response = client.post(
            f"/api/v1/beneficiaries/{beneficiary.beneficiary_id}/photo",
            files={"file": ("Foto.JPG", b"jpeg-bytes", "image/jpeg")},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200, response.text
        [(bucket, object_name)] = storage.objects
        assert object_name.startswith(f"beneficiaries/{beneficiary.beneficiary_id}-")
        assert object_name.endswith(".jpg")

    def test_donor_has_no_access(self, client, donor):
        assert client.get("/api/v1/beneficiaries/", headers=auth_headers(donor)).status_code == 403


class TestSiteDirectorScope:

    def test_lists_only_own_headquarters(self, client, db, site):
        director, own, other = site
        make_beneficiary(db, own, first_name="Propio")
        make_beneficiary(db, other, first_name="Ajeno")

        response = client.get("/api/v1/beneficiaries/", headers=auth_headers(director))
        assert [b["first_name"] for b in response.json()] == ["Propio"]

    def test_cannot_touch_other_headquarters(self, client, db, site):
        director, own, other = site
        foreign = make_beneficiary(db, other)

        headers = auth_headers(director)
        assert client.get(f"/api/v1/beneficiaries/{foreign.beneficiary_id}", headers=headers).status_code == 403
        assert client.post("/api/v1/beneficiaries/", json=_payload(other), headers=headers).status_code == 403
        assert client.post("/api/v1/beneficiaries/", json=_payload(own), headers=headers).status_code == 201

    def test_dashboard(self, client, db, site):
        director, own, other = site
        make_beneficiary(db, own, performance=80, attendance=90)
        make_beneficiary(db, own, performance=60, attendance=70, status="inactivo")

        response = client.get("/api/v1/director-sede/dashboard", headers=auth_headers(director))
        assert response.status_code == 200
        body = response.json()
        assert body["headquarters"]["name"] == "Sede Norte"
        assert body["stats"]["total_beneficiaries"] == 2
        assert body["stats"]["by_status"]["inactivo"] == 1
        assert body["stats"]["average_performance"] == 70.0

    def test_dashboard_falls_back_to_user_headquarter(self, client, db):
        headquarters = make_headquarters(db, name="Sede Oeste")
        director = make_user(
            db, "oeste@atenas.org", roles=[RoleName.DIRECTOR_SEDE], headquarter_id=headquarters.headquarters_id
        )
        response = client.get("/api/v1/director-sede/dashboard", headers=auth_headers(director))
        assert response.json()["headquarters"]["name"] == "Sede Oeste"

    def test_dashboard_without_headquarters(self, client, db):
        director = make_user(db, "sin@atenas.org", roles=[RoleName.DIRECTOR_SEDE])
        assert client.get("/api/v1/director-sede/dashboard", headers=auth_headers(director)).status_code == 404


class TestCoachScope:

    def _coach(self, db, headquarters=None):
        return make_user(
            db, "coach@atenas.org", roles=[RoleName.ENTRENADOR],
            headquarter_id=headquarters.headquarters_id if headquarters else None,
        )

    def test_lists_only_assigned_headquarters(self, client, db):
        own = make_headquarters(db, name="Sede Norte")
        other = make_headquarters(db, name="Sede Sur")
        make_beneficiary(db, own, first_name="Propio")
        foreign = make_beneficiary(db, other, first_name="Ajeno")
        headers = auth_headers(self._coach(db, own))

        response = client.get("/api/v1/beneficiaries/", headers=headers)
        assert [b["first_name"] for b in response.json()] == ["Propio"]
        assert client.get(f"/api/v1/beneficiaries/{foreign.beneficiary_id}", headers=headers).status_code == 403
        response = client.get(
            "/api/v1/beneficiaries/", params={"headquarters_id": str(other.headquarters_id)}, headers=headers
        )
        assert response.status_code == 403

    def test_unassigned_coach_is_forbidden(self, client, db):
        make_beneficiary(db, make_headquarters(db))
        response = client.get("/api/v1/beneficiaries/", headers=auth_headers(self._coach(db)))
        assert response.status_code == 403

    def test_cannot_evaluate_other_headquarters(self, client, db):
        own = make_headquarters(db, name="Sede Norte")
        other = make_headquarters(db, name="Sede Sur")
        foreign = make_beneficiary(db, other)
        headers = auth_headers(self._coach(db, own))

        response = client.post(
            "/api/v1/evaluations/",
            json={"beneficiary_id": str(foreign.beneficiary_id), "technical_tactic_detail": TECHNICAL},
            headers=headers,
        )
        assert response.status_code == 403
        listed = client.get(f"/api/v1/evaluations/headquarters/{other.headquarters_id}", headers=headers)
        assert listed.status_code == 403


class TestEvaluations:

    def test_record_updates_beneficiary(self, client, db):
        headquarters = make_headquarters(db)
        coach = make_user(
            db, "coach@atenas.org", roles=[RoleName.ENTRENADOR], headquarter_id=headquarters.headquarters_id
        )
        beneficiary = make_beneficiary(db, headquarters)

        response = client.post(
            "/api/v1/evaluations/",
            json={
                "beneficiary_id": str(beneficiary.beneficiary_id),
                "anthropometric_detail": {"genero": "M", "peso": 40, "talla": 150, "cintura": 70, "cadera": 90},
                "technical_tactic_detail": TECHNICAL,
            },
            headers=auth_headers(coach),
        )
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["performance"] == 75
        assert body["bmi"] == 17.78
        assert body["waist_hip_ratio"] == 0.78
        assert body["technical_average"] == 4.0

        db.expire_all()
        stored = db.query(BeneficiaryModel).filter_by(beneficiary_id=beneficiary.beneficiary_id).one()
        assert stored.performance == 75
        assert stored.sex == "M"

    def test_empty_evaluation_rejected(self, client, db, admin):
        beneficiary = make_beneficiary(db, make_headquarters(db))
        response = client.post(
            "/api/v1/evaluations/", json={"beneficiary_id": str(beneficiary.beneficiary_id)}, headers=auth_headers(admin)
        )
        assert response.status_code == 400

    def test_list_by_headquarters_and_delete(self, client, db, admin):
        headquarters = make_headquarters(db)
        beneficiary = make_beneficiary(db, headquarters)
        headers = auth_headers(admin)
        created = client.post(
            "/api/v1/evaluations/",
            json={"beneficiary_id": str(beneficiary.beneficiary_id), "emotional_detail": {"motivacion": 4}},
            headers=headers,
        ).json()

        listed = client.get(f"/api/v1/evaluations/headquarters/{headquarters.headquarters_id}", headers=headers)
        assert [e["id"] for e in listed.json()] == [created["id"]]

        assert client.delete(f"/api/v1/evaluations/{created['id']}", headers=headers).status_code == 200
        assert db.query(BeneficiaryEvaluationModel).count() == 0
        assert client.get(f"/api/v1/evaluations/{created['id']}", headers=headers).status_code == 404

    def test_update_reapplies_performance_and_sex(self, client, db):
        headquarters = make_headquarters(db)
        coach = make_user(
            db, "coach@atenas.org", roles=[RoleName.ENTRENADOR], headquarter_id=headquarters.headquarters_id
        )
        beneficiary = make_beneficiary(db, headquarters)
        headers = auth_headers(coach)
        created = client.post(
            "/api/v1/evaluations/",
            json={
                "beneficiary_id": str(beneficiary.beneficiary_id),
                "anthropometric_detail": {"genero": "M"},
                "technical_tactic_detail": TECHNICAL,
            },
            headers=headers,
        ).json()

        response = client.put(
            f"/api/v1/evaluations/{created['id']}",
            json={
                "anthropometric_detail": {"genero": "F", "peso": 45, "talla": 150},
                "technical_tactic_detail": {name: 5 for name in TECHNICAL},
            },
            headers=headers,
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["performance"] == 100
        assert body["bmi"] == 20.0
        assert body["emotional_detail"] is None

        db.expire_all()
        stored = db.query(BeneficiaryModel).filter_by(beneficiary_id=beneficiary.beneficiary_id).one()
        assert stored.performance == 100
        assert stored.sex == "F"
        assert client.get(f"/api/v1/evaluations/{created['id']}", headers=headers).json()["performance"] == 100

    def test_update_keeps_omitted_sections(self, client, db, admin):
        beneficiary = make_beneficiary(db, make_headquarters(db))
        headers = auth_headers(admin)
        created = client.post(
            "/api/v1/evaluations/",
            json={"beneficiary_id": str(beneficiary.beneficiary_id), "technical_tactic_detail": TECHNICAL},
            headers=headers,
        ).json()

        response = client.put(
            f"/api/v1/evaluations/{created['id']}", json={"emotional_detail": {"motivacion": 5}}, headers=headers
        )
        assert response.json()["technical_tactic_detail"] == TECHNICAL
        assert response.json()["emotional_detail"] == {"motivacion": 5}

    def test_update_cannot_empty_evaluation(self, client, db, admin):
        beneficiary = make_beneficiary(db, make_headquarters(db))
        headers = auth_headers(admin)
        created = client.post(
            "/api/v1/evaluations/",
            json={"beneficiary_id": str(beneficiary.beneficiary_id), "emotional_detail": {"motivacion": 4}},
            headers=headers,
        ).json()
        response = client.put(f"/api/v1/evaluations/{created['id']}", json={"emotional_detail": None}, headers=headers)
        assert response.status_code == 400

    def test_update_unknown_evaluation(self, client, admin):
        response = client.put(
            "/api/v1/evaluations/6f1c1b1e-0000-4000-8000-000000000000",
            json={"emotional_detail": {"motivacion": 4}},
            headers=auth_headers(admin),
        )
        assert response.status_code == 404
