import pytest
from sqlalchemy import event

from atenas.core.config import settings
from atenas.infrastructure.orm.content_model import SiteContentModel

from .factories import auth_headers


class TestTestimonials:

    def _submit(self, client, user, rating=5):
        response = client.post(
            "/api/v1/testimonials/",
            json={"title": "Gracias", "content": "Mi hijo aprendió mucho", "rating": rating},
            headers=auth_headers(user),
        )
        assert response.status_code == 201, response.text
        return response.json()

    def test_new_testimonials_wait_for_approval(self, client, donor):
        created = self._submit(client, donor)
        assert created["status"] == "pending"
        assert created["approve"] is False
        assert client.get("/api/v1/testimonials/").json() == []

    def test_approved_testimonial_is_public_with_author(self, client, donor, admin):
        created = self._submit(client, donor)
        response = client.patch(
            f"/api/v1/testimonials/{created['testimonial_id']}/approve", headers=auth_headers(admin)
        )
        assert response.json()["approve"] is True

        [public] = client.get("/api/v1/testimonials/").json()
        assert public["author_name"] == "Ana Gómez"
        assert public["status"] == "approved"

    def test_rejected_testimonial_stays_hidden(self, client, donor, admin):
        created = self._submit(client, donor)
        client.patch(f"/api/v1/testimonials/{created['testimonial_id']}/reject", headers=auth_headers(admin))
        assert client.get("/api/v1/testimonials/").json() == []
        [stored] = client.get("/api/v1/testimonials/all", headers=auth_headers(admin)).json()
        assert stored["status"] == "rejected"

    def test_rating_bounds(self, client, donor):
        response = client.post(
            "/api/v1/testimonials/", json={"content": "Excelente", "rating": 6}, headers=auth_headers(donor)
        )
        assert response.status_code == 422

    def test_only_admin_moderates(self, client, donor):
        created = self._submit(client, donor)
        response = client.patch(
            f"/api/v1/testimonials/{created['testimonial_id']}/approve", headers=auth_headers(donor)
        )
        assert response.status_code == 403

    def test_delete(self, client, donor, admin):
        created = self._submit(client, donor)
        url = f"/api/v1/testimonials/{created['testimonial_id']}"
        assert client.delete(url, headers=auth_headers(admin)).status_code == 200
        assert client.delete(url, headers=auth_headers(admin)).status_code == 404


class TestGallery:

    def _upload(self, client, admin, title, category="eventos", display_order=0):
        response = client.post(
            "/api/v1/gallery/",
            data={"title": title, "category": category, "display_order": str(display_order)},
            files={"file": (f"{title}.jpg", b"jpeg", "image/jpeg")},
            headers=auth_headers(admin),
        )
        assert response.status_code == 201, response.text
        return response.json()

    def test_upload_stores_in_gallery_bucket(self, client, admin, storage):
        item = self._upload(client, admin, "final")
        [(bucket, object_name)] = storage.objects
        assert bucket == settings.MINIO_GALLERY_BUCKET
        assert object_name.startswith("gallery/eventos/")
        assert item["public_url"] == f"{settings.minio_public_base}/{bucket}/{object_name}"
        assert item["type"] == "photo"

    def test_public_list_orders_and_filters(self, client, admin):
        self._upload(client, admin, "segunda", display_order=2)
        self._upload(client, admin, "primera", display_order=1)
        self._upload(client, admin, "torneo", category="torneos", display_order=0)

        assert [i["title"] for i in client.get("/api/v1/gallery/").json()] == ["torneo", "primera", "segunda"]
        eventos = client.get("/api/v1/gallery/", params={"category": "eventos"}).json()
        assert [i["title"] for i in eventos] == ["primera", "segunda"]

    def test_toggle_hides_from_public(self, client, admin):
        item = self._upload(client, admin, "oculta")
        client.patch(f"/api/v1/gallery/{item['gallery_item_id']}/toggle", headers=auth_headers(admin))
        assert client.get("/api/v1/gallery/").json() == []
        assert len(client.get("/api/v1/gallery/all", headers=auth_headers(admin)).json()) == 1

    def test_reorder(self, client, admin):
        first = self._upload(client, admin, "a", display_order=0)
        second = self._upload(client, admin, "b", display_order=1)
        response = client.put(
            "/api/v1/gallery/reorder",
            json={"items": [
                {"gallery_item_id": first["gallery_item_id"], "display_order": 5},
                {"gallery_item_id": second["gallery_item_id"], "display_order": 0},
            ]},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200, response.text
        assert [i["title"] for i in client.get("/api/v1/gallery/").json()] == ["b", "a"]

    def test_update(self, client, admin):
        item = self._upload(client, admin, "vieja")
        response = client.put(
            f"/api/v1/gallery/{item['gallery_item_id']}", json={"title": "nueva"}, headers=auth_headers(admin)
        )
        assert response.json()["title"] == "nueva"
        assert response.json()["category"] == "eventos"

    def test_delete_removes_object(self, client, admin, storage):
        item = self._upload(client, admin, "borrar")
        assert client.delete(f"/api/v1/gallery/{item['gallery_item_id']}", headers=auth_headers(admin)).status_code == 200
        assert storage.deleted == [(settings.MINIO_GALLERY_BUCKET, item["bucket_path"])]

    def test_upload_requires_admin(self, client, donor):
        response = client.post(
            "/api/v1/gallery/",
            data={"title": "x"},
            files={"file": ("x.jpg", b"jpeg", "image/jpeg")},
            headers=auth_headers(donor),
        )
        assert response.status_code == 403


class TestSiteContents:

    def _create(self, client, admin, key="home_hero", section="home", content_type="image"):
        response = client.post(
            "/api/v1/site-contents/",
            data={"content_key": key, "title": key.title(), "page_section": section, "content_type": content_type},
            files={"file": ("hero.png", b"\x89PNG-data", "image/png")},
            headers=auth_headers(admin),
        )
        return response

    def test_create_records_file_metadata(self, client, admin, storage):
        response = self._create(client, admin)
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["metadata"] == {"filename": "hero.png", "size": 9, "mime_type": "image/png"}
        assert body["bucket_path"].startswith("sites-content/home/home_hero/")
        assert (settings.MINIO_GALLERY_BUCKET, body["bucket_path"]) in storage.objects

    def test_duplicate_key_rejected(self, client, admin, storage):
        self._create(client, admin)
        response = self._create(client, admin)
        assert response.status_code == 400
        assert len(storage.objects) == 1

    def test_lookup_by_key_and_section(self, client, admin):
        self._create(client, admin, key="home_hero")
        self._create(client, admin, key="about_banner", section="about")

        assert client.get("/api/v1/site-contents/key/home_hero").json()["page_section"] == "home"
        assert client.get("/api/v1/site-contents/key/missing").status_code == 404
        about = client.get("/api/v1/site-contents/section/about").json()
        assert [c["content_key"] for c in about] == ["about_banner"]

    def test_inactive_content_is_not_public(self, client, admin):
        created = self._create(client, admin).json()
        client.put(
            f"/api/v1/site-contents/{created['content_id']}", json={"is_active": False}, headers=auth_headers(admin)
        )
        assert client.get("/api/v1/site-contents/key/home_hero").status_code == 404
        assert client.get("/api/v1/site-contents/").json() == []

    def test_stats(self, client, admin):
        self._create(client, admin, key="home_hero")
        self._create(client, admin, key="home_video", content_type="video")
        self._create(client, admin, key="about_banner", section="about")

        stats = client.get("/api/v1/site-contents/stats", headers=auth_headers(admin)).json()
        assert stats["total"] == 3
        assert stats["active"] == 3
        assert stats["by_section"] == {"home": 2, "about": 1}
        assert stats["by_type"] == {"image": 2, "video": 1}

    def test_replace_file_deletes_previous(self, client, admin, storage):
        created = self._create(client, admin).json()
        response = client.put(
            f"/api/v1/site-contents/{created['content_id']}/file",
            files={"file": ("new.jpg", b"jpeg", "image/jpeg")},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200, response.text
        assert response.json()["metadata"]["filename"] == "new.jpg"
        assert storage.deleted == [(settings.MINIO_GALLERY_BUCKET, created["bucket_path"])]

    def test_delete_removes_object(self, client, admin, storage):
        created = self._create(client, admin).json()
        url = f"/api/v1/site-contents/{created['content_id']}"
        assert client.delete(url, headers=auth_headers(admin)).status_code == 200
        assert storage.deleted == [(settings.MINIO_GALLERY_BUCKET, created["bucket_path"])]

    @pytest.fixture
    def failing_insert(self):
        def refuse(mapper, connection, target):
            raise RuntimeError("insert refused")

        event.listen(SiteContentModel, "before_insert", refuse)
        yield
        event.remove(SiteContentModel, "before_insert", refuse)

    def test_failed_insert_removes_uploaded_object(self, client, db, admin, storage, failing_insert):
        response = self._create(client, admin)
        assert response.status_code == 500
        [(bucket, object_name)] = storage.objects
        assert object_name.startswith("sites-content/home/home_hero/")
        assert storage.deleted == [(settings.MINIO_GALLERY_BUCKET, object_name)]
        assert db.query(SiteContentModel).count() == 0
