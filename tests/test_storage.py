"""Tests for the document store and the upload file store."""

import io

import pytest

from property_market.storage.documents import DocumentNotFound, DocumentStore
from property_market.storage.files import FileStore, InvalidUpload


@pytest.fixture
def store():
    return DocumentStore.from_url("sqlite://")


class TestDocumentStore:
    def test_set_and_get(self, store):
        store.set("users", "u1", {"id": "u1", "nama": "Budi"})
        assert store.get("users", "u1") == {"id": "u1", "nama": "Budi"}

    def test_get_missing(self, store):
        assert store.get("users", "nope") is None
        assert not store.exists("users", "nope")

    def test_set_overwrites(self, store):
        store.set("users", "u1", {"nama": "Budi", "peran": "client"})
        store.set("users", "u1", {"nama": "Sari"})
        assert store.get("users", "u1") == {"nama": "Sari"}

    def test_update_merges(self, store):
        store.set("orders", "o1", {"id": "o1", "status": "WAITING", "budget": 100})
        store.update("orders", "o1", {"status": "DONE"})
        assert store.get("orders", "o1") == {"id": "o1", "status": "DONE", "budget": 100}

    def test_update_missing_raises(self, store):
        with pytest.raises(DocumentNotFound):
            store.update("orders", "nope", {"status": "DONE"})

    def test_delete(self, store):
        store.set("orders", "o1", {"id": "o1"})
        assert store.delete("orders", "o1")
        assert store.get("orders", "o1") is None
        assert not store.delete("orders", "o1")

    def test_collections_are_separate(self, store):
        store.set("users", "x", {"kind": "user"})
        store.set("vendors", "x", {"kind": "vendor"})
        assert store.get("users", "x") == {"kind": "user"}
        assert store.all("vendors") == [{"kind": "vendor"}]

    def test_where_equality(self, store):
        store.set("ratings", "v1_a", {"id_vendor": "v1", "id_client": "a", "rating": 4.0})
        store.set("ratings", "v1_b", {"id_vendor": "v1", "id_client": "b", "rating": 5.0})
        store.set("ratings", "v2_a", {"id_vendor": "v2", "id_client": "a", "rating": 3.0})
        assert [r["rating"] for r in store.where("ratings", id_vendor="v1")] == [4.0, 5.0]
        assert store.where("ratings", id_vendor="v1", id_client="b") == [
            {"id_vendor": "v1", "id_client": "b", "rating": 5.0}
        ]
        assert store.where("ratings", id_vendor="v3") == []

    def test_where_requires_field(self, store):
        store.set("vendors", "v1", {"id": "v1"})
        assert store.where("vendors", lokasi_kantor=None) == []

    def test_delete_where(self, store):
        store.set("ratings", "v1_a", {"id_vendor": "v1"})
        store.set("ratings", "v1_b", {"id_vendor": "v1"})
        store.set("ratings", "v2_a", {"id_vendor": "v2"})
        assert store.delete_where("ratings", id_vendor="v1") == 2
        assert store.all("ratings") == [{"id_vendor": "v2"}]

    def test_returned_documents_are_copies(self, store):
        store.set("users", "u1", {"nama": "Budi"})
        store.get("users", "u1")["nama"] = "changed"
        assert store.get("users", "u1") == {"nama": "Budi"}

    def test_file_database_persists(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'market.db'}"
        DocumentStore.from_url(url).set("users", "u1", {"nama": "Budi"})
        assert DocumentStore.from_url(url).get("users", "u1") == {"nama": "Budi"}


class TestFileStore:
    def test_saves_image_under_hashed_name(self, tmp_path):
        files = FileStore(tmp_path / "uploads")
        name = files.save("rumah.png", "image/png", io.BytesIO(b"png-bytes"))
        assert name == FileStore.stored_name("rumah.png")
        assert name.endswith(".png")
        assert files.path(name).read_bytes() == b"png-bytes"

    def test_stored_name_is_sha256(self):
        assert len(FileStore.stored_name("a.jpg")) == 64 + len(".jpg")

    def test_same_filename_same_name(self, tmp_path):
        files = FileStore(tmp_path)
        first = files.save("a.jpg", "image/jpeg", io.BytesIO(b"1"))
        second = files.save("a.jpg", "image/jpeg", io.BytesIO(b"2"))
        assert first == second
        assert files.path(first).read_bytes() == b"2"

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None])
    def test_rejects_non_images(self, tmp_path, content_type):
        files = FileStore(tmp_path / "uploads")
        with pytest.raises(InvalidUpload):
            files.save("doc.pdf", content_type, io.BytesIO(b"x"))
        assert not (tmp_path / "uploads").exists()
