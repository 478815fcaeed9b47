"""
Document locker: search, folders, uploads, storage quota, sharing, deletion.
"""

import os

from farmconnect.config import settings

PDF_BYTES = b"%PDF-1.4\n" + b"0" * 2048


def _upload(client, name="Harvest Receipt.pdf", content=PDF_BYTES, **data):
    return client.post(
        "/api/documents/upload",
        files={"file": (name, content, "application/pdf")},
        data={"doc_type": "Receipt", **data},
    )


def test_seed_endpoint(client):
    assert client.get("/api/documents/seed").json() == {"ok": True, "seeded": 5}
    assert client.get("/api/documents/seed").json()["seeded"] == 0


def test_list_newest_first(client, seeded):
    docs = client.get("/api/documents/").json()
    assert len(docs) == 5
    assert docs[0]["name"] == "Soil Testing Report.pdf"


def test_search_name_and_type(client, seeded):
    by_name = client.get("/api/documents/", params={"q": "insurance"}).json()
    assert [d["name"] for d in by_name] == ["Crop Insurance Policy.pdf"]
    by_type = client.get("/api/documents/", params={"q": "loan document"}).json()
    assert [d["name"] for d in by_type] == ["Loan Agreement - State Bank.pdf"]


def test_filter_shared(client, seeded):
    shared = client.get("/api/documents/", params={"shared": True}).json()
    assert len(shared) == 2
    assert all(d["shared"] for d in shared)


def test_folders_count_documents(client, seeded):
    folders = client.get("/api/documents/folders").json()
    assert [f["name"] for f in folders] == ["Government Schemes", "Insurance", "Land Documents", "Loan Documents"]
    land = next(f for f in folders if f["name"] == "Land Documents")
    assert land["document_count"] == 2
    assert land["last_updated"].startswith("2023-06-01")

    docs = client.get("/api/documents/", params={"folder_id": land["id"]}).json()
    assert len(docs) == 2


def test_create_folder(client):
    resp = client.post("/api/documents/folders", json={"name": "Receipts"})
    assert resp.status_code == 200
    assert resp.json()["document_count"] == 0
    assert client.post("/api/documents/folders", json={"name": "Receipts"}).status_code == 400
    assert client.post("/api/documents/folders", json={"name": "  "}).status_code == 400


def test_storage_usage(client, seeded):
    data = client.get("/api/documents/storage").json()
    assert data["document_count"] == 5
    assert data["used_bytes"] == 10171187
    assert data["quota_bytes"] == 100 * 1024 * 1024
    assert data["used_percentage"] == 9.7


def test_storage_usage_empty(client):
    data = client.get("/api/documents/storage").json()
    assert data["used_bytes"] == 0
    assert data["used_percentage"] == 0.0


def test_upload_into_folder(client):
    folder_id = client.post("/api/documents/folders", json={"name": "Receipts"}).json()["id"]
    resp = _upload(client, folder_id=str(folder_id))
    assert resp.status_code == 200
    doc = resp.json()
    assert doc["name"] == "Harvest Receipt.pdf"
    assert doc["doc_type"] == "Receipt"
    assert doc["size_bytes"] == len(PDF_BYTES)
    assert doc["folder_id"] == folder_id
    assert doc["shared"] is False
    assert doc["file_url"].startswith("/uploads/documents/doc_")
    assert client.get("/api/documents/folders").json()[0]["document_count"] == 1


def test_upload_rejects_disallowed_type(client):
    resp = _upload(client, name="setup.exe")
    assert resp.status_code == 400
    assert "not allowed" in resp.json()["detail"]


def test_upload_rejects_unknown_folder(client):
    assert _upload(client, folder_id="999").status_code == 404


def test_upload_respects_quota(client, seeded, monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_QUOTA_MB", 10)
    resp = _upload(client, content=b"%PDF-" + b"0" * 400_000)
    assert resp.status_code == 400
    assert "quota" in resp.json()["detail"]


def test_share_rename_and_move(client, seeded):
    doc = client.get("/api/documents/", params={"q": "Soil"}).json()[0]
    insurance = next(f for f in client.get("/api/documents/folders").json() if f["name"] == "Insurance")
    resp = client.patch(f"/api/documents/{doc['id']}", json={
        "shared": True, "name": "Soil Report 2023.pdf", "folder_id": insurance["id"],
    })
    assert resp.status_code == 200
    assert resp.json()["shared"] is True
    assert resp.json()["name"] == "Soil Report 2023.pdf"
    assert client.get(f"/api/documents/{doc['id']}").json()["folder_id"] == insurance["id"]

    assert client.patch(f"/api/documents/{doc['id']}", json={"folder_id": 999}).status_code == 404


def test_delete_removes_file(client):
    doc = _upload(client).json()
    path = os.path.join(settings.UPLOAD_DIR, doc["file_url"][len("/uploads/"):])
    assert os.path.exists(path)

    assert client.delete(f"/api/documents/{doc['id']}").json() == {"ok": True}
    assert not os.path.exists(path)
    assert client.get(f"/api/documents/{doc['id']}").status_code == 404


def test_delete_missing_document(client):
    assert client.delete("/api/documents/12345").status_code == 404


def test_patch_null_name_unchanged_and_null_folder_unfiles(client, seeded):
    doc = client.get("/api/documents/", params={"q": "Soil"}).json()[0]
    assert doc["folder_id"] is not None
    resp = client.patch(f"/api/documents/{doc['id']}", json={
        "name": None, "doc_type": None, "shared": None, "folder_id": None,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Soil Testing Report.pdf"
    assert data["doc_type"] == "Farm Document"
    assert data["shared"] is False
    assert data["folder_id"] is None


def test_uploaded_file_is_served(client):
    doc = _upload(client).json()
    resp = client.get(doc["file_url"])
    assert resp.status_code == 200
    assert resp.content == PDF_BYTES
