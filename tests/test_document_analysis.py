"""
Upload → skill extraction → snapshot, through the HTTP API.
"""

from skillsync.core.config import get_settings
from skillsync.services.mongo_service import SkillSnapshotService
from skillsync.services.postgres_service import ExtractedSkillService

from conftest import upload


# ============================================================
# SAMPLE DATA
# ============================================================

SAMPLE_RESUME = b"""
PRIYA SHARMA
Software engineering student.

PROJECTS
- Built a REST API in Python with FastAPI and PostgreSQL
- Containerised services with Docker
- Led a team of four through a semester project
"""

EXTRACTED = [
    {"skillName": "Python", "category": "Programming", "skillType": "technical",
     "confidenceScore": 0.9, "evidenceText": "Built a REST API in Python"},
    {"skillName": "PostgreSQL", "category": "Databases", "skillType": "technical",
     "confidenceScore": 0.8, "evidenceText": "FastAPI and PostgreSQL"},
    {"skillName": "Docker", "category": "DevOps", "skillType": "technical",
     "confidenceScore": 0.7, "evidenceText": "Containerised services with Docker"},
    {"skillName": "Leadership", "category": "Communication", "skillType": "soft",
     "confidenceScore": 0.6, "evidenceText": "Led a team of four"},
]


# ============================================================
# AUTOMATIC ANALYSIS AFTER UPLOAD
# ============================================================

def test_text_upload_is_analyzed_in_background(client, ai, auth):
    headers, user_id = auth
    ai.reply(EXTRACTED)

    document = upload(client, headers, "resume.txt", SAMPLE_RESUME)
    assert document["status"] == "PROCESSING"
    assert document["storageUrl"].endswith(".txt")
    assert f"/files/{user_id}/" in document["storageUrl"]

    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "COMPLETED"
    assert [s["name"] for s in detail["skills"]] == ["Python", "PostgreSQL", "Docker", "Leadership"]
    assert detail["skills"][3]["type"] == "soft"
    assert detail["skills"][0]["evidenceQuote"] == "Built a REST API in Python"

    history = client.get("/api/skill-history", headers=headers).json()
    assert len(history) == 1
    assert history[0]["totalCount"] == 4
    assert history[0]["countsByType"] == {"technical": 3, "soft": 1, "transferable": 0}
    assert history[0]["documentId"] == document["id"]


def test_skill_history_ranks_categories_in_first_seen_order(client, ai, auth):
    headers, _ = auth
    ai.reply(EXTRACTED)

    upload(client, headers, "resume.txt", SAMPLE_RESUME)

    history = client.get("/api/skill-history", headers=headers).json()
    assert history[0]["topCategories"] == ["Programming", "Databases", "DevOps", "Communication"]


def test_document_text_is_sent_to_model(client, ai, auth):
    headers, _ = auth
    ai.reply(EXTRACTED)

    upload(client, headers, "resume.txt", SAMPLE_RESUME)

    assert len(ai.calls) == 1
    assert "Containerised services with Docker" in ai.calls[0]["user_content"]


def test_stored_file_is_served(client, ai, auth):
    headers, _ = auth
    ai.reply([])

    document = upload(client, headers, "notes.txt", b"plain notes")
    path = document["storageUrl"].split("http://localhost:8000", 1)[1]

    response = client.get(path)
    assert response.status_code == 200
    assert response.content == b"plain notes"


def test_pdf_upload_fails_without_model_call(client, ai, auth):
    headers, _ = auth

    document = upload(client, headers, "transcript.pdf", b"%PDF-1.4 fake")

    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "FAILED"
    assert detail["skills"] == []
    assert ai.calls == []


def test_fenced_json_reply_is_accepted(client, ai, auth):
    headers, _ = auth
    ai.reply("```json\n[{\"skillName\": \"SQL\", \"category\": \"Databases\"}]\n```")

    document = upload(client, headers)

    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "COMPLETED"
    assert detail["skills"][0]["name"] == "SQL"
    assert detail["skills"][0]["type"] == "technical"


def test_malformed_reply_fails_document(client, ai, auth):
    headers, _ = auth
    ai.reply([{"skillName": "Python"}, {"category": "no name"}])

    document = upload(client, headers)

    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "FAILED"
    assert detail["skills"] == []
    assert client.get("/api/skill-history", headers=headers).json() == []


def test_upload_requires_auth(client):
    response = client.post(
        "/api/documents/upload", files={"file": ("resume.txt", b"text", "text/plain")}
    )
    assert response.status_code == 401


def test_empty_upload_rejected(client, auth):
    headers, _ = auth
    response = client.post(
        "/api/documents/upload", files={"file": ("resume.txt", b"", "text/plain")}, headers=headers
    )
    assert response.status_code == 400


def test_oversized_upload_rejected(client, ai, auth, monkeypatch):
    headers, _ = auth
    monkeypatch.setattr(get_settings(), "max_upload_mb", 1)

    response = client.post(
        "/api/documents/upload",
        files={"file": ("big.txt", b"x" * (1024 * 1024 + 1), "text/plain")},
        headers=headers
    )

    assert response.status_code == 413
    assert response.json()["detail"] == "File too large. Maximum size: 1MB"
    assert client.get("/api/documents", headers=headers).json() == []
    assert ai.calls == []


def test_upload_at_size_limit_accepted(client, ai, auth, monkeypatch):
    headers, _ = auth
    monkeypatch.setattr(get_settings(), "max_upload_mb", 1)
    ai.reply([])

    document = upload(client, headers, "limit.txt", b"x" * (1024 * 1024))

    assert document["filename"] == "limit.txt"

# ============================================================

def test_analyze_endpoint(client, ai, auth, manual_analysis):
    headers, user_id = auth
    document = upload(client, headers, "resume.txt", SAMPLE_RESUME)
    assert ai.calls == []

    ai.reply(EXTRACTED)
    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert response.status_code == 200
    assert response.json() == {"status": "COMPLETED", "skillsCount": 4, "error": None}
    assert len(SkillSnapshotService().timeline(user_id)) == 1


def test_analyze_pdf_reports_failed_status(client, ai, auth, manual_analysis):
    headers, _ = auth
    document = upload(client, headers, "cv.PDF", b"%PDF-1.4")

    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "FAILED"
    assert body["skillsCount"] == 0
    assert "PDF" in body["error"]
    assert ai.calls == []


def test_analyze_malformed_reply_is_500(client, ai, auth, manual_analysis):
    headers, _ = auth
    document = upload(client, headers)

    ai.reply("I found some skills: Python, SQL")
    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to extract skills from document"
    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "FAILED"


def test_analyze_api_error_is_500(client, ai, auth, manual_analysis):
    headers, _ = auth
    document = upload(client, headers)

    ai.reply(RuntimeError("connection reset"))
    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert response.status_code == 500


def test_analyze_storage_failure_marks_document_failed(client, ai, auth, manual_analysis, monkeypatch):
    headers, user_id = auth
    document = upload(client, headers, "resume.txt", SAMPLE_RESUME)

    def broken_insert(self, db, owner_id, document_id, skills):
        raise RuntimeError("disk full")

    monkeypatch.setattr(ExtractedSkillService, "insert_many", broken_insert)
    ai.reply(EXTRACTED)
    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to extract skills from document"}
    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "FAILED"
    assert detail["skills"] == []
    assert SkillSnapshotService().timeline(user_id) == []


def test_background_storage_failure_marks_document_failed(client, ai, auth, monkeypatch):
    headers, _ = auth

    def broken_insert(self, db, owner_id, document_id, skills):
        raise RuntimeError("disk full")

    monkeypatch.setattr(ExtractedSkillService, "insert_many", broken_insert)
    ai.reply(EXTRACTED)
    document = upload(client, headers, "resume.txt", SAMPLE_RESUME)

    detail = client.get(f"/api/documents/{document['id']}", headers=headers).json()
    assert detail["status"] == "FAILED"


def test_analyze_twice_is_rejected(client, ai, auth, manual_analysis):
    headers, _ = auth
    document = upload(client, headers)
    ai.reply([{"skillName": "Python"}])

    first = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)
    second = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 400
    assert len(ai.calls) == 1


def test_analyze_other_users_document_is_404(client, ai, auth, other_auth, manual_analysis):
    headers, _ = auth
    other_headers, _ = other_auth
    document = upload(client, headers)

    response = client.post("/api/documents/analyze", json={"documentId": document["id"]}, headers=other_headers)

    assert response.status_code == 404
    assert ai.calls == []


def test_analyze_requires_document_id(client, auth):
    headers, _ = auth
    response = client.post("/api/documents/analyze", json={}, headers=headers)
    assert response.status_code == 400


# ============================================================
# LISTING
# ============================================================

def test_list_documents_newest_first(client, ai, auth):
    headers, _ = auth
    ai.reply([], [])
    first = upload(client, headers, "a.txt")
    second = upload(client, headers, "b.txt")

    documents = client.get("/api/documents", headers=headers).json()

    assert [d["id"] for d in documents] == [second["id"], first["id"]]


def test_skills_filter_by_type(client, ai, auth):
    headers, _ = auth
    ai.reply(EXTRACTED)
    upload(client, headers, "resume.txt", SAMPLE_RESUME)

    soft = client.get("/api/skills", params={"type": "soft"}, headers=headers).json()
    everything = client.get("/api/skills", headers=headers).json()

    assert [s["name"] for s in soft] == ["Leadership"]
    assert [s["name"] for s in everything] == ["Leadership", "Docker", "PostgreSQL", "Python"]
