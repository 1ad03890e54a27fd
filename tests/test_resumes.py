"""Resume endpoint tests: CRUD, activation, and the download link."""
import uuid
from urllib.parse import unquote

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from conftest import PDF_BYTES, pdf_data_url


async def _upload(client: AsyncClient, name: str, is_active: bool = False, content: bytes = PDF_BYTES) -> dict:
    response = await client.post(
        "/api/resumes",
        json={"fileName": name, "fileData": pdf_data_url(content), "isActive": is_active},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestResumeCrud:
    async def test_create_returns_camel_case_record(self, client: AsyncClient):
        data = await _upload(client, "jane.pdf", is_active=True)
        assert uuid.UUID(data["id"])
        assert data["fileName"] == "jane.pdf"
        assert data["fileData"].startswith("data:application/pdf;base64,")
        assert data["isActive"] is True
        assert "uploadedAt" in data

    async def test_legacy_url_field_is_accepted(self, client: AsyncClient):
        response = await client.post("/api/resumes", json={"fileName": "old.pdf", "url": pdf_data_url()})
        assert response.status_code == 201
        assert response.json()["isActive"] is False

    async def test_versioned_path_works(self, client: AsyncClient):
        response = await client.get("/api/v1/resumes")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"fileData": pdf_data_url()},
            {"fileName": "", "fileData": pdf_data_url()},
            {"fileName": "cv.pdf"},
            {"fileName": "cv.pdf", "fileData": ""},
            {"fileName": "cv.pdf", "fileData": "data:application/pdf;base64,%%%"},
        ],
    )
    async def test_invalid_payload_returns_400(self, client: AsyncClient, payload):
        response = await client.post("/api/resumes", json=payload)
        assert response.status_code == 400
        assert (await client.get("/api/resumes")).json() == []

    async def test_non_pdf_payload_returns_400(self, client: AsyncClient):
        response = await client.post(
            "/api/resumes",
            json={"fileName": "photo.png", "fileData": "data:image/png;base64,iVBORw0KGgo="},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please upload a PDF file only."

    async def test_list_is_newest_first(self, client: AsyncClient, make_resume):
        await make_resume("first.pdf", minutes_ago=10)
        await make_resume("second.pdf", minutes_ago=1)

        response = await client.get("/api/resumes")

        assert response.status_code == 200
        assert [r["fileName"] for r in response.json()] == ["second.pdf", "first.pdf"]

    async def test_upload_active_replaces_previous_active(self, client: AsyncClient):
        await _upload(client, "a.pdf", is_active=True)
        await _upload(client, "b.pdf", is_active=True)

        rows = (await client.get("/api/resumes")).json()

        assert [r["fileName"] for r in rows if r["isActive"]] == ["b.pdf"]


class TestActivate:
    async def test_activate_switches_active_resume(self, client: AsyncClient):
        r1 = await _upload(client, "r1.pdf", is_active=True)
        r2 = await _upload(client, "r2.pdf")

        response = await client.patch(f"/api/resumes/{r2['id']}/active")

        assert response.status_code == 200
        assert response.json()["isActive"] is True
        states = {r["id"]: r["isActive"] for r in (await client.get("/api/resumes")).json()}
        assert states == {r1["id"]: False, r2["id"]: True}

    async def test_unknown_id_returns_404(self, client: AsyncClient):
        r1 = await _upload(client, "r1.pdf", is_active=True)

        response = await client.patch(f"/api/resumes/{uuid.uuid4()}/active")

        assert response.status_code == 404
        assert response.json()["detail"] == "Resume ID not found"
        rows = (await client.get("/api/resumes")).json()
        assert rows[0]["id"] == r1["id"] and rows[0]["isActive"] is True

    async def test_malformed_id_returns_400(self, client: AsyncClient):
        response = await client.patch("/api/resumes/not-a-uuid/active")
        assert response.status_code == 400


class TestDelete:
    async def test_delete_existing(self, client: AsyncClient):
        r1 = await _upload(client, "r1.pdf")

        response = await client.delete(f"/api/resumes/{r1['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted successfully"}
        assert (await client.get("/api/resumes")).json() == []

    async def test_delete_missing_id_still_succeeds(self, client: AsyncClient):
        response = await client.delete(f"/api/resumes/{uuid.uuid4()}")
        assert response.status_code == 200
        assert response.json() == {"message": "Deleted successfully"}


class TestDownload:
    async def test_empty_store_returns_404(self, client: AsyncClient):
        response = await client.get("/api/resume/download")
        assert response.status_code == 404

    async def test_serves_active_resume_bytes(self, client: AsyncClient, make_resume):
        active_bytes = b"%PDF-1.4 active"
        await make_resume("active.pdf", is_active=True, minutes_ago=60, file_data=pdf_data_url(active_bytes))
        await make_resume("newer.pdf", minutes_ago=1)

        response = await client.get("/api/resume/download")

        assert response.status_code == 200
        assert response.content == active_bytes
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-length"] == str(len(active_bytes))
        assert response.headers["content-disposition"] == (
            "attachment; filename=\"My_Resume.pdf\"; filename*=UTF-8''My_Resume.pdf"
        )

    async def test_falls_back_to_newest_when_none_active(self, client: AsyncClient, make_resume):
        await make_resume("old.pdf", minutes_ago=30, file_data=pdf_data_url(b"%PDF old"))
        await make_resume("new.pdf", minutes_ago=2, file_data=pdf_data_url(b"%PDF new"))

        response = await client.get("/api/resume/download")

        assert response.status_code == 200
        assert response.content == b"%PDF new"

    async def test_filename_uses_profile_name(self, client: AsyncClient, make_resume):
        await client.post("/api/user/update", json={"name": "Jane  Q\tDoe"})
        await make_resume("cv.pdf")

        response = await client.get("/api/resume/download")

        assert response.headers["content-disposition"].startswith('attachment; filename="Jane_Q_Doe_Resume.pdf"')

    async def test_non_latin_profile_name_is_percent_encoded(self, client: AsyncClient, make_resume):
        await client.post("/api/user/update", json={"name": "Prasanna అంజనేయులు"})
        await make_resume("cv.pdf")

        response = await client.get("/api/resume/download")

        assert response.status_code == 200
        assert response.content == PDF_BYTES
        disposition = response.headers["content-disposition"]
        fallback = disposition.split('filename="', 1)[1].split('"', 1)[0]
        assert fallback.startswith("Prasanna_") and fallback.endswith("_Resume.pdf")
        assert fallback.isascii()
        encoded = disposition.split("filename*=UTF-8''", 1)[1]
        assert unquote(encoded) == "Prasanna_అంజనేయులు_Resume.pdf"

    async def test_quotes_in_profile_name_do_not_break_header(self, client: AsyncClient, make_resume):
        await client.post("/api/user/update", json={"name": 'Jane "JD" Doe'})
        await make_resume("cv.pdf")

        response = await client.get("/api/resume/download")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            "attachment; filename=\"Jane__JD__Doe_Resume.pdf\"; "
            "filename*=UTF-8''Jane_%22JD%22_Doe_Resume.pdf"
        )

    async def test_empty_payload_returns_404(self, client: AsyncClient, make_resume):
        await make_resume("blank.pdf", file_data="")

        response = await client.get("/api/resume/download")

        assert response.status_code == 404

    async def test_corrupt_payload_returns_500(self, client: AsyncClient, make_resume):
        await make_resume("broken.pdf", file_data="data:application/pdf;base64,@@@")

        response = await client.get("/api/resume/download")

        assert response.status_code == 500


class TestStorageFailures:
    async def test_list_failure_returns_500(self, client: AsyncClient, db_session, monkeypatch):
        async def failing_execute(*args, **kwargs):
            raise SQLAlchemyError("connection refused")

        monkeypatch.setattr(db_session, "execute", failing_execute)

        response = await client.get("/api/resumes")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to load resumes"}

    async def test_delete_failure_returns_500_and_keeps_row(self, client: AsyncClient, db_session, monkeypatch):
        r1 = await _upload(client, "r1.pdf")

        async def failing_commit():
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(db_session, "commit", failing_commit)

        response = await client.delete(f"/api/resumes/{r1['id']}")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to delete resume"}
        monkeypatch.undo()
        assert [r["id"] for r in (await client.get("/api/resumes")).json()] == [r1["id"]]
