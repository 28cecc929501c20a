"""
Integration tests for the leads board.

Tests:
- GET/POST /api/leads
- GET /api/leads/stats
- POST /api/leads/import
- GET/PUT/DELETE /api/leads/{id}
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import LeadFactory


@pytest.mark.asyncio
class TestLeadsCrud:

    async def test_create_lead(self, client: AsyncClient, user, auth_headers):
        response = await client.post(
            "/api/leads",
            headers=auth_headers,
            json={"name": "Asha Rao", "email": "asha@example.com", "company": "Acme", "source": "Referral"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "new"
        assert data["user_id"] == user.id
        assert data["company"] == "Acme"

    async def test_invalid_status(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/leads", headers=auth_headers, json={"name": "Asha", "status": "hot"})

        assert response.status_code == 422

    async def test_agency_can_use_leads(self, client: AsyncClient, agency_headers):
        response = await client.get("/api/leads", headers=agency_headers)

        assert response.status_code == 200

    async def test_update_status(self, client: AsyncClient, db_session: AsyncSession, user, auth_headers):
        lead = await LeadFactory.create_async(db_session, user_id=user.id, name="Asha")
        await db_session.commit()

        response = await client.put(f"/api/leads/{lead.id}", headers=auth_headers, json={"status": "contacted"})

        assert response.status_code == 200
        assert response.json()["status"] == "contacted"
        assert response.json()["name"] == "Asha"

    async def test_update_keeps_name_when_null(self, client: AsyncClient, db_session: AsyncSession, user, auth_headers):
        lead = await LeadFactory.create_async(db_session, user_id=user.id, name="Asha")
        await db_session.commit()

        response = await client.put(f"/api/leads/{lead.id}", headers=auth_headers, json={"name": None, "notes": "Call Monday"})

        assert response.json()["name"] == "Asha"
        assert response.json()["notes"] == "Call Monday"

    async def test_other_users_lead_is_not_found(self, client: AsyncClient, db_session: AsyncSession, other_user, auth_headers):
        lead = await LeadFactory.create_async(db_session, user_id=other_user.id)
        await db_session.commit()

        get = await client.get(f"/api/leads/{lead.id}", headers=auth_headers)
        delete = await client.delete(f"/api/leads/{lead.id}", headers=auth_headers)

        assert get.status_code == 404
        assert get.json()["detail"] == "Lead not found"
        assert delete.status_code == 404

    async def test_delete_lead(self, client: AsyncClient, db_session: AsyncSession, user, auth_headers):
        lead = await LeadFactory.create_async(db_session, user_id=user.id)
        await db_session.commit()

        response = await client.delete(f"/api/leads/{lead.id}", headers=auth_headers)

        assert response.status_code == 204
        assert (await client.get(f"/api/leads/{lead.id}", headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
class TestLeadsBoard:

    @pytest.fixture
    async def board(self, db_session: AsyncSession, user, other_user):
        for name, company, status in [
            ("Asha Rao", "Acme", "new"),
            ("Ravi Menon", "Globex", "new"),
            ("Meera Iyer", "Initech", "contacted"),
            ("Kabir Shah", "Acme Labs", "converted"),
        ]:
            await LeadFactory.create_async(db_session, user_id=user.id, name=name, company=company, status=status)
        await LeadFactory.create_async(db_session, user_id=other_user.id, status="lost")
        await db_session.commit()

    async def test_status_filter(self, client: AsyncClient, board, auth_headers):
        response = await client.get("/api/leads?status=new", headers=auth_headers)

        assert sorted(lead["name"] for lead in response.json()) == ["Asha Rao", "Ravi Menon"]

    async def test_search(self, client: AsyncClient, board, auth_headers):
        response = await client.get("/api/leads?q=acme", headers=auth_headers)

        assert sorted(lead["name"] for lead in response.json()) == ["Asha Rao", "Kabir Shah"]

    async def test_stats(self, client: AsyncClient, board, auth_headers):
        response = await client.get("/api/leads/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"new": 2, "contacted": 1, "qualified": 0, "converted": 1, "lost": 0, "total": 4}


@pytest.mark.asyncio
class TestLeadImport:

    async def upload(self, client: AsyncClient, headers, content: str):
        return await client.post(
            "/api/leads/import",
            headers=headers,
            files={"file": ("leads.csv", content.encode("utf-8"), "text/csv")},
        )

    async def test_import_csv(self, client: AsyncClient, auth_headers):
        content = (
            "\ufeffName,Email,Company,Status\n"
            "Asha Rao,asha@example.com,Acme,Qualified\n"
            "Ravi Menon,,Globex,hot\n"
            ",nobody@example.com,,new\n"
        )

        response = await self.upload(client, auth_headers, content)

        assert response.status_code == 201
        assert response.json() == {"imported": 2, "skipped": 1}
        leads = {lead["name"]: lead for lead in (await client.get("/api/leads", headers=auth_headers)).json()}
        assert leads["Asha Rao"]["status"] == "qualified"
        assert leads["Asha Rao"]["email"] == "asha@example.com"
        assert leads["Ravi Menon"]["status"] == "new"
        assert leads["Ravi Menon"]["email"] is None

    async def test_empty_file(self, client: AsyncClient, auth_headers):
        response = await self.upload(client, auth_headers, "name,email\n")

        assert response.status_code == 400
        assert response.json()["detail"] == "The file appears to be empty."

    async def test_file_without_names(self, client: AsyncClient, auth_headers):
        response = await self.upload(client, auth_headers, "email\na@example.com\n")

        assert response.status_code == 400
        assert "No valid leads found" in response.json()["detail"]

    async def test_binary_file(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/leads/import",
            headers=auth_headers,
            files={"file": ("leads.xlsx", b"\xff\xfe\x00\x9c\x81", "application/octet-stream")},
        )

        assert response.status_code == 400
