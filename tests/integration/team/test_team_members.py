"""
Integration tests for agency team members and team payments.

Tests:
- /api/team/members CRUD
- /api/team/payments CRUD
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import (
    ClientFactory,
    ProjectFactory,
    TeamMemberFactory,
    TeamMemberPaymentFactory,
)


@pytest.mark.asyncio
class TestTeamAccess:

    async def test_freelancer_is_forbidden(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/team/members", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Your account type cannot access team members"

    async def test_freelancer_cannot_see_team_payments(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/team/payments", headers=auth_headers)

        assert response.status_code == 403


@pytest.mark.asyncio
class TestTeamMembers:

    async def test_create_and_list(self, client: AsyncClient, agency_user, agency_headers):
        response = await client.post(
            "/api/team/members",
            headers=agency_headers,
            json={"name": "Asha", "email": "asha@example.com", "role": "Designer"}
        )

        assert response.status_code == 201
        assert response.json()["user_id"] == agency_user.id

        listed = await client.get("/api/team/members", headers=agency_headers)
        assert [m["name"] for m in listed.json()] == ["Asha"]

    async def test_role_required(self, client: AsyncClient, agency_headers):
        response = await client.post(
            "/api/team/members",
            headers=agency_headers,
            json={"name": "Asha", "email": "asha@example.com"}
        )

        assert response.status_code == 422

    async def test_update_member(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id, role="Designer")
        await db_session.commit()

        response = await client.put(f"/api/team/members/{member.id}", headers=agency_headers, json={"role": "Lead"})

        assert response.status_code == 200
        assert response.json()["role"] == "Lead"

    async def test_delete_member_deletes_payments(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        await TeamMemberPaymentFactory.create_async(db_session, user_id=agency_user.id, team_member_id=member.id)
        await db_session.commit()

        response = await client.delete(f"/api/team/members/{member.id}", headers=agency_headers)

        assert response.status_code == 204
        assert (await client.get("/api/team/payments", headers=agency_headers)).json() == []


@pytest.mark.asyncio
class TestTeamPayments:

    async def test_create_payment(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        await db_session.commit()

        response = await client.post(
            "/api/team/payments",
            headers=agency_headers,
            json={"team_member_id": member.id, "amount": 1200, "date": "2024-04-01", "notes": "April"}
        )

        assert response.status_code == 201
        assert response.json()["amount"] == 1200
        assert response.json()["project_id"] is None

    async def test_payment_for_foreign_member(self, client: AsyncClient, db_session: AsyncSession, other_user, agency_headers):
        foreign = await TeamMemberFactory.create_async(db_session, user_id=other_user.id)
        await db_session.commit()

        response = await client.post(
            "/api/team/payments",
            headers=agency_headers,
            json={"team_member_id": foreign.id, "amount": 10, "date": "2024-04-01"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Team member not found"

    async def test_update_payment(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        payment = await TeamMemberPaymentFactory.create_async(db_session, user_id=agency_user.id, team_member_id=member.id, amount=100)
        await db_session.commit()

        response = await client.put(f"/api/team/payments/{payment.id}", headers=agency_headers, json={"amount": 150})

        assert response.status_code == 200
        assert response.json()["amount"] == 150

    async def test_filter_by_member(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        first = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        second = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        await TeamMemberPaymentFactory.create_async(db_session, user_id=agency_user.id, team_member_id=first.id, amount=1)
        await TeamMemberPaymentFactory.create_async(db_session, user_id=agency_user.id, team_member_id=second.id, amount=2)
        await db_session.commit()

        response = await client.get(f"/api/team/payments?team_member_id={second.id}", headers=agency_headers)

        assert [p["amount"] for p in response.json()] == [2]

    async def test_deleting_project_unlinks_payment(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        customer = await ClientFactory.create_async(db_session, user_id=agency_user.id)
        project = await ProjectFactory.create_async(db_session, user_id=agency_user.id, client_id=customer.id)
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        payment = await TeamMemberPaymentFactory.create_async(
            db_session, user_id=agency_user.id, team_member_id=member.id, project_id=project.id
        )
        await db_session.commit()
        payment_id = payment.id

        await client.delete(f"/api/projects/{project.id}", headers=agency_headers)
        # SET NULL happens in the database; drop the loaded copy
        db_session.expire_all()

        response = await client.get("/api/team/payments", headers=agency_headers)
        assert [(p["id"], p["project_id"]) for p in response.json()] == [(payment_id, None)]

    async def test_delete_payment(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        member = await TeamMemberFactory.create_async(db_session, user_id=agency_user.id)
        payment = await TeamMemberPaymentFactory.create_async(db_session, user_id=agency_user.id, team_member_id=member.id)
        await db_session.commit()

        response = await client.delete(f"/api/team/payments/{payment.id}", headers=agency_headers)

        assert response.status_code == 204
