"""
Integration tests for email automation settings, templates, rules and logs.

Tests:
- GET/PUT /api/email/settings
- GET/POST /api/email/templates
- /api/email/rules CRUD
- GET /api/email/logs
- POST /api/email/process-queue
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.email import EmailLog
from tests.factories import EmailQueueItemFactory, EmailTemplateFactory


@pytest.mark.asyncio
class TestEmailAccess:

    async def test_freelancer_is_forbidden(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/email/settings", headers=auth_headers)

        assert response.status_code == 403


@pytest.mark.asyncio
class TestEmailSettings:

    async def test_defaults_when_unconfigured(self, client: AsyncClient, agency_headers):
        response = await client.get("/api/email/settings", headers=agency_headers)

        assert response.status_code == 200
        assert response.json() == {
            "enabled": False,
            "from_name": "Pixel Forge Studio",
            "reply_to": "hello@pixelforge.com",
        }

    async def test_save_settings(self, client: AsyncClient, agency_headers):
        saved = await client.put(
            "/api/email/settings",
            headers=agency_headers,
            json={"enabled": True, "from_name": "Pixel Forge", "reply_to": "team@pixelforge.com"}
        )
        updated = await client.put(
            "/api/email/settings",
            headers=agency_headers,
            json={"enabled": False, "from_name": "Pixel Forge", "reply_to": "team@pixelforge.com"}
        )

        assert saved.status_code == 200
        assert saved.json()["enabled"] is True
        assert updated.json()["enabled"] is False
        assert (await client.get("/api/email/settings", headers=agency_headers)).json()["enabled"] is False

    async def test_reply_to_must_be_email(self, client: AsyncClient, agency_headers):
        response = await client.put(
            "/api/email/settings",
            headers=agency_headers,
            json={"enabled": True, "from_name": "Pixel Forge", "reply_to": "nope"}
        )

        assert response.status_code == 422


@pytest.mark.asyncio
class TestEmailTemplates:

    async def test_defaults_seeded_once(self, client: AsyncClient, agency_headers):
        first = await client.get("/api/email/templates", headers=agency_headers)
        second = await client.get("/api/email/templates", headers=agency_headers)

        assert len(first.json()) == 7
        assert [t["id"] for t in second.json()] == [t["id"] for t in first.json()]
        assert {t["event"] for t in first.json()} >= {"CLIENT_CREATED", "PROJECT_COMPLETED", "PAYMENT_RECEIVED"}

    async def test_create_template(self, client: AsyncClient, agency_headers):
        response = await client.post(
            "/api/email/templates",
            headers=agency_headers,
            json={
                "name": "Thanks",
                "subject": "Thanks {{client_name}}",
                "body": "<p>Thanks!</p>",
                "event": "PAYMENT_RECEIVED",
                "variables": ["client_name"],
            }
        )

        assert response.status_code == 201
        assert response.json()["event"] == "PAYMENT_RECEIVED"


@pytest.mark.asyncio
class TestAutomationRules:

    async def test_rule_lifecycle(self, client: AsyncClient, db_session: AsyncSession, agency_user, agency_headers):
        template = await EmailTemplateFactory.create_async(db_session, user_id=agency_user.id)
        await db_session.commit()

        created = await client.post(
            "/api/email/rules",
            headers=agency_headers,
            json={"event": "CLIENT_CREATED", "template_id": template.id, "delay": 30}
        )
        rule_id = created.json()["id"]
        updated = await client.put(f"/api/email/rules/{rule_id}", headers=agency_headers, json={"enabled": False})
        listed = await client.get("/api/email/rules", headers=agency_headers)
        deleted = await client.delete(f"/api/email/rules/{rule_id}", headers=agency_headers)

        assert created.status_code == 201
        assert created.json()["delay"] == 30
        assert updated.json()["enabled"] is False
        assert [r["id"] for r in listed.json()] == [rule_id]
        assert deleted.status_code == 204
        assert (await client.get("/api/email/rules", headers=agency_headers)).json() == []

    async def test_rule_with_foreign_template(self, client: AsyncClient, db_session: AsyncSession, other_user, agency_headers):
        foreign = await EmailTemplateFactory.create_async(db_session, user_id=other_user.id)
        await db_session.commit()

        response = await client.post(
            "/api/email/rules",
            headers=agency_headers,
            json={"event": "CLIENT_CREATED", "template_id": foreign.id}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Email template not found"


@pytest.mark.asyncio
class TestLogsAndQueue:

    async def test_logs_newest_first(self, client: AsyncClient, db_session: AsyncSession, agency_user, other_user, agency_headers):
        db_session.add_all([
            EmailLog(user_id=agency_user.id, to="a@example.com", subject="First", status="sent"),
            EmailLog(user_id=agency_user.id, to="b@example.com", subject="Second", status="failed", error="boom"),
            EmailLog(user_id=other_user.id, to="c@example.com", subject="Other", status="sent"),
        ])
        await db_session.commit()

        response = await client.get("/api/email/logs", headers=agency_headers)

        assert [log["subject"] for log in response.json()] == ["Second", "First"]

    async def test_process_queue_without_smtp_retries(self, client: AsyncClient, db_session: AsyncSession, agency_user):
        await EmailQueueItemFactory.create_async(db_session, user_id=agency_user.id)
        await db_session.commit()

        response = await client.post("/api/email/process-queue")

        assert response.status_code == 200
        assert response.json() == {"processed": 1, "sent": 0, "failed": 0, "retried": 1}

    async def test_process_queue_checks_cron_secret(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "CRON_SECRET", "s3cret")

        denied = await client.post("/api/email/process-queue")
        allowed = await client.post("/api/email/process-queue", headers={"Authorization": "Bearer s3cret"})

        assert denied.status_code == 401
        assert allowed.status_code == 200
        assert allowed.json()["processed"] == 0
