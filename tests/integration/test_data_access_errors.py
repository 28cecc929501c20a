"""
Integration tests for database failures surfacing through the API.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import text


@pytest.mark.asyncio
class TestDataAccessErrors:

    async def test_missing_table_returns_503(self, client: AsyncClient, test_engine, db_session, agency_headers):
        await db_session.commit()
        async with test_engine.begin() as conn:
            await conn.execute(text("DROP TABLE investments"))

        response = await client.get("/api/investments", headers=agency_headers)

        assert response.status_code == 503
        data = response.json()
        assert data["collection"] == "investments"
        assert "investments collection is missing" in data["detail"]
