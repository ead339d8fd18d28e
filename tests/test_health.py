"""Tests for health check endpoints."""

from unittest.mock import MagicMock, patch

import pytest


def count_result(value):
    result = MagicMock()
    result.scalar.return_value = value
    return result


@pytest.mark.asyncio
async def test_health_endpoint(app_client, mock_db_session, test_settings):
    """Health endpoint returns 200 with expected fields."""
    mock_db_session.execute.return_value = count_result(2)

    with patch("hets.routers.health.get_settings", return_value=test_settings):
        response = await app_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["in_progress_requests"] == 2
    assert data["seniority_blocks"] == {"Default": 2, "DumpTruck": 3}
    assert "version" in data
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_health_counts_in_progress_requests_only(app_client, mock_db_session):
    mock_db_session.execute.return_value = count_result(None)

    response = await app_client.get("/health")

    assert response.json()["in_progress_requests"] == 0
    stmt = mock_db_session.execute.await_args.args[0]
    sql = str(stmt)
    assert "count(rental_requests.id)" in sql
    assert "lower(rental_requests.status)" in sql
    assert "in progress" in stmt.compile().params.values()


@pytest.mark.asyncio
async def test_health_reports_database_error(app_client, mock_db_session):
    """A failing database query is reported, not raised."""
    mock_db_session.execute.side_effect = RuntimeError("connection refused")

    response = await app_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "error: connection refused"
    assert data["in_progress_requests"] is None
    assert set(data["seniority_blocks"]) == {"Default", "DumpTruck"}


@pytest.mark.asyncio
async def test_api_health_endpoint(app_client, mock_db_session):
    """API-prefixed health endpoint works too."""
    mock_db_session.execute.return_value = count_result(0)

    response = await app_client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
