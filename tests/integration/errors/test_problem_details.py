"""Integration tests for Problem Details error responses."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from medihub.core.errors.handlers import PROBLEM_MEDIA_TYPE
from medihub.modules.users.models import User


pytestmark = pytest.mark.integration


class TestProblemDetails:
    """Tests for the registered exception handlers."""

    @pytest.mark.asyncio
    async def test_denial_logged_with_acting_user(self, login_as, doctor: User):
        client = login_as(doctor)

        with patch("medihub.core.errors.handlers.logger") as log:
            response = await client.get("/api/v1/roles", headers={"X-Request-ID": "req-403"})

        assert response.status_code == 403
        assert response.json()["trace_id"] == "req-403"
        assert response.json()["instance"] == "/api/v1/roles"

        log.warning.assert_called_once()
        assert log.warning.call_args.args[0] == "app_exception"
        assert log.warning.call_args.kwargs["error_code"] == "permission_denied"
        assert log.warning.call_args.kwargs["user_id"] == doctor.id

    @pytest.mark.asyncio
    async def test_validation_errors_list_fields(self, login_as, security_officer: User):
        client = login_as(security_officer)

        response = await client.post("/api/v1/roles", json={"permissions": "hce.view"})

        assert response.status_code == 422
        assert response.headers["content-type"] == PROBLEM_MEDIA_TYPE
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"name", "permissions"} <= fields

    @pytest.mark.asyncio
    async def test_unexpected_error_hides_internals(self, app: FastAPI):
        async def failing_store() -> None:
            raise RuntimeError("database file is locked")

        app.add_api_route("/api/v1/failing", failing_store)

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as client:
            response = await client.get(
                "/api/v1/failing", headers={"X-Request-ID": "req-500"}
            )

        assert response.status_code == 500
        assert response.headers["content-type"] == PROBLEM_MEDIA_TYPE
        body = response.json()
        assert body["detail"] == "An unexpected error occurred"
        assert body["trace_id"] == "req-500"
        assert "locked" not in response.text
