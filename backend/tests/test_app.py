"""Application-level tests: health, configuration guard, middleware."""

from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

from sims_api.config import Settings
from sims_api.database import Database
from sims_api.main import create_app
from sims_api.models.orm import EmployeeORM
from tests.conftest import TEST_FRONTEND_URL, TEST_PASSWORD

MISSING_BOTH = {"message": "Missing env vars", "missing": ["DATABASE_URL", "JWT_SECRET"]}


@pytest.fixture
async def unconfigured_client():
    app = create_app(settings=Settings(_env_file=None, database_url=None, jwt_secret=None))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    async def test_health_needs_no_token(self, unconfigured_client: AsyncClient) -> None:
        response = await unconfigured_client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestMissingConfiguration:
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("POST", "/api/login"),
            ("POST", "/api/evaluations"),
            ("GET", "/api/analytics/department-risk"),
        ],
    )
    async def test_api_reports_missing_variables(
        self, unconfigured_client: AsyncClient, method: str, path: str
    ) -> None:
        response = await unconfigured_client.request(method, path, json={})

        assert response.status_code == 500
        assert response.json() == MISSING_BOTH

    async def test_reported_before_authentication(self, unconfigured_client: AsyncClient) -> None:
        response = await unconfigured_client.post(
            "/api/evaluations", headers={"Authorization": "Bearer whatever"}
        )

        assert response.status_code == 500
        assert response.json() == MISSING_BOTH

    async def test_only_unset_variables_listed(self, database: Database) -> None:
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")
        app = create_app(settings=settings, database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post("/api/login", json={})

        assert response.status_code == 500
        assert response.json() == {"message": "Missing env vars", "missing": ["JWT_SECRET"]}


class TestPathPrefix:
    async def test_gateway_prefix_is_stripped(
        self, settings: Settings, database: Database, employees: dict[str, UUID]
    ) -> None:
        prefix = "/.netlify/functions/api"
        app = create_app(settings=settings.model_copy(update={"path_prefix": prefix}), database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            health = await ac.get(f"{prefix}/api/health")
            login = await ac.post(
                f"{prefix}/api/login",
                json={"email": "hr@example.com", "password": TEST_PASSWORD},
            )
            direct = await ac.get("/api/health")

        assert health.json() == {"ok": True}
        assert login.status_code == 200
        assert direct.status_code == 200


class TestMiddleware:
    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]
        assert "no-store" in response.headers["Cache-Control"]

    async def test_request_id_generated(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.headers.get("X-Request-ID")

    async def test_cors_preflight_for_frontend(self, client: AsyncClient) -> None:
        response = await client.options(
            "/api/evaluations",
            headers={
                "Origin": TEST_FRONTEND_URL,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == TEST_FRONTEND_URL

    async def test_cors_rejects_other_origins(self, client: AsyncClient) -> None:
        response = await client.get("/api/health", headers={"Origin": "https://evil.example.com"})

        assert "Access-Control-Allow-Origin" not in response.headers

    async def test_error_responses_carry_cors_header(self, client: AsyncClient) -> None:
        response = await client.post("/api/evaluations", headers={"Origin": TEST_FRONTEND_URL})

        assert response.status_code == 401
        assert response.headers["Access-Control-Allow-Origin"] == TEST_FRONTEND_URL

    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"message": "Not found"}


class TestEmployeeMapping:
    def test_manager_is_a_plain_foreign_key(self) -> None:
        mapper = EmployeeORM.__mapper__

        assert not mapper.relationships
        foreign_keys = mapper.columns["manager_id"].foreign_keys
        assert {fk.target_fullname for fk in foreign_keys} == {"employees.id"}
