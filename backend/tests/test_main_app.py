"""
主应用端点和全局异常处理单元测试
覆盖：健康检查、接口文档、全局异常处理器、CORS
"""

import pytest
from unittest.mock import patch
from httpx import AsyncClient


@pytest.mark.asyncio
class TestHealthEndpoint:
    """健康检查端点测试"""

    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"]["status"] == "healthy"

    async def test_health_database_down(self, client: AsyncClient):
        with patch("routers.health.check_database") as mock_check:
            from routers.health import ComponentHealth
            mock_check.return_value = ComponentHealth(status="unhealthy", message="down")
            response = await client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
class TestDocs:
    """接口文档测试"""

    async def test_api_docs(self, client: AsyncClient):
        response = await client.get("/api-docs")
        assert response.status_code == 200
        assert "swagger" in response.text.lower()

    async def test_openapi_paths(self, client: AsyncClient):
        paths = (await client.get("/openapi.json")).json()["paths"]
        for path in ("/exams", "/export/exams", "/export/exams/csv", "/exam/{exam_id}",
                     "/question", "/upload-image", "/admin", "/generatepdf"):
            assert path in paths


@pytest.mark.asyncio
class TestGlobalExceptionHandler:
    """全局异常处理器测试"""

    async def test_unhandled_exception_returns_500(self, lenient_client: AsyncClient):
        with patch("modules.pdf.pdf_router.PdfService.build_declaration_pdf", side_effect=RuntimeError("boom")):
            response = await lenient_client.get("/generatepdf")
        assert response.status_code == 500
        assert response.json() == {"error": "boom"}

    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
class TestCors:
    """跨域测试"""

    async def test_preflight(self, client: AsyncClient):
        response = await client.options(
            "/exams",
            headers={"Origin": "http://frontend.test", "Access-Control-Request-Method": "GET"}
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://frontend.test")
