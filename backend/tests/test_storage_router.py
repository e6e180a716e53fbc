"""
图片上传 API 测试
"""
import re

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
class TestUploadAPI:
    """上传 API 测试"""

    async def test_upload_image(self, client: AsyncClient, storage):
        """测试上传并返回访问地址"""
        content = b"\x89PNG\r\n\x1a\nfake"
        files = {"image": ("photo.png", content, "image/png")}
        response = await client.post("/upload-image", files=files)
        assert response.status_code == 200

        url = response.json()["url"]
        match = re.fullmatch(r"http://testserver/uploads/(photo-\d+\.png)", url)
        assert match
        saved = storage.upload_dir / match.group(1)
        assert saved.read_bytes() == content

    async def test_upload_any_type(self, client: AsyncClient, storage):
        """不校验文件类型"""
        files = {"image": ("report.pdf", b"%PDF-1.4", "application/pdf")}
        response = await client.post("/upload-image", files=files)
        assert response.status_code == 200
        assert response.json()["url"].endswith(".pdf")

    async def test_missing_file(self, client: AsyncClient, storage):
        response = await client.post("/upload-image")
        assert response.status_code == 400
        assert response.json() == {"error": "Upload failed"}
        assert list(storage.upload_dir.iterdir()) == []

    async def test_wrong_field_name(self, client: AsyncClient, storage):
        files = {"file": ("photo.png", b"data", "image/png")}
        response = await client.post("/upload-image", files=files)
        assert response.status_code == 400
        assert response.json() == {"error": "Upload failed"}

    async def test_uploaded_file_is_served(self, client: AsyncClient):
        """上传后可通过 /uploads 访问"""
        files = {"image": ("served.txt", b"static content", "text/plain")}
        response = await client.post("/upload-image", files=files)
        assert response.status_code == 200

        path = "/uploads/" + response.json()["url"].rsplit("/", 1)[1]
        served = await client.get(path)
        assert served.status_code == 200
        assert served.content == b"static content"
