"""
Mowen MCP 테스트 공통 Fixtures

- fake_backend: aiohttp 테스트 서버로 띄운 가짜 墨问 API (요청 기록 + 응답 지정)
- client: fake_backend를 바라보는 MowenClient
- mock_client: 네트워크 없는 AsyncMock 클라이언트
"""

import asyncio
import os
import sys
from typing import Any, Dict, List, Tuple
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# 프로젝트 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mcp_mowen.mowen_client import MowenClient
from mcp_mowen.mowen_service import MowenService

TEST_API_KEY = "test-api-key"


class FakeMowenBackend:
    """요청을 기록하고 경로별로 지정된 응답을 돌려주는 가짜 백엔드"""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self.responses: Dict[str, Tuple[int, str]] = {}
        self.delays: Dict[str, float] = {}
        self.base_url = ""

        self.app = web.Application()
        self.app.router.add_route("POST", "/{tail:.*}", self._handle)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def respond(self, path: str, body: str, status: int = 200):
        self.responses[path] = (status, body)

    def requests_to(self, path: str) -> List[Dict[str, Any]]:
        return [r for r in self.requests if r["path"] == path]

    async def _handle(self, request: web.Request) -> web.Response:
        record: Dict[str, Any] = {
            "path": request.path,
            "headers": request.headers.copy(),
            "content_type": request.content_type,
        }

        if request.content_type == "multipart/form-data":
            form = await request.post()
            fields: Dict[str, Any] = {}
            for key, value in form.items():
                if isinstance(value, web.FileField):
                    fields[key] = {
                        "filename": value.filename,
                        "content": value.file.read(),
                        "content_type": value.content_type,
                    }
                else:
                    fields[key] = value
            record["form"] = fields
        else:
            record["body"] = await request.read()

        self.requests.append(record)

        delay = self.delays.get(request.path)
        if delay:
            await asyncio.sleep(delay)

        status, body = self.responses.get(request.path, (200, '{"ok": true}'))
        return web.Response(status=status, text=body, content_type="application/json")


@pytest_asyncio.fixture
async def fake_backend():
    """가짜 墨问 API 서버"""
    backend = FakeMowenBackend()
    server = TestServer(backend.app)
    await server.start_server()
    backend.base_url = f"http://{server.host}:{server.port}"
    yield backend
    await server.close()


@pytest_asyncio.fixture
async def client(fake_backend):
    """fake_backend에 연결된 MowenClient"""
    mowen_client = MowenClient(api_key=TEST_API_KEY, base_url=fake_backend.base_url, timeout=5.0)
    await mowen_client.initialize()
    yield mowen_client
    await mowen_client.close()


@pytest.fixture
def mock_client():
    """Mock MowenClient"""
    mock = AsyncMock()
    mock.initialize = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock


@pytest_asyncio.fixture
async def service(mock_client):
    """초기화된 MowenService (Mock 클라이언트)"""
    mowen_service = MowenService(client=mock_client)
    await mowen_service.initialize()
    return mowen_service


@pytest.fixture
def sample_file(tmp_path):
    """업로드용 임시 파일"""
    path = tmp_path / "sample.png"
    path.write_bytes(b"\x89PNG fake image bytes")
    return path
