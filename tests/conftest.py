"""
공통 테스트 픽스처

원격 API는 httpx.MockTransport로 대체하고, 받은 요청을 기록합니다.
"""
import base64
import io
import json
from typing import Callable, List, Optional

import httpx
import pytest
from PIL import Image

from pixellab_mcp.config import Settings
from pixellab_mcp.dispatcher import ToolDispatcher
from pixellab_mcp.pixellab_client import PixelLabClient

TEST_BASE_URL = "https://api.test.local"


class RecordingTransport(httpx.MockTransport):
    """응답 핸들러를 실행하고 받은 요청을 순서대로 기록"""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200, json={}))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


def make_png_base64(width: int = 4, height: int = 4) -> str:
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), (255, 0, 0, 255)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_key="test-key",
        api_base_url=TEST_BASE_URL,
        output_dir=tmp_path / "gameassets",
        _env_file=None,
    )


@pytest.fixture
def make_dispatcher(settings):
    """응답 핸들러로 디스패처와 기록용 전송 계층을 만듭니다."""

    def factory(handler=None):
        transport = RecordingTransport(handler)
        client = PixelLabClient(
            api_key=settings.api_key,
            base_url=settings.api_base_url,
            transport=transport,
        )
        return ToolDispatcher(settings, client=client), transport

    return factory
