"""
PixelLab REST API 클라이언트
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from pixellab_mcp.config import Settings
from pixellab_mcp.errors import PixelLabTransportError
from pixellab_mcp.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteResponse:
    """API 응답 (상태 코드와 본문을 가공 없이 전달)"""
    status_code: int
    data: Any = None
    text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400


class PixelLabClient:
    """PixelLab API 클라이언트 (요청 1회당 HTTP 호출 1회, 재시도 없음)"""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        초기화

        Args:
            api_key: PixelLab API 키 (Bearer 토큰)
            base_url: API 기본 주소
            timeout: 요청 타임아웃 (초, None이면 제한 없음)
            transport: 테스트용 httpx 전송 계층 (None이면 실제 네트워크 사용)
        """
        if not api_key:
            raise ValueError("PIXELLAB_API_KEY 환경변수가 설정되지 않았습니다.")

        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> RemoteResponse:
        """
        API 요청을 보내고 응답을 그대로 반환합니다.

        4xx/5xx 응답도 예외 없이 RemoteResponse로 반환합니다.
        응답 자체를 받지 못한 경우에만 PixelLabTransportError를 발생시킵니다.

        Args:
            method: HTTP 메서드
            path: API 경로 (예: /characters/abc)
            json: JSON 요청 본문 (값이 None인 키는 제외)
            params: 쿼리 파라미터

        Returns:
            RemoteResponse
        """
        body = _drop_none(json) if json is not None else None
        logger.debug(f"{method} {path}")

        try:
            response = await self._client.request(method, path, json=body, params=params)
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e!r}")
            raise PixelLabTransportError(method, f"{self.base_url}{path}", str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(f"{method} {path} -> HTTP {response.status_code}")

        return _to_remote_response(response)

    async def aclose(self) -> None:
        await self._client.aclose()


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def _to_remote_response(response: httpx.Response) -> RemoteResponse:
    content_type = response.headers.get("content-type", "")

    data: Any = None
    text = ""
    if "json" in content_type:
        try:
            data = response.json()
        except ValueError:
            text = response.text
        else:
            text = response.text
    elif content_type.startswith("text/") or not content_type:
        text = response.text

    return RemoteResponse(
        status_code=response.status_code,
        data=data,
        text=text,
        headers=dict(response.headers),
    )


def get_pixellab_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> PixelLabClient:
    """설정으로부터 PixelLab 클라이언트 인스턴스 반환"""
    return PixelLabClient(
        api_key=settings.api_key,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
