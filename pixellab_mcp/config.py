"""
서버 설정 관리

환경변수(PIXELLAB_ 접두사)와 .env 파일에서 설정을 읽습니다.
API 키가 없으면 서버를 시작할 수 없습니다.
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pixellab_mcp.constants import DEFAULT_API_BASE_URL, DEFAULT_OUTPUT_DIR


class Settings(BaseSettings):
    """PixelLab MCP 서버 설정"""

    api_key: str = Field(..., min_length=1, description="PixelLab API 키 (PIXELLAB_API_KEY)")
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="PixelLab API 기본 주소 (PIXELLAB_API_BASE_URL)"
    )
    request_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="HTTP 요청 타임아웃 (초). 기본값 None은 제한 없음 (이미지 생성은 응답까지 오래 걸림)"
    )
    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR),
        description="생성된 이미지를 저장할 디렉터리"
    )

    transport: Literal["stdio", "http"] = Field(
        default="stdio",
        description="MCP 전송 방식 (stdio 또는 streamable HTTP)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="로그 레벨"
    )
    log_file: Optional[Path] = Field(default=None, description="로그 파일 경로")

    model_config = SettingsConfigDict(
        env_prefix="PIXELLAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# 전역 인스턴스
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """설정 인스턴스 반환 (최초 호출 시 생성)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
