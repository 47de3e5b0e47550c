"""
MCP 서버 메타데이터

AI가 도구를 발견하고 사용할 때 필요한 메타데이터를 정의합니다.
도구 스키마는 tools.TOOLS 카탈로그의 인자 모델에서 생성되므로 여기서 따로 정의하지 않습니다.
"""
from typing import Any, Dict, List

from mcp.types import LATEST_PROTOCOL_VERSION

from pixellab_mcp.dispatcher import ToolDispatcher

SERVER_NAME = "pixellab-mcp"
SERVER_TITLE = "PixelLab 픽셀 아트 MCP 서버"
SERVER_VERSION = "1.0.0"

# MCP 프로토콜 버전 (SDK가 지원하는 최신 버전)
MCP_PROTOCOL_VERSION = LATEST_PROTOCOL_VERSION

# streamable HTTP 엔드포인트 경로
MCP_HTTP_PATH = "/mcp"


def get_mcp_tools_list(dispatcher: ToolDispatcher) -> List[Dict[str, Any]]:
    """
    MCP 도구 목록 반환 (/.well-known/mcp용)

    Returns:
        도구 메타데이터 목록 (name, description, inputSchema 포함)
    """
    return dispatcher.list_tools()


def get_server_metadata(dispatcher: ToolDispatcher) -> Dict[str, Any]:
    """/.well-known/mcp 응답 본문"""
    transport = {"type": "streamable-http", "endpoint": f"{MCP_HTTP_PATH}/"}
    return {
        "version": "1.0",
        "protocolVersion": MCP_PROTOCOL_VERSION,
        "serverInfo": {
            "name": SERVER_NAME,
            "title": SERVER_TITLE,
            "version": SERVER_VERSION,
        },
        "description": "PixelLab API로 게임용 픽셀 아트(캐릭터, 애니메이션, 타일셋, 이미지)를 생성하는 MCP 서버",
        "instructions": MCP_SERVER_INSTRUCTIONS,
        "transports": [transport],
        "transport": transport,
        "capabilities": {
            "tools": {"listChanged": False},
        },
        "tools": get_mcp_tools_list(dispatcher),
    }


# MCP 서버 기본 지침 (AI에게 전달되는 instructions)
MCP_SERVER_INSTRUCTIONS = """# PixelLab 픽셀 아트 MCP 서버

## 🔧 도구 분류

### 캐릭터
- **create_character** - 4방향(기본) 또는 8방향 캐릭터 생성
- **get_8direction_character** - 8방향 캐릭터 생성
- **get_character** / **list_characters** - 캐릭터 조회
- **get_character_zip** - 모든 방향/애니메이션 ZIP 다운로드 링크
- **rotate_character** - 다른 시점/방향으로 회전

### 애니메이션
- **animate_character** - 템플릿 애니메이션 추가 (walk, run, idle, punch, kick, jump, death, drink ...)
- **animate_character_alt** - 대체 엔드포인트로 애니메이션 추가
- **animate_with_text** - 텍스트로 동작 설명
- **estimate_skeleton** → **animate_with_skeleton** - 키포인트 기반 포즈 애니메이션

### 타일 / 이미지
- **create_topdown_tileset** → **get_tileset_status**
- **create_isometric_tile** → **get_isometric_tile_status**
- **create_image_pixflux** / **create_image_bitforge** - 이미지 생성 (gameassets 폴더에 PNG 저장)
- **inpaint_pixel_art** - 마스크 영역 수정

### 계정
- **get_background_job** - 백그라운드 작업 상태
- **get_balance** - 남은 크레딧
- **get_api_documentation** - API 문서

## ⚠️ 중요 행동 지침
- 캐릭터/타일셋 생성은 비동기입니다. 반환된 ID로 상태 조회 도구를 호출해 완료를 확인하세요.
- 이미지 생성 결과에 "파일 저장 실패"가 있으면 같은 요청을 반복하지 마세요. 크레딧이 중복 사용됩니다.
- create_sidescroller_tileset은 현재 API에서 지원하지 않습니다. create_topdown_tileset을 사용하세요.
"""
