"""
API 응답 정규화

PixelLab 응답은 엔드포인트/버전마다 필드 이름과 중첩 구조가 다릅니다.
값마다 후보 경로 목록을 우선순위대로 정의하고 처음 발견된 값을 사용합니다.
"""
import json
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from pixellab_mcp.models import ToolResult
from pixellab_mcp.pixellab_client import RemoteResponse

# 키(dict) 또는 인덱스(list)의 나열
FieldPath = Tuple[Union[str, int], ...]


# ===== 값별 후보 경로 (우선순위 순) =====

CHARACTER_ID_FIELDS: Sequence[FieldPath] = (("character_id",), ("data", "character_id"))
BACKGROUND_JOB_ID_FIELDS: Sequence[FieldPath] = (("background_job_id",), ("data", "background_job_id"))
TILESET_ID_FIELDS: Sequence[FieldPath] = (("tileset_id",), ("data", "tileset_id"))
TILE_ID_FIELDS: Sequence[FieldPath] = (("tile_id",), ("data", "tile_id"))
DOWNLOAD_URL_FIELDS: Sequence[FieldPath] = (("download_url",), ("zip_url",), ("url",))
REDIRECT_HEADER_FIELDS: Sequence[FieldPath] = (("location",), ("content-location",))
ERROR_MESSAGE_FIELDS: Sequence[FieldPath] = (("message",), ("detail",), ("error",))
STATUS_FIELDS: Sequence[FieldPath] = (("status",), ("data", "status"))
CHARACTER_LIST_FIELDS: Sequence[FieldPath] = (("characters",), ("data", "characters"), ("data",))
LISTED_CHARACTER_NAME_FIELDS: Sequence[FieldPath] = (("name",), ("description",))
LISTED_CHARACTER_ID_FIELDS: Sequence[FieldPath] = (("character_id",), ("id",))
KEYPOINT_FIELDS: Sequence[FieldPath] = (("skeleton_keypoints",), ("keypoints",), ("data", "keypoints"))
IMAGE_DATA_FIELDS: Sequence[FieldPath] = (
    ("image", "base64"),
    ("image",),
    ("images", 0, "base64"),
    ("images", 0),
    ("base64",),
    ("data", "image", "base64"),
)
PREVIEW_URL_FIELDS: Sequence[FieldPath] = (("preview_url",), ("preview", "url"))

GENERIC_ERROR_MESSAGE = "Unknown error"


def get_path(data: Any, path: FieldPath) -> Any:
    """경로를 따라 값을 꺼냅니다. 중간에 없으면 None."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
    return current


def extract_first(data: Any, candidates: Iterable[FieldPath]) -> Any:
    """
    후보 경로 중 처음으로 값이 있는 경로의 값을 반환합니다.

    None과 빈 문자열은 값이 없는 것으로 취급합니다.
    """
    for path in candidates:
        value = get_path(data, path)
        if value is not None and value != "":
            return value
    return None


def extract_text(data: Any, candidates: Iterable[FieldPath]) -> Optional[str]:
    """문자열 값만 허용하는 extract_first"""
    for path in candidates:
        value = get_path(data, path)
        if isinstance(value, str) and value:
            return value
    return None


def to_pretty_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def error_message(response: RemoteResponse, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    """응답 본문에서 오류 메시지를 찾습니다 (message → detail → error 순)."""
    value = extract_first(response.data, ERROR_MESSAGE_FIELDS)
    if value is None:
        return response.text.strip() or fallback
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def api_error_result(label: str, response: RemoteResponse) -> ToolResult:
    """2xx가 아닌 응답을 isError 결과로 변환"""
    return ToolResult.from_text(
        f"❌ {label}: {response.status_code} - {error_message(response)}",
        is_error=True,
    )


def raw_json_result(title: str, data: Any, is_error: bool = False) -> ToolResult:
    """알려진 필드를 찾지 못했을 때 원본 JSON을 그대로 보여줍니다."""
    return ToolResult.from_text(f"{title}\n{to_pretty_json(data)}", is_error=is_error)


def format_lines(title: str, lines: Iterable[str], footer: Optional[str] = None) -> str:
    """'제목 / ✅ 항목들 / 안내' 형식의 텍스트 블록"""
    text = f"{title}\n\n" + "\n".join(f"✅ {line}" for line in lines)
    if footer:
        text += f"\n\n{footer}"
    return text
