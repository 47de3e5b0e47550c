"""
MCP 도구 구현

모든 원격 도구는 같은 흐름을 따릅니다:
인자 검증 → HTTP 호출 1회 → 상태 코드/응답 형태 분기 → 텍스트 결과 생성.
도구별로 다른 부분(요청 생성, 결과 렌더링)만 RemoteTool에 함수로 넘깁니다.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type
from urllib.parse import quote

from pixellab_mcp.constants import (
    DEFAULT_IMAGE_SIZE,
    DEFAULT_TILESET_TILE_SIZE,
    SIDESCROLLER_UNSUPPORTED_MESSAGE,
    Direction,
    get_template_animation_id,
)
from pixellab_mcp.image_utils import get_image_info, save_base64_image
from pixellab_mcp.logging_config import get_logger
from pixellab_mcp.models import (
    AnimateCharacterAltArgs,
    AnimateCharacterArgs,
    AnimateWithSkeletonArgs,
    AnimateWithTextArgs,
    Create8DirectionCharacterArgs,
    CreateCharacterArgs,
    CreateImageBitforgeArgs,
    CreateImagePixfluxArgs,
    CreateIsometricTileArgs,
    CreateSidescrollerTilesetArgs,
    CreateTopdownTilesetArgs,
    EstimateSkeletonArgs,
    GetBackgroundJobArgs,
    GetCharacterArgs,
    GetCharacterZipArgs,
    GetIsometricTileStatusArgs,
    GetTilesetStatusArgs,
    InpaintPixelArtArgs,
    ListCharactersArgs,
    NoArgs,
    RotateCharacterArgs,
    ToolArguments,
    ToolResult,
)
from pixellab_mcp.pixellab_client import PixelLabClient, RemoteResponse
from pixellab_mcp.response_normalizer import (
    BACKGROUND_JOB_ID_FIELDS,
    CHARACTER_ID_FIELDS,
    CHARACTER_LIST_FIELDS,
    DOWNLOAD_URL_FIELDS,
    ERROR_MESSAGE_FIELDS,
    GENERIC_ERROR_MESSAGE,
    IMAGE_DATA_FIELDS,
    KEYPOINT_FIELDS,
    LISTED_CHARACTER_ID_FIELDS,
    LISTED_CHARACTER_NAME_FIELDS,
    PREVIEW_URL_FIELDS,
    REDIRECT_HEADER_FIELDS,
    STATUS_FIELDS,
    TILE_ID_FIELDS,
    TILESET_ID_FIELDS,
    api_error_result,
    extract_first,
    extract_text,
    format_lines,
    raw_json_result,
    to_pretty_json,
)

logger = get_logger(__name__)

# 원격 작업이 아직 끝나지 않았음을 뜻하는 상태 값
PENDING_STATUSES = {"queued", "pending", "processing", "running", "in_progress"}

# 원격 작업 실패
FAILED_STATUSES = {"failed", "error"}


@dataclass(frozen=True)
class ToolContext:
    """도구 실행에 필요한 공유 자원 (읽기 전용)"""
    client: PixelLabClient
    output_dir: Path


@dataclass(frozen=True)
class RemoteCall:
    """도구 하나가 보내는 HTTP 요청"""
    method: str
    path: str
    json: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None


Renderer = Callable[[Any, RemoteResponse, ToolContext], ToolResult]


@dataclass(frozen=True)
class BaseTool:
    """MCP 도구 정의 (이름, 설명, 인자 모델)"""
    name: str
    description: str
    args_model: Type[ToolArguments]

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.args_model.model_json_schema()

    def to_schema(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    async def run(self, args: ToolArguments, ctx: ToolContext) -> ToolResult:
        raise NotImplementedError


@dataclass(frozen=True)
class RemoteTool(BaseTool):
    """HTTP 호출 1회로 끝나는 도구"""
    build_call: Callable[[Any], RemoteCall]
    render: Renderer
    error_label: str
    accept_redirect: bool = False

    async def run(self, args: ToolArguments, ctx: ToolContext) -> ToolResult:
        call = self.build_call(args)
        response = await ctx.client.request(call.method, call.path, json=call.json, params=call.params)

        if response.ok or (self.accept_redirect and response.is_redirect):
            return self.render(args, response, ctx)
        return api_error_result(self.error_label, response)


@dataclass(frozen=True)
class StaticTool(BaseTool):
    """원격 호출 없이 고정 메시지를 반환하는 도구"""
    message: str

    async def run(self, args: ToolArguments, ctx: ToolContext) -> ToolResult:
        return ToolResult.from_text(self.message)


def _segment(value: str) -> str:
    """URL 경로에 넣을 ID 인코딩"""
    return quote(value, safe="")


def _image_size(width: int, height: int) -> Dict[str, int]:
    return {"width": width, "height": height}


def _base64_png(data: str) -> Dict[str, str]:
    return {"type": "base64", "base64": data, "format": "png"}


def _as_dict(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


# ===== 캐릭터 생성 =====

def _character_call(description: str, n_directions: int) -> RemoteCall:
    body: Dict[str, Any] = {
        "description": description,
        "image_size": _image_size(DEFAULT_IMAGE_SIZE, DEFAULT_IMAGE_SIZE),
    }
    if n_directions == 8:
        body["async_mode"] = True
    return RemoteCall("POST", f"/create-character-with-{n_directions}-directions", json=body)


def _render_character_created(description: str, n_directions: int, response: RemoteResponse) -> ToolResult:
    character_id = extract_text(response.data, CHARACTER_ID_FIELDS)
    job_id = extract_text(response.data, BACKGROUND_JOB_ID_FIELDS)

    if not (character_id and job_id):
        return raw_json_result(f"❌ {n_directions}방향 캐릭터 생성 실패:", response.data, is_error=True)

    lines = [f"설명: \"{description}\""]
    if n_directions == 8:
        lines.append("방향: 360° 전체 (8방향)")
    lines += [f"캐릭터 ID: {character_id}", f"작업 ID: {job_id}"]

    eta = "4~6분" if n_directions == 8 else "3~5분"
    return ToolResult.from_text(format_lines(
        f"🤖 **{n_directions}방향 캐릭터 생성 시작!**",
        lines,
        f"⏱️ 처리에 {eta} 정도 걸립니다.\n\n💡 get_character 또는 get_background_job으로 진행 상황을 확인하세요.",
    ))


def _render_create_character(args: CreateCharacterArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    return _render_character_created(args.description, args.n_directions, response)


def _render_create_8direction_character(
    args: Create8DirectionCharacterArgs, response: RemoteResponse, ctx: ToolContext
) -> ToolResult:
    return _render_character_created(args.description, 8, response)


# ===== 캐릭터 조회 =====

def _render_get_character(args: GetCharacterArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    character = response.data
    if not isinstance(character, dict):
        return raw_json_result("🎨 **캐릭터 정보** (알 수 없는 응답 형식):", character)

    result = "🎨 **캐릭터 정보**\n"
    result += f"🆔 ID: {character.get('id') or character.get('character_id') or args.character_id}\n"
    if character.get("name"):
        result += f"📝 이름: {character['name']}\n"

    rotation_urls = _as_dict(character.get("rotation_urls"))
    if rotation_urls.get(Direction.SOUTH.value):
        result += "✅ **완료! 다운로드할 수 있습니다.**\n\n"
        result += "📸 **다운로드 링크:**\n"
        for direction in Direction:
            url = rotation_urls.get(direction.value)
            if url:
                result += f"• {direction.value.upper()}: {url}\n"

        animations = character.get("animations") or []
        if isinstance(animations, list) and animations:
            result += f"\n🎬 **애니메이션 ({len(animations)}개):**\n"
            for index, animation in enumerate(animations, start=1):
                animation = _as_dict(animation)
                name = animation.get("name") or f"Animation {index}"
                result += f"• {name}: {animation.get('status', 'unknown')}\n"
    else:
        result += "⏳ **아직 처리 중입니다...**\n"

    if args.include_preview:
        preview_url = extract_text(character, PREVIEW_URL_FIELDS)
        if preview_url:
            result += f"\n🖼️ 미리보기: {preview_url}\n"

    return ToolResult.from_text(result)


def _list_characters_call(args: ListCharactersArgs) -> RemoteCall:
    params: Dict[str, Any] = {"limit": args.limit}
    if args.offset:
        params["offset"] = args.offset
    return RemoteCall("GET", "/characters", params=params)


def _render_list_characters(args: ListCharactersArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    if isinstance(response.data, list):
        characters = response.data
    else:
        characters = extract_first(response.data, CHARACTER_LIST_FIELDS)
        if not isinstance(characters, list):
            characters = []

    result = f"🎨 **내 캐릭터 목록 ({len(characters)}개)**\n\n"
    if not characters:
        result += "📝 **캐릭터가 없습니다.**\ncreate_character로 첫 캐릭터를 만들어 보세요!"
        return ToolResult.from_text(result)

    for index, character in enumerate(characters, start=args.offset + 1):
        character = _as_dict(character)
        name = extract_text(character, LISTED_CHARACTER_NAME_FIELDS) or "Unnamed Character"
        character_id = extract_first(character, LISTED_CHARACTER_ID_FIELDS) or "Unknown"
        result += f"{index}. **{name}**\n"
        result += f"   🆔 ID: {character_id}\n"
        result += f"   📊 상태: {character.get('status') or 'Unknown'}\n\n"
    result += "💡 get_character로 상세 정보와 다운로드 링크를 확인하세요!"
    return ToolResult.from_text(result)


def _render_character_zip(args: GetCharacterZipArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    download_url = extract_text(response.data, DOWNLOAD_URL_FIELDS)
    if not download_url:
        # 본문에 URL이 없으면 리다이렉트 헤더를 확인
        download_url = extract_text(response.headers, REDIRECT_HEADER_FIELDS)

    lines = [f"캐릭터 ID: {args.character_id}", "상태: ZIP 파일 생성됨"]
    if download_url:
        return ToolResult.from_text(format_lines(
            "📦 **캐릭터 ZIP 다운로드 준비 완료!**",
            lines,
            f"📥 다운로드: {download_url}\n\n💡 ZIP에는 모든 방향 스프라이트와 애니메이션이 포함됩니다.",
        ))

    logger.debug(f"ZIP response without download URL: {response.status_code} {response.data!r}")
    body = response.data if response.data is not None else (response.text or "(binary body)")
    return ToolResult.from_text(format_lines(
        "📦 **캐릭터 ZIP 응답을 받았습니다.**",
        lines,
        f"⚠️ 응답에서 다운로드 URL을 찾지 못했습니다. 원본 응답:\n{to_pretty_json(body)}",
    ))


def _rotate_call(args: RotateCharacterArgs) -> RemoteCall:
    return RemoteCall("POST", "/rotate", json={
        "from_image": _base64_png(args.source_image),
        "image_guidance_scale": args.image_guidance_scale,
        "view_change": args.view_change,
        "direction_change": args.direction_change,
        "from_view": args.from_view.value,
        "to_view": args.to_view.value,
        "image_size": _image_size(args.width, args.height),
    })


def _render_rotate(args: RotateCharacterArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    lines = [
        "원본 이미지: 제공됨",
        f"시점 변경: {args.view_change:g}°",
        f"방향 변경: {args.direction_change:g}°",
        f"원래 시점: \"{args.from_view.value}\"",
        f"목표 시점: \"{args.to_view.value}\"",
    ]
    slug_source = f"rotated {args.from_view.value} to {args.to_view.value}"
    return _render_generated_image("🔄 **캐릭터 회전 완료!**", lines, slug_source, response, ctx)


# ===== 애니메이션 =====

def _animate_character_call(args: AnimateCharacterArgs) -> RemoteCall:
    return RemoteCall("POST", "/characters/animations", json={
        "character_id": args.character_id,
        "template_animation_id": get_template_animation_id(args.animation),
        "action_description": f"{args.animation} animation",
        "async_mode": True,
    })


def _render_animate_character(args: AnimateCharacterArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    lines = [
        f"캐릭터 ID: {args.character_id}",
        f"애니메이션: {args.animation} (템플릿: {get_template_animation_id(args.animation)})",
    ]
    job_id = extract_text(response.data, BACKGROUND_JOB_ID_FIELDS)
    if job_id:
        lines.append(f"작업 ID: {job_id}")
    lines.append("상태: 처리 중")
    return ToolResult.from_text(format_lines(
        "🎬 **애니메이션 작업 시작!**",
        lines,
        "⏱️ 애니메이션은 2~4분 후에 준비됩니다.",
    ))


def _animate_character_alt_call(args: AnimateCharacterAltArgs) -> RemoteCall:
    return RemoteCall("POST", "/animate-character", json={
        "character_id": args.character_id,
        "template_animation_id": args.animation,
        "animation_name": args.animation_name,
        "action_description": args.animation_name or args.action_description,
    })


def _render_animate_character_alt(
    args: AnimateCharacterAltArgs, response: RemoteResponse, ctx: ToolContext
) -> ToolResult:
    return ToolResult.from_text(format_lines(
        "🎭 **대체 애니메이션 작업 시작!**",
        [
            f"캐릭터 ID: {args.character_id}",
            f"애니메이션: {args.animation} (대체 방식)",
            "상태: 처리 중",
        ],
        "⏱️ 애니메이션은 3~5분 후에 준비됩니다.\n\n💡 animate_character와는 다른 방식으로 애니메이션을 생성합니다.",
    ))


def _animate_with_text_call(args: AnimateWithTextArgs) -> RemoteCall:
    return RemoteCall("POST", "/animate-with-text", json={
        "image_size": _image_size(DEFAULT_IMAGE_SIZE, DEFAULT_IMAGE_SIZE),
        "description": args.description,
        "action": args.action,
        "text_guidance_scale": args.text_guidance_scale,
        "image_guidance_scale": args.image_guidance_scale,
        "n_frames": args.n_frames,
        "reference_image": {
            "type": "character_id",
            "character_id": args.reference_image,
        },
    })


def _render_animate_with_text(args: AnimateWithTextArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    return ToolResult.from_text(format_lines(
        "🎭 **텍스트 기반 애니메이션 생성 시작!**",
        [
            f"캐릭터: \"{args.description}\"",
            f"동작: \"{args.action}\"",
            f"참조 캐릭터: {args.reference_image}",
            f"프레임 수: {args.n_frames}",
            "상태: 처리 중",
        ],
        "⏱️ 처리에 4~6분 정도 걸립니다.",
    ))


def _animate_with_skeleton_call(args: AnimateWithSkeletonArgs) -> RemoteCall:
    body: Dict[str, Any] = {
        "reference_image": _base64_png(args.reference_image),
        "image_guidance_scale": args.image_guidance_scale,
        "view": args.view,
        "direction": args.direction.value,
    }
    if args.skeleton_keypoints:
        body["skeleton_keypoints"] = args.skeleton_keypoints
    if args.isometric:
        body["isometric"] = True
    return RemoteCall("POST", "/animate-with-skeleton", json=body)


def _render_animate_with_skeleton(
    args: AnimateWithSkeletonArgs, response: RemoteResponse, ctx: ToolContext
) -> ToolResult:
    return ToolResult.from_text(format_lines(
        "🦴 **스켈레톤 기반 애니메이션 시작!**",
        [
            "참조 이미지: 제공됨",
            f"키포인트: {'포함' if args.skeleton_keypoints else '자동 생성'}",
            f"시점: \"{args.view}\"",
            f"방향: \"{args.direction.value}\"",
            f"아이소메트릭: {str(args.isometric).lower()}",
            "상태: 처리 중",
        ],
        "⏱️ 처리에 4~6분 정도 걸립니다.",
    ))


def _format_keypoint(point: Any) -> Optional[str]:
    if isinstance(point, (list, tuple)) and len(point) >= 2:
        x, y = point[0], point[1]
        label = None
    elif isinstance(point, dict) and "x" in point and "y" in point:
        x, y = point["x"], point["y"]
        label = point.get("label")
    else:
        return None
    try:
        coords = f"({float(x):.2f}, {float(y):.2f})"
    except (TypeError, ValueError):
        return None
    return f"{label} {coords}" if label else coords


def _render_estimate_skeleton(args: EstimateSkeletonArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    keypoints = extract_first(response.data, KEYPOINT_FIELDS)
    if not isinstance(keypoints, list):
        keypoints = []

    result = f"🦴 **스켈레톤 키포인트 추정 완료!**\n\n✅ 검출된 키포인트: {len(keypoints)}개\n\n"
    if keypoints:
        result += "📍 **키포인트 좌표:**\n"
        for index, point in enumerate(keypoints, start=1):
            formatted = _format_keypoint(point)
            if formatted:
                result += f"• Point {index}: {formatted}\n"
    result += "\n💡 이 키포인트를 animate_with_skeleton에 넘기면 포즈 기반 애니메이션을 만들 수 있습니다."
    return ToolResult.from_text(result)


# ===== 타일셋 / 아이소메트릭 타일 =====

def _topdown_tileset_call(args: CreateTopdownTilesetArgs) -> RemoteCall:
    return RemoteCall("POST", "/tilesets", json={
        "lower_description": args.lower,
        "upper_description": args.upper,
        "lower_base_tile_id": args.lower_base_tile_id,
        "transition_description": args.transition_description,
        "tile_size": _image_size(DEFAULT_TILESET_TILE_SIZE, DEFAULT_TILESET_TILE_SIZE),
    })


def _render_topdown_tileset(args: CreateTopdownTilesetArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    tileset_id = extract_text(response.data, TILESET_ID_FIELDS)
    if not tileset_id:
        return raw_json_result("❌ 타일셋 생성 응답에서 tileset_id를 찾지 못했습니다:", response.data, is_error=True)

    return ToolResult.from_text(format_lines(
        "🏞️ **탑다운 타일셋 생성 시작!**",
        [f"아래 지형: \"{args.lower}\"", f"위 지형: \"{args.upper}\"", f"타일셋 ID: {tileset_id}"],
        "⏱️ 처리에 3~5분 정도 걸립니다.\n\n💡 get_tileset_status로 완료 여부를 확인하세요.",
    ))


def _isometric_tile_call(args: CreateIsometricTileArgs) -> RemoteCall:
    return RemoteCall("POST", "/create-isometric-tile", json={
        "description": args.description,
        "image_size": _image_size(args.size, args.size),
        "isometric_tile_size": args.size,
        "isometric_tile_shape": "block",
    })


def _render_isometric_tile(args: CreateIsometricTileArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    tile_id = extract_text(response.data, TILE_ID_FIELDS)
    job_id = extract_text(response.data, BACKGROUND_JOB_ID_FIELDS)
    if not (tile_id or job_id):
        return raw_json_result("❌ 아이소메트릭 타일 생성 실패:", response.data, is_error=True)

    return ToolResult.from_text(format_lines(
        "🎲 **아이소메트릭 타일 생성 시작!**",
        [
            f"설명: \"{args.description}\"",
            f"크기: {args.size}px",
            f"타일 ID: {tile_id or 'Unknown'}",
            f"작업 ID: {job_id or 'Unknown'}",
        ],
        "⏱️ 처리에 2~3분 정도 걸립니다.\n\n💡 get_isometric_tile_status로 완료 여부를 확인하세요.",
    ))


def _render_asset_status(
    title: str,
    id_label: str,
    asset_id: str,
    eta: str,
    response: RemoteResponse,
) -> ToolResult:
    status = (extract_text(response.data, STATUS_FIELDS) or "").lower()

    if status in FAILED_STATUSES:
        reason = extract_text(response.data, ERROR_MESSAGE_FIELDS) or GENERIC_ERROR_MESSAGE
        return ToolResult.from_text(f"❌ {title} 생성 실패 ({id_label}: {asset_id}): {reason}", is_error=True)

    pending = response.status_code != 200 or status in PENDING_STATUSES

    if pending:
        message = extract_text(response.data, ERROR_MESSAGE_FIELDS) or "잠시 후 다시 확인해 주세요!"
        return ToolResult.from_text(f"⏳ {title} 아직 처리 중입니다... (생성 후 약 {eta})\n{message}")

    lines = [f"{id_label}: {asset_id}", "상태: 다운로드 가능"]
    download_url = extract_text(response.data, DOWNLOAD_URL_FIELDS)
    if download_url:
        lines.append(f"다운로드: {download_url}")
    return ToolResult.from_text(format_lines(f"✅ **{title} 완료!**", lines))


def _render_tileset_status(args: GetTilesetStatusArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    return _render_asset_status("타일셋", "타일셋 ID", args.tileset_id, "3~5분", response)


def _render_isometric_tile_status(
    args: GetIsometricTileStatusArgs, response: RemoteResponse, ctx: ToolContext
) -> ToolResult:
    return _render_asset_status("아이소메트릭 타일", "타일 ID", args.tile_id, "2~3분", response)


# ===== 이미지 생성 =====

def _render_generated_image(
    title: str,
    lines: List[str],
    slug_source: str,
    response: RemoteResponse,
    ctx: ToolContext,
) -> ToolResult:
    """
    응답에 포함된 base64 이미지를 파일로 저장하고 결과를 만듭니다.

    저장에 실패해도 생성 자체는 성공했으므로 isError로 표시하지 않습니다.
    같은 요청을 다시 보내면 원격 생성이 중복됩니다.
    """
    image_data = extract_text(response.data, IMAGE_DATA_FIELDS)
    if image_data is None and isinstance(response.data, str):
        image_data = response.data

    if not image_data:
        keys = ", ".join(sorted(response.data)) if isinstance(response.data, dict) else type(response.data).__name__
        return raw_json_result(
            format_lines(title, lines, f"⚠️ 응답에서 이미지 데이터를 찾지 못했습니다 (keys: {keys}). 원본 응답:"),
            response.data,
        )

    try:
        file_path = save_base64_image(image_data, ctx.output_dir, slug_source)
        width, height, image_format = get_image_info(file_path.read_bytes())
    except (OSError, ValueError) as e:
        logger.warning(f"Generated image could not be saved: {e}")
        return ToolResult.from_text(format_lines(
            title,
            lines,
            f"❌ 파일 저장 실패: {e}\n\n💡 이미지는 생성되었지만 저장하지 못했습니다. "
            f"다시 생성하면 크레딧이 중복 사용되니 저장 경로({ctx.output_dir})를 먼저 확인하세요.",
        ))

    logger.info(f"Saved generated image to {file_path}")
    return ToolResult.from_text(format_lines(
        title,
        lines + [f"파일: {file_path.as_posix()} ({width}x{height} {image_format})"],
        f"💡 이미지가 {ctx.output_dir.as_posix()} 폴더에 저장되었습니다!",
    ))


def _pixflux_call(args: CreateImagePixfluxArgs) -> RemoteCall:
    return RemoteCall("POST", "/create-image-pixflux", json={
        "description": args.description,
        "negative_description": args.negative_description,
        "image_size": _image_size(args.width, args.height),
        "text_guidance_scale": 8.0,
    })


def _render_pixflux(args: CreateImagePixfluxArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    lines = [
        f"설명: \"{args.description}\"",
        f"크기: {args.width}x{args.height}",
        "모델: Pixflux (기본)",
    ]
    return _render_generated_image("🎨 **Pixflux 이미지 생성 완료!**", lines, args.description, response, ctx)


def _bitforge_call(args: CreateImageBitforgeArgs) -> RemoteCall:
    return RemoteCall("POST", "/create-image-bitforge", json={
        "description": args.description,
        "negative_description": args.negative_description,
        "image_size": _image_size(args.width, args.height),
        "text_guidance_scale": 8.0,
        "style_strength": args.style_strength,
    })


def _render_bitforge(args: CreateImageBitforgeArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    lines = [
        f"설명: \"{args.description}\"",
        f"크기: {args.width}x{args.height}",
        "모델: Bitforge (대체)",
        f"스타일 강도: {args.style_strength:g}",
    ]
    return _render_generated_image("🎨 **Bitforge 이미지 생성 완료!**", lines, args.description, response, ctx)


def _inpaint_call(args: InpaintPixelArtArgs) -> RemoteCall:
    return RemoteCall("POST", "/inpaint", json={
        "description": args.description,
        "negative_description": args.negative_description,
        "image_size": _image_size(args.width, args.height),
        "text_guidance_scale": 3.0,
        "inpainting_image": _base64_png(args.source_image),
        "mask_image": _base64_png(args.mask_image),
    })


def _render_inpaint(args: InpaintPixelArtArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    lines = [f"설명: \"{args.description}\"", "원본 이미지: 제공됨", "마스크: 적용됨"]
    return _render_generated_image("🎨 **픽셀 아트 인페인팅 완료!**", lines, args.description, response, ctx)


# ===== 계정 / 작업 / 문서 =====

def _render_background_job(args: GetBackgroundJobArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    job = response.data
    if not isinstance(job, dict):
        return raw_json_result("⚙️ **작업 상태** (알 수 없는 응답 형식):", job)

    status = extract_text(job, STATUS_FIELDS) or "unknown"
    status_key = status.lower()
    result = f"⚙️ **작업 상태: {status.upper()}**\n\n"
    result += f"🆔 작업 ID: {args.job_id}\n"

    character_id = extract_text(job, CHARACTER_ID_FIELDS)
    if character_id:
        result += f"🎨 캐릭터 ID: {character_id}\n"

    if status_key == "completed":
        result += "✅ **완료!**\n"
        download_url = extract_text(job, DOWNLOAD_URL_FIELDS)
        if download_url:
            result += f"📥 다운로드: {download_url}\n"
    elif status_key in PENDING_STATUSES:
        result += "⏳ **아직 처리 중입니다...**\n"
    elif status_key in FAILED_STATUSES:
        reason = extract_text(job, ERROR_MESSAGE_FIELDS)
        result += f"❌ **작업 실패**{f': {reason}' if reason else ''}\n"

    return ToolResult.from_text(result)


def _render_balance(args: NoArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    balance = _as_dict(response.data)
    if not any(key in balance for key in ("credits", "usage", "limits")):
        return raw_json_result("💰 **계정 잔액** (알 수 없는 응답 형식):", response.data)

    result = "💰 **계정 잔액**\n\n"
    if "credits" in balance:
        credits = balance["credits"]
        result += f"💳 크레딧: {credits if not isinstance(credits, (dict, list)) else to_pretty_json(credits)}\n"
    if "usage" in balance:
        result += f"📊 사용량: {balance['usage']}\n"
    if balance.get("limits"):
        result += f"🚦 한도: {to_pretty_json(balance['limits'])}\n"
    return ToolResult.from_text(result)


def _render_api_documentation(args: NoArgs, response: RemoteResponse, ctx: ToolContext) -> ToolResult:
    documentation = response.text.strip() or (response.data if isinstance(response.data, str) else "")
    if not documentation:
        return raw_json_result("📜 **PixelLab API 문서** (본문이 비어 있음):", response.data)

    separator = "=" * 50
    return ToolResult.from_text(
        f"📜 **LLM용 PixelLab API 문서**\n\n{separator}\n\n{documentation}\n\n{separator}\n\n"
        "💡 이 문서는 API 변경에 맞춰 주기적으로 갱신됩니다."
    )


# ===== 도구 카탈로그 (목록 = 디스패치 테이블) =====

TOOLS: List[BaseTool] = [
    RemoteTool(
        name="create_character",
        description="4방향 또는 8방향 픽셀 아트 캐릭터를 생성합니다. 캐릭터 ID와 백그라운드 작업 ID를 반환합니다.",
        args_model=CreateCharacterArgs,
        build_call=lambda args: _character_call(args.description, args.n_directions),
        render=_render_create_character,
        error_label="API Error",
    ),
    RemoteTool(
        name="animate_character",
        description="기존 캐릭터에 애니메이션(walk, run, idle, punch, kick 등)을 추가합니다. 이름은 템플릿 애니메이션으로 변환됩니다.",
        args_model=AnimateCharacterArgs,
        build_call=_animate_character_call,
        render=_render_animate_character,
        error_label="Animation API Error",
    ),
    RemoteTool(
        name="create_topdown_tileset",
        description="지형 전환용 Wang 타일셋을 생성합니다. lower_base_tile_id로 여러 지형을 이어 붙일 수 있습니다.",
        args_model=CreateTopdownTilesetArgs,
        build_call=_topdown_tileset_call,
        render=_render_topdown_tileset,
        error_label="Tileset API Error",
    ),
    StaticTool(
        name="create_sidescroller_tileset",
        description="2D 플랫포머용 타일셋 (현재 PixelLab API에서 지원하지 않으며 안내 메시지만 반환합니다).",
        args_model=CreateSidescrollerTilesetArgs,
        message=SIDESCROLLER_UNSUPPORTED_MESSAGE,
    ),
    RemoteTool(
        name="create_isometric_tile",
        description="아이소메트릭 타일 하나를 생성합니다.",
        args_model=CreateIsometricTileArgs,
        build_call=_isometric_tile_call,
        render=_render_isometric_tile,
        error_label="Isometric Tile API Error",
    ),
    RemoteTool(
        name="get_character",
        description="캐릭터의 방향별 이미지, 애니메이션, 다운로드 링크를 조회합니다.",
        args_model=GetCharacterArgs,
        build_call=lambda args: RemoteCall("GET", f"/characters/{_segment(args.character_id)}"),
        render=_render_get_character,
        error_label="API Error retrieving character",
    ),
    RemoteTool(
        name="list_characters",
        description="내가 만든 캐릭터 목록을 페이지 단위로 조회합니다.",
        args_model=ListCharactersArgs,
        build_call=_list_characters_call,
        render=_render_list_characters,
        error_label="API Error listing characters",
    ),
    RemoteTool(
        name="get_background_job",
        description="백그라운드 작업의 상태와 결과를 확인합니다.",
        args_model=GetBackgroundJobArgs,
        build_call=lambda args: RemoteCall("GET", f"/background-jobs/{_segment(args.job_id)}"),
        render=_render_background_job,
        error_label="API Error retrieving job",
    ),
    RemoteTool(
        name="get_balance",
        description="계정 잔액과 남은 API 크레딧을 확인합니다.",
        args_model=NoArgs,
        build_call=lambda args: RemoteCall("GET", "/balance"),
        render=_render_balance,
        error_label="API Error getting balance",
    ),
    RemoteTool(
        name="get_8direction_character",
        description="8방향(360°) 픽셀 아트 캐릭터를 생성합니다.",
        args_model=Create8DirectionCharacterArgs,
        build_call=lambda args: _character_call(args.description, 8),
        render=_render_create_8direction_character,
        error_label="API Error",
    ),
    RemoteTool(
        name="get_character_zip",
        description="캐릭터의 모든 방향과 애니메이션을 담은 ZIP 다운로드 링크를 받습니다.",
        args_model=GetCharacterZipArgs,
        build_call=lambda args: RemoteCall("GET", f"/characters/{_segment(args.character_id)}/zip"),
        render=_render_character_zip,
        error_label="API Error getting ZIP",
        accept_redirect=True,
    ),
    RemoteTool(
        name="get_tileset_status",
        description="타일셋 생성 상태를 확인합니다.",
        args_model=GetTilesetStatusArgs,
        build_call=lambda args: RemoteCall("GET", f"/tilesets/{_segment(args.tileset_id)}"),
        render=_render_tileset_status,
        error_label="API Error checking tileset",
    ),
    RemoteTool(
        name="get_isometric_tile_status",
        description="아이소메트릭 타일 생성 상태를 확인합니다.",
        args_model=GetIsometricTileStatusArgs,
        build_call=lambda args: RemoteCall("GET", f"/isometric-tiles/{_segment(args.tile_id)}"),
        render=_render_isometric_tile_status,
        error_label="API Error checking isometric tile",
    ),
    RemoteTool(
        name="animate_character_alt",
        description="대체 엔드포인트로 캐릭터 애니메이션을 생성합니다. animation 값은 변환 없이 템플릿 ID로 전달됩니다.",
        args_model=AnimateCharacterAltArgs,
        build_call=_animate_character_alt_call,
        render=_render_animate_character_alt,
        error_label="API Error alternative animation",
    ),
    RemoteTool(
        name="animate_with_text",
        description="텍스트 설명으로 애니메이션을 생성합니다 (예: \"숨을 헐떡이는\", \"주문을 외우는\").",
        args_model=AnimateWithTextArgs,
        build_call=_animate_with_text_call,
        render=_render_animate_with_text,
        error_label="API Error text animation",
    ),
    RemoteTool(
        name="create_image_pixflux",
        description="Pixflux 모델로 픽셀 아트 이미지를 생성하고 gameassets 폴더에 PNG로 저장합니다.",
        args_model=CreateImagePixfluxArgs,
        build_call=_pixflux_call,
        render=_render_pixflux,
        error_label="API Error Pixflux",
    ),
    RemoteTool(
        name="inpaint_pixel_art",
        description="마스크 영역만 다시 그려 기존 픽셀 아트를 수정합니다 (인페인팅).",
        args_model=InpaintPixelArtArgs,
        build_call=_inpaint_call,
        render=_render_inpaint,
        error_label="API Error inpainting",
    ),
    RemoteTool(
        name="get_api_documentation",
        description="LLM용으로 정리된 PixelLab API 문서를 가져옵니다.",
        args_model=NoArgs,
        build_call=lambda args: RemoteCall("GET", "/llms.txt"),
        render=_render_api_documentation,
        error_label="API Error getting documentation",
    ),
    RemoteTool(
        name="create_image_bitforge",
        description="Bitforge 모델로 픽셀 아트 이미지를 생성하고 gameassets 폴더에 PNG로 저장합니다.",
        args_model=CreateImageBitforgeArgs,
        build_call=_bitforge_call,
        render=_render_bitforge,
        error_label="API Error Bitforge",
    ),
    RemoteTool(
        name="rotate_character",
        description="픽셀 아트 캐릭터를 다른 시점/방향에서 본 모습으로 생성합니다.",
        args_model=RotateCharacterArgs,
        build_call=_rotate_call,
        render=_render_rotate,
        error_label="API Error rotating character",
    ),
    RemoteTool(
        name="animate_with_skeleton",
        description="2D 스켈레톤 키포인트로 포즈 기반 애니메이션을 생성합니다.",
        args_model=AnimateWithSkeletonArgs,
        build_call=_animate_with_skeleton_call,
        render=_render_animate_with_skeleton,
        error_label="API Error skeleton animation",
    ),
    RemoteTool(
        name="estimate_skeleton",
        description="픽셀 아트 캐릭터 이미지에서 스켈레톤 키포인트를 추출합니다.",
        args_model=EstimateSkeletonArgs,
        build_call=lambda args: RemoteCall("POST", "/estimate-skeleton", json={"image": _base64_png(args.image)}),
        render=_render_estimate_skeleton,
        error_label="API Error skeleton estimation",
    ),
]
