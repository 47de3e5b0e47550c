"""
PixelLab API 관련 상수 정의
"""
from enum import Enum
from typing import Dict, Optional


# PixelLab API 기본 주소 (PIXELLAB_API_BASE_URL 환경변수로 변경 가능)
DEFAULT_API_BASE_URL = "https://api.pixellab.ai"

# 생성된 이미지가 저장되는 디렉터리 (작업 디렉터리 기준)
DEFAULT_OUTPUT_DIR = "gameassets"

# 기본 이미지 크기 (픽셀)
DEFAULT_IMAGE_SIZE = 64
DEFAULT_ISOMETRIC_TILE_SIZE = 32
DEFAULT_TILESET_TILE_SIZE = 16


class CameraView(str, Enum):
    """카메라 시점"""
    SIDE = "side"
    TOP_DOWN = "top-down"
    LOW_TOP_DOWN = "low top-down"
    HIGH_TOP_DOWN = "high top-down"
    PERSPECTIVE = "perspective"


class Direction(str, Enum):
    """캐릭터가 바라보는 방향"""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTH_EAST = "north-east"
    NORTH_WEST = "north-west"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"


class TemplateAnimation(str, Enum):
    """PixelLab이 허용하는 템플릿 애니메이션 ID"""
    BREATHING_IDLE = "breathing-idle"
    CROSS_PUNCH = "cross-punch"
    CROUCHING = "crouching"
    FLYING_KICK = "flying-kick"
    FALLING_BACK_DEATH = "falling-back-death"
    BACKFLIP = "backflip"
    DRINKING = "drinking"


DEFAULT_TEMPLATE_ANIMATION = TemplateAnimation.BREATHING_IDLE


# 자유 텍스트 애니메이션 이름 → 템플릿 ID
# API가 소수의 템플릿만 받기 때문에 이동 계열은 모두 breathing-idle로 모은다.
ANIMATION_ALIASES: Dict[str, TemplateAnimation] = {
    "walking": TemplateAnimation.BREATHING_IDLE,
    "running": TemplateAnimation.BREATHING_IDLE,
    "sprint": TemplateAnimation.BREATHING_IDLE,
    "digital sprint": TemplateAnimation.BREATHING_IDLE,
    "idle": TemplateAnimation.BREATHING_IDLE,
    "fight": TemplateAnimation.CROSS_PUNCH,
    "punch": TemplateAnimation.CROSS_PUNCH,
    "attack": TemplateAnimation.CROSS_PUNCH,
    "crouch": TemplateAnimation.CROUCHING,
    "jump": TemplateAnimation.FLYING_KICK,
    "kick": TemplateAnimation.FLYING_KICK,
    "fall": TemplateAnimation.FALLING_BACK_DEATH,
    "death": TemplateAnimation.FALLING_BACK_DEATH,
    "backflip": TemplateAnimation.BACKFLIP,
    "drink": TemplateAnimation.DRINKING,
}


def get_template_animation_id(animation: Optional[str]) -> str:
    """
    애니메이션 이름을 템플릿 애니메이션 ID로 변환합니다.

    대소문자를 구분하지 않으며, 알 수 없는 이름은 breathing-idle로 처리합니다.
    템플릿 ID를 그대로 넘기면 그 ID가 반환됩니다.

    Args:
        animation: 사용자가 입력한 애니메이션 이름 (예: "Walking", "kick")

    Returns:
        템플릿 애니메이션 ID 문자열
    """
    if not animation:
        return DEFAULT_TEMPLATE_ANIMATION.value

    key = animation.strip().lower()
    if key in ANIMATION_ALIASES:
        return ANIMATION_ALIASES[key].value

    try:
        return TemplateAnimation(key).value
    except ValueError:
        return DEFAULT_TEMPLATE_ANIMATION.value


# 사이드스크롤러 타일셋은 API v2에서 지원하지 않음
SIDESCROLLER_UNSUPPORTED_MESSAGE = (
    "📊 **사이드스크롤러 타일셋 상태**\n\n"
    "❌ **현재 PixelLab API v2에서 지원하지 않습니다 (unsupported).**\n\n"
    "PixelLab API가 지원하는 타일셋:\n"
    "• 탑다운 타일셋 (\"low top-down\" 또는 \"high top-down\" 시점)\n"
    "• 지형 전환용 Wang 타일\n\n"
    "사이드스크롤러 타일셋에는 \"side\" 시점이 필요한데, API v2에는 구현되어 있지 않습니다.\n\n"
    "💡 플랫포머 게임에도 create_topdown_tileset으로 만든 탑다운 타일셋을 사용해 보세요."
)
