"""
MCP 도구 인자/결과를 위한 Pydantic 모델 정의

각 도구의 inputSchema는 여기 정의된 인자 모델에서 생성됩니다.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pixellab_mcp.constants import (
    DEFAULT_IMAGE_SIZE,
    DEFAULT_ISOMETRIC_TILE_SIZE,
    CameraView,
    Direction,
)


class TextContent(BaseModel):
    """텍스트 콘텐츠 블록"""
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """도구 호출 결과 (항상 텍스트 블록 하나 이상)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: List[TextContent] = Field(..., min_length=1)
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        """모든 텍스트 블록을 이어 붙인 문자열"""
        return "\n".join(block.text for block in self.content)


class ToolArguments(BaseModel):
    """도구 인자 모델 공통 베이스 (알 수 없는 필드는 무시)"""
    model_config = ConfigDict(extra="ignore")


# ===== 캐릭터 =====

class CreateCharacterArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Description of the character to create")
    n_directions: Literal[4, 8] = Field(4, description="Number of directional views (4 or 8)")


class Create8DirectionCharacterArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Description of the character to create")


class GetCharacterArgs(ToolArguments):
    character_id: str = Field(..., min_length=1, description="Character ID to retrieve")
    include_preview: bool = Field(True, description="Include preview image link when the API provides one")


class ListCharactersArgs(ToolArguments):
    limit: int = Field(10, ge=1, le=100, description="Maximum number of characters to return (1-100)")
    offset: int = Field(0, ge=0, description="Number of characters to skip for pagination")


class GetCharacterZipArgs(ToolArguments):
    character_id: str = Field(..., min_length=1, description="Character ID to download")


class RotateCharacterArgs(ToolArguments):
    source_image: str = Field(..., min_length=1, description="Base64 encoded source character image")
    image_guidance_scale: float = Field(3, ge=1, le=20, description="How closely to follow the reference image (1-20)")
    view_change: float = Field(30, ge=-180, le=180, description="Degrees to tilt the subject view")
    direction_change: float = Field(45, ge=-180, le=180, description="Degrees to rotate the subject direction")
    from_view: CameraView = Field(CameraView.SIDE, description="Source view angle")
    to_view: CameraView = Field(CameraView.TOP_DOWN, description="Target view angle")
    width: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=200, description="Image width (16-200)")
    height: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=200, description="Image height (16-200)")


# ===== 애니메이션 =====

class AnimateCharacterArgs(ToolArguments):
    character_id: str = Field(..., min_length=1, description="ID of the character to animate")
    animation: str = Field(..., min_length=1, description="Type of animation (walk, run, idle, punch, kick, etc.)")


class AnimateCharacterAltArgs(ToolArguments):
    character_id: str = Field(..., min_length=1, description="ID of the character to animate")
    animation: str = Field("walking", description="Template animation passed through as-is")
    animation_name: Optional[str] = Field(None, description="Name for the new animation")
    action_description: Optional[str] = Field(None, description="Free-text description of the action")


class AnimateWithTextArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Base character description")
    action: str = Field(..., min_length=1, description="Animation action description (e.g. \"casting a spell\")")
    reference_image: str = Field(..., min_length=1, description="Character ID to use as reference for animation")
    text_guidance_scale: float = Field(3.0, ge=1, le=20, description="How closely to follow the text (1-20)")
    image_guidance_scale: float = Field(1.0, ge=1, le=20, description="How closely to follow the reference (1-20)")
    n_frames: int = Field(4, ge=1, le=20, description="Number of animation frames")


class AnimateWithSkeletonArgs(ToolArguments):
    reference_image: str = Field(..., min_length=1, description="Base64 encoded reference image for pose")
    skeleton_keypoints: Optional[List[List[float]]] = Field(None, description="Array of skeleton keypoint coordinates")
    image_guidance_scale: float = Field(4, ge=1, le=20, description="How closely to follow the reference image (1-20)")
    view: Literal["side", "top-down", "low top-down", "high top-down"] = Field("side", description="Camera view angle")
    direction: Direction = Field(Direction.SOUTH, description="Subject direction")
    isometric: bool = Field(False, description="Generate in isometric view")


class EstimateSkeletonArgs(ToolArguments):
    image: str = Field(..., min_length=1, description="Base64 encoded character image for keypoint extraction")


# ===== 타일셋 =====

class CreateTopdownTilesetArgs(ToolArguments):
    lower: str = Field(..., min_length=1, description="Lower terrain type")
    upper: str = Field(..., min_length=1, description="Upper terrain type")
    transition_description: str = Field("", description="Transition between the two terrains (optional)")
    lower_base_tile_id: Optional[str] = Field(None, description="ID of the lower base tile (optional, for chaining)")


class CreateSidescrollerTilesetArgs(ToolArguments):
    lower: Optional[str] = Field(None, description="Lower platform type")
    transition: Optional[str] = Field(None, description="Transition material")
    base_tile_id: Optional[str] = Field(None, description="ID of the base tile (optional, for chaining)")


class CreateIsometricTileArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Description of the isometric tile")
    size: int = Field(DEFAULT_ISOMETRIC_TILE_SIZE, gt=0, description="Size of the tile in pixels")


class GetTilesetStatusArgs(ToolArguments):
    tileset_id: str = Field(..., min_length=1, description="Tileset ID to check")


class GetIsometricTileStatusArgs(ToolArguments):
    tile_id: str = Field(..., min_length=1, description="Isometric tile ID to check")


# ===== 이미지 생성 =====

class CreateImagePixfluxArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Text description of the image to generate")
    negative_description: Optional[str] = Field(None, description="What to avoid in the generated image (optional)")
    width: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=400, description="Image width (16-400)")
    height: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=400, description="Image height (16-400)")


class CreateImageBitforgeArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="Text description of the image to generate")
    negative_description: Optional[str] = Field(None, description="What to avoid in the generated image (optional)")
    width: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=200, description="Image width (16-200)")
    height: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=200, description="Image height (16-200)")
    style_strength: float = Field(0, ge=0, le=100, description="Style transfer strength (0-100)")


class InpaintPixelArtArgs(ToolArguments):
    description: str = Field(..., min_length=1, description="How to modify the image")
    source_image: str = Field(..., min_length=1, description="Base64 encoded source image")
    mask_image: str = Field(..., min_length=1, description="Base64 mask image (white areas are modified)")
    negative_description: Optional[str] = Field(None, description="What to avoid in the modified areas (optional)")
    width: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=400, description="Image width (16-400)")
    height: int = Field(DEFAULT_IMAGE_SIZE, ge=16, le=400, description="Image height (16-400)")


# ===== 기타 =====

class GetBackgroundJobArgs(ToolArguments):
    job_id: str = Field(..., min_length=1, description="Background job ID to check")


class NoArgs(ToolArguments):
    """인자가 없는 도구"""
