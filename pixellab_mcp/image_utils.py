"""
이미지 처리 유틸리티 함수
"""
import base64
import binascii
import io
import re
from pathlib import Path
from typing import Tuple

from PIL import Image

# 파일 이름 슬러그 최대 길이
MAX_SLUG_LENGTH = 30
DEFAULT_SLUG = "image"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def decode_base64_image(data: str) -> bytes:
    """
    Base64 인코딩된 이미지 디코딩

    "data:image/png;base64,..." 형태의 data URL이면 접두사를 제거합니다.

    Raises:
        ValueError: base64 형식이 아닌 경우 (binascii.Error 포함)
    """
    data = data.strip()
    if data.startswith("data:"):
        data = data.split(",", 1)[1] if "," in data else ""
    try:
        return base64.b64decode(data, validate=False)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def make_safe_filename(description: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    설명 문구로 파일 이름 슬러그 생성

    소문자로 바꾼 뒤 영숫자가 아닌 문자 묶음은 밑줄 하나로 바꾸고 max_length로 자릅니다.
    결과가 비면 "image"를 사용합니다.

    예: "A Brave Knight!! 2024" -> "a_brave_knight_2024"
    """
    slug = _NON_ALNUM.sub("_", description.lower()).strip("_")
    slug = slug[:max_length].rstrip("_")
    return slug or DEFAULT_SLUG


def get_image_info(image_bytes: bytes) -> Tuple[int, int, str]:
    """이미지 정보 (width, height, format) 반환"""
    with Image.open(io.BytesIO(image_bytes)) as img:
        return img.width, img.height, img.format or "UNKNOWN"


def save_png(image_bytes: bytes, output_dir: Path, name: str) -> Path:
    """
    이미지를 PNG 파일로 저장

    입력이 PNG가 아니어도 Pillow로 다시 인코딩하여 항상 PNG로 저장합니다.

    Args:
        image_bytes: 디코딩된 이미지 바이트
        output_dir: 저장 디렉터리 (없으면 생성)
        name: 확장자를 제외한 파일 이름

    Returns:
        저장된 파일 경로 (같은 이름이 있으면 name_2.png, name_3.png ...)

    Raises:
        OSError: 디렉터리 생성/쓰기 실패 또는 이미지로 인식할 수 없는 데이터
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = _unused_path(output_dir, name)

    with Image.open(io.BytesIO(image_bytes)) as img:
        img.save(file_path, format="PNG")

    return file_path


def _unused_path(output_dir: Path, name: str) -> Path:
    """기존 파일을 덮어쓰지 않도록 번호를 붙인 경로"""
    file_path = output_dir / f"{name}.png"
    index = 2
    while file_path.exists():
        file_path = output_dir / f"{name}_{index}.png"
        index += 1
    return file_path


def save_base64_image(data: str, output_dir: Path, description: str) -> Path:
    """base64 이미지(raw 또는 data URL)를 설명 기반 파일 이름으로 저장"""
    image_bytes = decode_base64_image(data)
    return save_png(image_bytes, output_dir, make_safe_filename(description))
