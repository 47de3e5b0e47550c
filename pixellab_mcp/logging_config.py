"""
로깅 설정

stdio 전송에서는 stdout이 MCP 메시지 채널이므로 로그는 항상 stderr로 보냅니다.
"""
import logging
import sys
from typing import Optional

from pixellab_mcp.config import Settings

LOGGER_NAME = "pixellab_mcp"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Settings) -> logging.Logger:
    """
    설정에 맞게 로거를 구성합니다.

    Args:
        settings: 로그 레벨과 로그 파일 경로를 포함한 설정

    Returns:
        구성된 패키지 루트 로거
    """
    level = getattr(logging, settings.log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = settings.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.info(f"Logging initialized - Level: {settings.log_level}")
    if settings.log_file:
        logger.info(f"Logging to file: {settings.log_file}")

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    패키지 하위 로거 반환

    Args:
        name: 모듈 이름 (보통 __name__). "pixellab_mcp."으로 시작하면 그대로 사용

    Returns:
        로거 인스턴스
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
