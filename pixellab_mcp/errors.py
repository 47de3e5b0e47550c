"""
오류 타입 정의

- 프로토콜 오류(알 수 없는 도구, 잘못된 인자)는 MCP SDK의 McpError로 올린다.
- 네트워크 오류(연결 실패, 타임아웃)는 PixelLabTransportError로 올린다.
- API가 돌려준 실패 응답은 예외가 아니라 isError 도구 결과로 변환된다.
"""
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class PixelLabTransportError(Exception):
    """HTTP 응답을 받지 못한 경우 (DNS, 연결 실패, 타임아웃)"""

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(f"PixelLab API 요청 실패 ({method} {url}): {reason}")
        self.method = method
        self.url = url
        self.reason = reason


def method_not_found(tool_name: str) -> McpError:
    """등록되지 않은 도구 이름에 대한 오류"""
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {tool_name}"))


def invalid_params(message: str) -> McpError:
    """필수 인자 누락 또는 타입 오류"""
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))
