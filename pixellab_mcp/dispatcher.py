"""
도구 레지스트리 / 디스패처

TOOLS 카탈로그 하나로 도구 목록과 디스패치 테이블을 함께 만듭니다.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from pixellab_mcp.config import Settings
from pixellab_mcp.errors import invalid_params, method_not_found
from pixellab_mcp.logging_config import get_logger
from pixellab_mcp.models import ToolArguments, ToolResult
from pixellab_mcp.pixellab_client import PixelLabClient, get_pixellab_client
from pixellab_mcp.tools import TOOLS, BaseTool, ToolContext

logger = get_logger(__name__)


def format_validation_error(error: ValidationError) -> str:
    """
    pydantic 검증 오류를 필드 이름이 드러나는 한 줄 메시지로 변환

    예: "description: Field required; width: Input should be less than or equal to 400"
    """
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(messages)


class ToolDispatcher:
    """도구 이름으로 핸들러를 찾아 실행합니다."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[PixelLabClient] = None,
        tools: Sequence[BaseTool] = TOOLS,
    ):
        """
        초기화

        Args:
            settings: 서버 설정
            client: PixelLab 클라이언트 (None이면 설정으로 생성)
            tools: 등록할 도구 카탈로그

        Raises:
            RuntimeError: 도구 이름 중복 또는 인자 모델 누락
        """
        self._tools: Dict[str, BaseTool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise RuntimeError(f"Duplicate tool name in catalogue: {tool.name}")
            if not (isinstance(tool.args_model, type) and issubclass(tool.args_model, ToolArguments)):
                raise RuntimeError(f"Tool has no argument model: {tool.name}")
            self._tools[tool.name] = tool

        self.client = client or get_pixellab_client(settings)
        self.context = ToolContext(client=self.client, output_dir=settings.output_dir)

        logger.info(f"Registered {len(self._tools)} tools")

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """MCP tools/list 응답용 도구 목록 (카탈로그 순서 유지)"""
        return [tool.to_schema() for tool in self._tools.values()]

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """
        도구 호출

        Args:
            name: 도구 이름
            arguments: 도구 인자 (None이면 빈 인자)

        Returns:
            ToolResult

        Raises:
            McpError: 알 수 없는 도구(METHOD_NOT_FOUND) 또는 잘못된 인자(INVALID_PARAMS)
            PixelLabTransportError: API에 연결하지 못한 경우
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name}")
            raise method_not_found(name)

        try:
            args = tool.args_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            message = format_validation_error(e)
            logger.warning(f"Invalid arguments for {name}: {message}")
            raise invalid_params(f"Invalid arguments for {name}: {message}") from e

        logger.info(f"Calling tool: {name}")
        result = await tool.run(args, self.context)
        if result.is_error:
            logger.warning(f"Tool {name} returned an error result")
        return result

    async def aclose(self) -> None:
        await self.client.aclose()
