"""
PixelLab 픽셀 아트 MCP 서버

PixelLab API(캐릭터, 애니메이션, 타일셋, 이미지 생성)를 MCP 도구로 제공합니다.
기본 전송은 stdio이며, PIXELLAB_TRANSPORT=http이면 FastAPI + streamable HTTP로 실행됩니다.
"""
import asyncio
import os
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

import mcp.types as types
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from pydantic import ValidationError

from pixellab_mcp.config import Settings, get_settings
from pixellab_mcp.dispatcher import ToolDispatcher
from pixellab_mcp.logging_config import get_logger, setup_logging
from pixellab_mcp.mcp_tools_schema import (
    MCP_HTTP_PATH,
    MCP_SERVER_INSTRUCTIONS,
    SERVER_NAME,
    SERVER_TITLE,
    SERVER_VERSION,
    get_server_metadata,
)
from pixellab_mcp.models import ToolResult

logger = get_logger("server")


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """ToolResult를 MCP SDK의 CallToolResult로 변환"""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in result.content],
        isError=result.is_error,
    )


def _register_tools(server: Server, dispatcher: ToolDispatcher) -> None:
    """
    MCP 도구들을 등록

    tools/list는 카탈로그에서, tools/call은 디스패처에서 처리합니다.
    """
    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [types.Tool(**schema) for schema in dispatcher.list_tools()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call(request.params.name, request.params.arguments)
        return types.ServerResult(to_call_tool_result(result))

    # call_tool 데코레이터는 모든 예외를 isError 결과로 바꾸므로 직접 등록
    # (McpError가 JSON-RPC 오류 응답으로 전달되어야 함)
    server.request_handlers[types.CallToolRequest] = call_tool


def create_mcp_server(dispatcher: ToolDispatcher) -> Server:
    """MCP 서버 생성"""
    server = Server(SERVER_NAME, version=SERVER_VERSION, instructions=MCP_SERVER_INSTRUCTIONS)
    _register_tools(server, dispatcher)
    logger.info(f"MCP tools registered: {', '.join(dispatcher.tool_names)}")
    return server


async def run_stdio(dispatcher: ToolDispatcher) -> None:
    """stdio 전송으로 MCP 서버 실행 (stdout은 MCP 메시지 전용)"""
    server = create_mcp_server(dispatcher)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("PixelLab MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await dispatcher.aclose()


def create_app(settings: Settings, dispatcher: Optional[ToolDispatcher] = None) -> FastAPI:
    """
    HTTP 전송용 FastAPI 앱 생성

    Args:
        settings: 서버 설정
        dispatcher: 도구 디스패처 (None이면 설정으로 생성)
    """
    dispatcher = dispatcher or ToolDispatcher(settings)
    session_manager = StreamableHTTPSessionManager(app=create_mcp_server(dispatcher), stateless=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with session_manager.run():
            logger.info(f"MCP server initialized - Streamable HTTP endpoint available at {MCP_HTTP_PATH}/")
            yield
        await dispatcher.aclose()

    app = FastAPI(title=SERVER_TITLE, lifespan=lifespan)
    app.state.dispatcher = dispatcher

    # CORS 설정 추가 (외부 MCP 클라이언트 접근 허용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """헬스체크 엔드포인트"""
        return {"status": "healthy", "service": SERVER_NAME}

    @app.get("/.well-known/mcp")
    async def mcp_metadata():
        """MCP 서버 메타데이터 엔드포인트"""
        return get_server_metadata(dispatcher)

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return {
            "name": SERVER_NAME,
            "description": SERVER_TITLE,
            "version": SERVER_VERSION,
            "tools": dispatcher.tool_names,
            "endpoints": {
                "mcp": f"{MCP_HTTP_PATH}/",
                "health": "/health",
                "metadata": "/.well-known/mcp",
            },
        }

    async def handle_mcp(scope, receive, send):
        await session_manager.handle_request(scope, receive, send)

    # Streamable HTTP는 하나의 엔드포인트에서 GET(SSE 스트림)과 POST(JSON-RPC)를 모두 처리
    app.mount(MCP_HTTP_PATH, handle_mcp)

    return app


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        # 로깅 설정 전이므로 stderr로 직접 출력
        sys.exit(f"PixelLab MCP 서버를 시작할 수 없습니다. PIXELLAB_API_KEY를 설정하세요.\n{e}")

    setup_logging(settings)

    if settings.transport == "http":
        port = int(os.environ.get("PORT", 8000))
        host = os.environ.get("HOST", "0.0.0.0")
        uvicorn.run(create_app(settings), host=host, port=port)
    else:
        asyncio.run(run_stdio(ToolDispatcher(settings)))


if __name__ == "__main__":
    main()
