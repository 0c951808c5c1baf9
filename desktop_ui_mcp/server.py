"""
Desktop UI Control MCP Server

Usage:
  python -m desktop_ui_mcp                                  # stdio (클라이언트 1개)
  python -m desktop_ui_mcp --transport=websocket --port=3000
  python -m desktop_ui_mcp --verbose                        # DEBUG 로그

전송 방식:
  stdio      표준 입출력에 세션 하나. 스트림이 닫히면 프로세스 종료
  websocket  연결마다 어댑터 + MCP 서버 코어를 새로 만든다 (도구 레지스트리는 공유)
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from websockets.asyncio.server import serve as websocket_serve

from .config import ConfigError, ServerConfig, TransportKind, configure_logging, load_config
from .prompts import PromptProvider
from .registry import OperationRegistry, build_registry
from .resources import ResourceProvider
from .transport import WebSocketServerTransport, open_streams

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Components:
    """모든 세션이 공유하는 불변 구성요소"""
    registry: OperationRegistry
    resources: ResourceProvider
    prompts: PromptProvider


def build_components(automation=None, logger: Optional[logging.Logger] = None) -> Components:
    logger = logger or log
    if automation is None:
        from .automation.desktop import DesktopAutomation
        automation = DesktopAutomation()
    return Components(
        registry=build_registry(automation, logger=logger.getChild("tools")),
        resources=ResourceProvider(automation, logger=logger.getChild("resources")),
        prompts=PromptProvider(logger=logger.getChild("prompts")),
    )


def create_server(components: Components, config: ServerConfig) -> Server:
    """세션 하나를 처리할 MCP 서버 코어"""
    server = Server(config.name, version=config.version)
    registry, resources, prompts = components.registry, components.resources, components.prompts

    @server.list_tools()
    async def list_tools():
        """사용 가능한 도구 목록"""
        return registry.tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict):
        """도구 실행"""
        return await registry.call(name, arguments)

    @server.list_resources()
    async def list_resources():
        return []

    @server.list_resource_templates()
    async def list_resource_templates():
        return resources.templates()

    @server.read_resource()
    async def read_resource(uri):
        return await resources.read(uri)

    @server.list_prompts()
    async def list_prompts():
        return prompts.list()

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[dict]):
        return prompts.get(name, arguments)

    return server


# ═══════════════════════════════════════════════════════════════
# 전송
# ═══════════════════════════════════════════════════════════════

async def run_stdio(config: ServerConfig, components: Components,
                    server_factory: Callable = create_server) -> None:
    log.info("Using stdio transport")
    server = server_factory(components, config)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    log.info("stdio stream closed")


def connection_handler(config: ServerConfig, components: Components,
                       server_factory: Callable = create_server,
                       logger: Optional[logging.Logger] = None):
    """WebSocket 연결마다 호출되는 핸들러를 만든다."""
    logger = logger or log

    async def handle(connection):
        transport = WebSocketServerTransport(connection, logger=logger.getChild("transport"))
        logger.info(f"New WebSocket connection {transport.session_id} from {getattr(connection, 'remote_address', None)}")
        # 세션끼리 프로토콜 상태를 공유하지 않도록 코어는 연결마다 새로 만든다
        server = server_factory(components, config)
        try:
            async with open_streams(transport) as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
        except Exception:
            logger.exception(f"Session {transport.session_id} failed")
        finally:
            logger.info(f"WebSocket connection {transport.session_id} finished")

    return handle


async def run_websocket(config: ServerConfig, components: Components,
                        server_factory: Callable = create_server) -> None:
    log.info(f"Using WebSocket transport on {config.host}:{config.port}")
    handler = connection_handler(config, components, server_factory)
    async with websocket_serve(handler, config.host, config.port) as ws_server:
        log.info("WebSocket server started, waiting for connections...")
        await ws_server.serve_forever()


TRANSPORTS = {
    TransportKind.STDIO: run_stdio,
    TransportKind.WEBSOCKET: run_websocket,
}


async def serve(config: ServerConfig, automation=None, logger: Optional[logging.Logger] = None,
                server_factory: Callable = create_server) -> None:
    """설정된 전송 방식 하나로 서버 실행"""
    # 자원을 열기 전에 전송 방식부터 확인
    kind = TransportKind.parse(config.transport)
    components = build_components(automation, logger)
    await TRANSPORTS[kind](config, components, server_factory)
    log.info("Server stopped")


# ═══════════════════════════════════════════════════════════════
# CLI
# ═══════════════════════════════════════════════════════════════

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Desktop UI Control MCP Server")
    parser.add_argument("--transport", help="전송 방식: stdio (기본) 또는 websocket")
    parser.add_argument("--host", help="WebSocket 바인드 주소 (기본 0.0.0.0)")
    parser.add_argument("--port", help="WebSocket 포트 (기본 3000)")
    parser.add_argument("--config", help="설정 JSON 경로")
    parser.add_argument("--verbose", action="store_true", default=None, help="DEBUG 로그 출력")
    return parser.parse_args(argv)


def print_banner(config: ServerConfig) -> None:
    # stdout 은 stdio 전송이 쓰므로 stderr 로 출력
    lines = [f"Desktop UI Control MCP Server v{config.version}", f"Transport: {config.transport.value}"]
    if config.transport == TransportKind.WEBSOCKET:
        lines.append(f"Port: {config.port}")
    print(f"{'=' * 60}", file=sys.stderr)
    for line in lines:
        print(f"  {line}", file=sys.stderr)
    print(f"{'=' * 60}", file=sys.stderr)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(
            overrides={"transport": args.transport, "host": args.host, "port": args.port, "verbose": args.verbose},
            config_path=args.config,
        )
    except ConfigError as e:
        configure_logging(bool(args.verbose)).error(f"Failed to start server: {e}")
        return 1

    logger = configure_logging(config.verbose)
    print_banner(config)
    try:
        asyncio.run(serve(config, logger=logger))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except ConfigError as e:
        logger.error(f"Failed to start server: {e}")
        return 1
    except Exception:
        logger.exception("Failed to start server")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
