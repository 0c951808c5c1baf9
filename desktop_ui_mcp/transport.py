"""
WebSocket 전송 어댑터

연결 하나(websockets ServerConnection)를 MCP 세션이 기대하는 양방향
메시지 채널로 감싼다.

  start()        준비 표시만 (멱등, I/O 없음)
  send(message)  JSON-RPC 메시지 → 텍스트 프레임. 닫힌 뒤에는 TransportClosedError
  close()        연결 종료. on_close 는 정확히 한 번
  listen()       수신 루프. 프레임마다 on_message / 파싱 실패시 on_error

상태: Open → Closed (재개방 없음)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

import anyio
from mcp.shared.message import SessionMessage
from mcp.types import JSONRPCMessage
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

MessageCallback = Callable[[JSONRPCMessage], Awaitable[None]]
ErrorCallback = Callable[[Exception], Awaitable[None]]
CloseCallback = Callable[[], Awaitable[None]]


class TransportClosedError(ConnectionError):
    pass


class MessageParseError(ValueError):
    pass


class WebSocketServerTransport:

    def __init__(self, connection, logger: Optional[logging.Logger] = None):
        self._ws = connection
        # 로그 상관관계용 (보안 토큰 아님)
        self.session_id = uuid.uuid4().hex
        self.log = logger or logging.getLogger(__name__)

        self.on_message: Optional[MessageCallback] = None
        self.on_error: Optional[ErrorCallback] = None
        self.on_close: Optional[CloseCallback] = None

        self._started = False
        self._close_notified = False

    @property
    def is_open(self) -> bool:
        return self._ws is not None

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        self.log.info(f"[{self.session_id}] WebSocket transport started")

    async def send(self, message: JSONRPCMessage) -> None:
        ws = self._ws
        if ws is None:
            raise TransportClosedError("WebSocket not connected")
        try:
            await ws.send(message.model_dump_json(by_alias=True, exclude_none=True))
        except ConnectionClosed as e:
            raise TransportClosedError(f"WebSocket connection closed: {e}") from e

    async def close(self) -> None:
        ws, self._ws = self._ws, None
        if ws is not None:
            await ws.close()
        await self._notify_close()

    async def listen(self) -> None:
        """연결이 닫힐 때까지 프레임을 받아 콜백으로 넘긴다."""
        ws = self._ws
        if ws is None:
            return
        try:
            async for frame in ws:
                await self._handle_frame(frame)
        except ConnectionClosedOK:
            pass
        except ConnectionClosed as e:
            await self._emit_error(e)
        finally:
            self._ws = None
            await self._notify_close()

    async def _handle_frame(self, frame) -> None:
        try:
            message = JSONRPCMessage.model_validate_json(frame)
        except ValueError as e:
            # 잘못된 메시지 하나로 세션을 끊지 않는다
            self.log.warning(f"[{self.session_id}] Failed to parse message")
            await self._emit_error(MessageParseError(f"Failed to parse message: {e}"))
            return
        if self.on_message is not None:
            await self.on_message(message)

    async def _emit_error(self, error: Exception) -> None:
        if self.on_error is not None:
            await self.on_error(error)

    async def _notify_close(self) -> None:
        if self._close_notified:
            return
        self._close_notified = True
        self.log.info(f"[{self.session_id}] WebSocket transport closed")
        if self.on_close is not None:
            await self.on_close()


@asynccontextmanager
async def open_streams(transport: WebSocketServerTransport):
    """
    어댑터 → (read_stream, write_stream)

    mcp Server.run() 이 소비하는 메모리 스트림 쌍으로 연결한다.
    read_stream 에는 SessionMessage 또는 Exception 이 들어간다.
    """
    read_stream_writer, read_stream = anyio.create_memory_object_stream(0)
    write_stream, write_stream_reader = anyio.create_memory_object_stream(0)

    async def deliver(message: JSONRPCMessage):
        await read_stream_writer.send(SessionMessage(message))

    async def report(error: Exception):
        await read_stream_writer.send(error)

    async def finish():
        await read_stream_writer.aclose()

    transport.on_message = deliver
    transport.on_error = report
    transport.on_close = finish

    async def reader():
        async with read_stream_writer:
            await transport.listen()

    async def writer():
        async with write_stream_reader:
            async for session_message in write_stream_reader:
                try:
                    await transport.send(session_message.message)
                except TransportClosedError as e:
                    transport.log.debug(f"[{transport.session_id}] Dropping outbound message: {e}")
                    return

    await transport.start()
    async with anyio.create_task_group() as tg:
        tg.start_soon(reader)
        tg.start_soon(writer)
        try:
            yield read_stream, write_stream
        finally:
            tg.cancel_scope.cancel()
            with anyio.CancelScope(shield=True):
                await transport.close()
