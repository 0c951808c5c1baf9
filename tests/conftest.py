import asyncio
import logging
import sys
from pathlib import Path

import pytest

# Add project root to Python path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from desktop_ui_mcp.automation import Point, Rect  # noqa: E402


class FakeAutomation:
    """
    자동화 기능 대역.

    어떤 기능이든 호출 기록을 남기고 results[name] (없으면 default) 을 반환하거나
    errors[name] (없으면 error) 예외를 던진다.
    """

    def __init__(self, results=None, errors=None, default=1, error=None):
        self.results = dict(results or {})
        self.errors = dict(errors or {})
        self.default = default
        self.error = error
        self.calls = []
        self.initialized = 0

    async def initialize(self):
        self.initialized += 1

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        async def method(*args):
            self.calls.append((name, args))
            if name in self.errors:
                raise self.errors[name]
            if self.error is not None:
                raise self.error
            return self.results.get(name, self.default)

        return method

    def last_call(self, name):
        return [args for called, args in self.calls if called == name][-1]


class FakeConnection:
    """websockets ServerConnection 대역 (큐에 넣은 프레임을 순서대로 내보냄)"""

    def __init__(self, frames=(), close_at_end=True, send_error=None):
        self.frames = asyncio.Queue()
        for frame in frames:
            self.frames.put_nowait(frame)
        if close_at_end:
            self.frames.put_nowait(None)
        self.sent = []
        self.closed = 0
        self.send_error = send_error
        self.remote_address = ("127.0.0.1", 50000)

    async def send(self, data):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    async def close(self):
        self.closed += 1

    def __aiter__(self):
        return self

    async def __anext__(self):
        frame = await self.frames.get()
        if frame is None:
            raise StopAsyncIteration
        if isinstance(frame, BaseException):
            raise frame
        return frame


@pytest.fixture
def automation():
    return FakeAutomation(
        results={
            "mouse_get_pos": Point(100, 200),
            "win_get_pos": Rect(10, 20, 810, 620),
            "capture_screen": b"\x89PNG\r\n\x1a\nfake",
        }
    )


@pytest.fixture
def logger():
    return logging.getLogger("tests.desktop_ui_mcp")
